"""
CampusShare Server - Upload Pipeline

Orchestrates a material upload:

    Received -> FileValidated -> BlobPersisted -> CatalogPersisted

0. The body is parsed by ReadUploadForm, which stops reading at the size limit
1. The caller is already authenticated (SessionContext from auth.py)
2. courseName, year and semester must be present
3. Exactly one file part, with an allowed type and size
4. The blob is written by file_storage.StoreUpload
5. The catalog row is inserted by material_catalog.InsertMaterial
6. If step 5 fails, the blob from step 4 is deleted before the error
   propagates, so no blob exists without a row

There is no transaction spanning steps 4 and 5. A crash between them can
still leave an orphan blob.
"""

import logging
from typing import List, Optional

from starlette.datastructures import FormData, UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import Request

from config import Settings, get_settings
from errors import ValidationFailed, PayloadTooLarge
from file_storage import StoreUpload, DeleteStoredFile, FormatFileSize
from managers.database_manager import DatabaseManager
from material_catalog import InsertMaterial
from models.api import MaterialRecord
from models.database import Material
from models.infrastructure import SessionContext

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = {
    "courseName": "Course name is required",
    "year": "Year is required",
    "semester": "Semester is required",
}

# Room for the text fields and multipart framing on top of the file itself
FORM_FIELD_ALLOWANCE = 64 * 1024


# ==================== Request Body ====================

class _ByteLimitedReceive:
    """ASGI receive channel that stops reading once the body passes a limit"""

    def __init__(self, receive, limit: int):
        self.receive = receive
        self.limit = limit
        self.received = 0

    async def __call__(self):
        message = await self.receive()
        if message["type"] == "http.request":
            self.received += len(message.get("body", b""))
            if self.received > self.limit:
                raise PayloadTooLarge()
        return message


async def ReadUploadForm(request: Request, max_size: Optional[int] = None) -> FormData:
    """
    Parse a multipart upload body without reading past the size limit

    A Content-Length over the limit is rejected before any byte is read.
    Otherwise the body is counted as the parser pulls it in, so a body that
    lies about or omits its length is cut off at the limit too.

    Args:
        request: Incoming upload request
        max_size: Maximum file size in bytes (defaults to the configured one)

    Returns:
        FormData: Parsed form fields and spooled file parts

    Raises:
        PayloadTooLarge: If the body exceeds the file limit plus FORM_FIELD_ALLOWANCE
        ValidationFailed: If the body is not a well-formed multipart form
    """
    max_size = max_size if max_size is not None else get_settings().max_upload_size
    limit = max_size + FORM_FIELD_ALLOWANCE

    content_length = request.headers.get("content-length", "")
    if content_length.isdigit() and int(content_length) > limit:
        logger.warning(f"Rejected upload body of {content_length} bytes (limit {limit})")
        raise PayloadTooLarge()

    limited_request = Request(request.scope, receive=_ByteLimitedReceive(request.receive, limit))
    try:
        return await limited_request.form()
    except StarletteHTTPException as e:
        raise ValidationFailed(str(e.detail))
    except MultiPartException as e:
        raise ValidationFailed(e.message)


def _FormValue(form, key: str) -> Optional[str]:
    """Stripped text value of a form field, None if absent, blank or a file"""
    value = form.get(key)
    if value is None or not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def ValidateUploadFields(form) -> dict:
    """
    Check the text fields of an upload form

    Returns:
        dict: course, year, semester, description and title

    Raises:
        ValidationFailed: Listing every missing required field
    """
    missing = [message for key, message in REQUIRED_FIELDS.items() if _FormValue(form, key) is None]
    if missing:
        raise ValidationFailed("; ".join(missing))

    return {
        "course": _FormValue(form, "courseName"),
        "year": _FormValue(form, "year"),
        "semester": _FormValue(form, "semester"),
        "description": _FormValue(form, "description") or "",
        "title": _FormValue(form, "title"),
    }


def RequireSingleFile(parts: list) -> UploadFile:
    """
    Pick the one attached file out of the 'file' form parts

    Raises:
        ValidationFailed: If there is no file or more than one
    """
    files = [part for part in parts if isinstance(part, UploadFile) and part.filename]
    if not files:
        raise ValidationFailed("No file uploaded")
    if len(files) > 1:
        raise ValidationFailed("Exactly one file must be uploaded")
    return files[0]


async def _DiscardBuffered(parts: List) -> None:
    """Close any files the transport layer spooled for this request"""
    for part in parts:
        if isinstance(part, UploadFile):
            await part.close()


async def ProcessUpload(
    db_manager: DatabaseManager,
    context: SessionContext,
    form,
    settings: Optional[Settings] = None
) -> Material:
    """
    Run one upload through the pipeline

    Args:
        db_manager: DatabaseManager instance
        context: Authenticated caller
        form: Parsed multipart form (Starlette FormData or similar multi-dict)
        settings: Upload directory and size limit (defaults to get_settings())

    Returns:
        Material: The new catalog row

    Raises:
        ValidationFailed: If required fields or the file are missing
        UnsupportedType, PayloadTooLarge: If the file is rejected
        StoreFailure: If the blob or the row cannot be written
    """
    settings = settings or get_settings()
    parts = form.getlist("file")

    try:
        fields = ValidateUploadFields(form)
        upload = RequireSingleFile(parts)

        # FileValidated -> BlobPersisted
        blob = await StoreUpload(upload, settings.upload_dir, settings.max_upload_size)

    except Exception as e:
        logger.warning(f"Upload by '{context.username}' rejected: {e}")
        raise

    finally:
        await _DiscardBuffered(parts)

    record = MaterialRecord(
        title=fields["title"] or blob.original_name,
        filename=blob.stored_name,
        filepath=str(blob.stored_path),
        filetype=blob.filetype,
        course=fields["course"],
        year=fields["year"],
        semester=fields["semester"],
        description=fields["description"],
        uploader_id=context.user_id,
        size=FormatFileSize(blob.size_bytes),
    )

    # BlobPersisted -> CatalogPersisted, or compensate
    try:
        material = InsertMaterial(db_manager, record)
    except Exception:
        logger.error(f"Catalog insert failed for '{blob.original_name}'; removing blob {blob.stored_name}")
        if not DeleteStoredFile(blob.stored_path):
            logger.error(f"Orphan blob left behind: {blob.stored_path}")
        raise

    logger.info(
        f"User '{context.username}' uploaded '{material.title}' as material {material.id} "
        f"({material.size}, {material.course} {material.year} {material.semester})"
    )
    return material
