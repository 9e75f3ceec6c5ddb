"""
CampusShare Server - File Storage Management

This module handles blob storage for uploaded materials:
- Upload directory creation
- Collision-resistant stored names (nanosecond timestamp + random suffix)
- Extension allow-list and streaming size enforcement
- Blob lookup for downloads and best-effort deletion for rollback

Stored names are generated without any lock; two concurrent uploads would
need the same nanosecond timestamp and the same random suffix to collide.
"""

import logging
import secrets
import time
from pathlib import Path
from typing import Union

from config import get_settings
from errors import UnsupportedType, PayloadTooLarge, StoreFailure, NotFound
from models.infrastructure import StoredBlob

logger = logging.getLogger(__name__)


# ==================== Storage Configuration ====================

ALLOWED_EXTENSIONS = {
    "pdf", "doc", "docx", "ppt", "pptx", "txt",
    "zip", "rar", "jpg", "jpeg", "png", "gif",
}
CHUNK_SIZE = 64 * 1024


# ==================== Storage Directory Management ====================

def InitializeStorage(upload_dir: str = None) -> Path:
    """
    Create the upload directory if it doesn't exist

    Args:
        upload_dir: Directory for stored blobs (defaults to the configured one)

    Returns:
        Path: Absolute path of the upload directory
    """
    upload_path = Path(upload_dir or get_settings().upload_dir)

    try:
        upload_path.mkdir(parents=True, exist_ok=True)
        logger.info(f"Upload directory ready: {upload_path.absolute()}")
        return upload_path.absolute()

    except OSError as e:
        logger.error(f"Failed to initialize storage: {str(e)}")
        raise


# ==================== Naming and Validation ====================

def GetExtension(original_name: str) -> str:
    """Lower-cased extension of a file name without the dot ('' if none)"""
    return Path(original_name).suffix.lower().lstrip(".")


def ValidateFileType(original_name: str) -> str:
    """
    Check a file name against the extension allow-list

    Args:
        original_name: Name of the file as uploaded

    Returns:
        str: Lower-cased extension without the dot

    Raises:
        UnsupportedType: If the extension is not allowed
    """
    extension = GetExtension(original_name)
    if extension not in ALLOWED_EXTENSIONS:
        raise UnsupportedType()
    return extension


def GenerateStoredName(original_name: str) -> str:
    """
    Build an opaque stored name: <time_ns>-<random 0..999999999>.<ext>

    Args:
        original_name: Name of the file as uploaded (only its extension is kept)

    Returns:
        str: New stored file name
    """
    extension = GetExtension(original_name)
    suffix = f".{extension}" if extension else ""
    return f"{time.time_ns()}-{secrets.randbelow(10**9)}{suffix}"


def FormatFileSize(num_bytes: int) -> str:
    """Human-readable size in KiB with two decimals, e.g. '12.34 KB'"""
    return f"{num_bytes / 1024:.2f} KB"


# ==================== Blob Operations ====================

async def StoreUpload(upload, upload_dir: str = None, max_size: int = None) -> StoredBlob:
    """
    Write an uploaded file to the upload directory

    Type and declared size are checked before anything is written. The body
    is then streamed in chunks; the running total is checked before each
    chunk is written, and the partial file is removed if the limit is
    exceeded or a write fails.

    Args:
        upload: Starlette/FastAPI UploadFile
        upload_dir: Directory for stored blobs (defaults to the configured one)
        max_size: Maximum size in bytes (defaults to the configured one)

    Returns:
        StoredBlob: Stored name, path, type and size

    Raises:
        UnsupportedType: If the extension is not allowed
        PayloadTooLarge: If the file exceeds max_size
        StoreFailure: If the file cannot be written
    """
    settings = get_settings()
    upload_path = Path(upload_dir or settings.upload_dir)
    max_size = max_size if max_size is not None else settings.max_upload_size

    original_name = upload.filename
    filetype = ValidateFileType(original_name)

    declared_size = getattr(upload, "size", None)
    if declared_size is not None and declared_size > max_size:
        logger.warning(f"Rejected upload '{original_name}': declared size {declared_size} exceeds {max_size} bytes")
        raise PayloadTooLarge()

    stored_name = GenerateStoredName(original_name)
    stored_path = (upload_path / stored_name).absolute()
    total_bytes = 0

    # Exclusive create; on a name collision the other upload's file is left alone
    try:
        upload_path.mkdir(parents=True, exist_ok=True)
        blob_file = open(stored_path, "xb")
    except OSError as e:
        logger.error(f"Failed to create {stored_path} for upload '{original_name}': {str(e)}")
        raise StoreFailure("Failed to store file")

    try:
        with blob_file as f:
            while chunk := await upload.read(CHUNK_SIZE):
                if total_bytes + len(chunk) > max_size:
                    raise PayloadTooLarge()
                f.write(chunk)
                total_bytes += len(chunk)

    except PayloadTooLarge:
        DeleteStoredFile(stored_path)
        logger.warning(f"Rejected upload '{original_name}': exceeds {max_size} bytes")
        raise

    except OSError as e:
        DeleteStoredFile(stored_path)
        logger.error(f"Failed to write upload '{original_name}' to {stored_path}: {str(e)}")
        raise StoreFailure("Failed to store file")

    logger.debug(f"Stored '{original_name}' as {stored_name} ({total_bytes} bytes)")

    return StoredBlob(
        stored_name=stored_name,
        stored_path=stored_path,
        original_name=original_name,
        filetype=filetype,
        size_bytes=total_bytes
    )


def GetStoredFile(stored_path: Union[str, Path]) -> Path:
    """
    Resolve a stored path for download

    Args:
        stored_path: Path recorded in the catalog

    Returns:
        Path: Absolute path to an existing file

    Raises:
        NotFound: If the path does not resolve to an existing file
    """
    file_path = Path(stored_path).resolve()
    if not file_path.is_file():
        raise NotFound()
    return file_path


def DeleteStoredFile(stored_path: Union[str, Path]) -> bool:
    """
    Best-effort removal of a stored blob

    Failures are logged and never raised; this is only used to undo a blob
    write whose catalog row could not be created.

    Returns:
        bool: True if the file is gone afterwards
    """
    file_path = Path(stored_path)
    try:
        file_path.unlink(missing_ok=True)
        return True
    except OSError as e:
        logger.error(f"Failed to delete stored file {file_path}: {str(e)}")
        return False
