"""
CampusShare Server - File Endpoints

This module contains the upload endpoint and the public and authenticated
download endpoints.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, status, Request
from fastapi.responses import FileResponse

from auth import GetSessionContext
from errors import CampusShareError
from models.api import UploadResponse
from models.infrastructure import SessionContext
from retrieval import ResolveDownload, SuggestedDownloadName
from upload_pipeline import ProcessUpload, ReadUploadForm


# Create logger
logger = logging.getLogger(__name__)

# Create router instance
router = APIRouter(prefix="/api")


# ==================== Upload Endpoint ====================

@router.post("/upload", response_model=UploadResponse, tags=["Files"])
async def upload_material(
    request: Request,
    context: SessionContext = Depends(GetSessionContext)
):
    """
    Upload one study material (multipart/form-data)

    Form fields:
        file: The document (pdf, doc(x), ppt(x), txt, zip, rar, jpg, jpeg, png, gif; max 10 MiB)
        courseName, year, semester: Required
        description, title: Optional

    Returns:
        UploadResponse: The stored material's summary

    Raises:
        ValidationFailed: 400, also for a malformed multipart body
        UnsupportedType, PayloadTooLarge: 400, the body is not read past the size limit
        StoreFailure: 500, after the blob has been removed
    """
    from database import db_manager

    form = await ReadUploadForm(request)

    try:
        material = await ProcessUpload(db_manager, context, form)
        return UploadResponse.model_validate(material)

    except CampusShareError:
        raise
    except Exception as e:
        logger.error(f"Error uploading material for '{context.username}': {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save material"
        )


# ==================== Download Endpoints ====================

def _DownloadResponse(material_id: int, username: str = None) -> FileResponse:
    from database import db_manager

    material, file_path = ResolveDownload(db_manager, material_id, requested_by=username)
    return FileResponse(
        path=str(file_path),
        filename=SuggestedDownloadName(material),
        media_type='application/octet-stream'
    )


@router.get("/download/{material_id}", tags=["Files"])
async def download_material(
    material_id: int,
    context: SessionContext = Depends(GetSessionContext)
):
    """
    Download a material as a signed-in user

    Returns:
        FileResponse: File bytes with Content-Disposition set to the title

    Raises:
        NotFound: If the material or its file does not exist
    """
    return _DownloadResponse(material_id, context.username)


@router.get("/public/download/{material_id}", tags=["Files"])
async def public_download_material(material_id: int):
    """
    Download a material without signing in

    There is no ownership or visibility check: every material is public.

    Raises:
        NotFound: If the material or its file does not exist
    """
    return _DownloadResponse(material_id)
