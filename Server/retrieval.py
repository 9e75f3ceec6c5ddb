"""
CampusShare Server - Retrieval Gateway

Read path shared by the public and authenticated download endpoints.
Neither tier checks ownership: any material id can be downloaded once it
exists. The two tiers differ only in whether a session token is required.

A missing catalog row and a missing blob are logged differently but both
surface as the same NotFound error.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

from errors import NotFound
from file_storage import GetStoredFile
from managers.database_manager import DatabaseManager
from material_catalog import GetMaterialById
from models.database import Material

logger = logging.getLogger(__name__)


def ResolveDownload(db_manager: DatabaseManager, material_id: int,
                    requested_by: Optional[str] = None) -> Tuple[Material, Path]:
    """
    Find the catalog row and blob for a download

    Args:
        db_manager: DatabaseManager instance
        material_id: Material id from the URL
        requested_by: Username for logging, None for anonymous downloads

    Returns:
        (Material, Path): The row and the absolute path of its blob

    Raises:
        NotFound: If the row or the blob is missing
    """
    who = f"User '{requested_by}'" if requested_by else "Anonymous visitor"

    try:
        material = GetMaterialById(db_manager, material_id)
    except NotFound:
        logger.warning(f"{who} requested material {material_id}: not in catalog")
        raise

    try:
        file_path = GetStoredFile(material.filepath)
    except NotFound:
        logger.error(f"Material {material_id} exists in catalog but blob is missing on disk: {material.filepath}")
        raise

    logger.info(f"{who} downloading material {material_id} ('{material.title}', {material.size})")
    return material, file_path


def SuggestedDownloadName(material: Material) -> str:
    """
    Save-as name for a download: the title, with the stored extension
    appended when the title does not already end with it
    """
    name = material.title
    if material.filetype and not name.lower().endswith(f".{material.filetype.lower()}"):
        name = f"{name}.{material.filetype}"
    return name
