"""
CampusShare Server - Material Catalog

Relational record of every uploaded material:
- Single-row insert for the upload pipeline
- Public and authenticated listings with optional equality filters
- Lookup by id for downloads

Both listings are ordered newest first. The public listing only selects
summary columns, so stored names, descriptions and uploaders never leave
this module on the public path.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from errors import NotFound, StoreFailure
from managers.database_manager import DatabaseManager
from models.api import MaterialFilters, MaterialSummary, MaterialFull, MaterialRecord
from models.database import Material, User

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = (
    Material.id,
    Material.title,
    Material.filetype,
    Material.course,
    Material.year,
    Material.semester,
    Material.size,
    Material.upload_date,
)


def _ApplyFilters(query, filters: Optional[MaterialFilters]):
    """AND together the equality predicates that are present"""
    if filters is None:
        return query
    for field_name, value in filters.ActiveFilters().items():
        query = query.filter(getattr(Material, field_name) == value)
    return query


def _NewestFirst(query):
    return query.order_by(Material.upload_date.desc(), Material.id.desc())


# ==================== Insert ====================

def InsertMaterial(db_manager: DatabaseManager, record: MaterialRecord) -> Material:
    """
    Insert one catalog row

    Args:
        db_manager: DatabaseManager instance
        record: Fields of the new row; upload_date defaults to now

    Returns:
        Material: The inserted row with its id and upload date

    Raises:
        StoreFailure: If the insert fails
    """
    values = record.model_dump(exclude_none=True)
    session = db_manager.GetSession()

    try:
        material = Material(**values)
        session.add(material)
        session.commit()

        logger.debug(f"Inserted material {material.id} ('{material.title}') -> {material.filename}")
        return material

    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to insert material '{record.title}': {str(e)}")
        raise StoreFailure("Failed to save material")

    finally:
        session.close()


# ==================== Listings ====================

def ListPublicMaterials(db_manager: DatabaseManager,
                        filters: Optional[MaterialFilters] = None) -> List[MaterialSummary]:
    """
    List materials for anonymous visitors

    Returns:
        List[MaterialSummary]: Summary fields only, newest first

    Raises:
        StoreFailure: If the query fails
    """
    session = db_manager.GetSession()
    try:
        query = _NewestFirst(_ApplyFilters(session.query(*SUMMARY_COLUMNS), filters))
        return [MaterialSummary.model_validate(dict(row._mapping)) for row in query.all()]

    except SQLAlchemyError as e:
        logger.error(f"Error listing public materials: {str(e)}")
        raise StoreFailure("Failed to fetch materials")

    finally:
        session.close()


def ListAuthenticatedMaterials(db_manager: DatabaseManager,
                               filters: Optional[MaterialFilters] = None) -> List[MaterialFull]:
    """
    List materials for signed-in users

    The uploader's username comes from a LEFT OUTER JOIN so materials whose
    uploader no longer exists are still listed, with uploader None.

    Returns:
        List[MaterialFull]: All fields plus uploader username, newest first

    Raises:
        StoreFailure: If the query fails
    """
    session = db_manager.GetSession()
    try:
        query = session.query(
            *SUMMARY_COLUMNS,
            Material.filename,
            Material.description,
            User.username.label("uploader"),
        ).outerjoin(User, Material.uploader_id == User.id)
        query = _NewestFirst(_ApplyFilters(query, filters))
        return [MaterialFull.model_validate(dict(row._mapping)) for row in query.all()]

    except SQLAlchemyError as e:
        logger.error(f"Error listing materials: {str(e)}")
        raise StoreFailure("Failed to fetch materials")

    finally:
        session.close()


# ==================== Lookup ====================

def GetMaterialById(db_manager: DatabaseManager, material_id: int) -> Material:
    """
    Fetch one catalog row

    Raises:
        NotFound: If no material has this id
    """
    session = db_manager.GetSession()
    try:
        material = session.query(Material).filter(Material.id == material_id).first()
    finally:
        session.close()

    if material is None:
        raise NotFound()
    return material
