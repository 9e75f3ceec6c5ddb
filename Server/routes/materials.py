"""
CampusShare Server - Material Listing Endpoints

Public and authenticated material listings. The response models are
MaterialSummary and MaterialFull respectively, so the public endpoint
cannot serialize restricted fields even by accident.
"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query

from auth import GetSessionContext
from errors import CampusShareError
from material_catalog import ListPublicMaterials, ListAuthenticatedMaterials
from models.api import MaterialFilters, MaterialSummary, MaterialFull
from models.infrastructure import SessionContext


# Create logger
logger = logging.getLogger(__name__)

# Create router instance
router = APIRouter(prefix="/api")


def GetMaterialFilters(
    course: Optional[str] = Query(None, description="Exact course name"),
    year: Optional[str] = Query(None, description="Exact year"),
    semester: Optional[str] = Query(None, description="Exact semester")
) -> MaterialFilters:
    """Dependency collecting the optional listing filters"""
    return MaterialFilters(course=course, year=year, semester=semester)


# ==================== Listing Endpoints ====================

@router.get("/public/materials", response_model=List[MaterialSummary], tags=["Materials"])
async def list_public_materials(filters: MaterialFilters = Depends(GetMaterialFilters)):
    """
    List materials for anonymous visitors, newest first

    Returns:
        List[MaterialSummary]: id, title, filetype, course, year, semester, size, uploadDate
    """
    from database import db_manager

    try:
        return ListPublicMaterials(db_manager, filters)

    except CampusShareError:
        raise
    except Exception as e:
        logger.error(f"Error listing public materials: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch materials"
        )


@router.get("/materials", response_model=List[MaterialFull], tags=["Materials"])
async def list_materials(
    filters: MaterialFilters = Depends(GetMaterialFilters),
    context: SessionContext = Depends(GetSessionContext)
):
    """
    List materials with full details for signed-in users, newest first

    Returns:
        List[MaterialFull]: Summary fields plus filename, description and uploader
    """
    from database import db_manager

    try:
        materials = ListAuthenticatedMaterials(db_manager, filters)
        logger.info(f"User '{context.username}' listed {len(materials)} materials")
        return materials

    except CampusShareError:
        raise
    except Exception as e:
        logger.error(f"Error listing materials: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch materials"
        )
