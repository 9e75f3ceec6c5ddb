"""
CampusShare Server - API Models Package

This package contains Pydantic models for the material endpoints.
"""

from models.api.material_filters import MaterialFilters
from models.api.material_metadata import MaterialSummary, MaterialFull
from models.api.material_record import MaterialRecord
from models.api.upload_response import UploadResponse

__all__ = [
    'MaterialFilters',
    'MaterialSummary',
    'MaterialFull',
    'MaterialRecord',
    'UploadResponse',
]
