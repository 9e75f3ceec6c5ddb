"""
CampusShare Server - Material Record Model

Pydantic model for a catalog row about to be inserted.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class MaterialRecord(BaseModel):
    """Fields supplied to material_catalog.InsertMaterial"""
    title: str
    filename: str
    filepath: str
    filetype: Optional[str] = None
    course: Optional[str] = None
    year: Optional[str] = None
    semester: Optional[str] = None
    description: Optional[str] = ""
    uploader_id: Optional[int] = None
    size: Optional[str] = None
    upload_date: Optional[datetime] = None  # Assigned by the database default when None
