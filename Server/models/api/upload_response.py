"""
CampusShare Server - Upload Response Model

Pydantic model for the upload endpoint response.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_serializer

from models.api.material_metadata import AsUtc


class UploadResponse(BaseModel):
    """Summary of the material that was just stored"""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    title: str
    filetype: Optional[str]
    course: Optional[str]
    year: Optional[str]
    semester: Optional[str]
    description: Optional[str]
    size: Optional[str]
    upload_date: datetime = Field(..., alias="uploadDate")

    @field_serializer("upload_date")
    def serialize_upload_date(self, value: datetime) -> datetime:
        return AsUtc(value)
