"""
CampusShare Server - Material Metadata API Models

Pydantic models for the two material views. MaterialSummary is the public
view; MaterialFull adds the fields reserved for authenticated users.
"""

from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_serializer


def AsUtc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from SQLite"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class MaterialSummary(BaseModel):
    """Public view of a material"""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    title: str
    filetype: Optional[str]
    course: Optional[str]
    year: Optional[str]
    semester: Optional[str]
    size: Optional[str]
    upload_date: datetime = Field(..., alias="uploadDate")

    @field_serializer("upload_date")
    def serialize_upload_date(self, value: datetime) -> datetime:
        return AsUtc(value)


class MaterialFull(MaterialSummary):
    """Authenticated view of a material"""
    filename: str
    description: Optional[str]
    uploader: Optional[str]  # Username, None if the uploader row is gone
