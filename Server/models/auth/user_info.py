"""
CampusShare Server - User Info Models

Public representations of a user returned by register, login and profile.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserInfo(BaseModel):
    """User object embedded in auth responses"""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    username: str
    name: str
    student_id: str = Field(..., alias="studentId")
    email: str
    course: str
    year: str


class ProfileStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_materials: int = Field(..., alias="totalMaterials")
    last_login: Optional[datetime] = Field(None, alias="lastLogin")


class ProfileResponse(UserInfo):
    """Response model for the profile endpoint"""
    stats: ProfileStats
