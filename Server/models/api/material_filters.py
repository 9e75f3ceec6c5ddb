"""
CampusShare Server - Material Filter Model

Optional equality filters for the material listings.
"""

from typing import Optional
from pydantic import BaseModel, field_validator


class MaterialFilters(BaseModel):
    """Absent or blank filter means no restriction on that field"""
    course: Optional[str] = None
    year: Optional[str] = None
    semester: Optional[str] = None

    @field_validator("course", "year", "semester")
    @classmethod
    def blank_is_absent(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()

    def ActiveFilters(self) -> dict:
        """Return only the filters that restrict the result set"""
        return {key: value for key, value in self.model_dump().items() if value is not None}
