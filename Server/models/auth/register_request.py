"""
CampusShare Server - Registration Request Model

Pydantic model for the registration endpoint. Field names on the wire are
camelCase (studentId); Python attributes are snake_case.
"""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class RegisterRequest(BaseModel):
    """Request model for register endpoint"""
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(..., min_length=3, description="Username at least 3 chars")
    password: str = Field(..., min_length=6, description="Password at least 6 chars")
    name: str
    student_id: str = Field(..., alias="studentId")
    email: str
    course: str
    year: str

    @field_validator("name", "student_id", "course", "year")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value.strip()

    @field_validator("email")
    @classmethod
    def valid_email(cls, value: str) -> str:
        value = value.strip()
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Valid email required")
        return value
