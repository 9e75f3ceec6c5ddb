"""
CampusShare Server - Login Request Model

Pydantic model for login endpoint request.
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Request model for login endpoint"""
    username: str = Field(..., min_length=1, description="Username required")
    password: str = Field(..., min_length=1, description="Password required")
