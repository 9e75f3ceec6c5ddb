"""
CampusShare Server - Auth Response Model

Pydantic model returned by the register and login endpoints.
"""

from pydantic import BaseModel

from models.auth.user_info import UserInfo


class AuthResponse(BaseModel):
    """Session token plus the authenticated user"""
    token: str
    user: UserInfo
