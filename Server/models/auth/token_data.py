"""
CampusShare Server - Token Data Model

Pydantic model for the claims carried in a session token.
"""

from datetime import datetime
from pydantic import BaseModel


class TokenData(BaseModel):
    """Claims stored in the JWT"""
    user_id: int
    exp: datetime
