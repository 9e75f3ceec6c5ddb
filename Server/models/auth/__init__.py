"""
CampusShare Server - Auth Models Package

This package contains Pydantic models for authentication endpoints.
"""

from models.auth.login_request import LoginRequest
from models.auth.register_request import RegisterRequest
from models.auth.user_info import UserInfo, ProfileStats, ProfileResponse
from models.auth.auth_response import AuthResponse
from models.auth.token_data import TokenData

__all__ = [
    'LoginRequest',
    'RegisterRequest',
    'UserInfo',
    'ProfileStats',
    'ProfileResponse',
    'AuthResponse',
    'TokenData',
]
