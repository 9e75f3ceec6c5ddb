"""
CampusShare Server - Authentication Utilities

This module provides authentication functionality including:
- JWT session token generation and validation
- Resolution of the token's user against the database
- Authentication dependency for protected routes

Tokens are stateless: possession of a correctly signed, unexpired token
naming an existing user is access. There is no revocation list.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from config import Settings, get_settings
from credential_store import GetUserById
from errors import MalformedRequest, InvalidToken, UserNotFound
from managers.database_manager import DatabaseManager
from models.auth import TokenData
from models.database import User
from models.infrastructure import SessionContext

# Security scheme for FastAPI. Missing headers are reported by
# GetSessionContext so that every auth failure is a 401.
security = HTTPBearer(auto_error=False)


# ==================== JWT Token Functions ====================

def CreateAccessToken(user_id: int, settings: Optional[Settings] = None,
                      expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed session token for a user

    Args:
        user_id: Id of the user the token asserts
        settings: Settings with the signing secret (defaults to get_settings())
        expires_delta: Optional custom lifetime, token_expiration_days otherwise

    Returns:
        str: Encoded JWT token
    """
    settings = settings or get_settings()

    if expires_delta is None:
        expires_delta = timedelta(days=settings.token_expiration_days)
    expire = datetime.now(timezone.utc) + expires_delta

    to_encode = {"user_id": user_id, "exp": expire}
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def DecodeAccessToken(token: Optional[str], settings: Optional[Settings] = None) -> TokenData:
    """
    Validate a session token's structure, signature and expiry

    Args:
        token: Encoded JWT, or None if the request carried none
        settings: Settings with the signing secret (defaults to get_settings())

    Returns:
        TokenData: The validated claims

    Raises:
        MalformedRequest: If the token is absent or not a JWT
        InvalidToken: If the signature is wrong, the token expired, or claims are missing
    """
    settings = settings or get_settings()

    if not token or token.count(".") != 2:
        raise MalformedRequest()

    try:
        jwt.get_unverified_header(token)
    except JWTError:
        raise MalformedRequest()

    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise InvalidToken()

    user_id = payload.get("user_id")
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise InvalidToken()

    expires = payload.get("exp")
    if not isinstance(expires, (int, float)) or isinstance(expires, bool):
        raise InvalidToken()

    return TokenData(user_id=user_id, exp=datetime.fromtimestamp(expires, tz=timezone.utc))


def VerifyAccessToken(token: Optional[str], settings: Optional[Settings] = None) -> int:
    """
    Stateless verification step

    Returns:
        int: The user id asserted by the token
    """
    return DecodeAccessToken(token, settings).user_id


def ResolveSessionUser(db_manager: DatabaseManager, user_id: int) -> User:
    """
    Second verification step: the token's user must still exist

    The user is re-read on every request so profile fields are current.

    Raises:
        UserNotFound: If the id no longer resolves
    """
    user = GetUserById(db_manager, user_id)
    if user is None:
        raise UserNotFound()
    return user


# ==================== Authentication Dependencies ====================

def GetSessionContext(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> SessionContext:
    """
    FastAPI dependency to get the authenticated caller
    Validates the bearer token and loads the user from the database

    Args:
        credentials: HTTP Bearer token from Authorization header

    Returns:
        SessionContext: The caller's user and token

    Raises:
        MalformedRequest, InvalidToken, UserNotFound: If authentication fails
    """
    from database import db_manager

    token = credentials.credentials if credentials else None
    user_id = VerifyAccessToken(token)
    user = ResolveSessionUser(db_manager, user_id)

    return SessionContext(user=user, token=token)
