"""
CampusShare Server - Authentication Endpoints

This module contains registration, login and the profile endpoint.
"""

import logging
from fastapi import APIRouter, Depends

from auth import CreateAccessToken, GetSessionContext
from credential_store import RegisterUser, AuthenticateUser, CountMaterialsForUser
from models.auth import LoginRequest, RegisterRequest, AuthResponse, UserInfo, ProfileResponse, ProfileStats
from models.infrastructure import SessionContext


# Create logger
logger = logging.getLogger(__name__)

# Create router instance
router = APIRouter(prefix="/api")


# ==================== Authentication Endpoints ====================

@router.post("/register", response_model=AuthResponse, tags=["Authentication"])
async def register(register_request: RegisterRequest):
    """
    Create an account and return a session token

    Args:
        register_request: Username, password and student profile fields

    Returns:
        AuthResponse: Session token and the new user

    Raises:
        DuplicateKey: If username, email or student ID is already taken
    """
    from database import db_manager

    user = RegisterUser(
        db_manager,
        username=register_request.username,
        password=register_request.password,
        name=register_request.name,
        student_id=register_request.student_id,
        email=register_request.email,
        course=register_request.course,
        year=register_request.year
    )

    return AuthResponse(
        token=CreateAccessToken(user.id),
        user=UserInfo.model_validate(user)
    )


@router.post("/login", response_model=AuthResponse, tags=["Authentication"])
async def login(login_request: LoginRequest):
    """
    Authenticate user and return a session token

    Args:
        login_request: Username and password

    Returns:
        AuthResponse: Session token and the user

    Raises:
        InvalidCredentials: If the username is unknown or the password is wrong
    """
    from database import db_manager

    user = AuthenticateUser(db_manager, login_request.username, login_request.password)

    logger.info(f"User '{user.username}' logged in successfully")

    return AuthResponse(
        token=CreateAccessToken(user.id),
        user=UserInfo.model_validate(user)
    )


@router.get("/profile", response_model=ProfileResponse, tags=["User"])
async def profile(context: SessionContext = Depends(GetSessionContext)):
    """
    Profile of the signed-in user, read fresh from the database
    """
    from database import db_manager

    user = context.user
    stats = ProfileStats(
        total_materials=CountMaterialsForUser(db_manager, user.id),
        last_login=user.last_login
    )

    return ProfileResponse(
        id=user.id,
        username=user.username,
        name=user.name,
        student_id=user.student_id,
        email=user.email,
        course=user.course,
        year=user.year,
        stats=stats
    )
