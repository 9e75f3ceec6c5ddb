"""
CampusShare Server - Credential Store

This module handles user persistence and credential checks:
- Registration with bcrypt-hashed passwords
- Username/password authentication
- User lookup for session resolution and profile stats

Passwords are never stored or logged in plain text.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from errors import DuplicateKey, InvalidCredentials, StoreFailure
from managers.database_manager import DatabaseManager
from models.database import User, Material

logger = logging.getLogger(__name__)

# Hash compared against when the username is unknown, so that both
# failure paths spend the same bcrypt time
_dummy_password_hash: Optional[str] = None


def _GetDummyHash() -> str:
    global _dummy_password_hash
    if _dummy_password_hash is None:
        _dummy_password_hash = DatabaseManager.HashPassword("campusshare-dummy-password")
    return _dummy_password_hash


# ==================== Registration ====================

def RegisterUser(
    db_manager: DatabaseManager,
    username: str,
    password: str,
    name: str,
    student_id: str,
    email: str,
    course: str,
    year: str
) -> User:
    """
    Create a new user account

    Args:
        db_manager: DatabaseManager instance
        username: Unique login name
        password: Plain text password (hashed before storage)
        name: Display name
        student_id: Unique student identifier
        email: Unique email address
        course: Course of study
        year: Enrollment year

    Returns:
        User: The newly created user

    Raises:
        DuplicateKey: If username, email or student ID is already taken
        StoreFailure: If the database write fails for another reason
    """
    session = db_manager.GetSession()

    try:
        user = User(
            username=username,
            password_hash=db_manager.HashPassword(password),
            name=name,
            student_id=student_id,
            email=email,
            course=course,
            year=year,
            created_at=datetime.now(timezone.utc)
        )
        session.add(user)
        session.commit()

        logger.info(f"Registered user '{username}' (id {user.id})")
        return user

    except IntegrityError as e:
        session.rollback()
        if "UNIQUE" in str(e.orig).upper():
            logger.warning(f"Registration rejected for '{username}': duplicate username, email or student ID")
            raise DuplicateKey()
        logger.error(f"Integrity error registering '{username}': {str(e.orig)}")
        raise StoreFailure("Database error")

    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Database error registering '{username}': {str(e)}")
        raise StoreFailure("Database error")

    finally:
        session.close()


# ==================== Authentication ====================

def AuthenticateUser(db_manager: DatabaseManager, username: str, password: str) -> User:
    """
    Check a username and password

    Unknown usernames and wrong passwords raise the same error so that
    responses cannot be used to enumerate accounts.

    Args:
        db_manager: DatabaseManager instance
        username: Username
        password: Plain text password

    Returns:
        User: The authenticated user, with last_login updated

    Raises:
        InvalidCredentials: If the username is unknown or the password is wrong
    """
    session = db_manager.GetSession()

    try:
        user = session.query(User).filter(User.username == username).first()

        if not user:
            db_manager.VerifyPassword(password, _GetDummyHash())
            logger.warning(f"Failed login for '{username}'")
            raise InvalidCredentials()

        if not db_manager.VerifyPassword(password, user.password_hash):
            logger.warning(f"Failed login for '{username}'")
            raise InvalidCredentials()

        user.last_login = datetime.now(timezone.utc)
        session.commit()

        return user

    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Database error authenticating '{username}': {str(e)}")
        raise StoreFailure("Database error")

    finally:
        session.close()


# ==================== Lookups ====================

def GetUserById(db_manager: DatabaseManager, user_id: int) -> Optional[User]:
    """
    Fetch a user by id

    Args:
        db_manager: DatabaseManager instance
        user_id: User id

    Returns:
        User or None if no such user exists
    """
    session = db_manager.GetSession()
    try:
        return session.query(User).filter(User.id == user_id).first()
    finally:
        session.close()


def CountMaterialsForUser(db_manager: DatabaseManager, user_id: int) -> int:
    """Number of materials uploaded by a user"""
    session = db_manager.GetSession()
    try:
        count = session.query(func.count(Material.id)).filter(Material.uploader_id == user_id).scalar()
        return count or 0
    finally:
        session.close()
