"""
Tests for the credential store in CampusShare Server

Covers registration, uniqueness rejection, demo account seeding and login.
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from credential_store import RegisterUser, AuthenticateUser, GetUserById, CountMaterialsForUser
from errors import DuplicateKey, InvalidCredentials
from models.database import User


def _Register(db_manager, **overrides):
    fields = {
        "username": "alice",
        "password": "secret-pass",
        "name": "Alice Smith",
        "student_id": "STU2024100",
        "email": "alice@uni.edu",
        "course": "Physics",
        "year": "2023",
    }
    fields.update(overrides)
    return RegisterUser(db_manager, **fields)


def test_register_hashes_password(db_manager):
    """Stored password is a bcrypt hash, never the plain text"""
    user = _Register(db_manager)

    assert user.id is not None
    assert user.password_hash != "secret-pass"
    assert user.password_hash.startswith("$2")
    assert db_manager.VerifyPassword("secret-pass", user.password_hash)


@pytest.mark.parametrize("duplicate_field", [
    {"username": "alice"},
    {"email": "alice@uni.edu"},
    {"student_id": "STU2024100"},
])
def test_register_duplicate_rejected(db_manager, duplicate_field):
    """Second registration sharing username, email or student ID fails"""
    first = _Register(db_manager)

    second = {"username": "bob", "email": "bob@uni.edu", "student_id": "STU2024200", "name": "Bob"}
    second.update(duplicate_field)

    with pytest.raises(DuplicateKey):
        _Register(db_manager, password="other-pass", **second)

    # First user's row is untouched
    stored = GetUserById(db_manager, first.id)
    assert stored.name == "Alice Smith"
    assert stored.email == "alice@uni.edu"
    assert db_manager.VerifyPassword("secret-pass", stored.password_hash)

    session = db_manager.GetSession()
    try:
        assert session.query(User).filter(User.username == "bob").count() == 0
    finally:
        session.close()


def test_demo_user_seeded_once(db_manager):
    """Re-initializing the database does not duplicate the demo account"""
    assert db_manager.InitializeDatabase(seed_demo_user=True) is False

    session = db_manager.GetSession()
    try:
        demo_users = session.query(User).filter(User.username == "student123").all()
    finally:
        session.close()

    assert len(demo_users) == 1
    assert demo_users[0].student_id == "STU2024001"
    assert demo_users[0].email == "john.doe@uni.edu"


def test_authenticate_demo_user(db_manager):
    user = AuthenticateUser(db_manager, "student123", "password123")

    assert user.username == "student123"
    assert user.name == "John Doe"
    assert user.last_login is not None


def test_authenticate_failures_are_identical(db_manager):
    """Wrong password and unknown user raise the same error and message"""
    with pytest.raises(InvalidCredentials) as wrong_password:
        AuthenticateUser(db_manager, "student123", "wrong")

    with pytest.raises(InvalidCredentials) as unknown_user:
        AuthenticateUser(db_manager, "nouser", "x")

    assert type(wrong_password.value) is type(unknown_user.value)
    assert wrong_password.value.message == unknown_user.value.message


def test_get_user_by_id_missing(db_manager):
    assert GetUserById(db_manager, 9999) is None


def test_count_materials_for_user(db_manager, demo_context, add_material):
    assert CountMaterialsForUser(db_manager, demo_context.user_id) == 0

    add_material(uploader_id=demo_context.user_id)
    add_material(uploader_id=demo_context.user_id)
    add_material(uploader_id=None)

    assert CountMaterialsForUser(db_manager, demo_context.user_id) == 2
