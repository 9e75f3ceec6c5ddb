"""
Shared fixtures for CampusShare Server tests

Every test gets its own SQLite database and upload directory under tmp_path.
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest


@pytest.fixture
def settings(tmp_path, monkeypatch):
    """Settings pointing at a throwaway database and upload directory"""
    from config import get_settings

    monkeypatch.setenv("CAMPUSSHARE_DATABASE_PATH", str(tmp_path / "database" / "test.db"))
    monkeypatch.setenv("CAMPUSSHARE_UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.setenv("CAMPUSSHARE_LOG_DIR", "")
    monkeypatch.setenv("CAMPUSSHARE_JWT_SECRET", "test-secret-key")

    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def upload_dir(settings):
    from file_storage import InitializeStorage
    return InitializeStorage(settings.upload_dir)


@pytest.fixture
def db_manager(settings, upload_dir, monkeypatch):
    """Initialized DatabaseManager installed as the global database.db_manager"""
    import database
    from managers.database_manager import DatabaseManager

    manager = DatabaseManager(settings.database_path)
    manager.InitializeDatabase(seed_demo_user=True)
    monkeypatch.setattr(database, "db_manager", manager)
    yield manager
    manager.Dispose()


@pytest.fixture
def demo_context(db_manager):
    """SessionContext for the seeded demo account"""
    from credential_store import AuthenticateUser
    from models.infrastructure import SessionContext

    user = AuthenticateUser(db_manager, "student123", "password123")
    return SessionContext(user=user, token="unused")


@pytest.fixture
def add_material(db_manager, upload_dir):
    """Factory inserting a catalog row together with a real blob file"""
    from file_storage import GenerateStoredName
    from material_catalog import InsertMaterial
    from models.api import MaterialRecord

    def _AddMaterial(title="notes.pdf", content=b"%PDF-1.4 test", **fields):
        stored_name = GenerateStoredName(title)
        stored_path = upload_dir / stored_name
        stored_path.write_bytes(content)
        values = {
            "title": title,
            "filename": stored_name,
            "filepath": str(stored_path),
            "filetype": Path(title).suffix.lstrip(".") or None,
            "course": "Computer Science",
            "year": "2024",
            "semester": "1",
            "description": "",
            "size": f"{len(content) / 1024:.2f} KB",
        }
        values.update(fields)
        return InsertMaterial(db_manager, MaterialRecord(**values))

    return _AddMaterial


@pytest.fixture
def client(settings):
    """TestClient running the app lifespan against the throwaway settings"""
    from fastapi.testclient import TestClient
    import server

    with TestClient(server.app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client):
    """Bearer header for the seeded demo account"""
    response = client.post("/api/login", json={"username": "student123", "password": "password123"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
