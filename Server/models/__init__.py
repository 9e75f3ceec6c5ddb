"""
CampusShare Server - Models Package

This package contains all data models for the CampusShare server:
- database: SQLAlchemy database models
- auth: Authentication-related Pydantic models
- api: Material endpoint Pydantic models
- infrastructure: Dataclass models for request sessions and stored blobs
"""

# Re-export all models for convenient importing
from models.database import *
from models.auth import *
from models.api import *
from models.infrastructure import *
