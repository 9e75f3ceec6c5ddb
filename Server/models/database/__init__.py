"""
CampusShare Server - Database Models Package

This package contains all SQLAlchemy database model definitions.
All models share a common declarative base for proper table relationships.
"""

# Import Base first
from models.database.base import Base

# Import all models
from models.database.user import User
from models.database.material import Material

# Export all models and Base
__all__ = [
    'Base',
    'User',
    'Material',
]
