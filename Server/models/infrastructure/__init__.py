"""
CampusShare Server - Infrastructure Models Package

This package contains dataclass models for infrastructure components
like request sessions and stored blobs.
"""

from models.infrastructure.session_context import SessionContext
from models.infrastructure.stored_blob import StoredBlob

__all__ = [
    'SessionContext',
    'StoredBlob',
]
