"""
CampusShare Server - Stored Blob Model

Dataclass describing a file that the blob store has written to disk.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class StoredBlob:
    """Result of file_storage.StoreUpload"""
    stored_name: str  # Opaque, collision-resistant file name
    stored_path: Path  # Absolute path inside the upload directory
    original_name: str
    filetype: str  # Lower-cased extension without the dot
    size_bytes: int
