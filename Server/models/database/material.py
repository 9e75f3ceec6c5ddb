"""
CampusShare Server - Material Database Model

Material model for uploaded study documents.
Each row references exactly one blob in the upload directory.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Index
from sqlalchemy.orm import relationship

from models.database.base import Base


class Material(Base):
    """
    Materials table - metadata for one uploaded file
    Rows are immutable once inserted
    """
    __tablename__ = "materials"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    filename = Column(String, nullable=False)  # Opaque stored name
    filepath = Column(String, nullable=False)  # Stored path on disk
    filetype = Column(String, nullable=True)  # Extension without the dot
    course = Column(String, nullable=True)
    year = Column(String, nullable=True)
    semester = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    uploader_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    size = Column(String, nullable=True)  # Human-readable, e.g. "12.34 KB"
    upload_date = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    # Relationship to uploader
    uploader = relationship("User", back_populates="materials")

    __table_args__ = (
        # Listing is always newest first, optionally filtered
        Index('idx_materials_upload_date', 'upload_date'),
        Index('idx_materials_filters', 'course', 'year', 'semester'),
        {"sqlite_autoincrement": True}
    )
