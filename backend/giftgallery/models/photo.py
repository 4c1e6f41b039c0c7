"""Photo model."""

from sqlalchemy import Column, String, Text, Integer, DateTime, ForeignKey
from sqlalchemy.sql import func
from ..database import Base


class Photo(Base):
    """Uploaded image. ``folder_id`` NULL means the photo is unfiled."""

    __tablename__ = "photos"

    id = Column(String(50), primary_key=True)
    owner_id = Column(String(50), ForeignKey("users.user_id"), nullable=False, index=True)
    folder_id = Column(String(50), ForeignKey("folders.id"), nullable=True, index=True)

    # Path returned by blob storage; used again to remove the file.
    storage_path = Column(Text, nullable=False)
    caption = Column(Text, nullable=False, default="")
    content_type = Column(String(100), nullable=True)
    size_bytes = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
