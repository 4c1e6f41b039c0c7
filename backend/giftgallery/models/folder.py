"""Folder model: a photo album that may be locked with a password."""

from sqlalchemy import Boolean, Column, String, Text, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from ..database import Base

WATERMARK_POSITIONS = (
    "center", "north", "south", "east", "west",
    "north_east", "north_west", "south_east", "south_west",
)


class Folder(Base):
    """Owned container for photos.

    ``secret_hash`` is a bcrypt hash of the folder password, or NULL for an
    unprotected folder. The plaintext password is never stored.

    The ``allow_*`` flags and ``watermark_*`` columns are the owner's
    presentation settings, changed after creation through the settings
    endpoint. ``download_count`` only ever goes up.
    """

    __tablename__ = "folders"
    __table_args__ = (
        UniqueConstraint("owner_id", "name", name="uq_folders_owner_name"),
    )

    id = Column(String(50), primary_key=True)
    owner_id = Column(String(50), ForeignKey("users.user_id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    secret_hash = Column(Text, nullable=True)

    allow_download = Column(Boolean, nullable=False, default=False)
    allow_client_selection = Column(Boolean, nullable=False, default=False)
    watermark_enabled = Column(Boolean, nullable=False, default=False)
    watermark_text = Column(String(100), nullable=False, default="COPYRIGHT")
    watermark_opacity = Column(Integer, nullable=False, default=50)
    watermark_position = Column(String(20), nullable=False, default="center")
    watermark_font_size = Column(Integer, nullable=False, default=80)
    download_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def is_protected(self) -> bool:
        return self.secret_hash is not None
