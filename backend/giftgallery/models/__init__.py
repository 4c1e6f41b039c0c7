"""Database models."""

from .user import User, AuditLog
from .folder import Folder
from .photo import Photo

__all__ = ["User", "AuditLog", "Folder", "Photo"]
