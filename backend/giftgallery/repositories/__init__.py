"""Data access repositories."""

from .base import BaseRepository
from .folder_repository import FolderRepository
from .photo_repository import PhotoRepository

__all__ = [
    "BaseRepository",
    "FolderRepository",
    "PhotoRepository",
]
