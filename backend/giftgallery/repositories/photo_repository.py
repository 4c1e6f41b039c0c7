"""Repository for photo database operations."""

from typing import List, Optional

from .base import BaseRepository
from ..exceptions import PhotoNotFoundError
from ..models.photo import Photo


class PhotoRepository(BaseRepository[Photo]):
    """Data access layer for photos."""

    model_class = Photo
    not_found_error = PhotoNotFoundError

    def list_by_owner(self, owner_id: str, folder_id: Optional[str] = None) -> List[Photo]:
        """Owner's photos, newest first, optionally limited to one folder."""
        query = self.db.query(Photo).filter(Photo.owner_id == owner_id)
        if folder_id:
            query = query.filter(Photo.folder_id == folder_id)
        return query.order_by(Photo.created_at.desc(), Photo.id).all()

    def list_by_folder(self, folder_id: str) -> List[Photo]:
        return self.db.query(Photo).filter(Photo.folder_id == folder_id).all()

    def delete_by_folder(self, folder_id: str) -> int:
        """Bulk-delete every photo row in a folder. Returns rows removed."""
        count = (
            self.db.query(Photo)
            .filter(Photo.folder_id == folder_id)
            .delete(synchronize_session="auto")
        )
        self.db.flush()
        return count
