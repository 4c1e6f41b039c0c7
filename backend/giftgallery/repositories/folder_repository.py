"""Repository for folder database operations."""

from typing import List, Optional

from sqlalchemy import func

from .base import BaseRepository
from ..exceptions import FolderNotFoundError
from ..models.folder import Folder
from ..models.photo import Photo


class FolderRepository(BaseRepository[Folder]):
    """Data access layer for folders."""

    model_class = Folder
    not_found_error = FolderNotFoundError

    def get_by_owner_and_name(self, owner_id: str, name: str) -> Optional[Folder]:
        return (
            self.db.query(Folder)
            .filter(Folder.owner_id == owner_id, Folder.name == name)
            .first()
        )

    def list_by_owner(self, owner_id: str) -> List[Folder]:
        """Owner's folders, newest first."""
        return (
            self.db.query(Folder)
            .filter(Folder.owner_id == owner_id)
            .order_by(Folder.created_at.desc(), Folder.id)
            .all()
        )

    def photo_counts(self, folder_ids: List[str]) -> dict[str, int]:
        """Number of photos per folder, for the given folder ids."""
        if not folder_ids:
            return {}
        rows = (
            self.db.query(Photo.folder_id, func.count(Photo.id))
            .filter(Photo.folder_id.in_(folder_ids))
            .group_by(Photo.folder_id)
            .all()
        )
        return {folder_id: count for folder_id, count in rows}

    def count(self) -> int:
        return self.db.query(func.count(Folder.id)).scalar() or 0

    def increment_downloads(self, folder_id: str) -> int:
        """Atomically bump ``download_count``. Returns rows updated (0 if the folder is gone)."""
        count = (
            self.db.query(Folder)
            .filter(Folder.id == folder_id)
            .update({Folder.download_count: Folder.download_count + 1}, synchronize_session="fetch")
        )
        self.db.flush()
        return count
