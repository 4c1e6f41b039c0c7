"""Photo lifecycle: upload into a folder (or none), list, lookup, delete."""

import logging
import os
import uuid
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.result import Result, Ok, Err
from ..exceptions import PhotoNotFoundError, ValidationError
from ..models.photo import Photo
from ..repositories.folder_repository import FolderRepository
from ..repositories.photo_repository import PhotoRepository
from ..storage.blob_storage import BlobStorage, remove_quietly
from . import audit_service
from .ownership_guard import authorize

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = frozenset({".jpeg", ".jpg", ".png", ".gif", ".webp"})
ALLOWED_CONTENT_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"})


class PhotoService:
    def __init__(self, db: Session, storage: BlobStorage, max_upload_bytes: int = 5 * 1024 * 1024):
        self.db = db
        self.storage = storage
        self.max_upload_bytes = max_upload_bytes
        self.photo_repo = PhotoRepository(db)
        self.folder_repo = FolderRepository(db)

    def upload_photo(
        self,
        owner_id: str,
        filename: Optional[str],
        content_type: Optional[str],
        data: Optional[bytes],
        caption: str = "",
        folder_id: Optional[str] = None,
    ) -> Result[Photo]:
        """Store an image and record it, filed under *folder_id* if given.

        The target folder must exist and belong to the uploader.
        """
        invalid = self._validate_image(filename, content_type, data)
        if invalid is not None:
            return Err(invalid)

        if folder_id:
            found = self.folder_repo.find(folder_id)
            if not found.ok:
                return found
            allowed = authorize(owner_id, found.value, "upload to")
            if not allowed.ok:
                return allowed

        storage_path = self.storage.put_object(data, filename)
        photo = Photo(
            id=uuid.uuid4().hex,
            owner_id=owner_id,
            folder_id=folder_id or None,
            storage_path=storage_path,
            caption=caption or "",
            content_type=content_type,
            size_bytes=len(data),
        )
        try:
            self.photo_repo.add(photo)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            remove_quietly(self.storage, storage_path)
            raise
        self.db.refresh(photo)

        logger.info(
            "Photo uploaded",
            extra={"photo_id": photo.id, "folder_id": photo.folder_id, "size_bytes": photo.size_bytes},
        )
        audit_service.log(
            self.db, owner_id, "photo_upload", "photo", photo.id,
            details={"folder_id": photo.folder_id},
        )
        return Ok(photo)

    def _validate_image(
        self, filename: Optional[str], content_type: Optional[str], data: Optional[bytes]
    ) -> Optional[ValidationError]:
        if not filename or data is None:
            return ValidationError("Please upload an image file", field="image")
        ext = os.path.splitext(filename)[1].lower()
        if ext not in ALLOWED_EXTENSIONS or (content_type or "").lower() not in ALLOWED_CONTENT_TYPES:
            return ValidationError("Only image files are allowed", field="image")
        if not data:
            return ValidationError("Uploaded file is empty", field="image")
        if len(data) > self.max_upload_bytes:
            return ValidationError(
                f"File too large (max {self.max_upload_bytes} bytes)", field="image"
            )
        return None

    def list_photos(self, owner_id: str, folder_id: Optional[str] = None) -> List[Photo]:
        return self.photo_repo.list_by_owner(owner_id, folder_id)

    def get_photo(self, photo_id: str, principal_id: str) -> Result[Photo]:
        found = self.photo_repo.find(photo_id)
        if not found.ok:
            return found
        allowed = authorize(principal_id, found.value, "access")
        if not allowed.ok:
            return allowed
        return found

    def delete_photo(self, photo_id: str, principal_id: str) -> Result[None]:
        found = self.photo_repo.find(photo_id)
        if not found.ok:
            return found
        photo = found.value
        allowed = authorize(principal_id, photo, "delete")
        if not allowed.ok:
            return allowed

        storage_path = photo.storage_path
        if self.photo_repo.delete_by_id(photo_id) == 0:
            self.db.rollback()
            return Err(PhotoNotFoundError(photo_id))
        self.db.commit()

        remove_quietly(self.storage, storage_path)
        audit_service.log(self.db, principal_id, "photo_delete", "photo", photo_id)
        return Ok()
