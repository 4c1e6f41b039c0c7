"""Deep module for folder lifecycle: create, lookup, password check, settings, cascade delete.

Expected failures come back as ``Result`` values. The order of checks in
``delete_folder`` is fixed: existence, ownership, password, then mutation.
Nothing is written until every check has passed.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.result import Result, Ok, Err
from ..exceptions import (
    BadRequestError,
    ErrorCode,
    FolderNotFoundError,
    ForbiddenError,
    UnauthorizedError,
    ValidationError,
)
from ..models.folder import WATERMARK_POSITIONS, Folder
from ..repositories.folder_repository import FolderRepository
from ..repositories.photo_repository import PhotoRepository
from ..storage.blob_storage import BlobStorage, remove_quietly
from . import audit_service
from .credential_store import CredentialStore
from .ownership_guard import authorize

logger = logging.getLogger(__name__)

_DUPLICATE_NAME = "A folder with this name already exists"

_WATERMARK_COLUMNS = {
    "enabled": "watermark_enabled",
    "text": "watermark_text",
    "opacity": "watermark_opacity",
    "position": "watermark_position",
    "font_size": "watermark_font_size",
}


class FolderService:
    """All folder operations behind a simple interface.

    Public methods:
        create_folder       -- optional password makes the folder protected
        get_folder          -- lookup by id
        get_owned_folder    -- lookup + ownership check
        list_folders        -- owner's folders, newest first
        photo_counts        -- photos per folder id
        verify_secret       -- check a folder password
        get_settings        -- owner-only read of download and watermark settings
        update_settings     -- owner-only partial settings change
        track_download      -- public download counter, gated by settings and password
        delete_folder       -- guarded cascade delete
    """

    def __init__(self, db: Session, credentials: CredentialStore, storage: BlobStorage):
        self.db = db
        self.credentials = credentials
        self.storage = storage
        self.folder_repo = FolderRepository(db)
        self.photo_repo = PhotoRepository(db)

    # ------------------------------------------------------------------
    # Create / read
    # ------------------------------------------------------------------

    def create_folder(self, owner_id: str, name: str, secret: Optional[str] = None) -> Result[Folder]:
        """Create a folder owned by *owner_id*.

        A blank or missing *secret* gives an unprotected folder; otherwise the
        secret is hashed and the folder is protected.
        """
        name = (name or "").strip()
        if not name:
            return Err(ValidationError("Please provide a folder name", field="name"))

        if self.folder_repo.get_by_owner_and_name(owner_id, name) is not None:
            return Err(ValidationError(_DUPLICATE_NAME, field="name"))

        secret_hash = None
        if secret is not None and secret.strip():
            hashed = self.credentials.hash(secret)
            if not hashed.ok:
                return hashed
            secret_hash = hashed.value

        folder = Folder(
            id=uuid.uuid4().hex,
            owner_id=owner_id,
            name=name,
            secret_hash=secret_hash,
        )
        try:
            self.folder_repo.add(folder)
            self.db.commit()
        except IntegrityError:
            # Lost a race against a concurrent create with the same name.
            self.db.rollback()
            return Err(ValidationError(_DUPLICATE_NAME, field="name"))
        self.db.refresh(folder)

        logger.info(
            "Folder created",
            extra={"folder_id": folder.id, "owner_id": owner_id, "is_protected": folder.is_protected},
        )
        audit_service.log(
            self.db, owner_id, "folder_create", "folder", folder.id,
            details={"is_protected": folder.is_protected},
        )
        return Ok(folder)

    def get_folder(self, folder_id: str) -> Result[Folder]:
        return self.folder_repo.find(folder_id)

    def get_owned_folder(self, folder_id: str, principal_id: str, action: str = "access") -> Result[Folder]:
        found = self.get_folder(folder_id)
        if not found.ok:
            return found
        allowed = authorize(principal_id, found.value, action)
        if not allowed.ok:
            return allowed
        return found

    def list_folders(self, owner_id: str) -> List[Folder]:
        return self.folder_repo.list_by_owner(owner_id)

    def photo_counts(self, folders: List[Folder]) -> dict[str, int]:
        return self.folder_repo.photo_counts([f.id for f in folders])

    # ------------------------------------------------------------------
    # Password gate
    # ------------------------------------------------------------------

    def verify_secret(
        self,
        folder_id: str,
        secret: Optional[str],
        principal_id: Optional[str] = None,
    ) -> Result[None]:
        """Check *secret* against a protected folder.

        When *principal_id* is given, ownership is checked before the password.
        """
        if principal_id is not None:
            found = self.get_owned_folder(folder_id, principal_id, "access")
        else:
            found = self.get_folder(folder_id)
        if not found.ok:
            return found
        folder = found.value

        if not folder.is_protected:
            return Err(BadRequestError(
                "This folder is not password protected", ErrorCode.FOLDER_NOT_PROTECTED
            ))
        return self._check_secret(folder, secret, principal_id)

    def _check_secret(self, folder: Folder, secret: Optional[str], principal_id: Optional[str]) -> Result[None]:
        if not self.credentials.verify(secret or "", folder.secret_hash):
            audit_service.log(self.db, principal_id, "folder_verify_failed", "folder", folder.id)
            logger.info("Folder password rejected", extra={"folder_id": folder.id})
            return Err(UnauthorizedError("Incorrect password"))
        return Ok()

    # ------------------------------------------------------------------
    # Settings / downloads
    # ------------------------------------------------------------------

    def get_settings(self, folder_id: str, principal_id: str) -> Result[Folder]:
        return self.get_owned_folder(folder_id, principal_id, "view settings of")

    def update_settings(
        self,
        folder_id: str,
        principal_id: str,
        allow_download: Optional[bool] = None,
        allow_client_selection: Optional[bool] = None,
        watermark: Optional[dict] = None,
    ) -> Result[Folder]:
        """Apply a partial settings change. ``None`` leaves a setting as it is.

        *watermark* may hold any of ``enabled``, ``text``, ``opacity``,
        ``position`` and ``font_size``; keys left out keep their stored value.
        """
        found = self.get_owned_folder(folder_id, principal_id, "update")
        if not found.ok:
            return found
        folder = found.value

        watermark = {k: v for k, v in (watermark or {}).items() if v is not None}
        unknown = set(watermark) - set(_WATERMARK_COLUMNS)
        if unknown:
            return Err(ValidationError(
                f"Unknown watermark setting: {sorted(unknown)[0]}", field="watermark_settings"
            ))
        if "position" in watermark and watermark["position"] not in WATERMARK_POSITIONS:
            return Err(ValidationError("Invalid watermark position", field="watermark_settings"))
        if "opacity" in watermark and not 0 <= watermark["opacity"] <= 100:
            return Err(ValidationError("Watermark opacity must be between 0 and 100", field="watermark_settings"))

        if allow_download is not None:
            folder.allow_download = allow_download
        if allow_client_selection is not None:
            folder.allow_client_selection = allow_client_selection
        for key, value in watermark.items():
            setattr(folder, _WATERMARK_COLUMNS[key], value)

        self.db.commit()
        self.db.refresh(folder)

        changed = [f"watermark.{key}" for key in watermark]
        if allow_download is not None:
            changed.append("allow_download")
        if allow_client_selection is not None:
            changed.append("allow_client_selection")
        audit_service.log(
            self.db, principal_id, "folder_settings_update", "folder", folder.id,
            details={"changed": changed},
        )
        return Ok(folder)

    def track_download(self, folder_id: str, secret: Optional[str] = None) -> Result[int]:
        """Count one download of a folder and return the new total.

        Needs no login, but the owner must have enabled downloads, and a
        protected folder still needs its password.
        """
        found = self.get_folder(folder_id)
        if not found.ok:
            return found
        folder = found.value

        if not folder.allow_download:
            return Err(ForbiddenError("Downloads are disabled for this folder"))
        if folder.is_protected:
            if not secret:
                return Err(BadRequestError(
                    "Password required to download this protected folder", ErrorCode.SECRET_REQUIRED
                ))
            checked = self._check_secret(folder, secret, None)
            if not checked.ok:
                return checked

        if self.folder_repo.increment_downloads(folder_id) == 0:
            self.db.rollback()
            return Err(FolderNotFoundError(folder_id))
        self.db.commit()
        self.db.refresh(folder)

        logger.info(
            "Folder downloaded",
            extra={"folder_id": folder_id, "download_count": folder.download_count},
        )
        return Ok(folder.download_count)

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def delete_folder(self, folder_id: str, principal_id: str, secret: Optional[str] = None) -> Result[int]:
        """Delete a folder and every photo filed in it.

        Returns the number of photos removed. Stored files are removed after
        the rows are committed; a file that cannot be removed is logged and
        left behind.
        """
        found = self.get_owned_folder(folder_id, principal_id, "delete")
        if not found.ok:
            return found
        folder = found.value

        if folder.is_protected:
            if not secret:
                return Err(BadRequestError(
                    "Password required to delete this protected folder", ErrorCode.SECRET_REQUIRED
                ))
            checked = self._check_secret(folder, secret, principal_id)
            if not checked.ok:
                return checked

        storage_paths = [p.storage_path for p in self.photo_repo.list_by_folder(folder_id)]
        photos_removed = self.photo_repo.delete_by_folder(folder_id)
        if self.folder_repo.delete_by_id(folder_id) == 0:
            self.db.rollback()
            return Err(FolderNotFoundError(folder_id))
        self.db.commit()

        files_left = sum(1 for path in storage_paths if not remove_quietly(self.storage, path))

        logger.info(
            "Folder deleted",
            extra={
                "folder_id": folder_id,
                "photos_removed": photos_removed,
                "files_left_behind": files_left,
            },
        )
        audit_service.log(
            self.db, principal_id, "folder_delete", "folder", folder_id,
            details={"photos_removed": photos_removed, "files_left_behind": files_left},
        )
        return Ok(photos_removed)
