"""Blob storage for uploaded photo files.

``BlobStorage`` is the collaborator interface the services depend on.
``LocalBlobStorage`` keeps files under a directory on disk and hands back a
``/uploads/<name>`` path that is recorded on the photo row.
"""

import logging
import os
import time
import uuid
from pathlib import Path
from typing import Protocol

from ..core.result import Result, Ok, Err
from ..exceptions import StorageCleanupError

logger = logging.getLogger(__name__)

URL_PREFIX = "/uploads/"


class BlobStorage(Protocol):
    def put_object(self, data: bytes, filename: str) -> str:
        """Store *data* and return the path to record on the photo."""
        ...

    def remove_object(self, path: str) -> Result[None]:
        """Delete the object at *path*. Failures come back as Err, never raised."""
        ...


class LocalBlobStorage:
    """Files on local disk, named ``<millis>-<random><ext>``."""

    def __init__(self, root: str):
        self.root = Path(root)

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def put_object(self, data: bytes, filename: str) -> str:
        self.ensure_root()
        ext = os.path.splitext(filename)[1].lower()
        stored_name = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:12]}{ext}"
        (self.root / stored_name).write_bytes(data)
        logger.debug("Stored object", extra={"path": URL_PREFIX + stored_name, "size": len(data)})
        return URL_PREFIX + stored_name

    def remove_object(self, path: str) -> Result[None]:
        try:
            target = self._resolve(path)
            target.unlink()
        except (OSError, ValueError) as e:
            return Err(StorageCleanupError(path, e))
        return Ok()

    def _resolve(self, path: str) -> Path:
        """Map a stored ``/uploads/<name>`` path back to a file under root."""
        name = path[len(URL_PREFIX):] if path.startswith(URL_PREFIX) else path
        target = (self.root / name).resolve()
        if self.root.resolve() not in target.parents:
            raise ValueError(f"Path escapes storage root: {path}")
        return target


def remove_quietly(storage: BlobStorage, path: str) -> bool:
    """Request removal of *path*; log and swallow any failure.

    Used after the owning metadata row is gone, when a leftover file is
    preferable to a half-deleted photo. Returns True if the object was removed.
    """
    try:
        result = storage.remove_object(path)
    except Exception as e:
        result = Err(StorageCleanupError(path, e))
    if not result.ok:
        logger.warning(
            "Storage cleanup failed (non-fatal): %s", result.error.message,
            extra={"path": path, "error_code": result.error.error_code.value, "details": result.error.details},
        )
        return False
    return True
