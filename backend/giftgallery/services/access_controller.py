"""Request/response face of the folder access model.

Turns FolderService results into ``AccessResponse`` objects: an HTTP status
plus the uniform envelope. Expected failures map to their own status;
anything unexpected is logged with its traceback and reported as a bare 500
so internals never reach the client. No persistence happens here.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from fastapi.responses import JSONResponse

from ..core.result import Result
from ..exceptions import GalleryException
from ..schemas.envelope import Envelope, ok_envelope
from ..schemas.folder import FolderResponse
from .folder_service import FolderService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessResponse:
    status_code: int
    envelope: Envelope

    @property
    def success(self) -> bool:
        return self.envelope.success

    def to_response(self) -> JSONResponse:
        return JSONResponse(status_code=self.status_code, content=self.envelope.to_content())


def failure(error: GalleryException) -> AccessResponse:
    return AccessResponse(error.status_code, Envelope(**error.to_dict()))


def server_error(message: str) -> AccessResponse:
    return AccessResponse(500, Envelope(success=False, error=message, code="INTERNAL_ERROR"))


class AccessController:
    def __init__(self, folders: FolderService):
        self.folders = folders

    def create_resource(self, principal_id: str, name: str, secret: Optional[str] = None) -> AccessResponse:
        def op() -> AccessResponse:
            created = self.folders.create_folder(principal_id, name, secret)
            if not created.ok:
                return failure(created.error)
            return AccessResponse(201, ok_envelope(data=FolderResponse.model_validate(created.value)))

        return self._guarded("creating folder", op)

    def verify_access(self, folder_id: str, principal_id: str, secret: Optional[str]) -> AccessResponse:
        """Owner check, then password check, before browsing a protected folder."""
        def op() -> AccessResponse:
            verified = self.folders.verify_secret(folder_id, secret, principal_id=principal_id)
            return self._respond(verified, "Password verified successfully")

        return self._guarded("verifying password", op)

    def delete_resource(self, folder_id: str, principal_id: str, secret: Optional[str] = None) -> AccessResponse:
        def op() -> AccessResponse:
            deleted = self.folders.delete_folder(folder_id, principal_id, secret)
            return self._respond(deleted, "Folder and all associated photos deleted successfully", data={})

        return self._guarded("deleting folder", op)

    @staticmethod
    def _respond(result: Result, message: str, data=None) -> AccessResponse:
        if not result.ok:
            return failure(result.error)
        return AccessResponse(200, ok_envelope(data=data, message=message))

    def _guarded(self, activity: str, op: Callable[[], AccessResponse]) -> AccessResponse:
        try:
            return op()
        except GalleryException as e:
            return failure(e)
        except Exception:
            logger.exception("Unexpected error while %s", activity)
            self.folders.db.rollback()
            return server_error(f"Server error while {activity}")
