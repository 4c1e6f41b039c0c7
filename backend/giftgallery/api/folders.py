"""Folder API: create, list, get, verify password, settings, download tracking, delete.

Create, verify and delete go through the AccessController, which already
speaks in envelopes and status codes. Reads unwrap service results and let
the exception handler format failures.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends

from ..core.auth import AuthContext, require_auth
from ..schemas.envelope import ok_envelope
from ..schemas.folder import (
    FolderCreate,
    FolderDeleteRequest,
    FolderDownloadRequest,
    FolderResponse,
    FolderSettingsResponse,
    FolderSettingsUpdate,
    FolderVerifyRequest,
)
from ..services.access_controller import AccessController
from ..services.folder_service import FolderService
from .deps import get_access_controller, get_folder_service

router = APIRouter(prefix="/api/folders", tags=["folders"])


@router.post("", status_code=201)
def create_folder(
    data: FolderCreate,
    auth: AuthContext = Depends(require_auth),
    controller: AccessController = Depends(get_access_controller),
):
    """Create a folder. Supplying a password makes it protected."""
    return controller.create_resource(auth.user_id, data.name, data.password).to_response()


@router.get("")
def list_folders(
    auth: AuthContext = Depends(require_auth),
    service: FolderService = Depends(get_folder_service),
):
    """The caller's folders, newest first."""
    folders = service.list_folders(auth.user_id)
    counts = service.photo_counts(folders)
    data = [_folder_out(f, counts.get(f.id, 0)) for f in folders]
    return ok_envelope(data=data, count=len(data)).to_content()


@router.get("/{folder_id}")
def get_folder(
    folder_id: str,
    auth: AuthContext = Depends(require_auth),
    service: FolderService = Depends(get_folder_service),
):
    folder = service.get_owned_folder(folder_id, auth.user_id).unwrap()
    count = service.photo_counts([folder]).get(folder.id, 0)
    return ok_envelope(data=_folder_out(folder, count)).to_content()


@router.post("/{folder_id}/verify")
def verify_folder_password(
    folder_id: str,
    data: FolderVerifyRequest,
    auth: AuthContext = Depends(require_auth),
    controller: AccessController = Depends(get_access_controller),
):
    """Check a protected folder's password before opening it."""
    return controller.verify_access(folder_id, auth.user_id, data.password).to_response()


@router.delete("/{folder_id}")
def delete_folder(
    folder_id: str,
    data: Optional[FolderDeleteRequest] = Body(None),
    auth: AuthContext = Depends(require_auth),
    controller: AccessController = Depends(get_access_controller),
):
    """Delete a folder and its photos. Protected folders need their password."""
    secret = data.password if data is not None else None
    return controller.delete_resource(folder_id, auth.user_id, secret).to_response()


@router.get("/{folder_id}/settings")
def get_folder_settings(
    folder_id: str,
    auth: AuthContext = Depends(require_auth),
    service: FolderService = Depends(get_folder_service),
):
    """Download and watermark settings. Owner only."""
    folder = service.get_settings(folder_id, auth.user_id).unwrap()
    return ok_envelope(data=FolderSettingsResponse.from_folder(folder)).to_content()


@router.put("/{folder_id}/settings")
def update_folder_settings(
    folder_id: str,
    data: FolderSettingsUpdate,
    auth: AuthContext = Depends(require_auth),
    service: FolderService = Depends(get_folder_service),
):
    """Change any subset of the settings. Omitted watermark fields keep their value."""
    watermark = data.watermark_settings.model_dump(exclude_none=True) if data.watermark_settings else None
    folder = service.update_settings(
        folder_id,
        auth.user_id,
        allow_download=data.allow_download,
        allow_client_selection=data.allow_client_selection,
        watermark=watermark,
    ).unwrap()
    return ok_envelope(
        data=FolderSettingsResponse.from_folder(folder),
        message="Folder settings updated successfully",
    ).to_content()


@router.post("/{folder_id}/download")
def track_folder_download(
    folder_id: str,
    data: Optional[FolderDownloadRequest] = Body(None),
    service: FolderService = Depends(get_folder_service),
):
    """Record a download. Open to anyone the owner has allowed to download."""
    secret = data.password if data is not None else None
    count = service.track_download(folder_id, secret).unwrap()
    return ok_envelope(data={"download_count": count}).to_content()


def _folder_out(folder, photo_count: int) -> FolderResponse:
    return FolderResponse.model_validate(folder).model_copy(update={"photo_count": photo_count})
