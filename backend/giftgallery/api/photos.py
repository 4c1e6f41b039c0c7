"""Photo API: upload, list, get, delete."""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from ..core.auth import AuthContext, require_auth
from ..schemas.envelope import ok_envelope
from ..schemas.photo import PhotoResponse
from ..services.photo_service import PhotoService
from .deps import get_photo_service

router = APIRouter(prefix="/api/photos", tags=["photos"])


@router.post("", status_code=201)
def upload_photo(
    image: Optional[UploadFile] = File(None),
    caption: str = Form(""),
    folder_id: Optional[str] = Form(None),
    auth: AuthContext = Depends(require_auth),
    service: PhotoService = Depends(get_photo_service),
):
    """Upload one image, optionally into one of the caller's folders."""
    data = None
    if image is not None:
        # One byte past the limit is enough to reject an oversized file.
        data = image.file.read(service.max_upload_bytes + 1)
    photo = service.upload_photo(
        owner_id=auth.user_id,
        filename=image.filename if image is not None else None,
        content_type=image.content_type if image is not None else None,
        data=data,
        caption=caption,
        folder_id=folder_id,
    ).unwrap()
    return ok_envelope(data=PhotoResponse.model_validate(photo)).to_content()


@router.get("")
def list_photos(
    folder_id: Optional[str] = Query(None),
    auth: AuthContext = Depends(require_auth),
    service: PhotoService = Depends(get_photo_service),
):
    photos = service.list_photos(auth.user_id, folder_id)
    data = [PhotoResponse.model_validate(p) for p in photos]
    return ok_envelope(data=data, count=len(data)).to_content()


@router.get("/{photo_id}")
def get_photo(
    photo_id: str,
    auth: AuthContext = Depends(require_auth),
    service: PhotoService = Depends(get_photo_service),
):
    photo = service.get_photo(photo_id, auth.user_id).unwrap()
    return ok_envelope(data=PhotoResponse.model_validate(photo)).to_content()


@router.delete("/{photo_id}")
def delete_photo(
    photo_id: str,
    auth: AuthContext = Depends(require_auth),
    service: PhotoService = Depends(get_photo_service),
):
    service.delete_photo(photo_id, auth.user_id).unwrap()
    return ok_envelope(data={}).to_content()
