"""FastAPI dependencies that build services from the app's injected handles.

The credential store, blob storage and settings live on ``app.state``; they
are created once in ``create_app`` and reached only through here.
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ..core.config import Settings
from ..database import get_db
from ..services.access_controller import AccessController
from ..services.credential_store import CredentialStore
from ..services.folder_service import FolderService
from ..services.photo_service import PhotoService
from ..storage.blob_storage import BlobStorage


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_credentials(request: Request) -> CredentialStore:
    return request.app.state.credentials


def get_storage(request: Request) -> BlobStorage:
    return request.app.state.storage


def get_folder_service(
    db: Session = Depends(get_db),
    credentials: CredentialStore = Depends(get_credentials),
    storage: BlobStorage = Depends(get_storage),
) -> FolderService:
    return FolderService(db, credentials, storage)


def get_access_controller(
    folders: FolderService = Depends(get_folder_service),
) -> AccessController:
    return AccessController(folders)


def get_photo_service(
    db: Session = Depends(get_db),
    storage: BlobStorage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
) -> PhotoService:
    return PhotoService(db, storage, max_upload_bytes=settings.max_upload_bytes)
