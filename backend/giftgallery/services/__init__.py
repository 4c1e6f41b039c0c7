"""Business logic services."""

from .credential_store import CredentialStore
from .folder_service import FolderService
from .photo_service import PhotoService
from .access_controller import AccessController, AccessResponse

__all__ = ["CredentialStore", "FolderService", "PhotoService", "AccessController", "AccessResponse"]
