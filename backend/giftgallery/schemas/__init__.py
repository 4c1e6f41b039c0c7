"""Pydantic schemas for API validation."""

from .envelope import Envelope, ok_envelope
from .folder import (
    FolderCreate,
    FolderVerifyRequest,
    FolderDeleteRequest,
    FolderResponse,
    FolderSettingsUpdate,
    FolderSettingsResponse,
    FolderDownloadRequest,
    WatermarkSettings,
    WatermarkUpdate,
)
from .photo import PhotoResponse
from .user import RegisterRequest, LoginRequest, UserResponse, LoginResponse

__all__ = [
    "Envelope",
    "ok_envelope",
    "FolderCreate",
    "FolderVerifyRequest",
    "FolderDeleteRequest",
    "FolderResponse",
    "FolderSettingsUpdate",
    "FolderSettingsResponse",
    "FolderDownloadRequest",
    "WatermarkSettings",
    "WatermarkUpdate",
    "PhotoResponse",
    "RegisterRequest",
    "LoginRequest",
    "UserResponse",
    "LoginResponse",
]
