"""Custom exception hierarchy for the gallery API."""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(str, Enum):
    """Standardized error codes for API responses."""

    # Folder errors
    FOLDER_NOT_FOUND = "FOLDER_NOT_FOUND"
    FOLDER_NOT_PROTECTED = "FOLDER_NOT_PROTECTED"
    SECRET_REQUIRED = "SECRET_REQUIRED"
    INVALID_SECRET = "INVALID_SECRET"

    # Photo errors
    PHOTO_NOT_FOUND = "PHOTO_NOT_FOUND"

    # Storage errors
    STORAGE_CLEANUP_FAILED = "STORAGE_CLEANUP_FAILED"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    BAD_REQUEST = "BAD_REQUEST"

    # Auth
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"

    # Generic errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class GalleryException(Exception):
    """
    Base exception for all gallery errors.

    Provides structured error responses with:
    - Human-readable message
    - Machine-readable error code
    - HTTP status code
    - Optional additional details
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            status_code: HTTP status code to return
            details: Optional additional context/details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to the failure envelope.

        Returns:
            Dictionary with success, error and code fields
        """
        return {
            "success": False,
            "error": self.message,
            "code": self.error_code.value,
        }


class NotFoundError(GalleryException):
    """Requested entity does not exist."""

    def __init__(self, message: str, error_code: ErrorCode, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, status_code=404, details=details)


class FolderNotFoundError(NotFoundError):
    """Folder not found in database."""

    def __init__(self, folder_id: str):
        super().__init__(
            "Folder not found",
            ErrorCode.FOLDER_NOT_FOUND,
            details={"folder_id": folder_id}
        )


class PhotoNotFoundError(NotFoundError):
    """Photo not found in database."""

    def __init__(self, photo_id: str):
        super().__init__(
            "Photo not found",
            ErrorCode.PHOTO_NOT_FOUND,
            details={"photo_id": photo_id}
        )


class ValidationError(GalleryException):
    """Validation failed for user input."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message,
            ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=details
        )


class BadRequestError(GalleryException):
    """Well-formed request that cannot be applied to the resource in its current state."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.BAD_REQUEST):
        super().__init__(message, error_code, status_code=400)


class UnauthorizedError(GalleryException):
    """Supplied folder secret does not match."""

    def __init__(self, message: str = "Incorrect password"):
        super().__init__(
            message,
            ErrorCode.INVALID_SECRET,
            status_code=401,
        )


class AuthenticationError(GalleryException):
    """Request lacks valid authentication credentials."""

    def __init__(self, message: str = "Invalid or missing authentication token"):
        super().__init__(
            message,
            ErrorCode.UNAUTHORIZED,
            status_code=401,
        )


class ForbiddenError(GalleryException):
    """Authenticated user lacks permission for the requested action."""

    def __init__(self, message: str = "You do not have permission to perform this action"):
        super().__init__(
            message,
            ErrorCode.FORBIDDEN,
            status_code=403,
        )


class StorageCleanupError(GalleryException):
    """Removing a stored object failed. Logged by callers, never returned to clients."""

    def __init__(self, path: str, original_error: Optional[Exception] = None):
        details = {"path": path}
        if original_error:
            details["original_error"] = str(original_error)

        super().__init__(
            f"Failed to remove stored object: {path}",
            ErrorCode.STORAGE_CLEANUP_FAILED,
            status_code=500,
            details=details
        )
