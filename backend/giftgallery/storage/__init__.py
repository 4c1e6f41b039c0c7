"""Blob storage backends."""

from .blob_storage import BlobStorage, LocalBlobStorage, remove_quietly

__all__ = ["BlobStorage", "LocalBlobStorage", "remove_quietly"]
