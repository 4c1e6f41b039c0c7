"""Small builders shared by the test modules."""

# A few bytes that start like a JPEG; content is never decoded.
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64


def jpeg_upload(filename: str = "photo.jpg", data: bytes = JPEG_BYTES) -> dict:
    """Keyword arguments for PhotoService.upload_photo describing a small JPEG."""
    return {"filename": filename, "content_type": "image/jpeg", "data": data}
