"""Uniform response envelope shared by every endpoint."""

from typing import Any, Optional

from pydantic import BaseModel


class Envelope(BaseModel):
    """``{success, data?, count?, message?, error?, code?}``"""

    success: bool
    data: Optional[Any] = None
    count: Optional[int] = None
    message: Optional[str] = None
    error: Optional[str] = None
    code: Optional[str] = None

    def to_content(self) -> dict:
        """Serialize, omitting unset envelope keys. ``data`` is kept whole, nulls included."""
        content = self.model_dump(mode="json")
        return {key: value for key, value in content.items() if value is not None}


def ok_envelope(data: Any = None, message: Optional[str] = None, count: Optional[int] = None) -> Envelope:
    return Envelope(success=True, data=data, message=message, count=count)
