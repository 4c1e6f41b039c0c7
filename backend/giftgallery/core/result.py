"""Explicit success/failure values for the access-control components.

Expected failures (missing folder, wrong owner, bad secret) travel as
``Result`` values instead of exceptions so that every caller sees them in
the signature. Programmer faults still raise.

    result = folder_service.verify_secret(folder_id, secret)
    if not result.ok:
        return failure(result.error)
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from ..exceptions import GalleryException

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a fallible operation. Exactly one of value/error is meaningful."""

    value: Optional[T] = None
    error: Optional[GalleryException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value


def Ok(value: Optional[T] = None) -> Result[T]:
    return Result(value=value)


def Err(error: GalleryException) -> Result:
    return Result(error=error)
