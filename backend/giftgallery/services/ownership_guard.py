"""Ownership check: single pure function.

This is the ONE place where the ownership rule is defined: a principal may
act on a folder or photo only if it is that resource's owner. There is no
sharing model. Callers load the resource first (a missing resource is the
caller's NotFoundError, not the guard's concern) and call this before any
mutation.
"""

from __future__ import annotations

from typing import Protocol

from ..core.result import Result, Ok, Err
from ..exceptions import ForbiddenError


class Owned(Protocol):
    owner_id: str


def authorize(principal_id: str, resource: Owned, action: str = "access") -> Result[None]:
    """Allow *principal_id* to perform *action* on *resource* only if it owns it.

    Args:
        principal_id: The authenticated user's id.
        resource: Any loaded entity with an ``owner_id`` attribute.
        action: Verb used in the error message (e.g. ``"delete"``).

    Returns:
        ``Ok(None)`` for the owner, ``Err(ForbiddenError)`` for anyone else.
    """
    if not principal_id or resource.owner_id != principal_id:
        return Err(ForbiddenError(f"Not authorized to {action} this resource"))
    return Ok()
