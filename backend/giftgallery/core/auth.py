"""Authentication dependency: resolves the principal for a request.

``require_auth`` reads the ``Authorization: Bearer`` header, validates the
token, and loads the user from the database on every call. Nothing about
identity is cached between requests, so a deactivated account loses access
on its next call.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .token_factory import decode_token
from ..database import get_db
from ..exceptions import AuthenticationError

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """The authenticated principal. Handed to services as ``principal_id``."""

    user_id: str
    role: str


def require_auth(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    db: Session = Depends(get_db),
) -> AuthContext:
    """Require a valid JWT and return the caller's AuthContext."""
    if credentials is None:
        raise AuthenticationError("Missing authentication token")

    settings = request.app.state.settings
    payload = decode_token(
        credentials.credentials, settings.jwt_secret_key, settings.jwt_algorithm
    )
    if payload is None:
        raise AuthenticationError("Invalid or expired token")

    from ..models.user import User

    user = db.query(User).filter(User.user_id == payload.sub).first()
    if user is None:
        raise AuthenticationError("User not found")
    if not user.is_active:
        raise AuthenticationError("Account is deactivated")

    return AuthContext(user_id=user.user_id, role=user.role)
