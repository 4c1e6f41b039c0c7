"""Authentication service: account registration and login.

Passwords go through the same CredentialStore as folder passwords and are
never stored or logged in plaintext. Endpoints are thin wrappers.
"""

import logging
import uuid
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..exceptions import ValidationError, AuthenticationError
from ..models.user import User
from . import audit_service
from .credential_store import CredentialStore

logger = logging.getLogger(__name__)

# NIST SP 800-63B recommends at least 8 characters.
MIN_PASSWORD_LENGTH = 8


def register_user(
    db: Session,
    credentials: CredentialStore,
    email: str,
    password: str,
    display_name: str,
) -> User:
    """Create a new user account.

    Raises ValidationError if email is already taken or inputs are invalid.
    """
    email = email.strip().lower()
    if not email or "@" not in email:
        raise ValidationError("Valid email address required", field="email")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("Password must be at least 8 characters", field="password")
    if not display_name.strip():
        raise ValidationError("Display name required", field="display_name")

    if db.query(User).filter(User.email == email).first() is not None:
        raise ValidationError("Email already registered", field="email")

    user = User(
        user_id=uuid.uuid4().hex[:12],
        display_name=display_name.strip(),
        email=email,
        password_hash=credentials.hash(password).unwrap(),
        role="user",
        is_active=True,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError("Email already registered", field="email")
    db.refresh(user)
    logger.info("User registered", extra={"user_id": user.user_id})
    return user


def authenticate(
    db: Session,
    credentials: CredentialStore,
    email: str,
    password: str,
    ip_address: Optional[str] = None,
) -> User:
    """Validate credentials and return the user.

    Raises AuthenticationError on invalid email, wrong password, or inactive account.
    """
    email = email.strip().lower()
    user = db.query(User).filter(User.email == email).first()

    if user is None or not credentials.verify(password, user.password_hash):
        audit_service.log(
            db, user.user_id if user else None, "login_failed", "user",
            details={"email": email}, ip_address=ip_address,
        )
        raise AuthenticationError("Invalid email or password")

    if not user.is_active:
        raise AuthenticationError("Account is deactivated")

    audit_service.log(db, user.user_id, "login", "user", user.user_id, ip_address=ip_address)
    return user


def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.user_id == user_id).first()
