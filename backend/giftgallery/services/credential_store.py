"""One-way hashing and verification of folder and account passwords.

bcrypt via passlib: every hash carries its own random salt, so hashing the
same password twice gives different strings, and verification compares in
constant time. No I/O, no state beyond the configured cost factor.
"""

import logging

from passlib.hash import bcrypt

from ..core.result import Result, Ok, Err
from ..exceptions import ValidationError

logger = logging.getLogger(__name__)


class CredentialStore:
    """Hash and verify secrets with a fixed bcrypt cost factor."""

    def __init__(self, rounds: int = 12):
        self._hasher = bcrypt.using(rounds=rounds)

    def hash(self, secret: str) -> Result[str]:
        if not secret:
            return Err(ValidationError("Password cannot be empty", field="password"))
        return Ok(self._hasher.hash(secret))

    def verify(self, secret: str, secret_hash: str) -> bool:
        """True only if *secret* matches *secret_hash*. Never raises."""
        if not secret or not secret_hash:
            return False
        try:
            return self._hasher.verify(secret, secret_hash)
        except (ValueError, TypeError):
            logger.warning("Stored password hash is malformed; treating as mismatch")
            return False
