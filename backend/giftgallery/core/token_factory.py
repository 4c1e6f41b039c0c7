"""Login tokens: compact HMAC-signed JWTs naming a user id.

``create_token`` is called by the login endpoint, ``decode_token`` by the
``require_auth`` dependency. A token carries only ``sub``, ``iat``, ``exp``
and ``iss``; the user row is reloaded on every request, so nothing about
the account is trusted from the token beyond its id.
"""

import base64
import hashlib
import hmac
import json
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

ISSUER = "giftgallery"

SIGNING_ALGORITHMS = {
    "HS256": hashlib.sha256,
    "HS384": hashlib.sha384,
    "HS512": hashlib.sha512,
}


@dataclass(frozen=True)
class TokenPayload:
    sub: str
    issued_at: datetime
    expires_at: datetime


def create_token(
    subject: str,
    secret: str,
    algorithm: str = "HS256",
    expires_hours: int = 24,
) -> str:
    """Sign a token for *subject* (a user id).

    Raises:
        ValueError: if *algorithm* is not one of ``SIGNING_ALGORITHMS``.
    """
    if algorithm not in SIGNING_ALGORITHMS:
        raise ValueError(f"Unsupported algorithm: {algorithm}")

    issued = int(time.time())
    header = _encode_json({"alg": algorithm, "typ": "JWT"})
    claims = _encode_json({
        "sub": subject,
        "iat": issued,
        "exp": issued + expires_hours * 3600,
        "iss": ISSUER,
    })
    signing_input = header + b"." + claims
    return (signing_input + b"." + _b64encode(_sign(signing_input, secret, algorithm))).decode()


def decode_token(
    token: str,
    secret: str,
    algorithm: str = "HS256",
    leeway_seconds: int = 0,
) -> Optional[TokenPayload]:
    """Verify *token* and return its payload, or ``None`` if it is not acceptable.

    The header must name exactly *algorithm*; a token signed with any other
    algorithm is refused even if the signature would check out.
    """
    if algorithm not in SIGNING_ALGORITHMS or not token:
        return None
    try:
        header_seg, claims_seg, signature_seg = token.encode().split(b".")
        if json.loads(_b64decode(header_seg)).get("alg") != algorithm:
            return None

        expected = _sign(header_seg + b"." + claims_seg, secret, algorithm)
        if not hmac.compare_digest(expected, _b64decode(signature_seg)):
            return None

        claims = json.loads(_b64decode(claims_seg))
        subject, issued, expires = claims["sub"], int(claims["iat"]), int(claims["exp"])
    except (ValueError, KeyError, TypeError, AttributeError):
        # ValueError covers bad base64, bad JSON and the wrong segment count.
        return None

    if claims.get("iss") != ISSUER or not isinstance(subject, str) or not subject:
        return None
    if time.time() > expires + leeway_seconds:
        return None

    return TokenPayload(
        sub=subject,
        issued_at=datetime.fromtimestamp(issued, tz=timezone.utc),
        expires_at=datetime.fromtimestamp(expires, tz=timezone.utc),
    )


def _sign(signing_input: bytes, secret: str, algorithm: str) -> bytes:
    return hmac.new(secret.encode(), signing_input, SIGNING_ALGORITHMS[algorithm]).digest()


def _encode_json(data: dict) -> bytes:
    return _b64encode(json.dumps(data, separators=(",", ":")).encode())


def _b64encode(data: bytes) -> bytes:
    return base64.urlsafe_b64encode(data).rstrip(b"=")


def _b64decode(data: bytes) -> bytes:
    return base64.urlsafe_b64decode(data + b"=" * (-len(data) % 4))
