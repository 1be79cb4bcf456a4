from __future__ import annotations

import base64
import binascii
import json
import time
from dataclasses import dataclass
from typing import Any, Optional

from passlib.context import CryptContext

from paintshop.core.settings import get_app_settings

_pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class InvalidTokenError(Exception):
    """Raised when a session token is empty, malformed, incomplete or expired."""


@dataclass(frozen=True)
class SessionClaims:
    """Claims carried by a session token."""
    user_id: str
    username: str
    issued_at_ms: int


# PUBLIC_INTERFACE
def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password using bcrypt."""
    return _pwd_context.verify(plain_password, hashed_password)


# PUBLIC_INTERFACE
def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt."""
    return _pwd_context.hash(password)


def _now_ms() -> int:
    return int(time.time() * 1000)


# PUBLIC_INTERFACE
def create_session_token(user_id: Any, username: str, issued_at_ms: Optional[int] = None) -> str:
    """
    Create a session token for the given user.

    The token is the base64 encoding of the JSON object
    {"id": <user id>, "username": <username>, "timestamp": <epoch ms>}.
    """
    payload = {
        "id": str(user_id),
        "username": username,
        "timestamp": issued_at_ms if issued_at_ms is not None else _now_ms(),
    }
    raw = json.dumps(payload, separators=(",", ":")).encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


# PUBLIC_INTERFACE
def decode_session_token(token: Optional[str], now_ms: Optional[int] = None) -> SessionClaims:
    """
    Decode and validate a session token.

    Raises:
        InvalidTokenError: when the token is empty, is not base64 encoded JSON,
        lacks id/username/timestamp, or is older than TOKEN_TTL_HOURS.
    """
    if not token or not token.strip():
        raise InvalidTokenError("Empty token")

    try:
        decoded = json.loads(base64.b64decode(token.strip(), validate=True).decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
        raise InvalidTokenError("Malformed token") from exc

    if not isinstance(decoded, dict):
        raise InvalidTokenError("Malformed token")

    user_id = decoded.get("id")
    username = decoded.get("username")
    timestamp = decoded.get("timestamp")
    if not user_id or not username or not timestamp:
        raise InvalidTokenError("Token is missing required fields")
    if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
        raise InvalidTokenError("Token timestamp must be numeric")

    ttl_ms = get_app_settings().TOKEN_TTL_HOURS * 60 * 60 * 1000
    age = (now_ms if now_ms is not None else _now_ms()) - int(timestamp)
    if age > ttl_ms:
        raise InvalidTokenError("Token expired")

    return SessionClaims(user_id=str(user_id), username=str(username), issued_at_ms=int(timestamp))
