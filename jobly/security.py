"""Password hashing, signed bearer tokens and role-gating dependencies."""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
import secrets
import time
from dataclasses import dataclass

from fastapi import Request

from .config import settings
from .errors import UnauthorizedError


@dataclass(frozen=True)
class AuthUser:
    username: str
    is_admin: bool = False


def hash_password(password: str, iterations: int | None = None) -> str:
    """Hash a password using PBKDF2-SHA256."""
    if not password:
        raise ValueError("Password is required")
    iterations = iterations or settings.password_hash_iterations
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return (
        f"pbkdf2_sha256${iterations}$"
        f"{binascii.hexlify(salt).decode('ascii')}$"
        f"{binascii.hexlify(digest).decode('ascii')}"
    )


def verify_password(password: str, stored_hash: str) -> bool:
    """Verify a PBKDF2-SHA256 password hash."""
    if not password or not stored_hash:
        return False
    try:
        scheme, iterations_raw, salt_hex, digest_hex = stored_hash.split("$", 3)
        if scheme != "pbkdf2_sha256":
            return False
        iterations = int(iterations_raw)
        salt = binascii.unhexlify(salt_hex.encode("ascii"))
        expected = binascii.unhexlify(digest_hex.encode("ascii"))
    except (ValueError, binascii.Error):
        return False

    actual = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return hmac.compare_digest(actual, expected)


def _b64url_encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("utf-8").rstrip("=")


def _b64url_decode(data: str) -> bytes:
    padding = "=" * ((4 - (len(data) % 4)) % 4)
    return base64.urlsafe_b64decode((data + padding).encode("utf-8"))


def _sign(body: str) -> str:
    secret = settings.auth_secret.strip()
    if not secret:
        raise RuntimeError("auth_secret is required")
    return hmac.new(secret.encode("utf-8"), body.encode("utf-8"), hashlib.sha256).hexdigest()


def issue_token(user: AuthUser) -> str:
    """Issue a signed bearer token for ``user``.

    The token is ``<base64url JSON payload>.<HMAC-SHA256 hex signature>`` and
    expires after ``auth_token_ttl_seconds`` (at least one minute).
    """
    now = int(time.time())
    payload = {
        "sub": user.username,
        "admin": bool(user.is_admin),
        "iat": now,
        "exp": now + max(60, settings.auth_token_ttl_seconds),
    }
    body = _b64url_encode(json.dumps(payload, separators=(",", ":"), sort_keys=True).encode("utf-8"))
    return f"{body}.{_sign(body)}"


def decode_token(token: str) -> AuthUser | None:
    """Return the user a token was issued for.

    Yields None for a malformed, tampered or expired token, and for any token
    when no auth secret is configured.
    """
    if not token or not settings.auth_secret.strip():
        return None
    try:
        body, provided_sig = token.split(".", 1)
    except ValueError:
        return None

    if not hmac.compare_digest(provided_sig, _sign(body)):
        return None

    try:
        payload = json.loads(_b64url_decode(body))
    except (ValueError, binascii.Error):
        return None

    if not isinstance(payload, dict):
        return None

    exp = payload.get("exp")
    sub = payload.get("sub")
    if not isinstance(exp, int) or exp <= int(time.time()):
        return None
    if not isinstance(sub, str) or not sub.strip():
        return None
    return AuthUser(username=sub, is_admin=payload.get("admin") is True)


def _extract_token(request: Request) -> str:
    auth = request.headers.get("authorization", "")
    if auth.lower().startswith("bearer "):
        return auth[7:].strip()
    return ""


async def get_current_user(request: Request) -> AuthUser | None:
    """Resolve the bearer token, if any. Anonymous requests yield None."""
    return decode_token(_extract_token(request))


async def require_admin(request: Request) -> AuthUser:
    user = await get_current_user(request)
    if not user or not user.is_admin:
        raise UnauthorizedError()
    return user


async def require_correct_user_or_admin(request: Request, username: str) -> AuthUser:
    """Allow admins, or the user named by the ``username`` path parameter."""
    user = await get_current_user(request)
    if not user or not (user.is_admin or user.username == username):
        raise UnauthorizedError()
    return user
