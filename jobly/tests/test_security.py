"""Test password hashing and bearer tokens."""

from __future__ import annotations

import pytest

from jobly.config import settings
from jobly.security import (
    AuthUser,
    decode_token,
    hash_password,
    issue_token,
    verify_password,
)


def test_password_round_trip():
    stored = hash_password("hunter22")
    assert stored.startswith("pbkdf2_sha256$1000$")
    assert verify_password("hunter22", stored)
    assert not verify_password("hunter23", stored)


def test_verify_password_rejects_garbage():
    assert not verify_password("x", "")
    assert not verify_password("x", "md5$abc")
    assert not verify_password("x", "pbkdf2_sha256$notanint$00$00")


def test_hash_password_requires_value():
    with pytest.raises(ValueError):
        hash_password("")


def test_token_round_trip():
    token = issue_token(AuthUser("u1", is_admin=True))
    assert decode_token(token) == AuthUser("u1", is_admin=True)


def test_token_tampering_rejected():
    token = issue_token(AuthUser("u1"))
    body, sig = token.split(".", 1)
    assert decode_token(f"{body}x.{sig}") is None
    assert decode_token("no-dot") is None
    assert decode_token("") is None


def test_token_from_other_secret_rejected(monkeypatch: pytest.MonkeyPatch):
    token = issue_token(AuthUser("admin", is_admin=True))
    monkeypatch.setattr(settings, "auth_secret", "rotated")
    assert decode_token(token) is None


def test_expired_token_rejected(monkeypatch: pytest.MonkeyPatch):
    token = issue_token(AuthUser("u1"))
    monkeypatch.setattr("jobly.security.time.time", lambda: 10**12)
    assert decode_token(token) is None
