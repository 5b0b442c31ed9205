"""Hashing helpers for credentials and stored file contents.

Bearer tokens are stored as SHA-256 digests; passwords as bcrypt hashes.
"""

from __future__ import annotations

import hashlib
import secrets

import bcrypt

# bcrypt reads at most 72 bytes of a password
_BCRYPT_MAX_BYTES = 72


def sha256_hex(payload: bytes) -> str:
    """Hex SHA-256 digest of raw bytes."""
    return hashlib.sha256(payload).hexdigest()


def hash_token(raw_token: str) -> str:
    """Digest used to look up a bearer token without storing it."""
    return sha256_hex(raw_token.encode("utf-8"))


def generate_token() -> str:
    """New opaque bearer token."""
    return f"cp-{secrets.token_urlsafe(36)}"


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Salted bcrypt hash for a password."""
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        return False
