"""
Utilities package for Council Portal.

This package contains helpers for:
- Epoch-millisecond timestamp conversion
- Token and password hashing
"""

from .time_utils import utcnow, now_ms, to_epoch_ms, from_epoch_ms
from .hash_utils import (
    sha256_hex,
    hash_token,
    generate_token,
    hash_password,
    verify_password,
)

__all__ = [
    "utcnow",
    "now_ms",
    "to_epoch_ms",
    "from_epoch_ms",
    "sha256_hex",
    "hash_token",
    "generate_token",
    "hash_password",
    "verify_password",
]
