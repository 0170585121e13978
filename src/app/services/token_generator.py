"""
Opaque one-time tokens.

The plaintext goes to the user (by email); only its SHA-256 digest is
stored. Verification recomputes the digest and compares, it never
reverses it.
"""

import hashlib
import secrets
from datetime import datetime, timedelta
from typing import Callable, NamedTuple

TOKEN_BYTES = 32  # 256 bits


class OpaqueToken(NamedTuple):
    plaintext: str
    digest: str
    expires_at: datetime


def digest_of(plaintext: str) -> str:
    """Deterministic SHA-256 hex digest of a token"""
    return hashlib.sha256(plaintext.encode("utf-8")).hexdigest()


def new_opaque_token(
    expires_in: timedelta, clock: Callable[[], datetime] = datetime.utcnow
) -> OpaqueToken:
    """
    Generate a fresh one-time token.

    Uses the OS CSPRNG via ``secrets``; if it is unavailable the call
    raises rather than falling back to a weaker source.

    Args:
        expires_in: Validity window (TEMPORARY_TOKEN_EXPIRE_MINUTES)
        clock: Source of the current naive-UTC time

    Returns:
        OpaqueToken with plaintext, digest and absolute expiry
    """
    plaintext = secrets.token_hex(TOKEN_BYTES)
    return OpaqueToken(
        plaintext=plaintext,
        digest=digest_of(plaintext),
        expires_at=clock() + expires_in,
    )
