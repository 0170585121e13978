"""
Password hashing and credential verification (bcrypt).
"""

import bcrypt

BCRYPT_ROUNDS = 12

# bcrypt only reads the first 72 bytes of its input; newer releases reject longer input
MAX_PASSWORD_BYTES = 72

# Hash compared against when the account does not exist, so a missing
# user costs the same bcrypt work as a wrong password.
_DUMMY_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(BCRYPT_ROUNDS))


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def hash_password(password: str) -> str:
    """
    Hash a password with a fresh salt (bcrypt cost factor 12)

    Raises:
        ValueError: password is longer than MAX_PASSWORD_BYTES once encoded
    """
    if password_too_long(password):
        raise ValueError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(BCRYPT_ROUNDS)).decode(
        "utf-8"
    )


def verify_password(password: str, password_hash: str) -> bool:
    """
    Check a submitted password against a stored bcrypt hash.

    bcrypt.checkpw compares in constant time. A malformed stored hash or an
    over-long password is reported as a mismatch.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def burn_password_check(password: str) -> None:
    """Spend one verification's worth of time without a real account"""
    verify_password(password, _DUMMY_HASH.decode("utf-8"))
