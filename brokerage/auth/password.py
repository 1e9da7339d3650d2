"""
Brokerage Back-Office - Password Hashing Utilities

Password hashing using bcrypt. The work factor comes from settings
(BCRYPT_WORK_FACTOR, default 12) so tests can run with a cheap cost.

Security:
- Never log or expose plaintext passwords
- bcrypt includes a per-hash salt automatically
- Hashes below the configured work factor are upgraded on login
"""

import bcrypt

from brokerage.config import settings


def _work_factor() -> int:
    return settings.BCRYPT_WORK_FACTOR


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plaintext password

    Returns:
        bcrypt hash string (includes salt)

    Example:
        >>> hashed = hash_password("SecureP@ss123")
        >>> hashed.startswith("$2b$")
        True
    """
    password_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt(rounds=_work_factor())
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a bcrypt hash.

    Returns False for malformed hashes instead of raising.
    """
    try:
        password_bytes = plain_password.encode("utf-8")
        hashed_bytes = hashed_password.encode("utf-8")
        return bcrypt.checkpw(password_bytes, hashed_bytes)
    except (ValueError, TypeError):
        return False


def needs_rehash(hashed_password: str, target_work_factor: int = None) -> bool:
    """
    Check if a password hash should be regenerated.

    True when the hash was produced with a lower work factor than the
    target, or is not a bcrypt hash at all.
    """
    target = _work_factor() if target_work_factor is None else target_work_factor
    try:
        # bcrypt hash format: $2b$XX$...
        _, work_factor_str, _ = hashed_password.split("$")[1:4]
        return int(work_factor_str) < target
    except (ValueError, IndexError):
        return True


_DUMMY_HASH = None


def dummy_verify(plain_password: str) -> None:
    """
    Spend one bcrypt check against a throwaway hash.

    Used when the email is unknown so both login failures cost about the same.
    """
    global _DUMMY_HASH
    if _DUMMY_HASH is None:
        _DUMMY_HASH = hash_password("not-a-real-password")
    verify_password(plain_password, _DUMMY_HASH)
