"""
Brokerage Back-Office - Opaque Token Generation

Session tokens, reset tokens and temporary passwords are random strings drawn
from the secrets module. Tokens are 32 random bytes rendered as 64 hex chars.
"""

import secrets


TOKEN_BYTES = 32

# Human-friendly alphabet (no 0/O, 1/l/I) for passwords read out of band
TEMP_PASSWORD_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz23456789"
TEMP_PASSWORD_LENGTH = 14


def generate_token() -> str:
    """Return a new high-entropy opaque token."""
    return secrets.token_hex(TOKEN_BYTES)


def generate_temp_password(length: int = TEMP_PASSWORD_LENGTH) -> str:
    """Return a temporary password for an invited admin."""
    return "".join(secrets.choice(TEMP_PASSWORD_ALPHABET) for _ in range(length))
