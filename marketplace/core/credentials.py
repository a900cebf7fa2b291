"""Credentials — salted password hashing and random token issuance.

Invariants:
    - compute_hash is pure and deterministic: same (password, salt) -> same hash
    - Hash is SHA-256 over password + salt, base64-encoded
    - Tokens and salts come from the secrets module (never `random`)
"""

import base64
import hashlib
import hmac
import secrets

SALT_BYTES = 24
AUTH_TOKEN_BYTES = 32


def compute_hash(password: str, salt: str) -> str:
    digest = hashlib.sha256((password + salt).encode("utf-8")).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_password(password: str, salt: str, expected_hash: str) -> bool:
    """Recompute the hash and compare in constant time."""
    return hmac.compare_digest(compute_hash(password, salt), expected_hash)


def generate_random_token(byte_length: int) -> str:
    """URL-safe token carrying `byte_length` bytes of entropy."""
    if byte_length < 1:
        raise ValueError("byte_length must be positive")
    return secrets.token_urlsafe(byte_length)
