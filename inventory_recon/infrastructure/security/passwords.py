"""Password hashing for locally stored user accounts."""
from __future__ import annotations

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def is_password_hash(value: str) -> bool:
    """True when ``value`` is a hash this context can verify, not a plaintext secret."""
    return pwd_context.identify(value) is not None


def verify_password(password: str, hashed_password: str) -> bool:
    if not is_password_hash(hashed_password):
        return False
    return pwd_context.verify(password, hashed_password)
