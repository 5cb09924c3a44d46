"""
Password hashing.

Passwords are stored as salted PBKDF2-SHA256 hashes and verified by
recomputing the derivation; plaintext is never persisted.
"""

from passlib.hash import pbkdf2_sha256


def hash_password(password: str) -> str:
    """Return a salted hash of the password suitable for storage."""
    return pbkdf2_sha256.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a claimed password against a stored hash."""
    try:
        return pbkdf2_sha256.verify(password, password_hash)
    except ValueError:
        # Stored value is not a pbkdf2_sha256 hash
        return False
