"""
Authentication and authorization helpers.

Token issuance/verification, password hashing and the single-owner
authorization guard.
"""

from moviereviews.auth.tokens import Identity, TokenService, extract_bearer
from moviereviews.auth.passwords import hash_password, verify_password
from moviereviews.auth.guard import authorize, require_owner

__all__ = [
    'Identity',
    'TokenService',
    'extract_bearer',
    'hash_password',
    'verify_password',
    'authorize',
    'require_owner',
]
