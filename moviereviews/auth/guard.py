"""
Single-owner authorization guard.
"""

from moviereviews.auth.tokens import Identity
from moviereviews.core.errors import AuthorizationDenied


def authorize(identity: Identity, owner_id: int) -> bool:
    """Allow iff the identity is the resource's owner."""
    return identity.user_id == owner_id


def require_owner(identity: Identity, owner_id: int, message: str | None = None) -> None:
    """
    Raise AuthorizationDenied unless the identity owns the resource.

    Args:
        identity: Authenticated caller
        owner_id: Owning user ID stored on the resource
        message: Optional error message
    """
    if not authorize(identity, owner_id):
        raise AuthorizationDenied(message)
