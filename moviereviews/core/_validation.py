"""
Input checks shared by the operation handlers.
"""

from typing import Optional

from moviereviews.auth.tokens import Identity
from moviereviews.core.errors import AuthenticationRequired, ValidationFailed


def require_identity(identity: Optional[Identity], action: str) -> Identity:
    """Raise AuthenticationRequired when there is no authenticated caller."""
    if identity is None:
        raise AuthenticationRequired(f"You must be authenticated to {action}.")
    return identity


def require_fields(message: str, **fields) -> None:
    """Raise ValidationFailed unless every field is present and truthy."""
    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise ValidationFailed(message)
