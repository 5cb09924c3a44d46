"""
User operations: sign-up, login, password change and lookup.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from moviereviews.auth.guard import require_owner
from moviereviews.auth.passwords import hash_password, verify_password
from moviereviews.auth.tokens import Identity, TokenService
from moviereviews.core._validation import require_fields, require_identity
from moviereviews.core.errors import (
    ConstraintViolation, DuplicateEmail, InvalidCredentials, NotFound
)
from moviereviews.database import crud
from moviereviews.database.models import User

logger = logging.getLogger(__name__)


def get_user(session: Session, user_id: int) -> Optional[User]:
    """Get a user by ID, or None."""
    return crud.get_user(session, user_id)


def sign_up_user(session: Session, user_name: str, email: str, password: str) -> User:
    """
    Register a new user.

    Raises:
        ValidationFailed: If any field is empty
        DuplicateEmail: If the email is already registered
    """
    require_fields(
        "User name, email and password are required.",
        user_name=user_name, email=email, password=password,
    )

    if crud.get_user_by_email(session, email) is not None:
        logger.warning("Sign-up rejected: email already registered")
        raise DuplicateEmail()

    try:
        user = crud.create_user(
            session,
            user_name=user_name,
            email=email,
            password_hash=hash_password(password),
        )
    except ConstraintViolation as e:
        # Lost a race with a concurrent sign-up for the same email
        raise DuplicateEmail() from e

    logger.info("Created user %s", user.id)
    return user


def login_user(session: Session, tokens: TokenService, email: str, password: str) -> str:
    """
    Exchange credentials for a bearer token.

    Unknown email and wrong password fail identically.

    Raises:
        InvalidCredentials: On any mismatch
    """
    user = crud.get_user_by_email(session, email) if email else None
    if user is None or not password or not verify_password(password, user.password_hash):
        logger.warning("Login failed")
        raise InvalidCredentials()

    logger.info("User %s logged in", user.id)
    return tokens.issue(user.id)


def change_password(
    session: Session,
    identity: Optional[Identity],
    user_id: int,
    new_password: str
) -> User:
    """
    Change a user's password. Only the user themselves may do this.

    Raises:
        AuthenticationRequired, NotFound, AuthorizationDenied, ValidationFailed
    """
    identity = require_identity(identity, "change a password")

    user = crud.get_user(session, user_id)
    if user is None:
        raise NotFound("User not found.")

    require_owner(identity, user.id, "You are not authorized to change the password of this user.")
    require_fields("New password is required.", new_password=new_password)

    updated = crud.update_user_password(session, user_id, hash_password(new_password))
    if updated is None:
        raise NotFound("User not found.")

    logger.info("User %s changed password", user_id)
    return updated
