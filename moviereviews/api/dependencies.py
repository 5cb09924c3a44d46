"""
FastAPI dependency injection for database sessions, tokens and identity.

Long-lived collaborators are created by ``create_app`` and kept on
``app.state``; these dependencies hand them to each request.
"""

import logging
from typing import Generator, Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from moviereviews.auth.tokens import Identity, TokenService, extract_bearer
from moviereviews.database.connection import DatabaseManager

logger = logging.getLogger(__name__)


def get_db_manager(request: Request) -> DatabaseManager:
    """Return the application's DatabaseManager."""
    return request.app.state.db_manager


def get_db(db_manager: DatabaseManager = Depends(get_db_manager)) -> Generator[Session, None, None]:
    """Yield database session for FastAPI Depends()."""
    with db_manager.session_scope() as session:
        yield session


def get_token_service(request: Request) -> TokenService:
    """Return the application's TokenService."""
    return request.app.state.token_service


def get_identity(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
) -> Optional[Identity]:
    """
    Resolve the caller from the Authorization header.

    A missing or invalid token means an anonymous caller, not an error;
    operations that need an identity reject it themselves.
    """
    token = extract_bearer(request.headers.get("Authorization"))
    identity = tokens.verify(token)
    if token and identity is None:
        logger.debug("Ignoring invalid bearer token")
    return identity
