"""
Per-request GraphQL context.
"""

from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session
from strawberry.fastapi import BaseContext

from moviereviews.api.dependencies import get_db, get_identity, get_token_service
from moviereviews.auth.tokens import Identity, TokenService


class GraphQLContext(BaseContext):
    """Session, token service and caller identity for one request."""

    def __init__(self, session: Session, tokens: TokenService, identity: Optional[Identity]):
        super().__init__()
        self.session = session
        self.tokens = tokens
        self.identity = identity


async def get_context(
    session: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
    identity: Optional[Identity] = Depends(get_identity),
) -> GraphQLContext:
    """Build the GraphQL context from FastAPI dependencies."""
    return GraphQLContext(session=session, tokens=tokens, identity=identity)
