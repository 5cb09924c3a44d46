"""
Review operations.

Anyone can list a movie's reviews. Writing a review needs an authenticated
caller; editing or removing one is limited to its author.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from moviereviews.auth.guard import authorize
from moviereviews.auth.tokens import Identity
from moviereviews.core._validation import require_fields, require_identity
from moviereviews.core.errors import AuthorizationDenied, NotFound
from moviereviews.database import crud
from moviereviews.database.models import Review

logger = logging.getLogger(__name__)

INCOMPLETE_MESSAGE = "Review details are incomplete."


def get_reviews_for_movie(session: Session, movie_id: int) -> List[Review]:
    """All reviews of a movie; empty when it has none or does not exist."""
    return crud.get_reviews_for_movie(session, movie_id)


def create_review(
    session: Session,
    identity: Optional[Identity],
    movie_id: Optional[int],
    rating: Optional[int],
    comment: Optional[str]
) -> Review:
    """
    Write a review of an existing movie as the caller.

    Raises:
        AuthenticationRequired, ValidationFailed, NotFound
    """
    identity = require_identity(identity, "create a review")
    require_fields(INCOMPLETE_MESSAGE, movie_id=movie_id, rating=rating, comment=comment)

    if crud.get_movie(session, movie_id) is None:
        raise NotFound("Movie not found.")

    review = crud.create_review(
        session,
        movie_id=movie_id,
        user_id=identity.user_id,
        rating=rating,
        comment=comment,
    )
    logger.info("User %s reviewed movie %s (review %s)", identity.user_id, movie_id, review.id)
    return review


def _load_owned_review(session: Session, identity: Identity, review_id: int, action: str) -> Review:
    review = crud.get_review(session, review_id)
    if review is None:
        raise NotFound("Review not found.")
    if not authorize(identity, review.user_id):
        logger.warning("User %s denied %s on review %s", identity.user_id, action, review_id)
        raise AuthorizationDenied(f"You are not authorized to {action} this review.")
    return review


def update_review(
    session: Session,
    identity: Optional[Identity],
    review_id: int,
    rating: Optional[int] = None,
    comment: Optional[str] = None
) -> Review:
    """Replace a review's rating and comment. Only the author may do this."""
    identity = require_identity(identity, "update a review")
    _load_owned_review(session, identity, review_id, "update")
    require_fields(INCOMPLETE_MESSAGE, rating=rating, comment=comment)

    review = crud.update_review(session, review_id, rating=rating, comment=comment)
    if review is None:
        raise NotFound("Review not found.")

    logger.info("User %s updated review %s", identity.user_id, review_id)
    return review


def delete_review(session: Session, identity: Optional[Identity], review_id: int) -> bool:
    """Delete a review. Only the author may do this."""
    identity = require_identity(identity, "delete a review")
    _load_owned_review(session, identity, review_id, "delete")

    if not crud.delete_review(session, review_id):
        raise NotFound("Review not found.")

    logger.info("User %s deleted review %s", identity.user_id, review_id)
    return True
