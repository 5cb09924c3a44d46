"""
Movie operations.

Reads are public. Every write needs an authenticated caller, and updates
and deletes are limited to the movie's owner. Checks run in the order
authentication, existence, ownership, field completeness.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from moviereviews.auth.guard import authorize
from moviereviews.auth.tokens import Identity
from moviereviews.core._validation import require_fields, require_identity
from moviereviews.core.errors import AuthorizationDenied, NotFound, ValidationFailed
from moviereviews.database import crud
from moviereviews.database.models import Movie

logger = logging.getLogger(__name__)

INCOMPLETE_MESSAGE = "Movie details are incomplete."

# Field names accepted in sortBy (API or column spelling), mapped to columns
SORT_FIELDS = {
    'id': 'id',
    'movieName': 'movie_name',
    'directorName': 'director_name',
    'releaseDate': 'release_date',
    'movie_name': 'movie_name',
    'director_name': 'director_name',
    'release_date': 'release_date',
}


def parse_sort(sort_by: Optional[str]) -> Tuple[Optional[str], str]:
    """
    Parse a ``<field>_<direction>`` sort expression.

    A bare field sorts ascending. Returns (storage column name, direction),
    or (None, 'asc') when no sort is requested.

    Raises:
        ValidationFailed: For an unknown field or direction
    """
    if not sort_by:
        return None, 'asc'

    if sort_by in SORT_FIELDS:
        field, direction = sort_by, 'asc'
    else:
        field, _, direction = sort_by.rpartition('_')
    direction = direction.lower()

    if field not in SORT_FIELDS:
        raise ValidationFailed(
            f"Cannot sort by '{field or sort_by}'."
        )
    if direction not in crud.SORT_DIRECTIONS:
        raise ValidationFailed("Sort direction must be 'asc' or 'desc'.")
    return SORT_FIELDS[field], direction


def get_movie(session: Session, movie_id: int) -> Optional[Movie]:
    """Get a movie by ID, or None."""
    return crud.get_movie(session, movie_id)


def get_all_movies(
    session: Session,
    sort_by: Optional[str] = None,
    filter_by: Optional[str] = None,
    page: Optional[int] = None,
    limit: Optional[int] = None
) -> List[Movie]:
    """
    List movies filtered by name/director substring, sorted and paginated.

    Omitted or zero page and limit default to 1 and 10; negative values
    are rejected.
    """
    sort_field, sort_direction = parse_sort(sort_by)
    if (page is not None and page < 0) or (limit is not None and limit < 0):
        raise ValidationFailed("Page and limit must not be negative.")
    page = page or crud.DEFAULT_PAGE
    limit = limit or crud.DEFAULT_LIMIT

    return crud.list_movies(
        session,
        filter_text=filter_by,
        sort_field=sort_field,
        sort_direction=sort_direction,
        page=page,
        limit=limit,
    )


def create_movie(
    session: Session,
    identity: Optional[Identity],
    movie_name: Optional[str],
    description: Optional[str],
    director_name: Optional[str],
    release_date: Optional[str]
) -> Movie:
    """Create a movie owned by the caller."""
    identity = require_identity(identity, "create a movie")
    require_fields(
        INCOMPLETE_MESSAGE,
        movie_name=movie_name,
        description=description,
        director_name=director_name,
        release_date=release_date,
    )

    movie = crud.create_movie(
        session,
        owner_id=identity.user_id,
        movie_name=movie_name,
        description=description,
        director_name=director_name,
        release_date=release_date,
    )
    logger.info("User %s created movie %s", identity.user_id, movie.id)
    return movie


def _load_owned_movie(session: Session, identity: Identity, movie_id: int, action: str) -> Movie:
    movie = crud.get_movie(session, movie_id)
    if movie is None:
        raise NotFound("Movie not found.")
    if not authorize(identity, movie.owner_id):
        logger.warning("User %s denied %s on movie %s", identity.user_id, action, movie_id)
        raise AuthorizationDenied(f"You are not authorized to {action} this movie.")
    return movie


def update_movie(
    session: Session,
    identity: Optional[Identity],
    movie_id: int,
    movie_name: Optional[str] = None,
    description: Optional[str] = None,
    director_name: Optional[str] = None,
    release_date: Optional[str] = None
) -> Movie:
    """Replace a movie's details. Only the owner may do this."""
    identity = require_identity(identity, "update a movie")
    _load_owned_movie(session, identity, movie_id, "update")
    require_fields(
        INCOMPLETE_MESSAGE,
        movie_name=movie_name,
        description=description,
        director_name=director_name,
        release_date=release_date,
    )

    movie = crud.update_movie(
        session,
        movie_id,
        movie_name=movie_name,
        description=description,
        director_name=director_name,
        release_date=release_date,
    )
    if movie is None:
        raise NotFound("Movie not found.")

    logger.info("User %s updated movie %s", identity.user_id, movie_id)
    return movie


def delete_movie(session: Session, identity: Optional[Identity], movie_id: int) -> bool:
    """Delete a movie and its reviews. Only the owner may do this."""
    identity = require_identity(identity, "delete a movie")
    _load_owned_movie(session, identity, movie_id, "delete")

    if not crud.delete_movie(session, movie_id):
        raise NotFound("Movie not found.")

    logger.info("User %s deleted movie %s", identity.user_id, movie_id)
    return True
