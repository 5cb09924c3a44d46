"""
CRUD operations for User, Movie, and Review models.

This module provides Create, Read, Update, Delete operations for all database
models. Any storage fault is rolled back and surfaced as ``StorageFailure``.
"""

import functools
import logging
from typing import List, Optional
from sqlalchemy import delete, func, or_, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from moviereviews.core.errors import ConstraintViolation, StorageFailure
from moviereviews.database.models import User, Movie, Review

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

MOVIE_FIELDS = ('movie_name', 'description', 'director_name', 'release_date')
REVIEW_FIELDS = ('rating', 'comment')

# Columns list_movies may order by
MOVIE_SORT_COLUMNS = {
    'id': Movie.id,
    'movie_name': Movie.movie_name,
    'director_name': Movie.director_name,
    'release_date': Movie.release_date,
}
SORT_DIRECTIONS = ('asc', 'desc')


def storage_operation(operation):
    """Roll back and translate SQLAlchemy errors raised by a CRUD function."""
    @functools.wraps(operation)
    def wrapper(session: Session, *args, **kwargs):
        try:
            return operation(session, *args, **kwargs)
        except IntegrityError as e:
            session.rollback()
            logger.warning("Constraint violation in %s: %s", operation.__name__, e.orig)
            raise ConstraintViolation("A storage constraint was violated.") from e
        except SQLAlchemyError as e:
            session.rollback()
            logger.exception("Storage failure in %s", operation.__name__)
            raise StorageFailure() from e
    return wrapper


def _check_fields(fields: dict, allowed: tuple) -> None:
    unknown = set(fields) - set(allowed)
    if unknown:
        raise ValueError(f"Unknown fields: {', '.join(sorted(unknown))}")


# ==================== USER CRUD OPERATIONS ====================

@storage_operation
def create_user(
    session: Session,
    user_name: str,
    email: str,
    password_hash: str,
) -> User:
    """
    Create a new user.

    Args:
        session: Database session
        user_name: Display name
        email: Login email (must be unique)
        password_hash: Already-hashed password

    Returns:
        Created User object

    Raises:
        ConstraintViolation: If the email is already taken
    """
    user = User(user_name=user_name, email=email, password_hash=password_hash)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@storage_operation
def get_user(session: Session, user_id: int) -> Optional[User]:
    """
    Get a user by ID.

    Returns:
        User object or None if not found
    """
    return session.query(User).filter(User.id == user_id).first()


@storage_operation
def get_user_by_email(session: Session, email: str) -> Optional[User]:
    """
    Get a user by email address.

    Returns:
        User object or None if not found
    """
    return session.query(User).filter(User.email == email).first()


@storage_operation
def update_user_password(
    session: Session,
    user_id: int,
    password_hash: str
) -> Optional[User]:
    """
    Replace a user's password hash.

    Returns:
        Updated User object or None if the user does not exist
    """
    result = session.execute(
        update(User).where(User.id == user_id).values(password_hash=password_hash)
    )
    if result.rowcount == 0:
        session.rollback()
        return None
    session.commit()
    user = get_user(session, user_id)
    session.refresh(user)
    return user


@storage_operation
def get_user_count(session: Session) -> int:
    """Get total count of users."""
    return session.query(func.count(User.id)).scalar()


# ==================== MOVIE CRUD OPERATIONS ====================

@storage_operation
def create_movie(
    session: Session,
    owner_id: int,
    movie_name: str,
    description: str,
    director_name: str,
    release_date: str
) -> Movie:
    """
    Create a new movie.

    Args:
        session: Database session
        owner_id: ID of the user creating the movie
        movie_name: Movie title
        description: Movie description
        director_name: Director's name
        release_date: Release date string

    Returns:
        Created Movie object
    """
    movie = Movie(
        owner_id=owner_id,
        movie_name=movie_name,
        description=description,
        director_name=director_name,
        release_date=release_date
    )
    session.add(movie)
    session.commit()
    session.refresh(movie)
    return movie


@storage_operation
def get_movie(session: Session, movie_id: int) -> Optional[Movie]:
    """
    Get a movie by ID.

    Returns:
        Movie object or None if not found
    """
    return session.query(Movie).filter(Movie.id == movie_id).first()


@storage_operation
def list_movies(
    session: Session,
    filter_text: Optional[str] = None,
    sort_field: Optional[str] = None,
    sort_direction: str = 'asc',
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT
) -> List[Movie]:
    """
    List movies with optional filtering, ordering and offset pagination.

    Args:
        session: Database session
        filter_text: Case-insensitive substring matched against the movie
            name or the director name
        sort_field: One of MOVIE_SORT_COLUMNS; defaults to id order
        sort_direction: 'asc' or 'desc'
        page: 1-based page number
        limit: Page size

    Returns:
        List of Movie objects for the requested page

    Raises:
        ValueError: If the sort field, direction or paging values are invalid
    """
    if sort_field is not None and sort_field not in MOVIE_SORT_COLUMNS:
        raise ValueError(f"Cannot sort movies by '{sort_field}'")
    if sort_direction not in SORT_DIRECTIONS:
        raise ValueError("Sort direction must be 'asc' or 'desc'")
    if page < 1 or limit < 1:
        raise ValueError("Page and limit must be positive")

    query = session.query(Movie)

    if filter_text:
        query = query.filter(
            or_(
                Movie.movie_name.icontains(filter_text, autoescape=True),
                Movie.director_name.icontains(filter_text, autoescape=True),
            )
        )

    if sort_field:
        column = MOVIE_SORT_COLUMNS[sort_field]
        query = query.order_by(column.desc() if sort_direction == 'desc' else column.asc(), Movie.id)
    else:
        query = query.order_by(Movie.id)

    return query.offset((page - 1) * limit).limit(limit).all()


@storage_operation
def update_movie(session: Session, movie_id: int, **fields) -> Optional[Movie]:
    """
    Update movie details.

    Args:
        session: Database session
        movie_id: Movie ID
        **fields: Fields to update (movie_name, description, director_name,
            release_date)

    Returns:
        Updated Movie object or None if the movie does not exist
    """
    _check_fields(fields, MOVIE_FIELDS)
    result = session.execute(
        update(Movie).where(Movie.id == movie_id).values(**fields)
    )
    if result.rowcount == 0:
        session.rollback()
        return None
    session.commit()
    movie = get_movie(session, movie_id)
    session.refresh(movie)
    return movie


@storage_operation
def delete_movie(session: Session, movie_id: int) -> bool:
    """
    Delete a movie and, through the foreign key cascade, its reviews.

    Returns:
        True if the movie was deleted, False if not found
    """
    result = session.execute(delete(Movie).where(Movie.id == movie_id))
    session.commit()
    return result.rowcount > 0


@storage_operation
def get_movie_count(session: Session) -> int:
    """Get total count of movies."""
    return session.query(func.count(Movie.id)).scalar()


# ==================== REVIEW CRUD OPERATIONS ====================

@storage_operation
def create_review(
    session: Session,
    movie_id: int,
    user_id: int,
    rating: int,
    comment: str
) -> Review:
    """
    Create a new review.

    Args:
        session: Database session
        movie_id: Reviewed movie ID
        user_id: ID of the user writing the review
        rating: Numeric rating
        comment: Review text

    Returns:
        Created Review object
    """
    review = Review(
        movie_id=movie_id,
        user_id=user_id,
        rating=rating,
        comment=comment
    )
    session.add(review)
    session.commit()
    session.refresh(review)
    return review


@storage_operation
def get_review(session: Session, review_id: int) -> Optional[Review]:
    """
    Get a review by ID.

    Returns:
        Review object or None if not found
    """
    return session.query(Review).filter(Review.id == review_id).first()


@storage_operation
def get_reviews_for_movie(session: Session, movie_id: int) -> List[Review]:
    """
    Get all reviews for a specific movie, oldest first.
    """
    return session.query(Review).filter(
        Review.movie_id == movie_id
    ).order_by(Review.id).all()


@storage_operation
def update_review(session: Session, review_id: int, **fields) -> Optional[Review]:
    """
    Update a review's rating and/or comment.

    Returns:
        Updated Review object or None if the review does not exist
    """
    _check_fields(fields, REVIEW_FIELDS)
    result = session.execute(
        update(Review).where(Review.id == review_id).values(**fields)
    )
    if result.rowcount == 0:
        session.rollback()
        return None
    session.commit()
    review = get_review(session, review_id)
    session.refresh(review)
    return review


@storage_operation
def delete_review(session: Session, review_id: int) -> bool:
    """
    Delete a review.

    Returns:
        True if review was deleted, False if not found
    """
    result = session.execute(delete(Review).where(Review.id == review_id))
    session.commit()
    return result.rowcount > 0
