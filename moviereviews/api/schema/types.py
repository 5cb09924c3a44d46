"""
GraphQL object types.
"""

import strawberry

from moviereviews.database.models import User, Movie, Review


@strawberry.type(name="User")
class UserType:
    """A registered user. Credentials are never exposed."""

    id: int
    user_name: str
    email: str

    @classmethod
    def from_model(cls, user: User) -> "UserType":
        return cls(id=user.id, user_name=user.user_name, email=user.email)


@strawberry.type(name="Movie")
class MovieType:
    id: int
    movie_name: str
    description: str
    director_name: str
    release_date: str
    owner_id: int

    @classmethod
    def from_model(cls, movie: Movie) -> "MovieType":
        return cls(
            id=movie.id,
            movie_name=movie.movie_name,
            description=movie.description,
            director_name=movie.director_name,
            release_date=movie.release_date,
            owner_id=movie.owner_id,
        )


@strawberry.type(name="Review")
class ReviewType:
    id: int
    movie_id: int
    user_id: int
    rating: int
    comment: str

    @classmethod
    def from_model(cls, review: Review) -> "ReviewType":
        return cls(
            id=review.id,
            movie_id=review.movie_id,
            user_id=review.user_id,
            rating=review.rating,
            comment=review.comment,
        )
