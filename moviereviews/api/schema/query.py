"""
GraphQL query root. All queries are public.
"""

from typing import List, Optional

import strawberry
from strawberry.types import Info

from moviereviews.api.schema.types import MovieType, ReviewType, UserType
from moviereviews.core import movies, reviews, users


@strawberry.type
class Query:

    @strawberry.field(description="Get a user by ID.")
    def get_user(self, info: Info, id: int) -> Optional[UserType]:
        user = users.get_user(info.context.session, id)
        return UserType.from_model(user) if user else None

    @strawberry.field(description="Get a movie by ID.")
    def get_movie(self, info: Info, id: int) -> Optional[MovieType]:
        movie = movies.get_movie(info.context.session, id)
        return MovieType.from_model(movie) if movie else None

    @strawberry.field(description="List the reviews of a movie.")
    def get_reviews_for_movie(self, info: Info, movie_id: int) -> List[ReviewType]:
        return [
            ReviewType.from_model(r)
            for r in reviews.get_reviews_for_movie(info.context.session, movie_id)
        ]

    @strawberry.field(
        description=(
            "List movies. sortBy is '<field>_<asc|desc>' over id, movieName, "
            "directorName or releaseDate; filterBy matches movie or director "
            "name; page and limit default to 1 and 10."
        )
    )
    def get_all_movies(
        self,
        info: Info,
        sort_by: Optional[str] = None,
        filter_by: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[MovieType]:
        return [
            MovieType.from_model(m)
            for m in movies.get_all_movies(
                info.context.session,
                sort_by=sort_by,
                filter_by=filter_by,
                page=page,
                limit=limit,
            )
        ]
