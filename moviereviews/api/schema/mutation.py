"""
GraphQL mutation root.

Everything except signUpUser and loginUser needs a bearer token.
"""

from typing import Optional

import strawberry
from strawberry.types import Info

from moviereviews.api.schema.types import MovieType, ReviewType, UserType
from moviereviews.core import movies, reviews, users


@strawberry.type
class Mutation:

    @strawberry.mutation
    def sign_up_user(self, info: Info, user_name: str, email: str, password: str) -> UserType:
        user = users.sign_up_user(
            info.context.session, user_name=user_name, email=email, password=password
        )
        return UserType.from_model(user)

    @strawberry.mutation(description="Returns a bearer token valid for one day.")
    def login_user(self, info: Info, email: str, password: str) -> str:
        ctx = info.context
        return users.login_user(ctx.session, ctx.tokens, email=email, password=password)

    @strawberry.mutation
    def change_password(self, info: Info, user_id: int, new_password: str) -> UserType:
        ctx = info.context
        user = users.change_password(
            ctx.session, ctx.identity, user_id=user_id, new_password=new_password
        )
        return UserType.from_model(user)

    @strawberry.mutation
    def create_movie(
        self,
        info: Info,
        movie_name: str,
        description: str,
        director_name: str,
        release_date: str,
    ) -> MovieType:
        ctx = info.context
        movie = movies.create_movie(
            ctx.session,
            ctx.identity,
            movie_name=movie_name,
            description=description,
            director_name=director_name,
            release_date=release_date,
        )
        return MovieType.from_model(movie)

    @strawberry.mutation
    def update_movie(
        self,
        info: Info,
        id: int,
        movie_name: Optional[str] = None,
        description: Optional[str] = None,
        director_name: Optional[str] = None,
        release_date: Optional[str] = None,
    ) -> MovieType:
        ctx = info.context
        movie = movies.update_movie(
            ctx.session,
            ctx.identity,
            id,
            movie_name=movie_name,
            description=description,
            director_name=director_name,
            release_date=release_date,
        )
        return MovieType.from_model(movie)

    @strawberry.mutation
    def delete_movie(self, info: Info, id: int) -> bool:
        ctx = info.context
        return movies.delete_movie(ctx.session, ctx.identity, id)

    @strawberry.mutation
    def create_review(self, info: Info, movie_id: int, rating: int, comment: str) -> ReviewType:
        ctx = info.context
        review = reviews.create_review(
            ctx.session, ctx.identity, movie_id=movie_id, rating=rating, comment=comment
        )
        return ReviewType.from_model(review)

    @strawberry.mutation
    def update_review(
        self,
        info: Info,
        id: int,
        rating: Optional[int] = None,
        comment: Optional[str] = None,
    ) -> ReviewType:
        ctx = info.context
        review = reviews.update_review(
            ctx.session, ctx.identity, id, rating=rating, comment=comment
        )
        return ReviewType.from_model(review)

    @strawberry.mutation
    def delete_review(self, info: Info, id: int) -> bool:
        ctx = info.context
        return reviews.delete_review(ctx.session, ctx.identity, id)
