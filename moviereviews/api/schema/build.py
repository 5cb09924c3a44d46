"""
Executable schema assembly and error reporting.

Classified ApiErrors reach clients with their message and
``extensions.code``. Any other exception raised while resolving is logged
with its traceback and masked.
"""

import logging
from typing import List, Optional

import strawberry
from graphql import GraphQLError
from strawberry.extensions import MaskErrors
from strawberry.types import ExecutionContext

from moviereviews.api.schema.mutation import Mutation
from moviereviews.api.schema.query import Query
from moviereviews.core.errors import ApiError

logger = logging.getLogger(__name__)

MASKED_ERROR_MESSAGE = "Internal server error."


def should_mask_error(error: GraphQLError) -> bool:
    """Mask resolver exceptions that are not classified ApiErrors."""
    original = error.original_error
    return original is not None and not isinstance(original, ApiError)


class MovieReviewsSchema(strawberry.Schema):

    def process_errors(
        self,
        errors: List[GraphQLError],
        execution_context: Optional[ExecutionContext] = None,
    ) -> None:
        for error in errors:
            original = error.original_error
            if isinstance(original, ApiError):
                logger.info("%s at %s: %s", original.code, error.path, original.message)
            elif original is None:
                logger.info("GraphQL request error: %s", error.message)
            else:
                logger.error(
                    "Unhandled error at %s", error.path,
                    exc_info=(type(original), original, original.__traceback__),
                )


def create_schema() -> strawberry.Schema:
    """Build the executable schema."""
    return MovieReviewsSchema(
        query=Query,
        mutation=Mutation,
        extensions=[
            lambda: MaskErrors(
                should_mask_error=should_mask_error,
                error_message=MASKED_ERROR_MESSAGE,
            ),
        ],
    )


schema = create_schema()
