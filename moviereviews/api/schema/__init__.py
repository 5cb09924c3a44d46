"""
GraphQL schema for the movie reviews API.
"""

from moviereviews.api.schema.context import GraphQLContext, get_context
from moviereviews.api.schema.query import Query
from moviereviews.api.schema.mutation import Mutation
from moviereviews.api.schema.build import schema, create_schema, should_mask_error

__all__ = [
    "GraphQLContext",
    "get_context",
    "Query",
    "Mutation",
    "schema",
    "create_schema",
    "should_mask_error",
]
