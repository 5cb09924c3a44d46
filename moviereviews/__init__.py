"""
Movie Reviews GraphQL API package.

This package contains the persistence layer, authentication helpers,
operation handlers and the GraphQL/FastAPI surface for users, movies
and reviews.
"""

__version__ = "1.0.0"
