"""
REST route handlers alongside the GraphQL endpoint.
"""

from moviereviews.api.routers import system

__all__ = ["system"]
