"""
FastAPI application entry point for the Movie Reviews GraphQL API.
"""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from strawberry.fastapi import GraphQLRouter

from moviereviews import __version__
from moviereviews.api.config import Settings
from moviereviews.api.routers import system
from moviereviews.api.schema import get_context, schema
from moviereviews.auth.tokens import TokenService
from moviereviews.database.connection import DatabaseManager
from moviereviews.utils.logging_config import configure_api_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    logger.info("Shutting down, closing database connections")
    app.state.db_manager.close()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration; read from the environment when omitted

    Returns:
        Configured FastAPI application with the database schema in place
    """
    settings = settings or Settings()
    configure_api_logging(settings)

    if settings.uses_dev_secret:
        logger.warning("SECRET_KEY is not set; using the development signing key")

    db_manager = DatabaseManager(db_path=settings.database_url, echo=settings.echo_sql)
    db_manager.create_tables()

    app = FastAPI(
        title="Movie Reviews API",
        description="GraphQL API for users, movies and reviews",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db_manager = db_manager
    app.state.token_service = TokenService(
        settings.secret_key,
        ttl=timedelta(hours=settings.token_ttl_hours),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(GraphQLRouter(schema, context_getter=get_context), prefix="/graphql")
    app.include_router(system.router)

    @app.get("/")
    def root():
        """Root endpoint."""
        return {
            "message": "Movie Reviews API",
            "graphql": "/graphql",
            "health": "/api/health",
        }

    logger.info("Application ready (database: %s)", db_manager.engine.url.render_as_string(hide_password=True))
    return app
