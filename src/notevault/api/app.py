"""
Main FastAPI application for the Notevault backend
"""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import settings
from ..database import init_database
from ..database.connection import dispose_database
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..redis_pool import check_redis_health, close_redis_pool

# Configure logging before creating logger
configure_logging(debug=settings.debug)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Notevault API...")
    init_database()
    logger.info("Database initialized")

    if not await check_redis_health():
        logger.warning("Redis is unreachable; sign-in will fail until it recovers")

    yield

    logger.info("Shutting down Notevault API...")
    await close_redis_pool()
    await dispose_database()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Notevault API",
        description="Personal notes, todos and password entries",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.add_middleware(LoggingContextMiddleware)

    # Session cookies require credentialed CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    # GraphQL endpoint (allow disabling for tests)
    if not os.getenv("NOTEVAULT_DISABLE_GRAPHQL"):
        try:
            from ..graphql.schema import create_graphql_router, validate_schema

            logger.info("Validating GraphQL schema...")
            validate_schema()

            graphql_router = create_graphql_router(graphiql=settings.debug)
            app.include_router(graphql_router, prefix="")
            logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")
        except Exception as e:  # pragma: no cover
            logger.error("Failed to initialize GraphQL endpoint", error=str(e))
            raise

    return app


# Create the main application instance
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "notevault.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )
