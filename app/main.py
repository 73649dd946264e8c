"""
Main application entry point.

This sets up FastAPI with Strawberry GraphQL and initializes the database.
The app is the custom object store service that the GraphQL store client
talks to.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from strawberry.fastapi import GraphQLRouter

from app.infrastructure.api.schema import schema
from app.infrastructure.database.session import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app_instance: FastAPI):
    """
    Lifespan context manager for application startup/shutdown.

    Initializes the database on startup.
    """
    init_db()
    logger.info("Database initialized")

    yield

    logger.info("Shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Custom Object Store API",
    description="Versioned JSON custom objects addressed by container and key",
    version="1.0.0",
    lifespan=lifespan,
)

# Create GraphQL router
graphql_app = GraphQLRouter(schema)

# Mount GraphQL endpoint
app.include_router(graphql_app, prefix="/graphql")


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": "Custom Object Store API",
        "graphql": "/graphql",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
