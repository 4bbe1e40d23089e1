"""Main FastAPI application serving the TaskBri GraphQL API."""
import logging

from ariadne.asgi import GraphQL
from fastapi import FastAPI

from taskbri.db.config import DATABASE_URL, DEBUG, JWT_ALGORITHM, JWT_SECRET, create_db_engine
from taskbri.db.init import init_db
from taskbri.db.repository import Repository
from taskbri.middleware.auth import build_context_value
from taskbri.middleware.cors import add_cors_middleware
from taskbri.schema import format_error, schema
from taskbri.services.credentials import CredentialService

logger = logging.getLogger(__name__)


def create_app(
    database_url: str = DATABASE_URL,
    secret: str = JWT_SECRET,
    debug: bool = DEBUG,
) -> FastAPI:
    """Build the application around one engine opened for the process lifetime."""
    engine = create_db_engine(database_url)
    repository = Repository(engine)
    credentials = CredentialService(secret, algorithm=JWT_ALGORITHM)

    app = FastAPI(
        title="TaskBri API",
        description="GraphQL API for collaborative projects and their task lists",
        version="1.0.0",
    )
    app.state.engine = engine
    app.state.repository = repository
    app.state.credentials = credentials

    # Add CORS middleware
    add_cors_middleware(app)

    @app.on_event("startup")
    async def startup_event():
        """Initialize database tables on startup."""
        init_db(engine)
        logger.info("[SUCCESS] Application startup complete.")

    @app.on_event("shutdown")
    async def shutdown_event():
        engine.dispose()

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": "1.0.0"}

    @app.get("/")
    async def root():
        """Root endpoint - API welcome message."""
        return {
            "message": "Welcome to the TaskBri API",
            "version": "1.0.0",
            "graphql": "/graphql/",
            "health": "/health",
        }

    graphql_app = GraphQL(
        schema,
        context_value=build_context_value(repository, credentials),
        error_formatter=format_error,
        debug=debug,
    )
    app.mount("/graphql/", graphql_app)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "taskbri.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
