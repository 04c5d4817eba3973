"""
FastAPI Application Entry Point for WagerPoker.

This module creates and configures the FastAPI application with:
- HTTP routes for game sessions and hand evaluation
- A per-process game registry on `app.state`
- CORS middleware for development
"""

from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wagerpoker import __version__
from wagerpoker.server.routes import router
from wagerpoker.server.sessions import GameRegistry

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("WagerPoker server starting up...")
    yield
    logger.info("WagerPoker server shutting down with %d open games", len(app.state.registry))


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance with an empty game registry
    """
    app = FastAPI(
        title="WagerPoker",
        description="Heads-up Texas Hold'em engine against a house player",
        version=__version__,
        lifespan=lifespan,
    )

    # CORS middleware for development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.registry = GameRegistry()
    app.include_router(router)

    return app


# Create the application instance
app = create_app()


def main():
    """Run the server (for use as entry point)."""
    import uvicorn
    uvicorn.run(
        "wagerpoker.server.app:app",
        host="0.0.0.0",
        port=8000,
    )


if __name__ == "__main__":
    main()
