"""
FastAPI application entry point.

This is the main application that ties together all components:
- API routes for company validation
- Lifecycle of the downstream clients and the blocking worker pool
- Error handling and logging
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from kyb import __version__
from kyb.api.routes import health, validation
from kyb.config import get_settings

# Configure logging
logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown tasks:
    - Create the orchestrator (HTTP clients and worker pool)
    - Close clients and stop worker threads on shutdown
    """
    settings = get_settings()

    logger.info(f"Starting KYB v{__version__}")
    logger.info(f"Debug mode: {settings.debug}")

    orchestrator = validation.get_orchestrator()
    logger.info(f"Blocking pool size: {orchestrator.blocking_executor.max_workers}")

    yield  # Application runs here

    # Shutdown
    logger.info("Shutting down KYB")
    await validation.shutdown_orchestrator()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance ready to serve requests.
    """
    settings = get_settings()

    app = FastAPI(
        title="KYB API",
        description=(
            "Company validation service.\n\n"
            "Checks a company against Camara de Comercio, Bancolombia, "
            "DataCredito and the Superintendencia, and aggregates the results."
        ),
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # Register routers
    app.include_router(health.router)
    app.include_router(validation.router, prefix="/api/v1")

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Catch-all exception handler for unhandled errors."""
        logger.exception(f"Unhandled error: {exc}")

        # Don't expose internal errors in production
        if settings.debug:
            detail = str(exc)
        else:
            detail = "An internal error occurred"

        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "detail": detail,
            },
        )

    return app


# Create the application instance
app = create_app()


# Development server entry point
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "kyb.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
