"""FastAPI application for the avo-forms JSON API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .. import __version__
from ..clients.base import BackendClient
from ..clients.local import LocalBackendClient
from ..validation.errors import BackendError, ValidationError
from .routers import exercise, profile, validation

logger = logging.getLogger(__name__)


def create_app(backend: BackendClient | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Without ``backend`` a ``LocalBackendClient`` on the configured database
    is created when the app starts.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = backend or LocalBackendClient()
        if isinstance(client, LocalBackendClient):
            await client.start()
        app.state.backend = client
        yield
        if isinstance(client, LocalBackendClient):
            await client.close()

    app = FastAPI(
        title="avo-forms",
        description="Validated profile, exercise and registration forms",
        version=__version__,
        lifespan=lifespan,
    )

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError):
        return JSONResponse(status_code=422, content={"field": exc.field, "error": exc.message})

    @app.exception_handler(BackendError)
    async def backend_error(request: Request, exc: BackendError):
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
        status_code = 404 if exc.status == 404 else 502
        return JSONResponse(status_code=status_code, content={"error": exc.message})

    app.include_router(validation.router)
    app.include_router(profile.router)
    app.include_router(exercise.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
