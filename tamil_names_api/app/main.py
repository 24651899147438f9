"""
Main entrypoint for the Tamil Names API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``, so it can be served directly::

    uvicorn tamil_names_api.app.main:app --reload
"""

from fastapi import FastAPI

from .core.config import settings
from .core.db import init_db
from .core.exception_handlers import setup_exception_handlers
from .core.logging_config import setup_logging
from .api.v1.router import router as v1_router


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Configures logging, registers exception handlers and mounts the
    v1 routes under ``/api``, the prefix the web front-end has always
    called.  The database schema is migrated on startup.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    setup_exception_handlers(app)
    app.include_router(v1_router, prefix="/api")

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file on first start and brings the
        # schema up to date.
        init_db()

    return app


app = create_app()
