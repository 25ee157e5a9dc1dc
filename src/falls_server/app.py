"""Application factory and CLI entry point.

``create_app()`` builds the FastAPI application with:
  - Lifespan handler that loads rule tables and builds one engine per version
  - CORS middleware
  - Global exception handlers (AssessmentError → 422, KeyError → 404)
  - All API routes mounted under ``/api/v1``
  - A ``/health`` endpoint for readiness probes

The ``cli()`` function is the ``falls-server`` console-script entry point.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from falls_rulesets.engine import build_engines
from falls_rulesets.errors import AssessmentError
from falls_rulesets.ruleset import RulesetStore

from falls_server.config import ServerSettings, load_settings
from falls_server.errors import (
    assessment_error_handler,
    generic_error_handler,
    key_error_handler,
)
from falls_server.routes import register_routes

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Lifespan — runs once at startup/shutdown
# ------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialise shared resources at startup.

    Startup:
      1. Load YAML rule tables into a ``RulesetStore``
      2. Build one ``AssessmentEngine`` per version
      3. Stash them on ``app.state`` for dependency injection

    The default version must exist, otherwise startup fails.
    """
    settings: ServerSettings = app.state.settings

    # --- Load rule tables ---
    store = RulesetStore(ruleset_dir=settings.ruleset_dir)
    store.load()
    store.get(settings.default_version)
    logger.info("RulesetStore loaded; default version %s", settings.default_version)

    app.state.store = store
    app.state.engines = build_engines(store)

    yield

    logger.info("Shutting down")


# ------------------------------------------------------------------
# Factory
# ------------------------------------------------------------------

def create_app(settings: ServerSettings | None = None) -> FastAPI:
    """Build and return the configured FastAPI application."""
    if settings is None:
        settings = load_settings()

    # --- Configure logging ---
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="Falls Assessment API",
        description="Stateless scoring API for ISTUMBLE, FAST, FRAT and NEWS2",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store settings so the lifespan handler can read them
    app.state.settings = settings

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Exception handlers ---
    app.add_exception_handler(AssessmentError, assessment_error_handler)
    app.add_exception_handler(KeyError, key_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # --- Health check (outside /api/v1 prefix) ---
    @app.get("/health")
    async def health() -> dict:
        """Readiness probe — reports the loaded rule-table versions."""
        store: RulesetStore | None = getattr(app.state, "store", None)
        if store is None:
            return {"status": "error", "detail": "rule tables not loaded"}
        return {"status": "ok", "versions": store.versions()}

    # --- Mount all API routes ---
    register_routes(app)

    return app


# ------------------------------------------------------------------
# Module-level ASGI export (for uvicorn falls_server.app:app)
# ------------------------------------------------------------------
app = create_app()


# ------------------------------------------------------------------
# CLI entry point
# ------------------------------------------------------------------

def cli() -> None:
    """Console-script entry point: ``falls-server``."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "falls_server.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )
