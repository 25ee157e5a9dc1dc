"""Route registration — mounts all routers under ``/api/v1``."""

from fastapi import FastAPI

from falls_server.routes.assessments import router as assessments_router
from falls_server.routes.instruments import router as instruments_router
from falls_server.routes.reference import router as reference_router

API_PREFIX = "/api/v1"


def register_routes(app: FastAPI) -> None:
    """Include all sub-routers under the versioned API prefix."""
    app.include_router(instruments_router, prefix=API_PREFIX)
    app.include_router(assessments_router, prefix=API_PREFIX)
    app.include_router(reference_router, prefix=API_PREFIX)
