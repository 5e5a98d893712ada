"""FastAPI application factory"""

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from finplan.api.dependencies import get_request_id
from finplan.api.middleware import RequestIDMiddleware, MetricsMiddleware
from finplan.api.v1 import dashboard, projection, store
from finplan.infrastructure.database.session import init_db
from finplan.infrastructure.observability.logging import setup_logging
from finplan.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app(create_tables: bool = True) -> FastAPI:
    """Create and configure FastAPI application"""
    if create_tables:
        init_db()

    app = FastAPI(
        title="finplan",
        description="Personal finance planning: monthly projection, goals and recommendations",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.exception_handler(Exception)
    async def unhandled_exception(request: Request, exc: Exception):
        logging.error(
            f"Unhandled error on {request.method} {request.url.path}: {exc!r}",
            extra={"request_id": get_request_id(request)},
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name, "environment": settings.environment}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(projection.router, prefix="/v1", tags=["projection"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(store.router, prefix="/v1", tags=["store"])

    return app


app = create_app()
