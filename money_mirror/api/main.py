"""FastAPI application factory"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from money_mirror.api.middleware import RequestIDMiddleware, MetricsMiddleware
from money_mirror.api.v1 import analysis, assessment, findings, profiles
from money_mirror.infrastructure.database.session import init_db
from money_mirror.infrastructure.observability.logging import setup_logging
from money_mirror.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Money Mirror",
        description="Money Style assessment and behavioral contradiction analysis",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(assessment.router, prefix="/v1", tags=["assessment"])
    app.include_router(profiles.router, prefix="/v1", tags=["profiles"])
    app.include_router(analysis.router, prefix="/v1", tags=["analysis"])
    app.include_router(findings.router, prefix="/v1", tags=["findings"])

    return app


app = create_app()
