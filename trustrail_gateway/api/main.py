"""FastAPI application factory"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from trustrail_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from trustrail_gateway.api.v1 import applications, bank, businesses, notifications, rules, schedule
from trustrail_gateway.infrastructure.database.session import init_db
from trustrail_gateway.infrastructure.observability.logging import setup_logging
from trustrail_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_tables:
        init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="TrustRail Gateway",
        description="Trust scoring, instalment schedules and payment applications for TrustRail businesses",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(applications.router, prefix="/v1", tags=["applications"])
    app.include_router(schedule.router, prefix="/v1", tags=["schedules"])
    app.include_router(businesses.router, prefix="/v1", tags=["businesses"])
    app.include_router(rules.router, prefix="/v1", tags=["rules"])
    app.include_router(notifications.router, prefix="/v1", tags=["notifications"])
    app.include_router(bank.router, prefix="/v1", tags=["bank"])

    return app


app = create_app()
