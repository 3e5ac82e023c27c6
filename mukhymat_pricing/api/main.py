"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from mukhymat_pricing.api.middleware import RequestIDMiddleware, MetricsMiddleware
from mukhymat_pricing.api.v1 import quotes, cancellations, history, eligibility, policies
from mukhymat_pricing.infrastructure.observability.logging import setup_logging
from mukhymat_pricing.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Mukhymat Pricing Service",
        description="Booking price breakdown, cancellation refunds and host penalties",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
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
    app.include_router(quotes.router, prefix="/v1", tags=["quotes"])
    app.include_router(cancellations.router, prefix="/v1", tags=["cancellations"])
    app.include_router(history.router, prefix="/v1", tags=["cancellations"])
    app.include_router(eligibility.router, prefix="/v1", tags=["refunds"])
    app.include_router(policies.router, prefix="/v1", tags=["policies"])

    return app


app = create_app()
