"""FastAPI application factory"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from payment_intent_gateway.api.middleware import MetricsMiddleware, RequestIDMiddleware
from payment_intent_gateway.api.v1 import payments
from payment_intent_gateway.api.v1.schemas import INVALID_INSTRUCTION_MESSAGE
from payment_intent_gateway.config import settings
from payment_intent_gateway.infrastructure.observability.logging import setup_logging

# Setup structured logging
setup_logging(settings.log_level)


async def invalid_request_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject missing, empty or non-string instructions with a 400"""
    return JSONResponse(status_code=400, content={"error": INVALID_INSTRUCTION_MESSAGE})


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Payment Intent Gateway",
        description="Natural-language payment instructions to SEPA / Faster Payments with fraud scoring",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(RequestValidationError, invalid_request_handler)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(payments.router, prefix="/v1", tags=["payments"])

    return app


app = create_app()
