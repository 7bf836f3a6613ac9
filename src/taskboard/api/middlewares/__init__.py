"""Application middlewares."""

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.taskboard.core.config import Settings

from .request_logging import request_logging_middleware
from .security_headers import SecurityHeadersMiddleware, build_security_headers

__all__ = [
    "setup_middlewares",
    "SecurityHeadersMiddleware",
    "build_security_headers",
    "request_logging_middleware",
]


def setup_middlewares(app: FastAPI, settings: Settings) -> None:
    """Configure all application middlewares.

    Middleware order matters - the last one added is the outermost.
    """
    # Request logging - needs the correlation id, so it sits inside CorrelationIdMiddleware
    app.middleware("http")(request_logging_middleware)

    app.add_middleware(SecurityHeadersMiddleware, headers=build_security_headers(settings))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )

    # Correlation ID - generates/propagates X-Request-ID; outermost
    app.add_middleware(CorrelationIdMiddleware)
