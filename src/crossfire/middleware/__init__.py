"""Middleware registration."""

from fastapi import FastAPI

from crossfire.config import Settings
from crossfire.middleware.cors import setup_cors
from crossfire.middleware.error_handler import setup_error_handlers
from crossfire.middleware.logging import setup_logging
from crossfire.middleware.rate_limit import RateLimitMiddleware
from crossfire.middleware.request_id import RequestIdMiddleware


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register logging, error handlers and middleware.

    Starlette runs middleware in reverse-add order, so CORS is added last to
    wrap 429 responses from the rate limiter. The request id is bound before
    rate limiting so rejected requests are still traceable.
    """
    setup_logging(settings)
    setup_error_handlers(app)
    app.add_middleware(
        RateLimitMiddleware,
        requests_per_window=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.add_middleware(RequestIdMiddleware)
    setup_cors(app, settings)
