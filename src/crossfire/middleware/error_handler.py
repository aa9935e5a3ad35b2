"""Global error handler: consistent JSON error responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from crossfire.auth.errors import (
    AuthError,
    InvalidCredentialsError,
    UnauthorizedError,
    UserAlreadyExistsError,
    UserBannedError,
    UserNotFoundError,
)
from crossfire.players.errors import PlayerAlreadyExistsError, PlayerError, PlayerNotFoundError

logger = structlog.get_logger()

AUTH_ERROR_STATUS: dict[type[AuthError], int] = {
    InvalidCredentialsError: 401,
    UnauthorizedError: 401,
    UserBannedError: 403,
    UserNotFoundError: 404,
    UserAlreadyExistsError: 409,
}

PLAYER_ERROR_STATUS: dict[type[PlayerError], int] = {
    PlayerNotFoundError: 404,
    PlayerAlreadyExistsError: 409,
}


def setup_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(AuthError)
    async def auth_error_handler(_request: Request, exc: AuthError) -> JSONResponse:
        """Map auth failures to their HTTP status."""
        status_code = AUTH_ERROR_STATUS.get(type(exc), 500)
        headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
        return JSONResponse(status_code=status_code, content=exc.to_dict(), headers=headers)

    @app.exception_handler(PlayerError)
    async def player_error_handler(_request: Request, exc: PlayerError) -> JSONResponse:
        """Map player failures to their HTTP status."""
        return JSONResponse(status_code=PLAYER_ERROR_STATUS.get(type(exc), 500), content=exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Handle HTTP exceptions with consistent JSON format."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
        """Handle validation errors with consistent JSON format."""
        return JSONResponse(
            status_code=422,
            content={"detail": "Validation error", "code": "validation_error", "errors": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unhandled exceptions: always return JSON."""
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )
