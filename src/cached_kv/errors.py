"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cached_kv.dto import ErrorResponse

logger = logging.getLogger(__name__)


class KVServiceError(Exception):
    """Base exception with HTTP status code and an optional detail message."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail
        self.headers = headers or {}

    def to_dict(self) -> dict[str, str]:
        return ErrorResponse(error=str(self), message=self.detail).model_dump(exclude_none=True)


class RateLimitExceededError(KVServiceError):
    def __init__(self, retry_after: int = 60):
        super().__init__(
            "Rate limit exceeded",
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many requests. Please try again later.",
            headers={"Retry-After": str(retry_after)},
        )


class MalformedRequestBodyError(KVServiceError):
    def __init__(self):
        super().__init__("Invalid JSON in request body", status_code=status.HTTP_400_BAD_REQUEST)


class ValidationFailureError(KVServiceError):
    def __init__(self):
        super().__init__(
            "Missing required fields",
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Request must include "key" and "value" fields',
        )


class RouteNotFoundError(KVServiceError):
    def __init__(self):
        super().__init__("Not Found", status_code=status.HTTP_404_NOT_FOUND)


def not_found_response() -> PlainTextResponse:
    return PlainTextResponse("Not Found", status_code=status.HTTP_404_NOT_FOUND)


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(RouteNotFoundError)
    async def handle_route_not_found(_request: Request, _exc: RouteNotFoundError):
        return not_found_response()

    @app.exception_handler(KVServiceError)
    async def handle_service_error(_request: Request, exc: KVServiceError):
        return JSONResponse(exc.to_dict(), status_code=exc.status_code, headers=exc.headers)

    # Unknown paths and known paths with the wrong method both answer 404.
    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(_request: Request, exc: StarletteHTTPException):
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return not_found_response()
        return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
