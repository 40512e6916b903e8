"""
Typed API errors and their HTTP rendering.

Storage and service code raise these; `register_exception_handlers` turns them
into `{"error": "<message>"}` JSON bodies. Anything else that escapes a route
is caught by `unhandled_error_middleware` and rendered as a 500.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ApiError(RuntimeError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ApiError):
    status_code = status.HTTP_409_CONFLICT


class UnavailableError(ApiError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


async def api_error_handler(_: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


async def unhandled_error_middleware(request: Request, call_next):
    """
    Last-resort handler: log the stack, answer 500 with the raw message.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path)
        # NOTE: the raw message may leak internals to clients.
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc)},
        )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.middleware("http")(unhandled_error_middleware)
