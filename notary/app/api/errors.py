"""
Exception handlers translating failures into ``{"error": message}`` bodies.

FastAPI's own request validation errors become MalformedRequest (400) and
Starlette's 405 becomes MethodNotAllowed, so every failure the notary
emits has the same shape.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from notary.app.errors import MalformedRequest, MethodNotAllowed, NotaryError

logger = logging.getLogger("notary.api")


def error_response(exc: NotaryError, headers=None) -> ORJSONResponse:
    return ORJSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
        headers=headers,
    )


async def handle_notary_error(request: Request, exc: NotaryError) -> ORJSONResponse:
    logger.info(
        "request_rejected",
        extra={
            "path": request.url.path,
            "error_type": type(exc).__name__,
            "status_code": exc.status_code,
        },
    )
    return error_response(exc)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> ORJSONResponse:
    return await handle_notary_error(request, MalformedRequest("Invalid JSON body"))


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> ORJSONResponse:
    if exc.status_code == 405:
        allow = (exc.headers or {}).get("Allow", "")
        methods = [m.strip() for m in allow.split(",") if m.strip()]
        message = (
            f"Only {' or '.join(methods)} method is allowed"
            if methods
            else "Method not allowed"
        )
        return error_response(MethodNotAllowed(message), headers=exc.headers)

    return ORJSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=exc.headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NotaryError, handle_notary_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
