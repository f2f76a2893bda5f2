"""
FastAPI entrypoint for the hasher microservice.

A stateless Digest Service: ``POST /hash`` turns a text into its SHA-256
hex digest. The notary consumes it over HTTP and never hashes locally.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from hasher.app.api.routes import router as hash_router
from hasher.app.core.config import Settings

logger = logging.getLogger("hasher.main")


# ---------------------------------------------------------------------------
# Error rendering: every failure is {"error": message}
# ---------------------------------------------------------------------------

async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> ORJSONResponse:
    return ORJSONResponse(status_code=400, content={"error": "Invalid JSON body"})


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> ORJSONResponse:
    if exc.status_code == 405:
        allow = (exc.headers or {}).get("Allow", "")
        methods = [m.strip() for m in allow.split(",") if m.strip()]
        detail = (
            f"Only {' or '.join(methods)} method is allowed"
            if methods
            else "Method not allowed"
        )
    else:
        detail = str(exc.detail)

    return ORJSONResponse(
        status_code=exc.status_code,
        content={"error": detail},
        headers=exc.headers,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(
        title="Hasher Service",
        description="Stateless SHA-256 digest computation",
        version="0.1.0",
        docs_url="/docs",
        redoc_url=None,
        default_response_class=ORJSONResponse,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)

    app.include_router(hash_router)

    @app.get("/health", tags=["Monitoring"], summary="Liveness probe")
    async def health_check() -> ORJSONResponse:
        return ORJSONResponse(
            content={"status": "healthy", "service": "hasher-service"}
        )

    return app


app = create_app()
