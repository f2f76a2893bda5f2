"""
FastAPI entrypoint for the Notary microservice.

The notary binds a content digest, computed by the external Digest
Service (hasher), to a ``SEAL-NNNNNN`` identifier and a UTC timestamp,
and later verifies or resolves that binding. State lives in a single
in-memory RecordStore created at startup; nothing survives a restart.
"""

import logging
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from notary.app.api.errors import register_exception_handlers
from notary.app.api.routes import router as notary_router
from notary.app.core.config import Settings
from notary.app.schemas.seal import HealthResponse
from notary.app.services.digest_client import DigestFunction, HasherDigestClient
from notary.app.services.listing import ListingService
from notary.app.services.sealing import SealingService
from notary.app.services.verification import ResolutionService, VerificationService
from notary.app.store import RecordStore

logger = logging.getLogger("notary.main")


def get_app_version() -> str:
    try:
        return version("document-notary")
    except PackageNotFoundError:
        return "0.1.0"


def create_app(
    *,
    settings: Optional[Settings] = None,
    digest_function: Optional[DigestFunction] = None,
    store: Optional[RecordStore] = None,
) -> FastAPI:
    """
    Application factory for the Notary service.

    Collaborators passed in here take the place of the ones the lifespan
    would otherwise build: a fake ``digest_function`` means no HTTP client
    is opened at all.
    """

    try:
        resolved_settings = settings or Settings()
    except Exception:
        logger.exception("invalid_notary_configuration")
        raise

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Guarantees:
        - One RecordStore per process, shared by every service
        - One pooled HTTP client for the Digest Service, closed on shutdown
        """
        logger.info(
            "notary_startup_begin",
            extra={"service": "notary", "version": get_app_version()},
        )

        app.state.settings = resolved_settings

        http_client: Optional[httpx.Client] = None
        compute_digest = digest_function

        if compute_digest is None:
            http_client = httpx.Client(
                timeout=httpx.Timeout(resolved_settings.digest_timeout_seconds),
                follow_redirects=False,
                headers={"User-Agent": f"notary/{get_app_version()}"},
            )
            compute_digest = HasherDigestClient(
                http_client=http_client,
                url=str(resolved_settings.hasher_service_url),
            ).compute_digest

            logger.info(
                "digest_service_configured",
                extra={"hasher_url": str(resolved_settings.hasher_service_url)},
            )

        record_store = store if store is not None else RecordStore()

        app.state.store = record_store
        app.state.sealing_service = SealingService(
            store=record_store, compute_digest=compute_digest
        )
        app.state.verification_service = VerificationService(
            store=record_store, compute_digest=compute_digest
        )
        app.state.resolution_service = ResolutionService(store=record_store)
        app.state.listing_service = ListingService(store=record_store)

        try:
            yield
        finally:
            logger.info("notary_shutdown_begin")
            if http_client is not None:
                http_client.close()

    app = FastAPI(
        title="Notary Service",
        description="Seals content digests and verifies sealed documents",
        version=get_app_version(),
        docs_url="/docs",
        redoc_url=None,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(resolved_settings.cors_allow_origins),
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    register_exception_handlers(app)
    app.include_router(notary_router)

    @app.get(
        "/health",
        tags=["Monitoring"],
        summary="Liveness probe",
        response_model=HealthResponse,
    )
    def health_check() -> HealthResponse:
        """Static liveness answer. Does not touch the store or the hasher."""
        return HealthResponse(status="healthy", service="notary-service")

    return app


app = create_app()
