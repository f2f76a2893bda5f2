from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from notary.app.schemas.seal import (
    ErrorResponse,
    ListResponse,
    ResolveRequest,
    ResolveResponse,
    SealRecordView,
    SealResponse,
    TextRequest,
    VerifyResponse,
)
from notary.app.services.listing import ListingService
from notary.app.services.sealing import SealingService
from notary.app.services.verification import ResolutionService, VerificationService

router = APIRouter(tags=["Notary"])

SEALED_MESSAGE = "Document sealed successfully"
VERIFIED_MESSAGE = "Document verified! This document was sealed."
NOT_VERIFIED_MESSAGE = (
    "Document not found. This document was never sealed or has been modified."
)
RESOLVED_MESSAGE = "Seal record found."
NOT_RESOLVED_MESSAGE = "No seal record exists for this digest."

_TEXT_ERRORS = {
    400: {"model": ErrorResponse, "description": "Empty text or invalid JSON"},
    405: {"model": ErrorResponse, "description": "Method not allowed"},
    503: {"model": ErrorResponse, "description": "Digest Service unavailable"},
}

# =============================================================================
# Dependency providers
# =============================================================================


def get_sealing_service(request: Request) -> SealingService:
    return request.app.state.sealing_service


def get_verification_service(request: Request) -> VerificationService:
    return request.app.state.verification_service


def get_resolution_service(request: Request) -> ResolutionService:
    return request.app.state.resolution_service


def get_listing_service(request: Request) -> ListingService:
    return request.app.state.listing_service


# =============================================================================
# Routes
#
# Plain ``def`` endpoints run on FastAPI's threadpool, one worker thread
# per request.
# =============================================================================


@router.post(
    "/seal",
    summary="Seal a document's text",
    status_code=status.HTTP_201_CREATED,
    response_model=SealResponse,
    responses=_TEXT_ERRORS,
)
def seal_document(
    payload: TextRequest,
    service: Annotated[SealingService, Depends(get_sealing_service)],
) -> SealResponse:
    record = service.seal(payload.text)
    return SealResponse(
        identifier=record.identifier,
        digest=record.digest,
        created_at=record.created_at,
        message=SEALED_MESSAGE,
    )


@router.post(
    "/verify",
    summary="Check whether a document's text was sealed",
    response_model=VerifyResponse,
    response_model_exclude_none=True,
    responses=_TEXT_ERRORS,
)
def verify_document(
    payload: TextRequest,
    service: Annotated[VerificationService, Depends(get_verification_service)],
) -> VerifyResponse:
    result = service.verify(payload.text)

    if not result.matched:
        return VerifyResponse(matched=False, message=NOT_VERIFIED_MESSAGE)

    return VerifyResponse(
        matched=True,
        message=VERIFIED_MESSAGE,
        record=SealRecordView.from_record(result.record),
    )


@router.post(
    "/resolve",
    summary="Look up a seal record by digest",
    response_model=ResolveResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse, "description": "Empty digest or invalid JSON"},
        405: {"model": ErrorResponse, "description": "Method not allowed"},
    },
)
def resolve_digest(
    payload: ResolveRequest,
    service: Annotated[ResolutionService, Depends(get_resolution_service)],
) -> ResolveResponse:
    result = service.resolve(payload.digest)

    if not result.found:
        return ResolveResponse(found=False, message=NOT_RESOLVED_MESSAGE)

    return ResolveResponse(
        found=True,
        message=RESOLVED_MESSAGE,
        record=SealRecordView.from_record(result.record),
    )


@router.get(
    "/list",
    summary="List all seal records (payload redacted)",
    response_model=ListResponse,
    responses={405: {"model": ErrorResponse, "description": "Method not allowed"}},
)
def list_records(
    service: Annotated[ListingService, Depends(get_listing_service)],
) -> ListResponse:
    records = [SealRecordView.from_record(r) for r in service.list()]
    return ListResponse(count=len(records), records=records)
