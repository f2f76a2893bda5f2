"""
Seal record model and the HTTP request / response contracts.

``SealRecord`` is the internal, persisted unit. It may carry the original
text as ``payload``. Anything that leaves the service over HTTP is built
from ``SealRecordView``, which has no payload field at all.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ----------------------------------------------------------------------
# Internal record
# ----------------------------------------------------------------------
class SealRecord(BaseModel):
    """
    A digest bound to a generated identifier and a UTC timestamp.

    Records are immutable. Re-sealing a digest replaces the stored record
    with a new instance rather than mutating the old one.
    """

    identifier: str = Field(..., description="SEAL-NNNNNN identifier")
    digest: str = Field(..., description="Content digest (store key)")
    created_at: datetime = Field(..., alias="createdAt")
    payload: Optional[str] = Field(
        None,
        description="Original text. Internal only, never listed.",
    )

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="forbid",
    )

    def redacted(self) -> "SealRecord":
        """Return a copy of this record with the payload stripped."""
        if self.payload is None:
            return self
        return self.model_copy(update={"payload": None})


# ----------------------------------------------------------------------
# Public projection
# ----------------------------------------------------------------------
class SealRecordView(BaseModel):
    identifier: str
    digest: str
    created_at: datetime = Field(..., alias="createdAt")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @classmethod
    def from_record(cls, record: SealRecord) -> "SealRecordView":
        return cls(
            identifier=record.identifier,
            digest=record.digest,
            created_at=record.created_at,
        )


# ----------------------------------------------------------------------
# Requests
# ----------------------------------------------------------------------
class TextRequest(BaseModel):
    """
    Body of ``POST /seal`` and ``POST /verify``.

    A missing ``text`` member decodes to the empty string so that it is
    reported as a validation failure rather than a malformed body.
    """

    text: str = ""


class ResolveRequest(BaseModel):
    digest: str = ""


# ----------------------------------------------------------------------
# Responses
# ----------------------------------------------------------------------
class SealResponse(BaseModel):
    identifier: str
    digest: str
    created_at: datetime = Field(..., alias="createdAt")
    message: str

    model_config = ConfigDict(populate_by_name=True)


class VerifyResponse(BaseModel):
    matched: bool
    message: str
    record: Optional[SealRecordView] = None


class ResolveResponse(BaseModel):
    found: bool
    message: str
    record: Optional[SealRecordView] = None


class ListResponse(BaseModel):
    count: int
    records: List[SealRecordView]


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str
    service: str
