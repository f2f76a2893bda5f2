"""
Read-only lookups against the record store.

Verification recomputes the digest from the caller's text. Resolution
takes the digest as given and never contacts the Digest Service.
Neither mutates the store.
"""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict

from notary.app.errors import InputValidationError
from notary.app.schemas.seal import SealRecord
from notary.app.services.digest_client import DigestFunction
from notary.app.services.sealing import compute_digest_or_unavailable
from notary.app.store.record_store import RecordStore

logger = logging.getLogger("notary.verification")


class VerificationResult(BaseModel):
    matched: bool
    record: Optional[SealRecord] = None

    model_config = ConfigDict(frozen=True)


class ResolutionResult(BaseModel):
    found: bool
    record: Optional[SealRecord] = None

    model_config = ConfigDict(frozen=True)


class VerificationService:
    def __init__(self, *, store: RecordStore, compute_digest: DigestFunction) -> None:
        self.store = store
        self.compute_digest = compute_digest

    def verify(self, text: str) -> VerificationResult:
        if text == "":
            raise InputValidationError("Text field is required")

        digest = compute_digest_or_unavailable(self.compute_digest, text)
        record = self.store.get(digest)

        if record is None:
            logger.info("verification_no_match", extra={"digest": digest})
            return VerificationResult(matched=False)

        logger.info(
            "verification_matched",
            extra={"identifier": record.identifier, "digest": digest},
        )
        return VerificationResult(matched=True, record=record)


class ResolutionService:
    def __init__(self, *, store: RecordStore) -> None:
        self.store = store

    def resolve(self, digest: str) -> ResolutionResult:
        """
        Look up a record by a caller-supplied digest.

        The digest is not checked for well-formedness; an arbitrary string
        simply resolves to nothing.
        """
        if digest == "":
            raise InputValidationError("Digest field is required")

        record = self.store.get(digest)
        return ResolutionResult(found=record is not None, record=record)
