import logging

from notary.app.errors import DigestUnavailable, InputValidationError
from notary.app.schemas.seal import SealRecord
from notary.app.services.digest_client import DigestFunction, DigestServiceError
from notary.app.store.record_store import RecordStore

logger = logging.getLogger("notary.sealing")


def compute_digest_or_unavailable(compute_digest: DigestFunction, text: str) -> str:
    """Run the digest capability, mapping its failures to DigestUnavailable."""
    try:
        return compute_digest(text)
    except DigestServiceError as exc:
        raise DigestUnavailable(str(exc)) from exc


class SealingService:
    """
    compute digest -> allocate identifier -> insert-or-overwrite.

    Re-sealing content that is already sealed replaces the stored record
    and always mints a new identifier; the previous identifier is no
    longer reachable through its digest.
    """

    def __init__(self, *, store: RecordStore, compute_digest: DigestFunction) -> None:
        self.store = store
        self.compute_digest = compute_digest

    def seal(self, text: str) -> SealRecord:
        if text == "":
            raise InputValidationError("Text field is required")

        digest = compute_digest_or_unavailable(self.compute_digest, text)
        record = self.store.insert(digest, payload=text)

        logger.info(
            "seal_created",
            extra={
                "identifier": record.identifier,
                "digest": record.digest,
            },
        )
        return record
