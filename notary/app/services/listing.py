from typing import List

from notary.app.schemas.seal import SealRecord
from notary.app.store.record_store import RecordStore


class ListingService:
    """All seal records, payload redacted. Never fails."""

    def __init__(self, *, store: RecordStore) -> None:
        self.store = store

    def list(self) -> List[SealRecord]:
        # payload never leaves through listing
        return [record.redacted() for record in self.store.list()]
