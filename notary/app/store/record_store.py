"""
In-memory record store for seal records.

One record per digest. The store owns the sequence counter used to mint
``SEAL-NNNNNN`` identifiers and stamps ``created_at`` itself; callers
never supply timestamps on the creation path.

Concurrency:
- ``get`` and ``list`` take the shared side of a reader/writer lock
- ``put`` and ``insert`` take the exclusive side
- the sequence counter has its own mutex so ``allocate_identifier`` is
  linearizable on its own as well as inside ``insert``

Nothing returned from the store aliases its internal mapping. Records are
frozen models, and ``list`` builds a fresh list of redacted copies.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from notary.app.schemas.seal import SealRecord
from notary.app.store.rwlock import ReadWriteLock

logger = logging.getLogger("notary.store")

Clock = Callable[[], datetime]

IDENTIFIER_PREFIX = "SEAL"
IDENTIFIER_WIDTH = 6


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_identifier(sequence: int) -> str:
    """
    Format a sequence number as a seal identifier.

    The numeric field is zero-padded to six digits and simply widens
    past 999999 (``SEAL-1000000``).
    """
    return f"{IDENTIFIER_PREFIX}-{sequence:0{IDENTIFIER_WIDTH}d}"


class RecordStore:
    def __init__(
        self,
        *,
        clock: Optional[Clock] = None,
        initial_sequence: int = 0,
    ) -> None:
        if initial_sequence < 0:
            raise ValueError("initial_sequence must be non-negative")

        self._records: Dict[str, SealRecord] = {}
        self._lock = ReadWriteLock()

        self._sequence = initial_sequence
        self._sequence_lock = threading.Lock()

        self._clock: Clock = clock or _utc_now

    # ------------------------------------------------------------------
    # Identifier allocation
    # ------------------------------------------------------------------

    def allocate_identifier(self) -> str:
        with self._sequence_lock:
            self._sequence += 1
            sequence = self._sequence
        return format_identifier(sequence)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def put(self, digest: str, record: SealRecord) -> SealRecord:
        """Insert or replace the record stored under ``digest``."""
        if record.digest != digest:
            raise ValueError(
                f"record digest {record.digest!r} does not match key {digest!r}"
            )

        with self._lock.write_locked():
            self._records[digest] = record
        return record

    def insert(self, digest: str, payload: Optional[str] = None) -> SealRecord:
        """
        Create a record for ``digest``, replacing any existing one.

        Allocation, timestamping and storage happen under the write lock,
        so identifiers increase in the same order records are created.
        An overwrite always receives a new identifier.
        """
        with self._lock.write_locked():
            record = SealRecord(
                identifier=self.allocate_identifier(),
                digest=digest,
                created_at=self._clock(),
                payload=payload,
            )
            replaced = self._records.get(digest)
            self._records[digest] = record

        if replaced is not None:
            logger.info(
                "seal_record_replaced",
                extra={
                    "digest": digest,
                    "identifier": record.identifier,
                    "replaced_identifier": replaced.identifier,
                },
            )
        return record

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, digest: str) -> Optional[SealRecord]:
        with self._lock.read_locked():
            return self._records.get(digest)

    def list(self) -> List[SealRecord]:
        """Point-in-time snapshot of all records, payloads removed."""
        with self._lock.read_locked():
            snapshot = list(self._records.values())
        return [record.redacted() for record in snapshot]

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._records)
