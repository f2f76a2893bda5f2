from .record_store import RecordStore, format_identifier
from .rwlock import ReadWriteLock

__all__ = [
    "RecordStore",
    "ReadWriteLock",
    "format_identifier",
]
