"""History storage backends."""

from .history import HistoryStore, InMemoryHistoryStore, LocalHistoryStore, S3HistoryStore, create_history_store

__all__ = [
    "HistoryStore",
    "InMemoryHistoryStore",
    "LocalHistoryStore",
    "S3HistoryStore",
    "create_history_store",
]
