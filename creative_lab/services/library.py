"""Library service - record successful creatives and summarize a user's history."""

import logging
from datetime import datetime, timedelta, timezone

from ..models import CreativeFormat, CreativeOutput, HistoryEntry, User
from ..stores.history import HistoryStore

logger = logging.getLogger(__name__)


class LibraryService:
    """Append-only per-user creative library."""

    def __init__(self, store: HistoryStore):
        self.store = store

    def record(
        self,
        user: User,
        output: CreativeOutput,
        creative_type: CreativeFormat | str,
        user_input: str,
        occasion: str,
    ) -> HistoryEntry:
        """
        Create a HistoryEntry for a finished generation and persist it.

        Persistence failures are logged, not raised: the entry is still returned
        so the caller can show the creative.
        """
        entry = HistoryEntry.from_output(output, creative_type, user_input, occasion)
        try:
            self.store.append(user.email, entry)
        except Exception as e:
            logger.error(f"Failed to save history for {user.email}: {e}")
        return entry

    def list_entries(self, user: User, newest_first: bool = True) -> list[HistoryEntry]:
        try:
            entries = self.store.list_by_user(user.email)
        except Exception as e:
            logger.error(f"Failed to load history for {user.email}: {e}")
            return []
        return list(reversed(entries)) if newest_first else entries

    def stats(self, entries: list[HistoryEntry], now: datetime | None = None) -> dict:
        """Counts created today, this week (weeks start on Sunday) and in total."""
        now = now or datetime.now(timezone.utc)
        today = now.date()
        # Python weekday(): Monday=0 ... Sunday=6
        start_of_week = today - timedelta(days=(today.weekday() + 1) % 7)

        dates = [entry.created_datetime.astimezone(now.tzinfo).date() for entry in entries]
        return {
            "created_today": sum(1 for d in dates if d == today),
            "created_this_week": sum(1 for d in dates if d >= start_of_week),
            "total": len(entries),
        }
