"""History stores - append-only per-user creative collections."""

import json
import logging
import re
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path

import boto3

from ..api.serializers import deserialize_entry, serialize_entry
from ..models import HistoryEntry

logger = logging.getLogger(__name__)


def user_key(email: str) -> str:
    """Filesystem/object-key safe identifier for a user."""
    return re.sub(r"[^a-z0-9._@-]", "_", email.strip().lower())


class HistoryStore(ABC):
    """Ordered per-user collection of HistoryEntry (oldest first)."""

    @abstractmethod
    def append(self, email: str, entry: HistoryEntry) -> None:
        pass

    @abstractmethod
    def list_by_user(self, email: str) -> list[HistoryEntry]:
        pass


class InMemoryHistoryStore(HistoryStore):
    def __init__(self):
        self._entries: dict[str, list[HistoryEntry]] = {}

    def append(self, email: str, entry: HistoryEntry) -> None:
        self._entries.setdefault(user_key(email), []).append(entry)

    def list_by_user(self, email: str) -> list[HistoryEntry]:
        return list(self._entries.get(user_key(email), []))


class LocalHistoryStore(HistoryStore):
    """One JSON array file per user under a directory."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)
        self._lock = threading.Lock()

    def _path(self, email: str) -> Path:
        return self.directory / f"creativeHistory_{user_key(email)}.json"

    def append(self, email: str, entry: HistoryEntry) -> None:
        with self._lock:
            path = self._path(email)
            try:
                items = self._read(path)
            except (json.JSONDecodeError, UnicodeDecodeError, TypeError):
                items = []
                self._quarantine(path)
            items.append(serialize_entry(entry))
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp = path.with_suffix(".tmp")
            tmp.write_text(json.dumps(items), encoding="utf-8")
            tmp.replace(path)

    def list_by_user(self, email: str) -> list[HistoryEntry]:
        return [deserialize_entry(item) for item in self._read(self._path(email))]

    def _read(self, path: Path) -> list[dict]:
        if not path.exists():
            return []
        items = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(items, list):
            raise TypeError(f"{path} does not hold a JSON array")
        return items

    def _quarantine(self, path: Path) -> None:
        """Move an unreadable history file aside so new entries can be saved."""
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%f")
        target = path.with_name(f"{path.stem}.corrupt-{stamp}.json")
        path.replace(target)
        logger.warning(f"History file {path} is unreadable, moved to {target}")


class S3HistoryStore(HistoryStore):
    """One JSON object per entry under <prefix>/<user>/ in an S3 bucket."""

    def __init__(self, bucket: str, prefix: str = "history", client=None):
        self.bucket = bucket
        self.prefix = prefix.strip("/")
        self.s3 = client or boto3.client("s3")

    def _user_prefix(self, email: str) -> str:
        return f"{self.prefix}/{user_key(email)}/"

    def append(self, email: str, entry: HistoryEntry) -> None:
        # created_at first so keys list in insertion order
        key = f"{self._user_prefix(email)}{entry.created_at}_{entry.id}.json"
        self.s3.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=json.dumps(serialize_entry(entry)).encode("utf-8"),
            ContentType="application/json",
        )
        logger.info(f"Saved history entry s3://{self.bucket}/{key}")

    def list_by_user(self, email: str) -> list[HistoryEntry]:
        keys = []
        paginator = self.s3.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=self.bucket, Prefix=self._user_prefix(email)):
            keys.extend(obj["Key"] for obj in page.get("Contents", []))

        entries = []
        for key in sorted(keys):
            body = self.s3.get_object(Bucket=self.bucket, Key=key)["Body"].read()
            entries.append(deserialize_entry(json.loads(body)))
        return entries


def create_history_store(backend: str, directory: str = ".creative_history", bucket: str | None = None, prefix: str = "history") -> HistoryStore:
    """Build the configured history backend ("memory", "local" or "s3")."""
    if backend == "memory":
        return InMemoryHistoryStore()
    if backend == "local":
        return LocalHistoryStore(directory)
    if backend == "s3":
        if not bucket:
            raise ValueError("HISTORY_S3_BUCKET must be set for the s3 history backend")
        return S3HistoryStore(bucket, prefix)
    raise ValueError(f"Unknown history backend: {backend}")
