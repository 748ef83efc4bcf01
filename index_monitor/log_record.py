"""Normalized build-log entry fetched from the index service."""
import json
from dataclasses import dataclass
from typing import Any, Optional

from .errors import MalformedLogEntry

READ_METHOD = "GET"
DELETE_MARKER = "delete"


@dataclass(frozen=True)
class LogRecord:
    timestamp: str
    raw_payload: str
    method: Optional[str] = None

    @classmethod
    def from_entry(cls, entry: Any) -> "LogRecord":
        """Build a record from one decoded log entry. Raises MalformedLogEntry if timestamp is missing."""
        if not isinstance(entry, dict):
            raise MalformedLogEntry(f"log entry is not an object: {entry!r}")
        ts = entry.get("timestamp")
        if not isinstance(ts, str) or not ts:
            raise MalformedLogEntry(f"log entry has no timestamp: {entry!r}")
        method = entry.get("method")
        return cls(
            timestamp=ts,
            raw_payload=json.dumps(entry, separators=(",", ":"), ensure_ascii=False),
            method=method if isinstance(method, str) else None,
        )

    def is_read(self) -> bool:
        return (self.method or "").upper() == READ_METHOD

    def is_delete(self) -> bool:
        """Substring match on the whole payload; may also hit unrelated text containing 'delete'."""
        return DELETE_MARKER in self.raw_payload.lower()
