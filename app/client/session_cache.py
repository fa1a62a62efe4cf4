"""
Local cache for the admin session held by a client
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def parse_timestamp(value: Any) -> datetime:
    """ISO-8601 string -> naive UTC datetime"""
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


@dataclass(frozen=True)
class SessionRecord:
    session_id: str
    created_at: datetime
    last_used_at: datetime
    expires_at: datetime

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionRecord":
        """Build from an API payload or cache file; raises ValueError if incomplete"""
        if not isinstance(data, dict) or not data.get("session_id") or not data.get("expires_at"):
            raise ValueError("Session record needs session_id and expires_at")
        expires_at = parse_timestamp(data["expires_at"])
        return cls(
            session_id=str(data["session_id"]),
            created_at=parse_timestamp(data.get("created_at") or expires_at),
            last_used_at=parse_timestamp(data.get("last_used_at") or expires_at),
            expires_at=expires_at
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "session_id": self.session_id,
            "created_at": self.created_at.isoformat(),
            "last_used_at": self.last_used_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
        }

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now


class SessionCache:
    """JSON file holding at most one session record"""

    def __init__(self, path: str):
        self.path = os.path.expanduser(path)

    def load(self) -> Optional[SessionRecord]:
        """Cached record, or ``None``. Unreadable files are removed."""
        if not os.path.exists(self.path):
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return SessionRecord.from_dict(json.load(f))
        except (OSError, ValueError, TypeError) as e:
            logger.warning(f"Discarding unreadable admin session cache {self.path}: {e}")
            self.clear()
            return None

    def save(self, record: SessionRecord) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(record.to_dict(), f)
        os.replace(tmp_path, self.path)

    def clear(self) -> None:
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass
