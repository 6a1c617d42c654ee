"""JSON export source.

Reads a dump of the message store: either a bare list of message objects (as
written by `mongoexport --jsonArray`) or the admin listing payload
`{"messages": [...], "totalPages": ..., ...}` saved to disk.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional, Union

from ..logging import get_logger
from ..models import ContactMessage
from ..normalize import matches_query, to_contact_message
from .base import MessageSource


class JsonFileSource(MessageSource):
    """Load contact messages from a JSON file."""

    name = "json_file"

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path).expanduser()
        self._log = get_logger("sources.json_file", path=str(self.path))

    def _records(self) -> List[Any]:
        payload = json.loads(self.path.read_text(encoding="utf-8"))
        if isinstance(payload, dict):
            payload = payload.get("messages")
        if not isinstance(payload, list):
            raise ValueError(f"{self.path}: expected a list of messages or an object with a 'messages' list")
        return payload

    def fetch(self, query: Optional[str] = None, limit: int = 500) -> List[ContactMessage]:
        out: List[ContactMessage] = []
        for idx, rec in enumerate(self._records()):
            if len(out) >= max(limit, 0):
                break
            if not isinstance(rec, dict):
                self._log.warning("record_skipped", index=idx, reason="not an object")
                continue
            msg = to_contact_message(rec)
            if msg is None:
                self._log.warning("record_skipped", index=idx, reason="no subject or message")
                continue
            if not matches_query(msg, query):
                continue
            out.append(msg)

        self._log.info("messages_loaded", count=len(out))
        return out
