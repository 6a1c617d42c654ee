"""Normalization of raw message-store records.

This module contains the deterministic mapping from whatever the message store
exports (admin API JSON, mongoexport dumps) to `ContactMessage`:
- timestamp parsing (ISO strings, epoch s/ms, `{"$date": ...}` wrappers)
- id resolution (`_id`, `{"$oid": ...}`, or a stable hash)
- subject/body extraction for scoring
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .models import ContactMessage
from .utils import field_text, stable_id


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Normalize the store's created-at formats to an aware UTC datetime."""
    if value is None:
        return None

    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)

    if isinstance(value, dict):
        # mongoexport extended JSON: {"$date": "..."} or {"$date": {"$numberLong": "..."}}
        inner = value.get("$date")
        if isinstance(inner, dict):
            inner = inner.get("$numberLong")
            try:
                inner = int(inner)
            except (TypeError, ValueError):
                return None
        return parse_timestamp(inner)

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        ts = float(value)
        # JS clients send epoch in ms; convert if so.
        if ts > 1e12:
            ts /= 1000.0
        try:
            return datetime.fromtimestamp(ts, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    return None


def message_text(record: Any) -> str:
    """Subject and body joined by a space; missing fields count as ''."""
    return f"{field_text(record, 'subject')} {field_text(record, 'message', 'body')}"


def _resolve_id(payload: Dict[str, Any], created_at: Optional[datetime]) -> str:
    raw_id = payload.get("_id", payload.get("id"))
    if isinstance(raw_id, dict):
        raw_id = raw_id.get("$oid")
    if raw_id not in (None, ""):
        return str(raw_id)
    return stable_id(
        field_text(payload, "email"),
        field_text(payload, "subject"),
        created_at.isoformat() if created_at else "",
    )


def to_contact_message(payload: Dict[str, Any]) -> Optional[ContactMessage]:
    """Map a raw store record to `ContactMessage`; None if it has nothing to score."""
    subject = field_text(payload, "subject").strip()
    body = field_text(payload, "message", "body").strip()
    if not (subject or body):
        return None

    created_at = parse_timestamp(payload.get("createdAt", payload.get("created_at")))
    phone = field_text(payload, "phone").strip() or None

    return ContactMessage(
        id=_resolve_id(payload, created_at),
        name=field_text(payload, "name").strip(),
        email=field_text(payload, "email").strip(),
        phone=phone,
        subject=subject,
        message=body,
        status=field_text(payload, "status") or "unread",
        priority=field_text(payload, "priority") or "medium",
        created_at=created_at,
        raw=payload,
    )


def matches_query(msg: ContactMessage, query: Optional[str]) -> bool:
    """Case-insensitive substring match over name, email, subject and body."""
    q = (query or "").strip().lower()
    if not q:
        return True
    blob = f"{msg.name}\n{msg.email}\n{msg.subject}\n{msg.message}".lower()
    return q in blob
