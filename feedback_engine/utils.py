"""Utility helpers shared across the engine."""

from __future__ import annotations

import hashlib
from typing import Any, Iterable, List, Mapping


def stable_id(*parts: str) -> str:
    """Create a deterministic identifier from a set of string parts."""
    joined = "|".join(p.strip() for p in parts if p is not None)
    return hashlib.sha256(joined.encode("utf-8")).hexdigest()


def uniq_preserve_order(items: Iterable[str]) -> List[str]:
    """Deduplicate while preserving first-seen order."""
    seen = set()
    out: List[str] = []
    for it in items:
        if not it:
            continue
        key = it.strip().lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(it)
    return out


def field_text(record: Any, *names: str) -> str:
    """Return the first present field of a mapping or object as text ('' if none)."""
    for name in names:
        if isinstance(record, Mapping):
            val = record.get(name)
        else:
            val = getattr(record, name, None)
        if val is None or val == "":
            continue
        return val if isinstance(val, str) else str(val)
    return ""
