"""Session aggregation: one averaged record per calendar date."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from analysis.utils import compute_mean
from contracts import FieldValue, Record, SessionRecord, ValueKind

# Carried from the first swing of a session instead of averaged
IDENTITY_FIELDS = frozenset({
    "Date",
    "Equipment",
    "Handedness",
    "Swing Details",
    "Time",
    "Tag",
})


def session_key(date_str: Optional[str]) -> Optional[str]:
    """Date-only part of a date string (text before the first space)."""
    if not date_str:
        return None
    return date_str.split(" ")[0] or date_str


def _field_names(records: Sequence[Record]) -> List[str]:
    names: Dict[str, None] = {}
    for record in records:
        for name in record:
            names.setdefault(name, None)
    return list(names)


def _collapse(key: str, group: Sequence[Record]) -> SessionRecord:
    first = group[0]
    fields: Dict[str, FieldValue] = {}

    for name in _field_names(group):
        if name in IDENTITY_FIELDS or first.kind(name) is ValueKind.TEXT:
            if name in first:
                fields[name] = first[name]
            continue

        mean = compute_mean([n for n in (r.number(name) for r in group) if n is not None])
        if mean is not None:
            fields[name] = mean

    return SessionRecord(fields, timestamp=first.timestamp, date_str=key, swing_count=len(group))


def aggregate_by_session(records: Iterable[Record]) -> List[SessionRecord]:
    """Collapse records into one SessionRecord per date.

    Numeric fields become the mean of their non-null values (omitted when
    all are null); identity and text fields come from the first record of
    the session. Records without a date string are skipped. Sessions are
    ordered by the timestamp of their first record.
    """
    groups: Dict[str, List[Record]] = {}
    for record in records:
        key = session_key(record.date_str)
        if key is None:
            continue
        groups.setdefault(key, []).append(record)

    sessions = [_collapse(key, group) for key, group in groups.items()]
    sessions.sort(key=lambda s: s.timestamp)
    return sessions


__all__ = ["IDENTITY_FIELDS", "aggregate_by_session", "session_key"]
