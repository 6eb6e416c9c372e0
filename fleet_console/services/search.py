from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence

from fleet_console.services.record_access import resolve


def _searchable_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (Mapping, list, tuple, set)):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def record_matches(
    record: Mapping[str, Any],
    needle: str,
    fields: Optional[Sequence[str]] = None,
) -> bool:
    """
    Case-insensitive substring test for one record.

    - fields given  => only those (dotted) paths are searched
    - fields=None   => every own scalar value of the record is searched
    """
    if fields is not None:
        values = (resolve(record, path) for path in fields)
    else:
        values = record.values()

    for value in values:
        text = _searchable_text(value)
        if text is not None and needle in text.lower():
            return True
    return False


def filter_records(
    records: Iterable[Mapping[str, Any]],
    query: Optional[str],
    fields: Optional[Sequence[str]] = None,
) -> List[Mapping[str, Any]]:
    """Return the records matching ``query``, preserving input order."""
    records = list(records)
    needle = (query or "").strip().lower()
    if not needle:
        return records
    return [r for r in records if record_matches(r, needle, fields)]
