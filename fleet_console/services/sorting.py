"""Single-column stable sorting for grid records.

Missing values (None / unresolvable paths) always sort after every defined
value, in both directions. Records with equal values keep their input order,
in both directions.
"""
from __future__ import annotations

from functools import cmp_to_key
from numbers import Number
from typing import Any, Iterable, List, Mapping

from fleet_console.models.grid import SortState
from fleet_console.services.record_access import resolve


def _is_number(v: Any) -> bool:
    return isinstance(v, Number) and not isinstance(v, bool)


def compare_values(a: Any, b: Any) -> int:
    """Generic three-way compare: numeric for two numbers, lexical otherwise."""
    if _is_number(a) and _is_number(b):
        left, right = a, b
    else:
        left, right = str(a), str(b)
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def sort_records(records: Iterable[Mapping[str, Any]], sort_state: SortState) -> List[Mapping[str, Any]]:
    records = list(records)
    if not sort_state.key:
        return records

    keyed = [(resolve(r, sort_state.key), r) for r in records]
    present = [pair for pair in keyed if pair[0] is not None]
    missing = [r for value, r in keyed if value is None]

    # sorted(reverse=True) keeps equal elements in input order, so stability holds both ways
    present.sort(
        key=cmp_to_key(lambda x, y: compare_values(x[0], y[0])),
        reverse=sort_state.descending,
    )
    return [r for _, r in present] + missing
