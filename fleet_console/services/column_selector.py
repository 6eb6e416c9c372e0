from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from fleet_console.models.grid import FieldDescriptor


class ColumnSelector:
    """
    Ordered subset of a field registry that is currently visible/exported.

    Invariants:
      - every selected key exists in the registry
      - no duplicates
      - order always follows registry order (not toggle order)
      - empty selection is legal
    """

    def __init__(self, registry: Sequence[FieldDescriptor], selected: Optional[Iterable[str]] = None):
        self._registry: List[FieldDescriptor] = list(registry)
        self._known = {f.key for f in self._registry}
        self._selected: set = set()
        if selected is None:
            self._selected = set(self._known)
        else:
            for key in selected:
                self._require_known(key)
                self._selected.add(key)

    @classmethod
    def from_request_keys(cls, registry: Sequence[FieldDescriptor], keys: Iterable[str]) -> "ColumnSelector":
        """Like the constructor, but silently drops keys the registry does not know."""
        known = {f.key for f in registry}
        return cls(registry, [k for k in keys if k in known])

    def _require_known(self, key: str) -> None:
        if key not in self._known:
            raise ValueError(f"Unknown field key: {key!r}")

    def toggle(self, key: str) -> bool:
        """Flip one column. Returns True if the key is selected afterwards."""
        self._require_known(key)
        if key in self._selected:
            self._selected.discard(key)
            return False
        self._selected.add(key)
        return True

    def select_all(self) -> None:
        self._selected = set(self._known)

    def deselect_all(self) -> None:
        self._selected = set()

    def is_selected(self, key: str) -> bool:
        return key in self._selected

    @property
    def registry(self) -> List[FieldDescriptor]:
        return list(self._registry)

    @property
    def selected_fields(self) -> List[FieldDescriptor]:
        return [f for f in self._registry if f.key in self._selected]

    @property
    def selected_keys(self) -> List[str]:
        return [f.key for f in self.selected_fields]

    def summary(self) -> str:
        return f"{len(self._selected)} of {len(self._registry)} columns selected"
