# tests/services/test_column_selector.py
import pytest

from fleet_console.models.grid import FieldDescriptor
from fleet_console.services.column_selector import ColumnSelector

REGISTRY = [
    FieldDescriptor("a", "A"),
    FieldDescriptor("b", "B"),
    FieldDescriptor("c", "C"),
    FieldDescriptor("d", "D"),
]


def test_default_is_everything():
    assert ColumnSelector(REGISTRY).selected_keys == ["a", "b", "c", "d"]


def test_toggle_preserves_registry_order():
    selector = ColumnSelector(REGISTRY, ["c"])

    assert selector.toggle("a") is True
    assert selector.toggle("d") is True
    assert selector.selected_keys == ["a", "c", "d"]

    assert selector.toggle("c") is False
    assert selector.selected_keys == ["a", "d"]


def test_initial_order_and_duplicates_collapse():
    selector = ColumnSelector(REGISTRY, ["d", "a", "d"])

    assert selector.selected_keys == ["a", "d"]


def test_unknown_keys_are_rejected():
    with pytest.raises(ValueError):
        ColumnSelector(REGISTRY, ["zzz"])
    with pytest.raises(ValueError):
        ColumnSelector(REGISTRY).toggle("zzz")


def test_from_request_keys_drops_unknown():
    selector = ColumnSelector.from_request_keys(REGISTRY, ["b", "zzz", "a"])

    assert selector.selected_keys == ["a", "b"]


def test_select_and_deselect_all_are_symmetric():
    selector = ColumnSelector(REGISTRY, ["b"])

    selector.select_all()
    assert selector.selected_keys == ["a", "b", "c", "d"]

    selector.deselect_all()
    assert selector.selected_keys == []
    assert selector.selected_fields == []


def test_summary():
    selector = ColumnSelector(REGISTRY, ["a", "b"])

    assert selector.summary() == "2 of 4 columns selected"
    selector.deselect_all()
    assert selector.summary() == "0 of 4 columns selected"
