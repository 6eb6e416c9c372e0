# tests/services/test_sorting.py
from fleet_console.models.grid import SortDirection, SortState
from fleet_console.services.sorting import compare_values, sort_records


def ids(rows):
    return [r["id"] for r in rows]


def test_no_key_is_identity():
    rows = [{"id": "b", "k": 2}, {"id": "a", "k": 1}]

    assert ids(sort_records(rows, SortState())) == ["b", "a"]


def test_equal_keys_keep_input_order_ascending():
    rows = [{"k": 1, "id": "a"}, {"k": 1, "id": "b"}]

    assert ids(sort_records(rows, SortState("k", SortDirection.ASC))) == ["a", "b"]


def test_equal_keys_keep_input_order_descending():
    rows = [{"k": 1, "id": "a"}, {"k": 1, "id": "b"}]

    assert ids(sort_records(rows, SortState("k", SortDirection.DESC))) == ["a", "b"]


def test_stability_among_mixed_values():
    rows = [
        {"k": 2, "id": "a"},
        {"k": 1, "id": "b"},
        {"k": 2, "id": "c"},
        {"k": 1, "id": "d"},
    ]

    assert ids(sort_records(rows, SortState("k", SortDirection.ASC))) == ["b", "d", "a", "c"]
    assert ids(sort_records(rows, SortState("k", SortDirection.DESC))) == ["a", "c", "b", "d"]


def test_numbers_compare_numerically_strings_lexically():
    numbers = [{"id": "ten", "k": 10}, {"id": "nine", "k": 9}]
    strings = [{"id": "ten", "k": "10"}, {"id": "nine", "k": "9"}]

    assert ids(sort_records(numbers, SortState("k"))) == ["nine", "ten"]
    assert ids(sort_records(strings, SortState("k"))) == ["ten", "nine"]


def test_missing_values_sort_last_in_both_directions():
    rows = [
        {"id": "none", "k": None},
        {"id": "b", "k": "b"},
        {"id": "absent"},
        {"id": "a", "k": "a"},
    ]

    assert ids(sort_records(rows, SortState("k", SortDirection.ASC))) == ["a", "b", "none", "absent"]
    assert ids(sort_records(rows, SortState("k", SortDirection.DESC))) == ["b", "a", "none", "absent"]


def test_nested_path_sort():
    rows = [
        {"id": 1, "vehicles": {"reg_number": "GT-2"}},
        {"id": 2, "vehicles": {"reg_number": "AS-1"}},
        {"id": 3, "vehicles": None},
    ]

    assert ids(sort_records(rows, SortState("vehicles.reg_number"))) == [2, 1, 3]


def test_input_is_not_mutated():
    rows = [{"id": 2, "k": 2}, {"id": 1, "k": 1}]
    before = list(rows)

    sort_records(rows, SortState("k"))

    assert rows == before


def test_compare_values():
    assert compare_values(1, 2) == -1
    assert compare_values(2.5, 2) == 1
    assert compare_values("a", "a") == 0
    assert compare_values(10, "9") == -1  # mixed => lexical "10" < "9"
