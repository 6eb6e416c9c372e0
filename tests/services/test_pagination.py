# tests/services/test_pagination.py
import pytest

from fleet_console.models.grid import DEFAULT_PAGE_SIZE, PageState
from fleet_console.services.pagination import page_state_from_args, paginate


def test_stale_index_is_clamped_to_last_page():
    records = list(range(23))

    page = paginate(records, PageState(page_size=10, current_index=5))

    assert page.total_pages == 3
    assert page.current_index == 3
    assert page.items == [20, 21, 22]
    assert page.start_index == 20
    assert page.total_count == 23


def test_first_page():
    page = paginate(list(range(23)), PageState(page_size=10, current_index=1))

    assert page.items == list(range(10))


def test_empty_collection_has_one_empty_page():
    page = paginate([], PageState(page_size=25, current_index=4))

    assert page.total_pages == 1
    assert page.current_index == 1
    assert page.items == []


def test_exact_multiple_of_page_size():
    page = paginate(list(range(20)), PageState(page_size=10, current_index=2))

    assert page.total_pages == 2
    assert page.items == list(range(10, 20))


def test_page_size_change_resets_index():
    state = PageState(page_size=10, current_index=3)

    assert state.with_page_size(50) == PageState(page_size=50, current_index=1)


def test_invalid_page_size_is_rejected():
    with pytest.raises(ValueError):
        PageState(page_size=7)


def test_page_state_from_args_falls_back_to_defaults():
    assert page_state_from_args(None, None) == PageState(DEFAULT_PAGE_SIZE, 1)
    assert page_state_from_args("abc", "xyz") == PageState(DEFAULT_PAGE_SIZE, 1)
    assert page_state_from_args("7", "-3") == PageState(DEFAULT_PAGE_SIZE, 1)
    assert page_state_from_args("25", "4") == PageState(25, 4)
