"""Tests for page window arithmetic and PagedFindResult."""

from __future__ import annotations

import pytest

from sqla_basemodel import DEFAULT_PAGE_ROWS, PagedFindResult, compute_page_window


def test_last_page_rounds_up() -> None:
    assert compute_page_window(23, 1, 10).last_page == 3


def test_last_page_exact_multiple() -> None:
    assert compute_page_window(20, 1, 10).last_page == 2


def test_last_page_zero_when_empty() -> None:
    assert compute_page_window(0, 1, 10).last_page == 0


def test_third_page_window_is_unclamped() -> None:
    window = compute_page_window(23, 3, 10)
    assert window.offset == 20
    assert window.from_ == 21
    # Only 3 records exist past offset 20; ``to`` still reports a full page.
    assert window.to == 30


@pytest.mark.parametrize("page", [0, -4])
def test_non_positive_page_becomes_first(page: int) -> None:
    window = compute_page_window(100, page, 10)
    assert window.page == 1
    assert window.offset == 0
    assert window.from_ == 1


@pytest.mark.parametrize("rows", [0, -1])
def test_non_positive_rows_default(rows: int) -> None:
    window = compute_page_window(100, 2, rows)
    assert window.rows == DEFAULT_PAGE_ROWS == 25
    assert window.offset == 25
    assert window.last_page == 4


def test_result_to_dict_uses_wire_keys() -> None:
    window = compute_page_window(3, 1, 2)
    result = PagedFindResult.from_window(window, 3, ["a", "b"])
    assert result.to_dict() == {
        "total_data": 3,
        "rows": 2,
        "current_page": 1,
        "last_page": 2,
        "from": 1,
        "to": 2,
        "data": ["a", "b"],
    }


def test_result_is_frozen() -> None:
    result = PagedFindResult.from_window(compute_page_window(0, 1, 1), 0, [])
    with pytest.raises(AttributeError):
        result.total_data = 5  # type: ignore[misc]
