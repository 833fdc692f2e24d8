"""Tests for fixed-size pagination."""
import pytest

from pagination import PAGE_SIZE, paginate


def test_empty_sequence_has_one_page():
    page = paginate([], PAGE_SIZE, 1)
    assert page.count == 0
    assert page.total == 0
    assert page.last_page == 1
    assert not page.has_more_pages
    assert page.get(0) is None


@pytest.mark.parametrize("total,expected_last", [(1, 1), (6, 1), (7, 2), (12, 2), (13, 3)])
def test_last_page_is_ceiling(total, expected_last):
    page = paginate(list(range(total)), 6, 1)
    assert page.last_page == expected_last
    assert page.has_more_pages == (1 < expected_last)


def test_thirteen_items_third_page_has_one():
    items = list(range(13))
    page = paginate(items, 6, 3)
    assert page.items == [12]
    assert page.last_page == 3
    assert not page.has_more_pages


def test_middle_page_slice():
    page = paginate(list(range(13)), 6, 2)
    assert page.items == [6, 7, 8, 9, 10, 11]
    assert page.has_more_pages
    assert page[0] == 6
    assert page.get(6) is None


def test_page_past_end_is_empty_not_error():
    page = paginate(list(range(4)), 6, 5)
    assert page.count == 0
    assert page.total == 4
    assert page.current_page == 5
    assert page.last_page == 1


def test_same_input_gives_equal_pages():
    items = list(range(9))
    assert paginate(items, 6, 2) == paginate(items, 6, 2)
