"""Tests for odatable.state.PageState arithmetic."""

import pydantic
import pytest

from odatable.state import PageState


@pytest.mark.parametrize(
    "total_count, page_size, total_pages",
    [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (20, 7, 3), (21, 7, 3), (22, 7, 4)],
)
def test_total_pages(total_count, page_size, total_pages):
    assert PageState(total_count=total_count, page_size=page_size).total_pages == total_pages


def test_has_next_and_previous():
    pages = [PageState(current_page=n, page_size=7, total_count=20) for n in range(3)]
    assert [p.has_next for p in pages] == [True, True, False]
    assert [p.has_previous for p in pages] == [False, True, True]


def test_skip():
    assert PageState(current_page=3, page_size=25).skip == 75


def test_clamp():
    page = PageState(page_size=10, total_count=25)
    assert page.clamp(-1) == 0
    assert page.clamp(1) == 1
    assert page.clamp(7) == 2
    assert PageState().clamp(4) == 0


def test_validation():
    with pytest.raises(pydantic.ValidationError):
        PageState(page_size=0)
    with pytest.raises(pydantic.ValidationError):
        PageState(current_page=-1)
    with pytest.raises(pydantic.ValidationError):
        PageState(total_count=-5)
