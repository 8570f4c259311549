"""Tests for odatable.renderer: Column, render_table priorities, headers, pagination summary."""

from odatable import renderer
from odatable.renderer import (
    Column,
    ViewKind,
    pagination_summary,
    render_headers,
    render_table,
)
from odatable.state import PageState, SortState


def make_columns(calls=None):
    def render_name(item):
        if calls is not None:
            calls.append(("name", item["id"]))
        return item["name"].upper()

    def render_role(item):
        if calls is not None:
            calls.append(("role", item["id"]))
        return item.get("role", "-")

    return [
        Column(key="name", header="Name", render=render_name, sortable=True, sort_field="Name"),
        Column(key="role", header="Role", render=render_role),
    ]


ROWS = [{"id": "1", "name": "ann", "role": "admin"}, {"id": "2", "name": "bob"}]


def test_render_rows():
    view = render_table(make_columns(), ROWS, key=lambda item: item["id"])
    assert view.kind is ViewKind.ROWS
    assert view.message is None
    assert [h.label for h in view.headers] == ["Name", "Role"]
    assert [(r.key, r.cells) for r in view.rows] == [("1", ["ANN", "admin"]), ("2", ["BOB", "-"])]


def test_render_calls_each_column_once_per_row():
    calls = []
    render_table(make_columns(calls), ROWS)
    assert sorted(calls) == [("name", "1"), ("name", "2"), ("role", "1"), ("role", "2")]


def test_loading_has_priority():
    calls = []
    view = render_table(make_columns(calls), ROWS, loading=True, error="boom")
    assert view.kind is ViewKind.LOADING
    assert view.message == "Loading..."
    assert view.rows == []
    assert calls == []


def test_error_before_empty_and_rows():
    view = render_table(make_columns(), ROWS, error="boom")
    assert view.kind is ViewKind.ERROR
    assert view.message == "Error loading data"
    assert view.rows == []
    view = render_table(make_columns(), [], error="boom", error_message=None)
    assert view.kind is ViewKind.ERROR
    assert view.message == "boom"


def test_empty():
    view = render_table(make_columns(), [], empty_message="No members yet")
    assert view.kind is ViewKind.EMPTY
    assert view.message == "No members yet"
    assert len(view.headers) == 2
    assert render_table(make_columns(), None).kind is ViewKind.EMPTY


def test_custom_loading_message():
    assert render_table([], [], loading=True, loading_message="Please wait").message == "Please wait"


def test_column_sort_field_defaults_to_key():
    column = Column(key="title", header="Title", render=str, sortable=True)
    assert column.effective_sort_field == "title"


def test_render_headers_sort_indicator():
    columns = make_columns()
    headers = render_headers(columns, SortState(field="Name", direction="desc"))
    assert headers[0].label == "Name ▼"
    assert headers[0].sort_direction == "desc"
    assert headers[0].sort_field == "Name"
    assert headers[1].label == "Role"
    assert headers[1].sortable is False
    assert headers[1].sort_field is None
    headers = render_headers(columns, SortState(field="Name", direction="asc"))
    assert headers[0].label == "Name ▲"


def test_render_headers_without_sort():
    headers = render_headers(make_columns(), SortState())
    assert [h.label for h in headers] == ["Name", "Role"]
    assert render_headers(make_columns())[0].sort_direction is None


def test_render_table_with_sort_state():
    view = render_table(make_columns(), ROWS, sort_state=SortState(field="Name", direction="asc"))
    assert view.headers[0].label == "Name ▲"


def test_pagination_summary():
    assert pagination_summary(PageState(current_page=1, page_size=10, total_count=42)) == {
        "showing": "Showing 11 - 20 of 42",
        "page": "Page 2 of 5",
    }
    assert pagination_summary(PageState(current_page=4, page_size=10, total_count=42))["showing"] == (
        "Showing 41 - 42 of 42"
    )
    assert pagination_summary(PageState()) is None


def test_renderer_only_depends_on_shared_state():
    modules = {getattr(value, "__module__", None) for value in vars(renderer).values()}
    assert "odatable.controller" not in modules
    assert "odatable.transport" not in modules
    assert renderer.PageState.__module__ == "odatable.state"
