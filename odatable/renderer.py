"""Table rendering independent of any controller.

``render_table`` turns columns and rows into a ``TableView``: which of the
loading / error / empty / rows states to show, the header cells and the
rendered cell values. It keeps no state and calls each column's ``render``
exactly once per row.
"""

from __future__ import annotations

import enum
from typing import Any, Callable, Optional, Sequence

from pydantic import BaseModel, Field

from .state import PageState, SortState

DEFAULT_EMPTY_MESSAGE = "No data available"
DEFAULT_LOADING_MESSAGE = "Loading..."
DEFAULT_ERROR_MESSAGE = "Error loading data"

SORT_INDICATORS = {"asc": " ▲", "desc": " ▼"}


class Column(BaseModel):
    """One table column.

    ``render`` receives a row item and returns what to display. ``sort_field``
    is the server-side field used when sorting on this column; it defaults to ``key``.
    """

    model_config = {"arbitrary_types_allowed": True}

    key: str
    header: str
    render: Callable[[Any], Any]
    sortable: bool = False
    sort_field: Optional[str] = None
    class_name: Optional[str] = None

    @property
    def effective_sort_field(self) -> str:
        return self.sort_field or self.key


class ViewKind(str, enum.Enum):
    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    ROWS = "rows"


class HeaderCell(BaseModel):
    key: str
    label: str
    sortable: bool = False
    sort_field: Optional[str] = None
    sort_direction: Optional[str] = None
    """Direction when the table is currently sorted on this column."""
    class_name: Optional[str] = None


class Row(BaseModel):
    key: Optional[str] = None
    cells: list[Any] = Field(default_factory=list)


class TableView(BaseModel):
    kind: ViewKind
    message: Optional[str] = None
    headers: list[HeaderCell] = Field(default_factory=list)
    rows: list[Row] = Field(default_factory=list)


def render_headers(columns: Sequence[Column], sort_state: Optional[SortState] = None) -> list[HeaderCell]:
    """Header cells; the column currently sorted on gets ``▲``/``▼`` appended to its label."""
    headers = []
    for column in columns:
        direction = None
        label = column.header
        if column.sortable and sort_state is not None and sort_state.field == column.effective_sort_field:
            direction = sort_state.direction
            label += SORT_INDICATORS[direction]
        headers.append(
            HeaderCell(
                key=column.key,
                label=label,
                sortable=column.sortable,
                sort_field=column.effective_sort_field if column.sortable else None,
                sort_direction=direction,
                class_name=column.class_name,
            )
        )
    return headers


def render_table(
    columns: Sequence[Column],
    rows: Optional[Sequence[Any]],
    *,
    loading: bool = False,
    error: Optional[str] = None,
    empty_message: str = DEFAULT_EMPTY_MESSAGE,
    loading_message: str = DEFAULT_LOADING_MESSAGE,
    error_message: Optional[str] = DEFAULT_ERROR_MESSAGE,
    key: Optional[Callable[[Any], str]] = None,
    sort_state: Optional[SortState] = None,
) -> TableView:
    """Render rows, or the loading / error / empty message, in that order of priority.

    Args:
        columns: Column definitions.
        rows: Items to render; ``None`` is treated as no rows.
        loading: Show ``loading_message`` instead of anything else.
        error: When set (and not loading), show an error instead of rows.
        empty_message: Shown when there are no rows.
        loading_message: Shown while loading.
        error_message: Shown for errors; ``None`` shows ``error`` itself.
        key: Extracts a unique key from each item.
        sort_state: Current sort, used for header indicators.
    """
    if loading:
        return TableView(kind=ViewKind.LOADING, message=loading_message)
    if error:
        return TableView(kind=ViewKind.ERROR, message=error_message if error_message is not None else error)
    headers = render_headers(columns, sort_state)
    items = list(rows or [])
    if not items:
        return TableView(kind=ViewKind.EMPTY, message=empty_message, headers=headers)
    return TableView(
        kind=ViewKind.ROWS,
        headers=headers,
        rows=[
            Row(key=key(item) if key else None, cells=[column.render(item) for column in columns])
            for item in items
        ],
    )


def pagination_summary(page: PageState) -> Optional[dict[str, str]]:
    """``{"showing": "Showing 11 - 20 of 42", "page": "Page 2 of 5"}``, or None when there is nothing to page."""
    if page.total_count <= 0:
        return None
    first = page.current_page * page.page_size + 1
    last = min((page.current_page + 1) * page.page_size, page.total_count)
    return {
        "showing": f"Showing {first} - {last} of {page.total_count}",
        "page": f"Page {page.current_page + 1} of {page.total_pages}",
    }
