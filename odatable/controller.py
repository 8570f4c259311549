"""Paginated, sortable remote collection.

``PagedSortedController`` keeps the page / sort state of one list view and
fetches the matching slice through an injected transport::

    controller = PagedSortedController(fetch_page, "News", filter=eq("ClubID", club_id))
    await controller.fetch()
    await controller.set_sort("Title")
    await controller.next_page()

Transport failures never propagate: they end up in ``controller.error``. When
fetches overlap, only the most recently issued one is allowed to update the
state; older responses are dropped when they arrive.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Optional, Union

from .envelope import parse_envelope
from .expressions import Expression
from .query import ExpandOption, QueryOptions, compile_query, to_query_options
from .state import PageState, SortDirection, SortState
from .transport import FetchPage

logger = logging.getLogger("odatable")

DEFAULT_ERROR_MESSAGE = "Failed to fetch data"


class ControllerState(str, enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERRORED = "errored"


class PagedSortedController:
    """Page / sort / fetch lifecycle for one remote collection.

    Args:
        fetch_page: Async callable receiving the resource path (entity set and
            query string) and returning the response envelope.
        entity_set: Collection path, e.g. ``"News"`` or ``"Clubs('c1')/Members"``.
        filter: Static $filter (expression or precompiled string) applied to every fetch.
        expand: Static $expand.
        select: Static $select.
        page_size: Items per page; must be positive.
        initial_sort_field: Field sorted on before the user picks one.
        initial_sort_direction: Direction for ``initial_sort_field``.

    Raises:
        QueryOptionsError: if ``filter``, ``expand`` or ``select`` is invalid.
    """

    def __init__(
        self,
        fetch_page: FetchPage,
        entity_set: str,
        *,
        filter: Optional[Union[Expression, str]] = None,
        expand: Optional[Union[str, ExpandOption, list[Union[str, ExpandOption]]]] = None,
        select: Optional[list[str]] = None,
        page_size: int = 10,
        initial_sort_field: Optional[str] = None,
        initial_sort_direction: SortDirection = "desc",
    ):
        if page_size <= 0:
            raise ValueError(f"page_size must be positive; got {page_size}")
        self._fetch_page = fetch_page
        self.entity_set = entity_set
        self.static_options = to_query_options({"filter": filter, "expand": expand, "select": select})
        self._initial_sort = SortState(field=initial_sort_field, direction=initial_sort_direction)
        self._sequence = 0
        self.sort = self._initial_sort
        self.page = PageState(page_size=page_size)
        self.data: list[Any] = []
        self.error: Optional[str] = None
        self.state = ControllerState.IDLE

    # --- derived state ---

    @property
    def loading(self) -> bool:
        return self.state is ControllerState.LOADING

    @property
    def current_page(self) -> int:
        return self.page.current_page

    @property
    def page_size(self) -> int:
        return self.page.page_size

    @property
    def total_count(self) -> int:
        return self.page.total_count

    @property
    def total_pages(self) -> int:
        return self.page.total_pages

    @property
    def has_next(self) -> bool:
        return self.page.has_next

    @property
    def has_previous(self) -> bool:
        return self.page.has_previous

    # --- query construction ---

    def query_options(self) -> QueryOptions:
        """Options for the current page and sort, plus the static filter/expand/select."""
        return self.static_options.model_copy(
            update={
                "orderby": self.sort.orderby,
                "skip": self.page.skip,
                "top": self.page.page_size,
                "count": True,
            }
        )

    def resource_path(self) -> str:
        return self.entity_set + compile_query(self.query_options())

    # --- transitions ---

    async def set_sort(self, field: str) -> None:
        """Sort on ``field`` (flipping direction if already sorted on it), go back to page 0 and fetch."""
        if not field:
            raise ValueError("Sort field must not be empty")
        self.sort = self.sort.toggled(field)
        self.page = self.page.model_copy(update={"current_page": 0})
        await self.fetch()

    async def set_page(self, page: int) -> None:
        """Go to ``page`` (clamped to the known pages) and fetch."""
        self.page = self.page.model_copy(update={"current_page": self.page.clamp(page)})
        await self.fetch()

    async def next_page(self) -> None:
        if self.has_next:
            await self.set_page(self.current_page + 1)

    async def previous_page(self) -> None:
        if self.has_previous:
            await self.set_page(self.current_page - 1)

    async def first_page(self) -> None:
        if self.has_previous:
            await self.set_page(0)

    async def last_page(self) -> None:
        if self.has_next:
            await self.set_page(self.total_pages - 1)

    async def refetch(self) -> None:
        """Fetch the current page again (e.g. to retry after an error)."""
        await self.fetch()

    async def fetch(self) -> None:
        """Fetch the current page; the outcome lands in ``data``/``total_count`` or ``error``.

        Never raises for transport failures.
        """
        path = self.resource_path()
        self._sequence += 1
        sequence = self._sequence
        self.state = ControllerState.LOADING
        self.error = None
        logger.debug("Fetching %s (request %d)", path, sequence)
        try:
            payload = await self._fetch_page(path)
        except Exception as error:  # pylint: disable=broad-exception-caught
            self._settle_error(sequence, path, error)
        else:
            self._settle_success(sequence, payload)
        finally:
            # cancelled while current: leave the loading state
            if sequence == self._sequence and self.state is ControllerState.LOADING:
                self.state = ControllerState.IDLE

    def _is_stale(self, sequence: int) -> bool:
        if sequence != self._sequence:
            logger.debug("Discarding response to request %d; request %d is newer", sequence, self._sequence)
            return True
        return False

    def _settle_success(self, sequence: int, payload: Any) -> None:
        if self._is_stale(sequence):
            return
        envelope = parse_envelope(payload)
        self.data = envelope.value
        self.page = self.page.model_copy(update={"total_count": envelope.total_count or 0})
        self.error = None
        self.state = ControllerState.LOADED

    def _settle_error(self, sequence: int, path: str, error: Exception) -> None:
        if self._is_stale(sequence):
            return
        logger.warning("Fetching %s failed: %s", path, error)
        self.error = str(error) or DEFAULT_ERROR_MESSAGE
        self.data = []
        self.page = self.page.model_copy(update={"total_count": 0})
        self.state = ControllerState.ERRORED

    def reset(self) -> None:
        """Back to the initial sort, page 0 and no data; in-flight fetches are ignored when they return."""
        self._sequence += 1
        self.sort = self._initial_sort
        self.page = PageState(page_size=self.page.page_size)
        self.data = []
        self.error = None
        self.state = ControllerState.IDLE
