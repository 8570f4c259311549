"""Sort and page state shared by the controller and the renderer."""

from __future__ import annotations

import math
from typing import Literal, Optional

from pydantic import BaseModel, Field

SortDirection = Literal["asc", "desc"]


class SortState(BaseModel):
    """Current $orderby field and direction; ``field=None`` means server order."""

    field: Optional[str] = None
    direction: SortDirection = "asc"

    def toggled(self, field: str) -> SortState:
        """Same field flips the direction; a new field starts ascending."""
        if field == self.field:
            return SortState(field=field, direction="desc" if self.direction == "asc" else "asc")
        return SortState(field=field, direction="asc")

    @property
    def orderby(self) -> Optional[str]:
        if not self.field:
            return None
        return f"{self.field} {self.direction}"


class PageState(BaseModel):
    """Zero-based page position and the total reported by the server."""

    current_page: int = Field(default=0, ge=0)
    page_size: int = Field(default=10, gt=0)
    total_count: int = Field(default=0, ge=0)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages - 1

    @property
    def has_previous(self) -> bool:
        return self.current_page > 0

    @property
    def skip(self) -> int:
        return self.current_page * self.page_size

    def clamp(self, page: int) -> int:
        """``page`` limited to ``[0, total_pages - 1]`` (0 when there are no pages)."""
        return max(0, min(page, self.total_pages - 1))
