"""Skip/limit pagination helpers."""

import math
from dataclasses import dataclass
from typing import Generic, TypeVar

from recipe_share.domain.errors import ValidationFailedError

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """A validated page number and page size."""

    page: int
    page_size: int

    @property
    def offset(self) -> int:
        """Number of items to skip before this page."""
        return (self.page - 1) * self.page_size


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the size of the full result set."""

    items: list[T]
    total: int
    page: int
    page_size: int

    @property
    def pages(self) -> int:
        """Total page count, ceil(total / page_size)."""
        return math.ceil(self.total / self.page_size)


def build_page_request(
    page: int | None, page_size: int | None, *, default_size: int, max_size: int
) -> PageRequest:
    """Validate raw paging input, applying the default and the cap."""
    resolved_page = 1 if page is None else page
    resolved_size = default_size if page_size is None else page_size
    if resolved_page < 1:
        raise ValidationFailedError("Page must be at least 1", field="page")
    if resolved_size < 1:
        raise ValidationFailedError("Page size must be positive", field="limit")
    return PageRequest(page=resolved_page, page_size=min(resolved_size, max_size))
