"""Search filtering and fixed-size pagination of a folder's items."""

import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from s3_navigator.browser.items import NavigationItem, display_name
from s3_navigator.core import PAGE_SIZES, settings
from s3_navigator.core.exceptions import ValidationError

PAGE_WINDOW = 5


@dataclass(frozen=True)
class PageSlice:
    """Result of filtering and paginating one item list."""

    items: list[NavigationItem]
    page_index: int
    total_pages: int
    total_items: int


@dataclass(frozen=True)
class PageInfo:
    """Page metadata for rendering pagination controls."""

    page_index: int
    page_size: int
    total_pages: int
    total_items: int
    first_item: int
    last_item: int
    window: list[int] = field(default_factory=list)


def check_page_size(page_size: int) -> int:
    if page_size not in PAGE_SIZES:
        raise ValidationError(
            f"page_size must be one of {', '.join(map(str, PAGE_SIZES))}, "
            f"got: {page_size}"
        )
    return page_size


def filter_items(
    items: Sequence[NavigationItem], search_query: str, current_prefix: str = ""
) -> list[NavigationItem]:
    """Case-insensitive substring match on display names; "" keeps everything."""
    if not search_query:
        return list(items)
    needle = search_query.lower()
    return [
        item
        for item in items
        if needle in display_name(item, current_prefix).lower()
    ]


def total_pages_for(total_items: int, page_size: int) -> int:
    return max(1, math.ceil(total_items / page_size))


def clamp_page(page_index: int, total_pages: int) -> int:
    return min(max(page_index, 1), total_pages)


def apply(
    items: Sequence[NavigationItem],
    search_query: str,
    page_size: int,
    page_index: int,
    current_prefix: str = "",
) -> PageSlice:
    """Filter items, then cut out one page.

    The page index is clamped into [1, total_pages] before slicing, so an
    out-of-range request returns the nearest existing page.
    """
    check_page_size(page_size)
    filtered = filter_items(items, search_query, current_prefix)
    total_pages = total_pages_for(len(filtered), page_size)
    page_index = clamp_page(page_index, total_pages)
    start = (page_index - 1) * page_size
    return PageSlice(
        items=filtered[start : start + page_size],
        page_index=page_index,
        total_pages=total_pages,
        total_items=len(filtered),
    )


def page_window(
    page_index: int, total_pages: int, width: int = PAGE_WINDOW
) -> list[int]:
    """Page numbers to offer around the current page, at most `width` of them.

    >>> page_window(1, 3)
    [1, 2, 3]
    >>> page_window(6, 10)
    [4, 5, 6, 7, 8]
    >>> page_window(10, 10)
    [6, 7, 8, 9, 10]
    """
    if total_pages <= width:
        return list(range(1, total_pages + 1))
    half = width // 2
    start = min(max(page_index - half, 1), total_pages - width + 1)
    return list(range(start, start + width))


class Pager:
    """Holds search and page state for the items of the current folder.

    Replacing the items, the search query or the page size goes back to page
    one. Moving between pages keeps the requested page, clamped to the range.
    """

    def __init__(self, page_size: Optional[int] = None):
        self.items: list[NavigationItem] = []
        self.current_prefix = ""
        self.search_query = ""
        self.page_size = check_page_size(page_size or settings.default_page_size)
        self.page_index = 1

    def set_items(self, items: Sequence[NavigationItem], current_prefix: str) -> None:
        self.items = list(items)
        self.current_prefix = current_prefix
        self.page_index = 1

    def set_search_query(self, search_query: str) -> None:
        self.search_query = search_query
        self.page_index = 1

    def set_page_size(self, page_size: int) -> None:
        self.page_size = check_page_size(page_size)
        self.page_index = 1

    def go_to_page(self, page_index: int) -> int:
        self.page_index = page_index
        self.page_index = self.current().page_index
        return self.page_index

    def next_page(self) -> int:
        return self.go_to_page(self.page_index + 1)

    def previous_page(self) -> int:
        return self.go_to_page(self.page_index - 1)

    def current(self) -> PageSlice:
        return apply(
            self.items,
            self.search_query,
            self.page_size,
            self.page_index,
            self.current_prefix,
        )

    def info(self) -> PageInfo:
        page = self.current()
        start = (page.page_index - 1) * self.page_size
        return PageInfo(
            page_index=page.page_index,
            page_size=self.page_size,
            total_pages=page.total_pages,
            total_items=page.total_items,
            first_item=start + 1 if page.items else 0,
            last_item=start + len(page.items),
            window=page_window(page.page_index, page.total_pages),
        )
