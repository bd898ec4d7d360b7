"""
Pagination - Cursor history and list navigation state.

Connections only page forward, so going back means remembering the cursor
each visited page was requested with. CursorHistory keeps that stack;
PageNavigator combines it with the list's filters and sort.

Cursors are only valid for the filters and sort they were issued under, so
any change to either resets the navigator to the first page.

Typical usage:
    navigator = PageNavigator(browser.orders.fetch_orders_page, SortSpec("orderDate", "DESC"))
    page = navigator.load()
    if navigator.next_page(page):
        page = navigator.load()
    navigator.toggle_sort("shipName")   # back to page 1, shipName ASC
"""

from typing import Callable, List, Mapping, Optional, Tuple

from .models import Cursor, Page, SortDirection, SortSpec


class CursorHistory:
    """The cursors each visited page was requested with; page 1 is None."""

    def __init__(self):
        self._cursors: List[Optional[Cursor]] = [None]
        self._index = 0

    @property
    def current(self) -> Optional[Cursor]:
        return self._cursors[self._index]

    @property
    def page_number(self) -> int:
        return self._index + 1

    @property
    def can_go_back(self) -> bool:
        return self._index > 0

    def advance(self, page: Page) -> bool:
        """Move to the page after `page`. Returns False if there is none."""
        next_cursor = page.next_cursor
        if next_cursor is None:
            return False

        self.advance_to(next_cursor)
        return True

    def advance_to(self, cursor: Cursor):
        # Drop forward history from earlier back-navigation
        del self._cursors[self._index + 1:]
        self._cursors.append(cursor)
        self._index += 1

    def back(self) -> bool:
        if not self.can_go_back:
            return False
        self._index -= 1
        return True

    def reset(self):
        self._cursors = [None]
        self._index = 0


class PageNavigator:
    """Navigation state for one list view.

    Attributes:
        fetch_page: fetch_page(first, after, filters, sort) -> Page, e.g.
            OrdersApi.fetch_orders_page or CustomerSource.fetch_page.
        page_size: Rows per page.
        filters: The applied filter values.
        sort: The applied sort.
        history: The cursor history for the current filters and sort.
    """

    def __init__(
        self,
        fetch_page: Callable[..., Page],
        sort: SortSpec,
        page_size: int = 20,
        filters: Optional[Mapping[str, Optional[str]]] = None,
    ):
        self.fetch_page = fetch_page
        self.page_size = page_size
        self.sort = sort
        self.filters = dict(filters or {})
        self.history = CursorHistory()

    def query_key(self) -> Tuple:
        """Hashable identity of the page load() would fetch.

        A caller that loads asynchronously can compare keys to ignore results
        that arrive after the user has moved on.
        """
        return (
            tuple(sorted(self.filters.items())),
            self.sort.column,
            self.sort.direction.value,
            self.history.current.value if self.history.current else None,
        )

    def load(self) -> Page:
        return self.fetch_page(self.page_size, self.history.current, self.filters, self.sort)

    def next_page(self, page: Page) -> bool:
        return self.history.advance(page)

    def previous_page(self) -> bool:
        return self.history.back()

    def apply_filters(self, filters: Mapping[str, Optional[str]]):
        self.filters = dict(filters)
        self.history.reset()

    def clear_filters(self):
        self.apply_filters({})

    def set_sort(self, sort: SortSpec):
        self.sort = sort
        self.history.reset()

    def toggle_sort(self, column: str):
        """Flip the direction on the current column, or sort a new column ascending."""
        if self.sort.column == column:
            self.set_sort(SortSpec(column, self.sort.direction.flipped()))
        else:
            self.set_sort(SortSpec(column, SortDirection.ASC))
