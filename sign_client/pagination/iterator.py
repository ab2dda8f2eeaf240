"""Lazy iteration over paginated API collections."""

from collections import deque
from enum import Enum
from typing import Any, Callable, Deque, Dict, Iterator, Optional, Tuple, TypeVar

from aws_lambda_powertools.logging import Logger
from pydantic import BaseModel, ConfigDict

from ..clients.connection import Connection, send_json_request
from ..exceptions import CallerContractError, DeserializationError
from ..models.fields import raw_json
from ..utils.url_template import QueryStringBuilder, append_query

logger = Logger()

T = TypeVar("T")


class PageFormat(BaseModel):
    """Wire names of a collection's paging contract."""

    model_config = ConfigDict(frozen=True)

    entries_field: str = "entries"
    cursor_field: str = "next_marker"
    cursor_param: str = "marker"
    limit_param: str = "limit"


MARKER_PAGES = PageFormat()


class IteratorState(str, Enum):
    """State of a PagedIterator."""

    NEEDS_PAGE = "needs_page"
    HAS_BUFFERED_ITEMS = "has_buffered_items"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


class PagedIterator(Iterator[T]):
    """Forward-only, non-restartable iterator over a remote collection.

    Holds at most one page in memory. A page is requested only when the
    buffered items are used up; an empty page or a page without a
    continuation cursor ends the sequence. Once a page fetch or an item
    conversion fails, every later call reports the same error.

    Not safe for concurrent advancement from several threads.
    """

    def __init__(
        self,
        connection: Connection,
        url: str,
        limit: int,
        factory: Callable[[Dict[str, Any]], T],
        page_format: PageFormat = MARKER_PAGES,
    ) -> None:
        """Initialize the iterator without fetching anything.

        Args:
            connection: Connection used for page requests
            url: Collection URL, without paging parameters
            limit: Number of entries to request per page
            factory: Converts one entry document into an item
            page_format: Paging wire names of the collection

        Raises:
            CallerContractError: If limit is not positive
        """
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise CallerContractError(
                "Page limit must be a positive integer", details={"limit": limit}
            )
        self.connection = connection
        self.url = url
        self.limit = limit
        self.factory = factory
        self.page_format = page_format
        self.state = IteratorState.NEEDS_PAGE
        self.pages_fetched = 0
        self._buffer: Deque[Any] = deque()
        self._cursor: Optional[str] = None
        self._last_page = False
        self._error: Optional[Exception] = None

    def try_next(self) -> Tuple[Optional[T], bool, Optional[Exception]]:
        """Advance without raising.

        Returns:
            Tuple of (item, done, error); exactly one of them is meaningful
        """
        if self.state is IteratorState.FAILED:
            return None, False, self._error
        if self.state is IteratorState.EXHAUSTED:
            return None, True, None

        if not self._buffer:
            try:
                self._fetch_page()
            except Exception as e:
                return self._fail(e)
            if not self._buffer:
                self.state = IteratorState.EXHAUSTED
                return None, True, None

        entry = self._buffer.popleft()
        try:
            item = self.factory(entry)
        except Exception as e:
            return self._fail(e)

        if self._buffer:
            self.state = IteratorState.HAS_BUFFERED_ITEMS
        elif self._last_page:
            self.state = IteratorState.EXHAUSTED
        else:
            self.state = IteratorState.NEEDS_PAGE
        return item, False, None

    def __iter__(self) -> "PagedIterator[T]":
        return self

    def __next__(self) -> T:
        item, done, error = self.try_next()
        if error is not None:
            raise error
        if done:
            raise StopIteration
        return item  # type: ignore

    def _fail(self, error: Exception) -> Tuple[None, bool, Exception]:
        logger.error(
            "Collection iteration failed",
            extra={"url": self.url, "pages_fetched": self.pages_fetched, "error": str(error)},
        )
        self._error = error
        self._buffer.clear()
        self.state = IteratorState.FAILED
        return None, False, error

    def _fetch_page(self) -> None:
        page_format = self.page_format
        query = QueryStringBuilder().append_param(page_format.limit_param, self.limit)
        if self._cursor is not None:
            query.append_param(page_format.cursor_param, self._cursor)
        url = append_query(self.url, query.to_string())

        logger.debug(
            "Fetching collection page",
            extra={"url": url, "page": self.pages_fetched + 1},
        )
        document = send_json_request(self.connection, "GET", url)
        self.pages_fetched += 1

        entries = document.get(page_format.entries_field)
        if entries is None:
            entries = []
        elif not isinstance(entries, list):
            raise DeserializationError(
                page_format.entries_field,
                raw_json(entries),
                TypeError("expected array"),
            )
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise DeserializationError(
                    f"{page_format.entries_field}.{index}",
                    raw_json(entry),
                    TypeError("expected object"),
                )

        cursor = document.get(page_format.cursor_field)
        if cursor is not None and (isinstance(cursor, bool) or not isinstance(cursor, (str, int))):
            raise DeserializationError(
                page_format.cursor_field,
                raw_json(cursor),
                TypeError("expected string cursor"),
            )
        self._cursor = str(cursor) if cursor not in (None, "") else None
        self._last_page = self._cursor is None
        self._buffer.extend(entries)
