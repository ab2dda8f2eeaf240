"""URL building helpers for API endpoints."""

from typing import List, Sequence, Tuple, Union
from urllib.parse import quote, urlencode

from ..exceptions import CallerContractError

PLACEHOLDER = "%s"


class URLTemplate:
    """A path pattern with ordered ``%s`` placeholders.

    Example:
        >>> URLTemplate("sign_requests/%s/cancel").build("https://api.box.com/2.0", "SR1")
        'https://api.box.com/2.0/sign_requests/SR1/cancel'
    """

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern.lstrip("/")
        self.placeholder_count = self.pattern.count(PLACEHOLDER)

    def build(self, base: str, *args: str) -> str:
        """Substitute ``args`` into the pattern and join it onto ``base``.

        Args:
            base: Base URL of the API
            *args: Positional values, one per placeholder

        Returns:
            Absolute URL

        Raises:
            CallerContractError: If the argument count does not match the pattern
        """
        if len(args) != self.placeholder_count:
            raise CallerContractError(
                f"URL template '{self.pattern}' expects {self.placeholder_count} "
                f"argument(s), got {len(args)}",
                details={"pattern": self.pattern, "args": list(args)},
            )
        path = self.pattern % tuple(quote(str(arg), safe="") for arg in args)
        return f"{base.rstrip('/')}/{path}"

    def build_with_query(self, base: str, query: str, *args: str) -> str:
        """Build the URL and append an already serialized query string.

        An empty query leaves the URL without a ``?``.
        """
        url = self.build(base, *args)
        if not query:
            return url
        return f"{url}?{query}"

    def __repr__(self) -> str:
        return f"URLTemplate({self.pattern!r})"


class QueryStringBuilder:
    """Accumulates query parameters and renders them as a query string."""

    def __init__(self) -> None:
        self._params: List[Tuple[str, str]] = []

    def append_param(
        self, name: str, value: Union[str, int, Sequence[str]]
    ) -> "QueryStringBuilder":
        """Add a parameter; sequences are sent comma separated."""
        if isinstance(value, (list, tuple)):
            value = ",".join(value)
        self._params.append((name, str(value)))
        return self

    def to_string(self) -> str:
        return urlencode(self._params, safe=",")

    def __str__(self) -> str:
        return self.to_string()


def append_query(url: str, query: str) -> str:
    """Append a query string to a URL that may already carry one."""
    if not query:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"
