"""Transport-related exceptions."""

from typing import Any, Dict, Optional

from . import SignClientError


class TransportError(SignClientError):
    """Raised when the connection could not complete an HTTP exchange.

    Covers network failures as well as 4xx/5xx responses. When a response was
    received, its status code and body text are kept on the exception.
    """

    def __init__(
        self,
        message: str = "HTTP exchange failed",
        code: str = "TRANSPORT_ERROR",
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            details={"status_code": status_code, **(details or {})},
        )
        self.status_code = status_code
        self.body = body
