"""Exceptions for caller programming errors."""

from typing import Any, Dict, Optional

from . import SignClientError


class CallerContractError(SignClientError):
    """Error when the framework is called with malformed inputs.

    Not retryable: the calling code has to be fixed.
    """

    def __init__(
        self,
        message: str = "Invalid arguments",
        code: str = "CALLER_CONTRACT_VIOLATION",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code, details)
