"""Exception handling for the sign client."""

from typing import Any, Dict, Optional


class SignClientError(Exception):
    """Base exception for all sign client errors."""

    def __init__(
        self,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


from .contract import CallerContractError
from .deserialization import DeserializationError, UnknownEnumValueError
from .transport import TransportError

__all__ = [
    # Base
    "SignClientError",
    # Transport Errors
    "TransportError",
    # Parsing Errors
    "DeserializationError",
    "UnknownEnumValueError",
    # Caller Errors
    "CallerContractError",
]
