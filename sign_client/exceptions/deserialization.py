"""Exceptions raised while decoding wire documents."""

from typing import Any, Dict, Optional

from . import SignClientError


class DeserializationError(SignClientError):
    """Error when a known field of a JSON document has an unexpected shape.

    Attributes:
        field_name: Wire name of the offending field, dotted for nested fields
        raw_value: JSON text of the value that failed to convert
        cause: The underlying conversion error
    """

    def __init__(
        self,
        field_name: str,
        raw_value: str,
        cause: Optional[BaseException] = None,
        code: str = "DESERIALIZATION_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=f"Could not deserialize field '{field_name}' from value {raw_value}: {cause}",
            code=code,
            details={
                "field_name": field_name,
                "raw_value": raw_value,
                **(details or {}),
            },
        )
        self.field_name = field_name
        self.raw_value = raw_value
        self.cause = cause


class UnknownEnumValueError(ValueError):
    """Raised when a wire string is not part of an enum's closed set."""

    def __init__(self, enum_name: str, value: Any) -> None:
        super().__init__(f"{value!r} is not a valid {enum_name} wire value")
        self.enum_name = enum_name
        self.value = value
