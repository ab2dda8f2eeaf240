"""Typed converters from JSON values to snapshot field values.

Every converter takes the raw JSON value and the connection of the snapshot
being parsed, and returns the converted value. Converters raise TypeError or
ValueError on a wrong shape; the snapshot parser wraps those into a
DeserializationError naming the field.
"""

import json
from datetime import date, datetime
from typing import Any, Callable, List, Optional, Tuple, Type

from ..exceptions import DeserializationError
from ..utils.date_format import format_date, parse_date
from .enums import WireEnum

FieldConverter = Callable[[Any, Optional[Any]], Any]


def raw_json(value: Any) -> str:
    """Render a raw value the way it appeared on the wire."""
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)


def _kind(value: Any) -> str:
    return type(value).__name__


def as_string(value: Any, connection: Optional[Any] = None) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected string, got {_kind(value)}")
    return value


def as_boolean(value: Any, connection: Optional[Any] = None) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"expected boolean, got {_kind(value)}")
    return value


def as_integer(value: Any, connection: Optional[Any] = None) -> int:
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected integer, got {_kind(value)}")
    return value


def as_timestamp(value: Any, connection: Optional[Any] = None) -> datetime:
    return parse_date(as_string(value))


def as_date(value: Any, connection: Optional[Any] = None) -> date:
    """Parse a calendar date such as ``2021-04-26``."""
    return datetime.strptime(as_string(value), "%Y-%m-%d").date()


def as_enum(enum_class: Type[WireEnum]) -> FieldConverter:
    """Build a converter decoding a closed-set enum."""

    def convert(value: Any, connection: Optional[Any] = None) -> WireEnum:
        return enum_class.from_wire(value)

    return convert


def as_object(model_class: Any) -> FieldConverter:
    """Build a converter parsing a nested value object."""

    def convert(value: Any, connection: Optional[Any] = None) -> Any:
        return model_class.from_json(value, connection)

    return convert


def as_list(item: FieldConverter) -> FieldConverter:
    """Build a converter applying ``item`` to every element of a JSON array.

    The converted elements are returned as a tuple.
    """

    def convert(value: Any, connection: Optional[Any] = None) -> Tuple[Any, ...]:
        if not isinstance(value, list):
            raise TypeError(f"expected array, got {_kind(value)}")
        items: List[Any] = []
        for index, element in enumerate(value):
            try:
                items.append(item(element, connection))
            except DeserializationError as e:
                raise DeserializationError(
                    f"{index}.{e.field_name}", e.raw_value, e.cause
                ) from e
            except (TypeError, ValueError) as e:
                raise DeserializationError(str(index), raw_json(element), e) from e
        return tuple(items)

    return convert


def to_wire_value(value: Any) -> Any:
    """Convert a field value back into its JSON representation."""
    if isinstance(value, WireEnum):
        return value.to_wire()
    if isinstance(value, datetime):
        return format_date(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [to_wire_value(element) for element in value]
    if hasattr(value, "to_json"):
        return value.to_json()
    return value
