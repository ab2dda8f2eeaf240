"""Resource handles, snapshots and the wire object parser.

A Resource is the stable half of a remote entity: its ID and the connection
used to reach it. A Snapshot is an immutable capture of the entity's fields,
parsed from one JSON document and bound to exactly one Resource.
"""

from types import MappingProxyType
from typing import Any, Callable, ClassVar, Dict, FrozenSet, Mapping, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..clients.connection import Connection, send_json_request
from ..exceptions import CallerContractError, DeserializationError
from ..utils.url_template import QueryStringBuilder, URLTemplate
from .fields import FieldConverter, as_string, raw_json, to_wire_value

_RESOURCE_TYPES: Dict[str, Type["Resource"]] = {}


def register_resource(cls: Type["Resource"]) -> Type["Resource"]:
    """Class decorator registering a resource under its wire type name."""
    _RESOURCE_TYPES[cls.resource_type] = cls
    return cls


def resource_class(resource_type: str) -> Type["Resource"]:
    """Look up the resource class registered for a wire type name."""
    try:
        return _RESOURCE_TYPES[resource_type]
    except KeyError:
        raise LookupError(f"No resource registered for type '{resource_type}'")


class Resource:
    """Immutable identity of a remote entity.

    Two handles are equal when their type, ID and connection are equal.
    Constructing a handle never touches the network.
    """

    __slots__ = ("_connection", "_id")

    resource_type: ClassVar[str] = ""
    snapshot_class: ClassVar[Type["Snapshot"]]
    item_url_template: ClassVar[Optional[URLTemplate]] = None

    def __init__(self, connection: Connection, id: str) -> None:
        if not isinstance(id, str) or not id:
            raise CallerContractError(
                f"{type(self).__name__} ID must be a non-empty string",
                details={"id": id},
            )
        self._connection = connection
        self._id = id

    @property
    def id(self) -> str:
        return self._id

    @property
    def connection(self) -> Connection:
        return self._connection

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Resource):
            return NotImplemented
        return (
            type(self) is type(other)
            and self._id == other._id
            and self._connection == other._connection
        )

    def __hash__(self) -> int:
        return hash((type(self), self._id))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id!r})"

    @classmethod
    def from_json(cls, connection: Connection, document: Any) -> "Snapshot":
        """Build a handle from the document's ID and parse its snapshot.

        Raises:
            DeserializationError: If the document has no string ID or a known
                field has the wrong shape
        """
        if not isinstance(document, dict):
            raise TypeError(f"expected object, got {type(document).__name__}")
        resource_id = document.get("id")
        if not isinstance(resource_id, str) or not resource_id:
            raise DeserializationError(
                "id",
                raw_json(resource_id),
                TypeError("resource ID must be a non-empty string"),
            )
        return cls(connection, resource_id).snapshot_from_json(document)

    def snapshot_from_json(self, document: Dict[str, Any]) -> "Snapshot":
        """Parse a document into a snapshot bound to this handle."""
        return self.snapshot_class.from_json(
            document, self._connection, resource=self
        )

    def empty_snapshot(self) -> "Snapshot":
        """Snapshot with every field unset, for write-only use."""
        return self.snapshot_class(resource=self)

    def fetch(self, *fields: str) -> "Snapshot":
        """Fetch the current state of this resource.

        Args:
            *fields: Optional wire field names to restrict the response to

        Returns:
            A new snapshot; fields the server did not return stay unset
        """
        if self.item_url_template is None:
            raise CallerContractError(f"{type(self).__name__} cannot be fetched")
        query = QueryStringBuilder()
        if fields:
            query.append_param("fields", list(fields))
        url = self.item_url_template.build_with_query(
            self._connection.base_url, query.to_string(), self._id
        )
        document = send_json_request(self._connection, "GET", url)
        return self.snapshot_from_json(document)


def as_resource(resource_type: str) -> FieldConverter:
    """Build a converter for a nested resource reference.

    The nested handle is created with the connection of the parent snapshot.
    The type is resolved through the registry when the field is parsed.
    """

    def convert(value: Any, connection: Optional[Any] = None) -> "Snapshot":
        return resource_class(resource_type).from_json(connection, value)

    return convert


class WireObject(BaseModel):
    """A JSON object parsed by dispatching each member to a field converter.

    Subclasses declare ``field_converters`` mapping wire names to converters;
    the maps of all base classes are merged once, at class creation. Members
    without a converter are kept verbatim in ``extra``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    field_converters: ClassVar[Dict[str, FieldConverter]] = {}
    wire_converters: ClassVar[Dict[str, FieldConverter]] = {}
    not_serialized: ClassVar[FrozenSet[str]] = frozenset({"extra"})

    extra: Mapping[str, Any] = Field(
        default_factory=dict,
        validate_default=True,
        description="Members with no known field",
    )

    @field_validator("extra", mode="after")
    @classmethod
    def freeze_extra(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        converters: Dict[str, FieldConverter] = {}
        for klass in reversed(cls.__mro__):
            converters.update(klass.__dict__.get("field_converters", {}))
        cls.wire_converters = converters

    @classmethod
    def from_json(
        cls, document: Any, connection: Optional[Any] = None, **values: Any
    ) -> "WireObject":
        """Parse a JSON object.

        Args:
            document: Decoded JSON object
            connection: Connection used for nested resource handles
            **values: Values set directly, bypassing the document

        Raises:
            DeserializationError: If a known member has an unexpected shape
        """
        if not isinstance(document, dict):
            raise TypeError(f"expected object, got {type(document).__name__}")

        extra: Dict[str, Any] = {}
        for name, value in document.items():
            converter = cls.wire_converters.get(name)
            if converter is None:
                extra[name] = value
            elif value is None:
                values[name] = None
            else:
                values[name] = _convert_member(name, value, converter, connection)

        return cls(extra=extra, **values)

    @property
    def fields_set(self) -> FrozenSet[str]:
        """Names of the fields that were present when this object was built."""
        return frozenset(self.model_fields_set - self.not_serialized)

    def is_set(self, name: str) -> bool:
        return name in self.fields_set

    def to_json(self) -> Dict[str, Any]:
        """Serialize the set fields back into a JSON object."""
        return {
            name: to_wire_value(getattr(self, name))
            for name in type(self).model_fields
            if name in self.fields_set
        }


def _convert_member(
    name: str, value: Any, converter: Callable[..., Any], connection: Optional[Any]
) -> Any:
    try:
        return converter(value, connection)
    except DeserializationError as e:
        raise DeserializationError(f"{name}.{e.field_name}", e.raw_value, e.cause) from e
    except (TypeError, ValueError) as e:
        raise DeserializationError(name, raw_json(value), e) from e


class Snapshot(WireObject):
    """Point-in-time capture of a resource's fields."""

    field_converters: ClassVar[Dict[str, FieldConverter]] = {
        "id": as_string,
        "type": as_string,
    }
    not_serialized: ClassVar[FrozenSet[str]] = frozenset({"extra", "resource"})

    resource: Resource = Field(..., description="Handle this snapshot belongs to")
    id: Optional[str] = Field(None, description="Resource ID")
    type: Optional[str] = Field(None, description="Wire type name")


Resource.snapshot_class = Snapshot
