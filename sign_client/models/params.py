"""Sparse sets of optional request fields."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict

from ..exceptions import CallerContractError
from .fields import to_wire_value


class OptionalParams(BaseModel):
    """Optional fields of a request body, each independently set or unset.

    A field counts as set once it was passed to the constructor or assigned,
    even when the value is False, 0, an empty string or an empty list.
    Unset fields are left out of the body so the server defaults apply.
    """

    model_config = ConfigDict(validate_assignment=True, strict=True, extra="forbid")

    def set(self, **values: Any) -> "OptionalParams":
        """Set one or more fields and return this instance for chaining.

        Raises:
            CallerContractError: If a name is not a known field
        """
        for name, value in values.items():
            if name not in type(self).model_fields:
                raise CallerContractError(
                    f"Unknown parameter '{name}' for {type(self).__name__}",
                    details={"parameter": name},
                )
            setattr(self, name, value)
        return self

    def is_set(self, name: str) -> bool:
        return name in self.model_fields_set

    def serialize_into(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """Write exactly the set fields into a request body.

        Args:
            document: Request body to extend in place

        Returns:
            The same document
        """
        for name in type(self).model_fields:
            if name in self.model_fields_set:
                document[name] = to_wire_value(getattr(self, name))
        return document
