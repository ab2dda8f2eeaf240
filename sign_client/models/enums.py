"""Closed-set enums exchanged with the API."""

from enum import Enum
from typing import Any, FrozenSet

from ..exceptions import UnknownEnumValueError


class WireEnum(str, Enum):
    """Enum whose values are the literal wire strings.

    Inherits from str to ensure JSON serialization works correctly.
    """

    @classmethod
    def from_wire(cls, value: Any) -> "WireEnum":
        """Decode a wire string.

        Raises:
            UnknownEnumValueError: If the value is not in the closed set
        """
        if isinstance(value, str):
            for member in cls:
                if member.value == value:
                    return member
        raise UnknownEnumValueError(cls.__name__, value)

    def to_wire(self) -> str:
        """Encode the member as its wire string."""
        return self.value


class SignRequestStatus(WireEnum):
    """Status of a sign request, driven by server-side events."""

    CONVERTING = "converting"
    CREATED = "created"
    SENT = "sent"
    VIEWED = "viewed"
    SIGNED = "signed"
    CANCELLED = "cancelled"
    DECLINED = "declined"
    ERROR_CONVERTING = "error_converting"
    ERROR_SENDING = "error_sending"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        """Check if no further server-side transition is expected."""
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES: FrozenSet[SignRequestStatus] = frozenset(
    {
        SignRequestStatus.SIGNED,
        SignRequestStatus.CANCELLED,
        SignRequestStatus.DECLINED,
        SignRequestStatus.EXPIRED,
        SignRequestStatus.ERROR_CONVERTING,
        SignRequestStatus.ERROR_SENDING,
    }
)


class SignatureColor(WireEnum):
    """Forced color of the signature."""

    BLUE = "blue"
    BLACK = "black"
    RED = "red"


class SignerRole(WireEnum):
    """Role of a signer in a sign request."""

    SIGNER = "signer"
    APPROVER = "approver"
    FINAL_COPY_READER = "final_copy_reader"


class SignerDecisionType(WireEnum):
    """Final decision taken by a signer."""

    SIGNED = "signed"
    DECLINED = "declined"
