"""
Capability flags and the client-side authorization gate.

A scope is an integer bitmask carried by the API key. Zero is a sentinel
for an unrestricted key; any other value is an explicit allow-list.
The gate only saves a round-trip: the server remains authoritative.
"""

from dataclasses import dataclass
from enum import IntFlag, StrEnum

import structlog

from delta_storage.exceptions import AuthorizationDeniedError

logger = structlog.get_logger(__name__)


class Capability(IntFlag):
    """Single operation permission bits."""

    READ_FILE = 1
    UPLOAD_FILE = 2
    DELETE_FILE = 4
    READ_DIRECTORY = 8
    CREATE_DIRECTORY = 16
    DELETE_DIRECTORY = 32


ALL_CAPABILITIES = (
    Capability.READ_FILE
    | Capability.UPLOAD_FILE
    | Capability.DELETE_FILE
    | Capability.READ_DIRECTORY
    | Capability.CREATE_DIRECTORY
    | Capability.DELETE_DIRECTORY
)


def check_allowed(granted_scope: int, required_mask: int) -> bool:
    """
    Decide whether a scope grants every bit of a required mask.

    Args:
        granted_scope: Scope decoded from the API key.
        required_mask: Bits the operation needs.

    Returns:
        True for an unrestricted scope (0), otherwise True only if
        ``required_mask`` is a subset of ``granted_scope``.
    """
    if granted_scope == 0:
        return True
    return (granted_scope & required_mask) == required_mask


@dataclass(frozen=True, slots=True)
class CapabilitySet:
    """Immutable view over a scope bitmask."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            msg = "scope must be non-negative"
            raise ValueError(msg)

    @property
    def is_unrestricted(self) -> bool:
        return self.value == 0

    def grants(self, required: int) -> bool:
        """Check whether every bit in ``required`` is granted."""
        return check_allowed(self.value, int(required))

    def require(self, required: int, message: str = "Operation is not allowed.") -> None:
        """
        Raise if ``required`` is not granted.

        Raises:
            AuthorizationDeniedError: If any required bit is missing.
        """
        if not self.grants(required):
            logger.warning("Operation denied by scope", required=int(required), granted=self.value)
            raise AuthorizationDeniedError(message, required=int(required), granted=self.value)

    def capabilities(self) -> Capability:
        """Known capabilities granted; all of them for an unrestricted scope."""
        if self.is_unrestricted:
            return ALL_CAPABILITIES
        return Capability(self.value & ALL_CAPABILITIES)

    def __contains__(self, required: object) -> bool:
        return isinstance(required, int) and self.grants(required)

    def __repr__(self) -> str:
        if self.is_unrestricted:
            return "CapabilitySet(unrestricted)"
        names = sorted(c.name for c in Capability if c & self.value)
        return f"CapabilitySet({{{', '.join(names)}}})"


class Operation(StrEnum):
    """Operations checked by the gate before a request is sent."""

    READ_FILE = "read_file"
    UPLOAD_FILE = "upload_file"
    DELETE_FILE = "delete_file"
    RENAME_FILE = "rename_file"
    UPDATE_FILE = "update_file"
    READ_DIRECTORY = "read_directory"
    CREATE_DIRECTORY = "create_directory"
    RENAME_DIRECTORY = "rename_directory"
    MOVE = "move"
    DELETE_DIRECTORY = "delete_directory"


# Rename and move are modeled server-side as a combined update, so they
# need both the create and the delete capability of their resource kind.
OPERATION_SCOPES: dict[Operation, tuple[Capability, str]] = {
    Operation.READ_FILE: (Capability.READ_FILE, "READ_FILE is not allowed."),
    Operation.UPLOAD_FILE: (Capability.UPLOAD_FILE, "UPLOAD_FILE is not allowed."),
    Operation.DELETE_FILE: (Capability.DELETE_FILE, "DELETE_FILE is not allowed."),
    Operation.RENAME_FILE: (
        Capability.UPLOAD_FILE | Capability.DELETE_FILE,
        "RENAME_FILE is not allowed.",
    ),
    Operation.UPDATE_FILE: (
        Capability.UPLOAD_FILE | Capability.DELETE_FILE,
        "UPDATE_FILE is not allowed.",
    ),
    Operation.READ_DIRECTORY: (Capability.READ_DIRECTORY, "READ_DIRECTORY is not allowed."),
    Operation.CREATE_DIRECTORY: (Capability.CREATE_DIRECTORY, "CREATE_DIRECTORY is not allowed."),
    Operation.RENAME_DIRECTORY: (
        Capability.CREATE_DIRECTORY | Capability.DELETE_DIRECTORY,
        "UPDATE_DIRECTORY is not allowed.",
    ),
    Operation.MOVE: (
        Capability.CREATE_DIRECTORY | Capability.DELETE_DIRECTORY,
        "UPDATE_DIRECTORY is not allowed.",
    ),
    Operation.DELETE_DIRECTORY: (Capability.DELETE_DIRECTORY, "DELETE_DIRECTORY is not allowed."),
}


def verify_authorized(scope: CapabilitySet, operation: Operation) -> None:
    """
    Run the pre-flight check for ``operation``.

    Raises:
        AuthorizationDeniedError: If the scope lacks a required capability.
    """
    required, message = OPERATION_SCOPES[operation]
    scope.require(required, message)
