"""
API key decoding and scope checks.
"""

from delta_storage.auth.credential import Credential, parse_api_key
from delta_storage.auth.scope import (
    ALL_CAPABILITIES,
    OPERATION_SCOPES,
    Capability,
    CapabilitySet,
    Operation,
    check_allowed,
    verify_authorized,
)

__all__ = [
    "ALL_CAPABILITIES",
    "OPERATION_SCOPES",
    "Capability",
    "CapabilitySet",
    "Credential",
    "Operation",
    "check_allowed",
    "parse_api_key",
    "verify_authorized",
]
