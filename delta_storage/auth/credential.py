"""
Composite API key decoding.

Keys have the shape ``keyId.scope.userId.hash.edgeToken``. Only the scope
and the edge token are used by the client; the other fields pass through.
"""

from dataclasses import dataclass, field

from delta_storage.auth.scope import CapabilitySet
from delta_storage.exceptions import MalformedCredentialError

_FIELD_COUNT = 5


@dataclass(frozen=True, kw_only=True)
class Credential:
    """
    Decoded API key.

    Attributes:
        raw: The full composite key, sent as the bearer token.
        key_id: Key identifier.
        scope: Granted capabilities.
        user_id: Owner of the key.
        hash: Integrity hash computed by the server.
        edge_token: Auxiliary token forwarded on uploads.
    """

    raw: str = field(repr=False)
    key_id: str
    scope: CapabilitySet
    user_id: str
    hash: str = field(repr=False)
    edge_token: str = field(repr=False)


def parse_api_key(api_key: str) -> Credential:
    """
    Decode a composite API key.

    Args:
        api_key: Dot-delimited key with five fields.

    Returns:
        The decoded credential.

    Raises:
        MalformedCredentialError: If the key does not have five fields or
            the scope is not a non-negative base-10 integer.
    """
    fields = api_key.split(".")
    if len(fields) != _FIELD_COUNT:
        msg = f"API key must have {_FIELD_COUNT} dot-separated fields"
        raise MalformedCredentialError(msg, field_count=len(fields))

    key_id, scope, user_id, key_hash, edge_token = fields
    msg = "API key scope must be a non-negative base-10 integer"
    if not scope.isascii() or not scope.isdigit():
        raise MalformedCredentialError(msg, key_id=key_id)
    try:
        scope_value = int(scope, 10)
    except ValueError as e:
        # Past the interpreter's integer string conversion limit.
        raise MalformedCredentialError(msg, key_id=key_id) from e

    return Credential(
        raw=api_key,
        key_id=key_id,
        scope=CapabilitySet(scope_value),
        user_id=user_id,
        hash=key_hash,
        edge_token=edge_token,
    )
