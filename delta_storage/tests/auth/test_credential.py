import pytest

from delta_storage.auth.credential import parse_api_key
from delta_storage.auth.scope import Capability
from delta_storage.exceptions import MalformedCredentialError


def test_parse_api_key_decodes_scope_and_edge_token() -> None:
    credential = parse_api_key("key_1.3.user_1.hash_1.edge_1")

    assert credential.scope.value == 3
    assert credential.edge_token == "edge_1"
    assert credential.key_id == "key_1"
    assert credential.user_id == "user_1"
    assert credential.hash == "hash_1"
    assert credential.raw == "key_1.3.user_1.hash_1.edge_1"


def test_parse_api_key_scope_three_grants_read_and_upload_file_only() -> None:
    scope = parse_api_key("k.3.u.h.e").scope

    assert scope.grants(Capability.READ_FILE | Capability.UPLOAD_FILE)
    assert not scope.grants(Capability.DELETE_DIRECTORY)


def test_parse_api_key_zero_scope_is_unrestricted() -> None:
    assert parse_api_key("k.0.u.h.e").scope.is_unrestricted


def test_parse_api_key_keeps_edge_token_verbatim() -> None:
    credential = parse_api_key("k.1.u.h.Ab-_=+/9")

    assert credential.edge_token == "Ab-_=+/9"


@pytest.mark.parametrize(
    "api_key",
    [
        "",
        "k.1.u.h",
        "k.1.u.h.e.extra",
        "no-dots-at-all",
    ],
)
def test_parse_api_key_rejects_wrong_field_count(api_key: str) -> None:
    with pytest.raises(MalformedCredentialError, match="5 dot-separated fields"):
        parse_api_key(api_key)


@pytest.mark.parametrize("scope", ["", "abc", "-1", "0x10", " 3", "٣"])
def test_parse_api_key_rejects_non_decimal_scope(scope: str) -> None:
    with pytest.raises(MalformedCredentialError, match="base-10 integer"):
        parse_api_key(f"k.{scope}.u.h.e")


def test_malformed_credential_error_does_not_leak_key() -> None:
    with pytest.raises(MalformedCredentialError) as exc_info:
        parse_api_key("k.bad.u.secret_hash.secret_edge")

    assert "secret" not in str(exc_info.value)


def test_credential_repr_hides_secrets() -> None:
    credential = parse_api_key("k.1.u.secret_hash.secret_edge")

    assert "secret" not in repr(credential)


def test_parse_api_key_rejects_scope_past_int_conversion_limit() -> None:
    with pytest.raises(MalformedCredentialError, match="base-10 integer") as exc_info:
        parse_api_key("k." + "1" * 5000 + ".u.h.e")

    assert isinstance(exc_info.value.__cause__, ValueError)
