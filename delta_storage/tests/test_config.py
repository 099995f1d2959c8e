import pytest

from delta_storage.config import DEVELOPMENT_HOST, PRODUCTION_HOST, DeltaStorageConfig


def test_base_url_defaults_to_production_host() -> None:
    config = DeltaStorageConfig(environment="production")

    assert config.base_url == PRODUCTION_HOST


def test_base_url_uses_local_host_in_development() -> None:
    config = DeltaStorageConfig(environment="development")

    assert config.base_url == DEVELOPMENT_HOST


def test_explicit_host_overrides_environment() -> None:
    config = DeltaStorageConfig(environment="development", host="https://storage.example")

    assert config.base_url == "https://storage.example"


def test_explicit_host_trailing_slash_is_stripped() -> None:
    config = DeltaStorageConfig(host="https://storage.example/")

    assert config.base_url == "https://storage.example"


def test_environment_defaults_from_env_var(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DELTA_STORAGE_ENV", "development")

    assert DeltaStorageConfig().base_url == DEVELOPMENT_HOST


def test_environment_defaults_to_production_without_env_var(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("DELTA_STORAGE_ENV", raising=False)

    assert DeltaStorageConfig().environment == "production"


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"environment": "staging"}, "environment must be one of"),
        ({"host": "/"}, "host must not be empty"),
        ({"timeout": 0}, "timeout must be positive"),
        ({"socketio_transports": ()}, "socketio_transports must not be empty"),
        ({"socketio_wait_timeout": -1}, "socketio_wait_timeout must be positive"),
    ],
)
def test_invalid_config_raises(kwargs: dict, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        DeltaStorageConfig(**kwargs)
