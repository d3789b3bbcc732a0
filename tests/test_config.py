"""Tests for configuration adapter."""

import pytest

from dogpark_live.adapters.config import AppConfig


def test_config_loads_defaults() -> None:
    """Given no environment variables, when loading config, then defaults are used."""
    config = AppConfig(_env_file=None)

    assert config.host == "0.0.0.0"
    assert config.port == 8080
    assert config.log_level == "INFO"
    assert config.jwt_algorithm == "HS256"
    assert config.socketio_path == "socket.io"
    assert config.socket_require_auth is False
    assert config.cors_allowed_origins == ["*"]
    assert config.admin_command_token is None
    assert config.seed_file is None


def test_config_loads_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given environment variables, when loading config, then they are used."""
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("JWT_SECRET", "from-env")
    monkeypatch.setenv("SOCKET_REQUIRE_AUTH", "true")
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", '["https://dogpark.example"]')

    config = AppConfig(_env_file=None)

    assert config.host == "127.0.0.1"
    assert config.port == 9000
    assert config.jwt_secret == "from-env"
    assert config.socket_require_auth is True
    assert config.cors_allowed_origins == ["https://dogpark.example"]


def test_config_normalizes_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given a lower-case log level, when loading config, then it is upper-cased."""
    monkeypatch.setenv("LOG_LEVEL", "debug")

    assert AppConfig(_env_file=None).log_level == "DEBUG"


def test_config_validates_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given an unknown log level, when loading config, then validation error is raised."""
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    with pytest.raises(ValueError, match="log_level must be a standard logging level"):
        AppConfig(_env_file=None)


def test_config_validates_stream_queue_size() -> None:
    """Given a non-positive stream buffer, when loading config, then validation error is raised."""
    with pytest.raises(ValueError, match="stream_queue_size must be positive"):
        AppConfig(_env_file=None, stream_queue_size=0)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("*", ["*"]),
        ("https://dogpark.example", ["https://dogpark.example"]),
        ("https://a.example, https://b.example", ["https://a.example", "https://b.example"]),
        ('["https://a.example", "https://b.example"]', ["https://a.example", "https://b.example"]),
    ],
)
def test_config_parses_cors_origins_from_env(
    monkeypatch: pytest.MonkeyPatch, raw: str, expected: list[str]
) -> None:
    """Given CORS origins as a plain or JSON list, when loading config, then both forms parse."""
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", raw)

    assert AppConfig(_env_file=None).cors_allowed_origins == expected
