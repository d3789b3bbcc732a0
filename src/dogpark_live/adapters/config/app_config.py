"""12-factor configuration adapter using environment variables."""

import json
import logging
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=8080, description="Port to bind the server to")
    log_level: str = Field(default="INFO", description="Root log level")

    # Authentication
    jwt_secret: str = Field(
        default="your-secret-key", description="Shared secret used to verify access tokens"
    )
    jwt_algorithm: str = Field(default="HS256", description="Signing algorithm of access tokens")

    # Seed data
    seed_file: str | None = Field(
        default=None,
        description="Optional TOML file with [[parks]] and [[dogs]] loaded into the store at startup",
    )

    # Event stream transport
    stream_keepalive_seconds: float = Field(
        default=15.0,
        description="Seconds without events before a keepalive comment is sent (0 disables)",
    )
    stream_queue_size: int = Field(
        default=64,
        description="Maximum number of undelivered events buffered per stream subscriber",
    )

    # Socket transport
    socketio_path: str = Field(default="socket.io", description="Mount path of the Socket.IO endpoint")
    socket_require_auth: bool = Field(
        default=False, description="Require an access token on the Socket.IO handshake"
    )

    # HTTP surface
    cors_allowed_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["*"], description="Origins allowed by CORS"
    )
    rate_limit_per_minute: int = Field(
        default=100,
        description="Maximum number of mutating requests allowed per IP address per minute",
    )
    admin_command_token: str | None = Field(
        default=None,
        description="Shared secret for admin endpoints (X-Admin-Token); unset disables them",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"log_level must be a standard logging level, got '{v}'")
        return level

    @field_validator("cors_allowed_origins", mode="before")
    @classmethod
    def split_cors_allowed_origins(cls, v: Any) -> Any:
        """Accept a comma-separated string or a JSON array of origins."""
        if not isinstance(v, str):
            return v
        text = v.strip()
        if text.startswith("["):
            return json.loads(text)
        return [origin.strip() for origin in text.split(",") if origin.strip()]

    @field_validator("stream_queue_size")
    @classmethod
    def validate_stream_queue_size(cls, v: int) -> int:
        """Validate the per-subscriber buffer is positive."""
        if v <= 0:
            raise ValueError("stream_queue_size must be positive")
        return v

    @field_validator("stream_keepalive_seconds")
    @classmethod
    def validate_stream_keepalive_seconds(cls, v: float) -> float:
        """Validate the keepalive interval is not negative."""
        if v < 0:
            raise ValueError("stream_keepalive_seconds must not be negative")
        return v
