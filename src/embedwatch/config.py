"""Configuration management for EmbedWatch."""

from enum import StrEnum
from functools import lru_cache
from typing import Annotated, Any

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from embedwatch.constants import (
    DEFAULT_HOST,
    DEFAULT_MAX_BUFFER_ENTRIES,
    DEFAULT_PORT,
    DEFAULT_RETENTION_WINDOW_MS,
)


class AuthMode(StrEnum):
    """Which credential shape guards the data endpoint."""

    BEARER = "bearer"
    QUERY = "query"


def _split_csv(value: Any) -> Any:
    """Accept ``"a, b,c"`` from the environment as ``["a", "b", "c"]``."""
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, int):
        return [str(value)]
    return [str(part).strip() for part in value if str(part).strip()]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Discord
    discord_token: SecretStr = Field(description="Discord bot token")
    category_ids: Annotated[
        list[str],
        NoDecode,
        Field(default_factory=list, description="Category IDs whose text channels are watched"),
    ]

    # Query API
    api_secret_key: SecretStr | None = Field(
        default=None, description="Shared secret required to read announcements"
    )
    require_api_secret: bool = Field(
        default=True, description="Refuse to start without API_SECRET_KEY"
    )
    auth_mode: AuthMode = Field(default=AuthMode.BEARER, description="Credential shape")
    authorized_user_ids: Annotated[
        list[str],
        NoDecode,
        Field(default_factory=list, description="Caller IDs allowed in query mode"),
    ]
    serve_data_on_root: bool = Field(
        default=False, description="Bearer mode: serve data on / instead of /getdata"
    )
    host: str = Field(default=DEFAULT_HOST, description="HTTP listen host")
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535, description="HTTP listen port")

    # Retention
    retention_window_ms: int = Field(
        default=DEFAULT_RETENTION_WINDOW_MS, gt=0, description="Max age of a served entry"
    )
    max_buffer_entries: int = Field(
        default=DEFAULT_MAX_BUFFER_ENTRIES,
        ge=0,
        description="Upper bound on retained entries (0 disables the cap)",
    )

    # Application
    environment: str = Field(default="production", description="Environment name")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("discord_token")
    @classmethod
    def _require_token(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("DISCORD_TOKEN must not be empty")
        return value

    @field_validator("category_ids", "authorized_user_ids", mode="before")
    @classmethod
    def _parse_id_list(cls, value: Any) -> Any:
        return _split_csv(value)

    @model_validator(mode="after")
    def _check_auth_requirements(self) -> "Settings":
        if self.require_api_secret and not self.api_secret:
            raise ValueError("API_SECRET_KEY is required when REQUIRE_API_SECRET is enabled")
        if self.auth_mode is AuthMode.QUERY:
            if not self.authorized_user_ids:
                raise ValueError("AUTHORIZED_USER_IDS is required when AUTH_MODE is 'query'")
            if self.serve_data_on_root:
                raise ValueError("SERVE_DATA_ON_ROOT is only supported with AUTH_MODE 'bearer'")
        return self

    @property
    def api_secret(self) -> str | None:
        """Plain API secret, or None when unset or blank."""
        if self.api_secret_key is None:
            return None
        return self.api_secret_key.get_secret_value() or None

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
