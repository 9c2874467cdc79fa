"""Pydantic configuration models with validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import AliasChoices, AliasPath, BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]
StorageBackend = Literal["diskcache", "memory"]


def _normalize_path(value: Any) -> Path:
    """
    Normalize a path-like value without causing filesystem side-effects.

    This function MUST NOT create directories or files.
    """
    if isinstance(value, Path):
        return value.expanduser()
    if isinstance(value, str):
        return Path(value).expanduser()
    raise TypeError(f"Expected path-like value, got: {type(value)!r}")


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (omdb/http/logging/storage).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    - The API key is not validated locally; a bad key shows up as catalog errors.
    """

    # General
    app_name: str = Field(default="movie-explorer", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # Catalog (YAML section: omdb.*)
    omdb_api_key: str = Field(
        default="",
        validation_alias=AliasChoices(
            "omdb_api_key",
            AliasPath("omdb", "api_key"),
        ),
        description="OMDb API key sent as the 'apikey' query parameter.",
    )
    omdb_base_url: str = Field(
        default="https://www.omdbapi.com/",
        validation_alias=AliasChoices(
            "omdb_base_url",
            AliasPath("omdb", "base_url"),
        ),
        description="Catalog endpoint all requests are sent to.",
    )

    # HTTP (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=10.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="Transport timeout in seconds for catalog requests.",
    )
    http_user_agent: str = Field(
        default="movie-explorer/0.1.0",
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing HTTP requests.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="WARNING",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    # Persistence surface (YAML section: storage.*)
    storage_backend: StorageBackend = Field(
        default="diskcache",
        validation_alias=AliasChoices(
            "storage_backend",
            AliasPath("storage", "backend"),
        ),
        description="'diskcache' keeps the watchlist across runs, 'memory' per run.",
    )
    storage_dir: Path = Field(
        default=Path("./.cache/movie-explorer"),
        validation_alias=AliasChoices(
            "storage_dir",
            AliasPath("storage", "dir"),
        ),
        description="Diskcache directory.",
    )
    watchlist_key: str = Field(
        default="watchlist",
        validation_alias=AliasChoices(
            "watchlist_key",
            AliasPath("storage", "watchlist_key"),
        ),
        description="Key the watchlist is stored under.",
    )

    @field_validator("storage_dir", mode="before")
    @classmethod
    def _validate_paths(cls, v: Any) -> Path:
        return _normalize_path(v)

    @field_validator("omdb_api_key")
    @classmethod
    def _strip_api_key(cls, v: str) -> str:
        # Keys pasted into .env files often carry trailing whitespace.
        return v.strip()

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @field_validator("watchlist_key")
    @classmethod
    def _validate_watchlist_key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("watchlist_key must not be empty")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml.

        The API key is masked.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "omdb": {
                "api_key": "***" if self.omdb_api_key else "",
                "base_url": self.omdb_base_url,
            },
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "user_agent": self.http_user_agent,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
            "storage": {
                "backend": self.storage_backend,
                "dir": str(self.storage_dir),
                "watchlist_key": self.watchlist_key,
            },
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Intended usage:
    - load.py creates EnvOverrides() to read MOVIE_EXPLORER_* variables,
      converts to dict of set values, merges into YAML/defaults,
      then validates AppConfig.

    Supported env var examples (flat, explicit):
    - MOVIE_EXPLORER_OMDB_API_KEY
    - MOVIE_EXPLORER_HTTP_TIMEOUT_SECONDS
    - MOVIE_EXPLORER_STORAGE_BACKEND
    - MOVIE_EXPLORER_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="MOVIE_EXPLORER_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    omdb_api_key: Optional[str] = None
    omdb_base_url: Optional[str] = None

    http_timeout_seconds: Optional[float] = None
    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    storage_backend: Optional[StorageBackend] = None
    storage_dir: Optional[Path] = None
    watchlist_key: Optional[str] = None

    @field_validator("storage_dir", mode="before")
    @classmethod
    def _validate_paths(cls, v: Any) -> Any:
        if v is None:
            return None
        return _normalize_path(v)

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
