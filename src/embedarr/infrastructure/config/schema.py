"""Pydantic configuration models with validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]
StoreBackend = Literal["diskcache", "redis"]


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


class StoreConfig(BaseModel):
    """Record store configuration (backend-agnostic)."""

    backend: StoreBackend = Field(
        default="diskcache",
        description="Store backend: 'diskcache' (SQLite) or 'redis'",
    )

    directory: Path = Field(
        default=Path("./data/embedarr"),
        validation_alias=AliasChoices("directory", "dir"),
        description="Diskcache SQLite directory",
    )

    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL (only when backend=redis)",
    )

    max_concurrent: int = Field(
        default=10,
        description="Max parallel store ops (semaphore limit)",
    )

    @field_validator("directory", mode="before")
    @classmethod
    def _validate_directory(cls, v: Any) -> Path:
        return _normalize_path(v)

    @field_validator("max_concurrent")
    @classmethod
    def _validate_max_concurrent(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("store.max_concurrent must be > 0")
        return v


class AdminConfig(BaseModel):
    """Who may manage servers and publish changelog entries.

    Authentication happens upstream; the fronting proxy forwards the
    signed-in user's e-mail in ``identity_header``.
    """

    emails: list[str] = Field(
        default_factory=list,
        description="Admin e-mail addresses (case-insensitive).",
    )
    identity_header: str = Field(
        default="X-Forwarded-Email",
        description="Request header carrying the authenticated user's e-mail.",
    )

    @field_validator("emails", mode="before")
    @classmethod
    def _split_emails(cls, v: Any) -> Any:
        # ENV values arrive as "a@x.com,b@y.com"
        if isinstance(v, str):
            return [e for e in (p.strip() for p in v.split(",")) if e]
        return v

    @field_validator("emails")
    @classmethod
    def _lower_emails(cls, v: list[str]) -> list[str]:
        return [e.strip().lower() for e in v if e.strip()]

    def is_admin(self, email: str | None) -> bool:
        if not email:
            return False
        return email.strip().lower() in self.emails


class TmdbConfig(BaseModel):
    """TMDB metadata API (catalog endpoints are empty without a key)."""

    api_key: str | None = Field(
        default=None,
        description="TMDB API key for trending/search listings.",
    )
    language: str = Field(
        default="en-US",
        description="Locale passed to TMDB.",
    )


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (http/logging/store/admin/tmdb).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    app_name: str = Field(default="embedarr", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP client (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=10.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="Timeout for outgoing HTTP requests (TMDB).",
    )
    http_user_agent: str = Field(
        default="Embedarr/0.1.0",
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing HTTP requests.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
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

    store: StoreConfig = Field(default_factory=StoreConfig)
    admin: AdminConfig = Field(default_factory=AdminConfig)
    tmdb: TmdbConfig = Field(default_factory=TmdbConfig)

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.
        The TMDB key is masked.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "user_agent": self.http_user_agent,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
            "store": {
                "backend": self.store.backend,
                "dir": str(self.store.directory),
                "redis_url": self.store.redis_url,
                "max_concurrent": self.store.max_concurrent,
            },
            "admin": self.admin.model_dump(),
            "tmdb": {
                "api_key": "***" if self.tmdb.api_key else None,
                "language": self.tmdb.language,
            },
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    load.py creates EnvOverrides() to read EMBEDARR_* variables, converts the
    set values to a dict, merges it over YAML/defaults, then validates AppConfig.

    Supported env vars:
    - EMBEDARR_ENVIRONMENT
    - EMBEDARR_HTTP_TIMEOUT_SECONDS
    - EMBEDARR_LOG_LEVEL / EMBEDARR_LOG_FORMAT
    - EMBEDARR_STORE_BACKEND / EMBEDARR_STORE_DIR / EMBEDARR_STORE_REDIS_URL
    - EMBEDARR_ADMIN_EMAILS (comma separated)
    - EMBEDARR_TMDB_API_KEY
    """

    model_config = SettingsConfigDict(
        env_prefix="EMBEDARR_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    store_backend: Optional[StoreBackend] = None
    store_dir: Optional[Path] = None
    store_redis_url: Optional[str] = None

    # str, not list: pydantic-settings would expect JSON for list fields
    admin_emails: Optional[str] = None
    admin_identity_header: Optional[str] = None

    tmdb_api_key: Optional[str] = None
    tmdb_language: Optional[str] = None

    @field_validator("store_dir", mode="before")
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
