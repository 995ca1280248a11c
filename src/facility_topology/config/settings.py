"""Runtime configuration for the topology service.

Relies on pydantic-settings so that environment variables (prefixed with ``TOPOLOGY_``)
can override defaults.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from facility_topology.errors import ConfigurationError

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Captures runtime configuration for topology queries."""

    management_api_url: Optional[str] = Field(
        default=None, description="Base URL of the Digital Twins management API"
    )
    access_token: Optional[str] = Field(default=None, description="Bearer token for the management API")
    username: Optional[str] = Field(default=None, description="Basic auth username used when no token is set")
    password: Optional[str] = Field(default=None, description="Basic auth password used when no token is set")
    space_filter: str = Field(default="", description="Query string appended to the spaces request")
    http_timeout_s: float = Field(default=30.0, description="Timeout for management API requests")
    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default=Path("data/logs"))
    output_dir: Path = Field(default=Path("data/topology"))

    model_config = SettingsConfigDict(
        env_prefix="TOPOLOGY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",
    )

    @field_validator("management_api_url", mode="before")
    def _normalise_api_url(cls, value: str | None) -> Optional[str]:
        if value in (None, ""):
            return None
        value = str(value).strip()
        return value if value.endswith("/") else f"{value}/"

    @field_validator("space_filter", mode="before")
    def _strip_space_filter(cls, value: str | None) -> str:
        if value is None:
            return ""
        return str(value).strip().lstrip("?")

    @field_validator("log_dir", "output_dir", mode="before")
    def _expand_path(cls, value: str | Path) -> Path:
        if isinstance(value, Path):
            return value.expanduser()
        return Path(value).expanduser()

    @field_validator("http_timeout_s")
    def _validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("http_timeout_s must be positive")
        return value

    def ensure_directories(self) -> None:
        """Create directories that must exist at runtime."""
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def basic_auth(self) -> Optional[Tuple[str, str]]:
        if self.username and self.password:
            return self.username, self.password
        return None

    def client_kwargs(self) -> dict[str, object]:
        if not self.management_api_url:
            raise ConfigurationError("management_api_url must be configured (TOPOLOGY_MANAGEMENT_API_URL)")
        kwargs: dict[str, object] = {
            "base_url": self.management_api_url,
            "timeout": self.http_timeout_s,
            "space_filter": self.space_filter,
        }
        if self.access_token:
            kwargs["access_token"] = self.access_token
        else:
            credentials = self.basic_auth()
            if credentials:
                kwargs["basic_auth"] = credentials
            else:
                logger.warning("No access token or basic auth credentials configured; requests are unauthenticated")
        return kwargs
