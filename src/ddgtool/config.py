"""Application configuration.

Configuration is loaded from environment variables. For local development, you can provide a
`.env` file and set `DDGTOOL_ENV_FILE` to point to it.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

from pydantic import Field
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ddgtool.errors import ValidationError

if TYPE_CHECKING:
    from ddgtool.tools.duckduckgo import DuckDuckGoSearchToolOptions


class Settings(BaseSettings):
    """ddgtool settings.

    All fields are environment-configurable. Prefix is `DDGTOOL_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="DDGTOOL_",
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    log_level: str = Field(default="INFO")

    # Search
    max_results_per_page: int = Field(default=15, ge=1, le=50)
    region: str | None = Field(default=None)
    safe_search: Literal["on", "moderate", "off"] = Field(default="moderate")
    time_limit: Literal["d", "w", "m", "y"] | None = Field(default=None)
    api_key: str | None = Field(default=None)

    # Throttle
    throttle_enabled: bool = Field(default=True)
    throttle_limit: int = Field(default=1, ge=1, le=100)
    throttle_interval_ms: float = Field(default=3000.0, gt=0.0, le=600_000.0)

    # Networking
    http_proxy_url: str | None = Field(default=None)
    http_timeout_s: float = Field(default=10.0, ge=1.0, le=300.0)
    http_verify: bool = Field(default=True)

    def to_tool_options(self, **overrides: Any) -> DuckDuckGoSearchToolOptions:
        """Build tool configuration from settings.

        Args:
            **overrides: Option fields that replace the settings-derived values.
        """

        from ddgtool.models.search import ThrottleOptions
        from ddgtool.tools.duckduckgo import DuckDuckGoSearchToolOptions

        search: dict[str, Any] = {"safe_search": self.safe_search}
        if self.region:
            search["region"] = self.region
        if self.time_limit:
            search["time_limit"] = self.time_limit

        values: dict[str, Any] = {
            "search": search,
            "throttle": (
                ThrottleOptions(limit=self.throttle_limit, interval=self.throttle_interval_ms)
                if self.throttle_enabled
                else False
            ),
            "http_client_options": {"timeout": self.http_timeout_s, "verify": self.http_verify},
            "max_results_per_page": self.max_results_per_page,
            "api_key": self.api_key,
            "http_proxy_url": self.http_proxy_url,
        }
        values.update(overrides)
        try:
            return DuckDuckGoSearchToolOptions.model_validate(values)
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e, "options") from e


def load_settings() -> Settings:
    """Load settings from env.

    Returns:
        Settings: Parsed settings.
    """

    env_file_override = os.getenv("DDGTOOL_ENV_FILE")
    if env_file_override:
        env_path = Path(env_file_override)
        return Settings(_env_file=env_path)

    default_env = Path.cwd() / ".env"
    if default_env.exists():
        return Settings(_env_file=default_env)

    return Settings()
