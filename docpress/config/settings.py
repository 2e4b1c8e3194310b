"""
Service settings.

All settings can be overridden via DOCPRESS_* environment variables
or a local .env file.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """DocPress configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DOCPRESS_",
        env_file=".env",
        extra="ignore",
    )

    # === Server ===
    host: str = Field(default="127.0.0.1", description="Bind address")
    port: int = Field(default=3000, ge=1, le=65535, description="Bind port")
    log_level: str = Field(default="INFO", description="Root log level")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Allowed CORS origins",
    )

    # === Rendering backend ===
    browser_headless: bool = Field(default=True, description="Run Chromium headless")
    browser_args: list[str] = Field(
        default_factory=list,
        description="Extra command line flags passed to Chromium",
    )
    launch_browser_on_startup: bool = Field(
        default=False,
        description="Launch Chromium during startup instead of on first request",
    )

    # === Request handling ===
    strict_page_format: bool = Field(
        default=False,
        description="Require literal 'in'/'cm' units in custom WxH page formats",
    )
    sanitize_html_source: bool = Field(
        default=False,
        description="Sanitize inline HTML sources the same way Markdown output is",
    )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the process settings, loading them from the environment on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def init_settings(settings: Settings) -> Settings:
    """Install an explicit settings instance (tests, embedding)."""
    global _settings
    _settings = settings
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None
