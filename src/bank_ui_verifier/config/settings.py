"""
Settings - Pydantic models for type-safe configuration.

This module defines all configuration settings as Pydantic models,
providing validation, type hints, and automatic environment variable loading.

Example:
    >>> from bank_ui_verifier.config import load_config
    >>> settings = load_config()  # Loads from env, yaml, and defaults
    >>> print(settings.timeouts.action_timeout_ms)
    5000
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


def deep_merge(base: dict, updates: dict) -> dict:
    """Merge ``updates`` into ``base`` in place, descending into nested dicts."""
    for key, value in updates.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base


class BrowserSettings(BaseModel):
    """
    Browser launch settings.

    Attributes:
        headless: Run browser in headless mode
        browser_type: Playwright browser engine
        channel: Optional branded channel (chrome, msedge)
        slow_mo: Slow down operations by this amount (ms) - useful for debugging
        viewport_width: Browser viewport width in pixels
        viewport_height: Browser viewport height in pixels
        locale: Context locale; the driven application is Polish
    """
    headless: bool = True
    browser_type: Literal["chromium", "firefox", "webkit"] = "chromium"
    channel: Optional[str] = None
    slow_mo: int = Field(default=0, ge=0, le=5000)
    viewport_width: int = Field(default=1280, ge=320, le=3840)
    viewport_height: int = Field(default=720, ge=240, le=2160)
    locale: str = "pl-PL"


class TimeoutSettings(BaseModel):
    """
    Bounds for every wait performed by the page accessors.

    Attributes:
        action_timeout_ms: Wait for an element to become visible or enabled
        navigation_timeout_ms: Wait for a URL change after a click
        presence_probe_ms: Short visibility probe used by tolerant checks
        inspection_timeout_ms: Tag inspection done by the disambiguator
    """
    action_timeout_ms: int = Field(default=5000, ge=100, le=120000)
    navigation_timeout_ms: int = Field(default=5000, ge=100, le=120000)
    presence_probe_ms: int = Field(default=1000, ge=50, le=30000)
    inspection_timeout_ms: int = Field(default=1000, ge=50, le=30000)


class CredentialsSettings(BaseModel):
    """
    Where the login credentials come from.

    Attributes:
        auth_file: JSON file with ``{"login": ..., "password": ...}``
        login: Login taken from the environment when no file is present
        password: Password taken from the environment when no file is present
    """
    auth_file: str = "auth.json"
    login: Optional[str] = None
    password: Optional[SecretStr] = None


class LoggingSettings(BaseModel):
    """
    Logging configuration.

    Attributes:
        level: Log level
        file: Log file path (None for console only)
        json_format: Use JSON lines in the log file
    """
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file: Optional[str] = None
    json_format: bool = False


class Settings(BaseSettings):
    """
    Root settings container - single source of truth for all configuration.

    Settings are loaded in this priority order (highest to lowest):
    1. Explicit values passed to constructor
    2. Environment variables (prefixed with BANK_UI__)
    3. Config file (YAML)
    4. Default values

    A Settings instance is passed explicitly to whatever needs it; there is
    no process-wide singleton.

    Example:
        >>> settings = Settings()  # Load from env vars
        >>> settings = Settings(browser=BrowserSettings(headless=False))  # Override
    """

    model_config = SettingsConfigDict(
        env_prefix="BANK_UI__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = "https://demo-bank.vercel.app"
    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    timeouts: TimeoutSettings = Field(default_factory=TimeoutSettings)
    credentials: CredentialsSettings = Field(default_factory=CredentialsSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    debug: bool = False

    def merge_with(self, overrides: dict) -> "Settings":
        """
        Create a new Settings instance with overrides applied.

        Args:
            overrides: Dictionary of values to override

        Returns:
            New Settings instance with overrides applied
        """
        merged = deep_merge(self.model_dump(), overrides)
        return Settings(**merged)
