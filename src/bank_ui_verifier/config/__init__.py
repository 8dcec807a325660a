"""
Configuration module - Centralized settings management.

This module provides type-safe configuration management using Pydantic,
supporting environment variables, YAML files, and CLI arguments.

Usage:
    from bank_ui_verifier.config import load_config, load_credentials

    settings = load_config(browser={"headless": False})
    credentials = load_credentials(settings)

Environment Variables:
    BANK_UI__BASE_URL=https://demo-bank.vercel.app
    BANK_UI__BROWSER__HEADLESS=false
    BANK_UI__TIMEOUTS__ACTION_TIMEOUT_MS=8000
    BANK_UI__CREDENTIALS__LOGIN=tester01
    BANK_UI__CREDENTIALS__PASSWORD=...
"""

from bank_ui_verifier.config.settings import (
    Settings,
    BrowserSettings,
    TimeoutSettings,
    CredentialsSettings,
    LoggingSettings,
)
from bank_ui_verifier.config.loader import ConfigLoader, load_config
from bank_ui_verifier.config.credentials import Credentials, load_credentials, read_auth_file

__all__ = [
    "Settings",
    "BrowserSettings",
    "TimeoutSettings",
    "CredentialsSettings",
    "LoggingSettings",
    "ConfigLoader",
    "load_config",
    "Credentials",
    "load_credentials",
    "read_auth_file",
]
