"""
Credentials - the login/password pair used by a session.

Credentials are read once per session, at login time. A missing source or
malformed content is a fatal setup error for the scenario.

Sources, in order:
1. An explicit path passed by the caller
2. ``settings.credentials.auth_file`` (default ``auth.json``) if it exists
3. ``BANK_UI__CREDENTIALS__LOGIN`` / ``BANK_UI__CREDENTIALS__PASSWORD``
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, SecretStr, ValidationError, field_validator

from bank_ui_verifier.config.settings import Settings
from bank_ui_verifier.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class Credentials(BaseModel):
    """
    A login/password pair.

    Attributes:
        login: Account login
        password: Password (kept as SecretStr so it never lands in logs)
    """
    login: str
    password: SecretStr

    @field_validator("login")
    @classmethod
    def _login_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("login must not be empty")
        return value

    @field_validator("password")
    @classmethod
    def _password_not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("password must not be empty")
        return value


def read_auth_file(path: Union[str, Path]) -> Credentials:
    """
    Read credentials from a JSON file.

    Args:
        path: Path to a file containing ``{"login": ..., "password": ...}``

    Returns:
        Validated credentials

    Raises:
        ConfigurationError: File missing, not JSON, or missing fields
    """
    path = Path(path).resolve()
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read auth file at {path}: {e}", {"path": str(path)}) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Auth file at {path} is not valid JSON: {e}", {"path": str(path)}) from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Auth file at {path} must contain a JSON object", {"path": str(path)})

    try:
        return Credentials(**data)
    except (ValidationError, TypeError) as e:
        raise ConfigurationError(f"Malformed credentials in {path}: {e}", {"path": str(path)}) from e


def load_credentials(
    settings: Optional[Settings] = None,
    path: Optional[Union[str, Path]] = None,
) -> Credentials:
    """
    Resolve credentials from the first available source.

    Args:
        settings: Settings carrying the credentials section
        path: Explicit auth file; when given, no other source is consulted

    Returns:
        Validated credentials

    Raises:
        ConfigurationError: No source available or the source is malformed
    """
    if path is not None:
        return read_auth_file(path)

    settings = settings or Settings()
    section = settings.credentials

    auth_file = Path(section.auth_file)
    if auth_file.exists():
        logger.debug(f"Reading credentials from {auth_file}")
        return read_auth_file(auth_file)

    if section.login is not None and section.password is not None:
        logger.debug("Using credentials from environment")
        try:
            return Credentials(login=section.login, password=section.password)
        except ValidationError as e:
            raise ConfigurationError(f"Malformed credentials in environment: {e}") from e

    raise ConfigurationError(
        f"No credentials found: {auth_file.resolve()} does not exist and "
        "BANK_UI__CREDENTIALS__LOGIN / BANK_UI__CREDENTIALS__PASSWORD are not set",
        {"auth_file": str(auth_file)},
    )
