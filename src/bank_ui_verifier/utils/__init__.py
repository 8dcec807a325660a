"""
Utilities module - Common utility functions.
"""

from bank_ui_verifier.utils.logging import (
    JsonLineFormatter,
    setup_logging,
    setup_logging_from_settings,
    get_logger,
)

__all__ = [
    "JsonLineFormatter",
    "setup_logging",
    "setup_logging_from_settings",
    "get_logger",
]
