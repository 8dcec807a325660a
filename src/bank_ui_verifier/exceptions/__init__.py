"""
Exceptions module - Custom exception hierarchy.

This module defines all custom exceptions used throughout the verifier,
providing clear error types for configuration, browser, interaction and
outcome failures. A resolution miss is not an exception: it surfaces as a
``Fallback`` result from the field resolver.
"""

from bank_ui_verifier.exceptions.base import (
    BankUIVerifierError,
    ConfigurationError,
    EmptyFragmentError,
)
from bank_ui_verifier.exceptions.browser import (
    BrowserError,
    BrowserLaunchError,
    NavigationError,
)
from bank_ui_verifier.exceptions.interaction import (
    InteractionError,
    InteractionTimeoutError,
    OutcomeAmbiguousError,
)

__all__ = [
    # Base exceptions
    "BankUIVerifierError",
    "ConfigurationError",
    "EmptyFragmentError",
    # Browser exceptions
    "BrowserError",
    "BrowserLaunchError",
    "NavigationError",
    # Interaction / outcome exceptions
    "InteractionError",
    "InteractionTimeoutError",
    "OutcomeAmbiguousError",
]
