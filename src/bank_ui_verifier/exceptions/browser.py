"""
Browser-related exceptions.
"""

from bank_ui_verifier.exceptions.base import BankUIVerifierError


class BrowserError(BankUIVerifierError):
    """Base exception for browser-related errors."""
    pass


class BrowserLaunchError(BrowserError):
    """
    Error launching the browser.

    Raised when the browser fails to start, which could be due to:
    - Missing browser binaries
    - Invalid browser options
    - Resource constraints
    """
    pass


class NavigationError(BrowserError):
    """
    Error during page navigation.

    Raised when the driven application cannot be reached or a navigation
    request itself fails (DNS, refused connection, 4xx/5xx).
    """

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message, {"url": url})
        self.url = url
