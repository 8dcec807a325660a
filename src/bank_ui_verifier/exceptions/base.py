"""
Base exceptions for the bank UI verifier.
"""


class BankUIVerifierError(Exception):
    """
    Base exception for all bank UI verifier errors.

    All custom exceptions inherit from this class, making it easy
    to catch any error raised by the harness.

    Attributes:
        message: Human-readable error message
        details: Optional additional error details
    """

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(BankUIVerifierError):
    """
    Error in configuration.

    Raised for missing or malformed credentials, invalid settings files,
    or a malformed search fragment. Fatal for the scenario, never retried.
    """
    pass


class EmptyFragmentError(ConfigurationError):
    """
    An anchor fragment was empty or whitespace only.

    An empty fragment would match every element on the page, so it is
    rejected before any query reaches the browser.
    """

    def __init__(self, raw: str | None = None):
        super().__init__("Anchor fragment must not be empty", {"raw": raw})
        self.raw = raw
