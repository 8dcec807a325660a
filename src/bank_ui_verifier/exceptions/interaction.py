"""
Interaction and outcome exceptions.

Both propagate to the scenario as failures. They record what was being
attempted (fragment, strategy, probes) so a failed run can be diagnosed
from the log alone.
"""

from typing import List, Optional

from bank_ui_verifier.exceptions.base import BankUIVerifierError


class InteractionError(BankUIVerifierError):
    """Base exception for failed page interactions."""
    pass


class InteractionTimeoutError(InteractionError):
    """
    A bounded wait for visibility, enabled state or navigation expired.

    Never retried automatically: retrying a heuristic lookup risks masking
    a real application regression.
    """

    def __init__(
        self,
        message: str,
        timeout_ms: int,
        operation: str,
        fragment: Optional[str] = None,
        strategy: Optional[str] = None,
    ):
        super().__init__(
            message,
            {
                "timeout_ms": timeout_ms,
                "operation": operation,
                "fragment": fragment,
                "strategy": strategy,
            },
        )
        self.timeout_ms = timeout_ms
        self.operation = operation
        self.fragment = fragment
        self.strategy = strategy


class OutcomeAmbiguousError(BankUIVerifierError):
    """
    None of the recognized outcomes of a tolerant check was observed.

    This is a hard failure and is never downgraded.

    Attributes:
        check: Name of the tolerant check that was evaluated
        observed: Names of the probes that were tried, in order
    """

    def __init__(self, message: str, check: str, observed: List[str]):
        super().__init__(message, {"check": check, "tried": observed})
        self.check = check
        self.observed = observed
