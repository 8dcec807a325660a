"""
Reporting module - verdict and scenario reporting.
"""

from bank_ui_verifier.reporting.verdicts import (
    Outcome,
    PolicyVerdict,
    VerdictLog,
    verdict_table,
    print_verdicts,
)

__all__ = [
    "Outcome",
    "PolicyVerdict",
    "VerdictLog",
    "verdict_table",
    "print_verdicts",
]
