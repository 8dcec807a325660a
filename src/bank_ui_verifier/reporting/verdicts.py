"""
Verdict Log - per-session record of tolerant-check outcomes.

Suite authors use it to audit how often alternate paths are accepted.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List

from rich.console import Console
from rich.table import Table


class Outcome(Enum):
    """Accepted outcomes of a tolerant check, in priority order."""
    PRIMARY = "primary"
    SECONDARY = "secondary"
    ALTERNATE = "alternate"

    @property
    def priority(self) -> int:
        return _PRIORITY[self]


_PRIORITY = {Outcome.PRIMARY: 1, Outcome.SECONDARY: 2, Outcome.ALTERNATE: 3}


@dataclass(frozen=True)
class PolicyVerdict:
    """
    A passing tolerant check.

    Attributes:
        check: Name of the check (e.g. "failed-login")
        outcome: Which recognized outcome was observed
        description: Human-readable description of that outcome
        timestamp: When the verdict was reached
    """
    check: str
    outcome: Outcome
    description: str
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def is_alternate(self) -> bool:
        return self.outcome is Outcome.ALTERNATE

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "check": self.check,
            "outcome": self.outcome.value,
            "description": self.description,
            "timestamp": self.timestamp.isoformat(),
        }


class VerdictLog:
    """
    Ordered list of verdicts for one session.

    Example:
        >>> log = VerdictLog()
        >>> log.record(verdict)
        >>> log.alternate_count
        0
    """

    def __init__(self):
        self._verdicts: List[PolicyVerdict] = []

    def record(self, verdict: PolicyVerdict) -> None:
        self._verdicts.append(verdict)

    @property
    def verdicts(self) -> List[PolicyVerdict]:
        return list(self._verdicts)

    @property
    def alternates(self) -> List[PolicyVerdict]:
        return [v for v in self._verdicts if v.is_alternate]

    @property
    def alternate_count(self) -> int:
        return len(self.alternates)

    def __len__(self) -> int:
        return len(self._verdicts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "verdicts": [v.to_dict() for v in self._verdicts],
            "alternate_count": self.alternate_count,
        }


_OUTCOME_STYLE = {
    Outcome.PRIMARY: "green",
    Outcome.SECONDARY: "cyan",
    Outcome.ALTERNATE: "bold yellow",
}


def verdict_table(verdicts: Iterable[PolicyVerdict], title: str = "Tolerant checks") -> Table:
    """Build a rich table of verdicts; alternate outcomes are highlighted."""
    table = Table(title=title)
    table.add_column("Check")
    table.add_column("Outcome")
    table.add_column("Observed")

    for verdict in verdicts:
        style = _OUTCOME_STYLE[verdict.outcome]
        label = verdict.outcome.value
        if verdict.is_alternate:
            label += " (review)"
        table.add_row(verdict.check, f"[{style}]{label}[/{style}]", verdict.description)

    return table


def print_verdicts(console: Console, verdicts: Iterable[PolicyVerdict]) -> None:
    verdicts = list(verdicts)
    if not verdicts:
        return
    console.print(verdict_table(verdicts))
