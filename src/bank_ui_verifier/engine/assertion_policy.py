"""
Tolerant Assertion Policy - accept one of several legitimate outcomes.

Some states of the driven application differ between environments for no
reason the suite controls. Instead of letting that make tests flaky, a
tolerant check names every outcome it accepts and evaluates them in a fixed
order:

1. PRIMARY   - the expected state
2. SECONDARY - a recognized secondary signal
3. ALTERNATE - a recognized alternate terminal state

The first outcome observed wins. ALTERNATE passes are logged at WARNING on
``bank_ui_verifier.alternate_paths`` and flagged on the verdict, so they
stay auditable. If nothing recognized is observed the check fails with
``OutcomeAmbiguousError``.
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Pattern, Sequence, Union, TYPE_CHECKING
import logging
import re

from playwright.async_api import Error as PlaywrightError

from bank_ui_verifier.engine.text_matcher import text_contains
from bank_ui_verifier.exceptions import OutcomeAmbiguousError
from bank_ui_verifier.reporting.verdicts import Outcome, PolicyVerdict, VerdictLog

if TYPE_CHECKING:
    from playwright.async_api import Locator, Page

logger = logging.getLogger(__name__)
alternate_logger = logging.getLogger("bank_ui_verifier.alternate_paths")

Probe = Callable[[], Awaitable[bool]]


@dataclass(frozen=True)
class OutcomeProbe:
    """
    One recognized outcome and how to observe it.

    Attributes:
        outcome: Which outcome this probe stands for
        description: What is being observed, used in verdicts and errors
        check: Coroutine factory returning True when observed
    """
    outcome: Outcome
    description: str
    check: Probe


def visible(locator: "Locator", timeout_ms: int, description: str, outcome: Outcome = Outcome.PRIMARY) -> OutcomeProbe:
    """Probe that passes when the locator becomes visible within the timeout."""
    async def check() -> bool:
        await locator.wait_for(state="visible", timeout=timeout_ms)
        return True
    return OutcomeProbe(outcome, description, check)


def attached(locator: "Locator", description: str, outcome: Outcome = Outcome.SECONDARY) -> OutcomeProbe:
    """Probe that passes when the locator matches at least one element in the DOM."""
    async def check() -> bool:
        return await locator.count() > 0
    return OutcomeProbe(outcome, description, check)


def title_contains(page: "Page", fragment: str, description: str, outcome: Outcome = Outcome.PRIMARY) -> OutcomeProbe:
    """Probe that passes when the page title contains the fragment (case folded)."""
    async def check() -> bool:
        return text_contains(await page.title(), fragment)
    return OutcomeProbe(outcome, description, check)


def url_matches(
    page: "Page",
    pattern: Union[str, Pattern[str]],
    description: str,
    outcome: Outcome = Outcome.ALTERNATE,
) -> OutcomeProbe:
    """Probe that passes when the current URL matches the pattern."""
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern

    async def check() -> bool:
        return regex.search(page.url) is not None
    return OutcomeProbe(outcome, description, check)


class TolerantAssertionPolicy:
    """
    Evaluate tolerant checks.

    Stateless: verdicts go to the VerdictLog passed in by the caller.

    Example:
        >>> policy = TolerantAssertionPolicy()
        >>> verdict = await policy.evaluate("failed-login", [
        ...     title_contains(page, "logowanie", "still on login page"),
        ...     visible(page.get_by_role("alert").first, 1000, "error alert", Outcome.SECONDARY),
        ...     url_matches(page, r"pulpit", "redirected to dashboard"),
        ... ])
    """

    async def evaluate(
        self,
        check: str,
        probes: Sequence[OutcomeProbe],
        log: Optional[VerdictLog] = None,
    ) -> PolicyVerdict:
        """
        Run probes in outcome priority order and return the first pass.

        A probe that raises a Playwright error (timeout included) counts as
        not observed.

        Args:
            check: Name of the check, for verdicts and errors
            probes: Recognized outcomes; evaluated PRIMARY, SECONDARY, ALTERNATE
            log: Optional verdict log to record the verdict in

        Returns:
            Verdict for the first observed outcome

        Raises:
            OutcomeAmbiguousError: No recognized outcome was observed
        """
        if not probes:
            raise ValueError(f"Tolerant check '{check}' has no probes")

        ordered = sorted(probes, key=lambda p: p.outcome.priority)
        tried = []

        for probe in ordered:
            tried.append(f"{probe.outcome.value}: {probe.description}")
            try:
                observed = await probe.check()
            except PlaywrightError as e:
                logger.debug(f"[{check}] probe '{probe.description}' not observed: {e}")
                observed = False

            if not observed:
                continue

            verdict = PolicyVerdict(check=check, outcome=probe.outcome, description=probe.description)
            if verdict.is_alternate:
                alternate_logger.warning(f"[{check}] accepted alternate path: {probe.description}")
            else:
                logger.info(f"[{check}] passed via {probe.outcome.value}: {probe.description}")

            if log is not None:
                log.record(verdict)
            return verdict

        raise OutcomeAmbiguousError(
            f"Tolerant check '{check}' observed none of its recognized outcomes",
            check=check,
            observed=tried,
        )

    async def presence_or_visibility(
        self,
        check: str,
        locator: "Locator",
        probe_timeout_ms: int,
        log: Optional[VerdictLog] = None,
    ) -> PolicyVerdict:
        """
        Accept an element that is visible, or at least attached to the DOM.

        Used for elements that are sometimes hidden by styles, and for
        best-effort fallback locators.
        """
        return await self.evaluate(
            check,
            [
                visible(locator, probe_timeout_ms, "element is visible"),
                attached(locator, "element is present in the DOM but not visible"),
            ],
            log=log,
        )
