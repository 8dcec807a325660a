"""
Scenarios - read-only checks against the driven application.

Each scenario is a coroutine taking a fresh ``BankSession``. None of them
submits a transfer. ``run_scenarios`` gives every scenario its own browser
context and can run them concurrently.
"""

from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, Iterable, List, Optional
import asyncio
import logging
import time

from playwright.async_api import Error as PlaywrightError

from bank_ui_verifier.browsers.playwright_browser import PlaywrightBrowser
from bank_ui_verifier.config.credentials import Credentials
from bank_ui_verifier.config.settings import Settings
from bank_ui_verifier.exceptions import BankUIVerifierError, InteractionTimeoutError
from bank_ui_verifier.pages.session import BankSession
from bank_ui_verifier.reporting.verdicts import PolicyVerdict

logger = logging.getLogger(__name__)

Scenario = Callable[[BankSession], Awaitable[None]]

WRONG_PASSWORD = "wrong-password"


async def login_happy_path(session: BankSession) -> None:
    """Valid credentials land on the dashboard with a logout link."""
    await session.login_page.login()
    await session.dashboard.verify_logout_link_visible()


async def wrong_password_is_blocked(session: BankSession) -> None:
    """A wrong password keeps the user out, or takes a recognized alternate path."""
    credentials = session.credentials()
    await session.login_page.attempt_login(credentials.login, WRONG_PASSWORD)
    await session.login_page.verify_failed_login_outcome()


async def empty_fields_disable_submit(session: BankSession) -> None:
    """With both fields empty the submit control is disabled; it is never clicked."""
    await session.login_page.open()
    await session.login_page.verify_submit_disabled()


async def dashboard_shows_balance_and_operations(session: BankSession) -> None:
    """Dashboard headings, balance and recent operations are shown."""
    await session.login_page.login()
    await session.dashboard.verify_dashboard_visible()


async def logout_returns_to_login(session: BankSession) -> None:
    """Logging out returns to the login page."""
    await session.login_page.login()
    await session.dashboard.logout()


async def transfer_form_read_only(session: BankSession) -> None:
    """Fill the quick transfer form and check it could be submitted, without submitting."""
    await session.login_page.login()
    await session.transfer.open_from_dashboard()
    await session.transfer.verify_form_fields_visible()
    await session.transfer.fill_transfer_form(1, "1.00", "Test - read-only")
    await session.transfer.verify_execute_button_enabled()


async def transfer_form_heuristic(session: BankSession) -> None:
    """
    Same as the read-only transfer check, tolerating a non-``select`` recipient.

    Some combobox implementations are not HTML selects; selection failure is
    logged and the amount and title are still filled.
    """
    await session.login_page.login()
    await session.transfer.open_from_dashboard()
    await session.transfer.verify_form_fields_visible()

    try:
        await session.transfer.select_recipient(1)
    except (PlaywrightError, InteractionTimeoutError) as e:
        logger.warning(f"Recipient selection skipped: {e}")

    await session.transfer.fill_amount("1.00")
    await session.transfer.fill_title("Test - read-only (heuristics)")
    await session.transfer.verify_execute_button_enabled()


SCENARIOS: Dict[str, Scenario] = {
    "login": login_happy_path,
    "wrong-password": wrong_password_is_blocked,
    "empty-fields": empty_fields_disable_submit,
    "dashboard": dashboard_shows_balance_and_operations,
    "logout": logout_returns_to_login,
    "transfer": transfer_form_read_only,
    "transfer-heuristic": transfer_form_heuristic,
}


@dataclass
class ScenarioResult:
    """
    Result of one scenario run.

    Attributes:
        name: Scenario name
        passed: Whether every step and assertion passed
        verdicts: Tolerant-check verdicts recorded by the session
        error: Failure message, if any
        duration_ms: Wall time of the scenario
    """
    name: str
    passed: bool
    verdicts: List[PolicyVerdict] = field(default_factory=list)
    error: Optional[str] = None
    duration_ms: float = 0.0

    @property
    def used_alternate_path(self) -> bool:
        return any(v.is_alternate for v in self.verdicts)


async def run_scenario(
    browser: PlaywrightBrowser,
    settings: Settings,
    name: str,
    scenario: Scenario,
    credentials: Optional[Credentials] = None,
) -> ScenarioResult:
    """
    Run one scenario in its own browser context.

    Failures are captured in the result; cancellation propagates.
    """
    start = time.time()
    async with browser.session(settings, credentials=credentials) as session:
        try:
            await scenario(session)
        except (BankUIVerifierError, AssertionError, PlaywrightError) as e:
            logger.error(f"Scenario '{name}' failed: {e}")
            return ScenarioResult(
                name=name,
                passed=False,
                verdicts=session.verdicts.verdicts,
                error=f"{type(e).__name__}: {e}",
                duration_ms=(time.time() - start) * 1000,
            )

        logger.info(f"Scenario '{name}' passed")
        return ScenarioResult(
            name=name,
            passed=True,
            verdicts=session.verdicts.verdicts,
            duration_ms=(time.time() - start) * 1000,
        )


async def run_scenarios(
    browser: PlaywrightBrowser,
    settings: Settings,
    names: Optional[Iterable[str]] = None,
    parallel: bool = False,
    credentials: Optional[Credentials] = None,
) -> List[ScenarioResult]:
    """
    Run scenarios by name (all of them if ``names`` is None).

    Raises:
        KeyError: An unknown scenario name was requested
    """
    selected = list(names) if names else list(SCENARIOS)
    unknown = [n for n in selected if n not in SCENARIOS]
    if unknown:
        raise KeyError(f"Unknown scenario(s): {', '.join(unknown)}")

    if parallel:
        return list(await asyncio.gather(
            *(run_scenario(browser, settings, n, SCENARIOS[n], credentials) for n in selected)
        ))

    results = []
    for name in selected:
        results.append(await run_scenario(browser, settings, name, SCENARIOS[name], credentials))
    return results
