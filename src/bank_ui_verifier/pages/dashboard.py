"""
Dashboard Page - headings, balance, recent operations and logout.
"""

from typing import TYPE_CHECKING
import logging
import re

from playwright.async_api import expect

from bank_ui_verifier.pages.login import LOGIN_TITLE, LOGIN_URL
from bank_ui_verifier.reporting.verdicts import PolicyVerdict

if TYPE_CHECKING:
    from playwright.async_api import Locator
    from bank_ui_verifier.pages.session import BankSession

logger = logging.getLogger(__name__)


class DashboardPage:
    """Dashboard ("pulpit") of the driven application."""

    def __init__(self, session: "BankSession"):
        self._session = session

    @property
    def personal_accounts_heading(self) -> "Locator":
        return self._session.page.get_by_role("heading", name=re.compile("konta osobiste", re.I))

    @property
    def available_balance_text(self) -> "Locator":
        return self._session.page.get_by_text(re.compile("dostępne środki", re.I)).first

    @property
    def recent_operations_heading(self) -> "Locator":
        return self._session.page.get_by_role("heading", name=re.compile("ostatnie operacje", re.I))

    @property
    def recent_operations_table(self) -> "Locator":
        return self._session.page.locator("table").first

    @property
    def logout_link(self) -> "Locator":
        return self._session.page.get_by_role("link", name=re.compile("wyloguj", re.I))

    @property
    def current_url(self) -> str:
        return self._session.page.url

    async def page_title(self) -> str:
        return await self._session.page.title()

    async def verify_balance_shown(self) -> PolicyVerdict:
        """
        The balance is visible, or at least present.

        The balance node is sometimes in the DOM but hidden by styles.
        """
        session = self._session
        return await session.policy.presence_or_visibility(
            "dashboard-balance",
            self.available_balance_text,
            session.settings.timeouts.presence_probe_ms,
            log=session.verdicts,
        )

    async def verify_dashboard_visible(self) -> PolicyVerdict:
        """
        Key dashboard sections are shown.

        Returns:
            Verdict of the tolerant balance check
        """
        interactions = self._session.interactions
        await interactions.wait_visible(self.personal_accounts_heading, operation="dashboard")
        verdict = await self.verify_balance_shown()
        await interactions.wait_visible(self.recent_operations_heading, operation="dashboard")
        await interactions.wait_visible(self.recent_operations_table, operation="dashboard")
        return verdict

    async def verify_logout_link_visible(self) -> None:
        await self._session.interactions.wait_visible(self.logout_link, operation="logout link")

    async def logout(self) -> None:
        """Log out and wait for the login page."""
        session = self._session
        await session.interactions.click(self.logout_link, operation="logout")
        await session.interactions.wait_for_url(LOGIN_URL, operation="logout")
        await expect(session.page).to_have_title(
            re.compile(LOGIN_TITLE, re.I),
            timeout=session.settings.timeouts.navigation_timeout_ms,
        )
        logger.info("Logged out")
