"""
Transfer Page - quick transfer ("szybki przelew") form, read-only.

The amount and title fields carry no name or test id, so they are found by
the text next to them through the field resolver. The form is filled but
never submitted.
"""

from typing import List, TYPE_CHECKING
import logging
import re

from playwright.async_api import expect

from bank_ui_verifier.engine.field_resolver import ResolutionResult
from bank_ui_verifier.engine.strategies import ElementKind
from bank_ui_verifier.reporting.verdicts import PolicyVerdict

if TYPE_CHECKING:
    from playwright.async_api import Locator
    from bank_ui_verifier.pages.session import BankSession

logger = logging.getLogger(__name__)

AMOUNT_FRAGMENT = "kwota"
TITLE_FRAGMENT = "tytu"
TRANSFER_URL = r"quick_payment|pulpit"


class TransferPage:
    """Quick transfer form."""

    def __init__(self, session: "BankSession"):
        self._session = session

    @property
    def quick_transfer_link(self) -> "Locator":
        return self._session.page.get_by_role("link", name=re.compile("szybki przelew", re.I))

    @property
    def recipient_selector(self) -> "Locator":
        return self._session.page.get_by_role("combobox").first

    @property
    def execute_button(self) -> "Locator":
        return self._session.page.get_by_role("button", name=re.compile("wykonaj", re.I))

    async def amount_field(self) -> ResolutionResult:
        return await self._session.resolve_field(AMOUNT_FRAGMENT, ElementKind.INPUT)

    async def title_field(self) -> ResolutionResult:
        return await self._session.resolve_field(TITLE_FRAGMENT, ElementKind.INPUT)

    async def open_from_dashboard(self) -> None:
        """Follow the quick transfer link from the dashboard."""
        await self._session.interactions.click(self.quick_transfer_link, operation="open quick transfer")
        await self._session.interactions.wait_for_url(TRANSFER_URL, operation="open quick transfer")

    async def verify_transfer_page_loaded(self) -> List[PolicyVerdict]:
        await self._session.interactions.wait_for_url(TRANSFER_URL, operation="transfer page")
        return await self.verify_form_fields_visible()

    async def _verify_field_shown(self, check: str, result: ResolutionResult) -> List[PolicyVerdict]:
        session = self._session
        if result.is_found:
            await session.interactions.wait_visible(
                result.locator,
                operation=check,
                fragment=result.fragment,
                strategy=result.strategy,
            )
            return []
        verdict = await session.policy.presence_or_visibility(
            check,
            result.locator,
            session.settings.timeouts.presence_probe_ms,
            log=session.verdicts,
        )
        return [verdict]

    async def verify_form_fields_visible(self) -> List[PolicyVerdict]:
        """
        Recipient, amount, title and execute controls are shown.

        Fields resolved only on a best-effort basis are checked for
        presence rather than visibility.

        Returns:
            Verdicts of any tolerant checks that were needed
        """
        interactions = self._session.interactions
        await interactions.wait_visible(self.recipient_selector, operation="transfer form")

        verdicts = []
        verdicts += await self._verify_field_shown("transfer-amount", await self.amount_field())
        verdicts += await self._verify_field_shown("transfer-title", await self.title_field())

        await interactions.wait_visible(self.execute_button, operation="transfer form")
        return verdicts

    async def verify_execute_button_enabled(self) -> None:
        await expect(self.execute_button).to_be_enabled(
            timeout=self._session.settings.timeouts.action_timeout_ms
        )

    async def select_recipient(self, index: int) -> None:
        """Select a recipient by option index (0 is usually a placeholder)."""
        await self._session.interactions.select_index(self.recipient_selector, index, operation="select recipient")

    async def _fill_resolved(self, result: ResolutionResult, value: str, operation: str) -> None:
        await self._session.interactions.fill(
            result.locator,
            value,
            operation=operation,
            fragment=result.fragment,
            strategy=result.strategy,
        )

    async def fill_amount(self, amount: str) -> None:
        await self._fill_resolved(await self.amount_field(), amount, "fill amount")

    async def fill_title(self, title: str) -> None:
        await self._fill_resolved(await self.title_field(), title, "fill title")

    async def fill_transfer_form(self, recipient_index: int, amount: str, title: str) -> None:
        """Fill recipient, amount and title. Does not submit."""
        await self.select_recipient(recipient_index)
        await self.fill_amount(amount)
        await self.fill_title(title)
