"""
Interactions - bounded waits and actions shared by the page accessors.

Every wait is bounded by ``TimeoutSettings``. An expired wait raises
``InteractionTimeoutError`` carrying the operation and, for resolved
fields, the fragment and strategy that produced the locator. Nothing here
retries.
"""

from typing import Optional, Pattern, Union, TYPE_CHECKING
import logging
import re

from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import expect

from bank_ui_verifier.config.settings import TimeoutSettings
from bank_ui_verifier.exceptions import InteractionTimeoutError

if TYPE_CHECKING:
    from playwright.async_api import Locator, Page

logger = logging.getLogger(__name__)


class Interactions:
    """
    Waits and actions against one page.

    Args:
        page: Playwright page of the session
        timeouts: Wait bounds
    """

    def __init__(self, page: "Page", timeouts: TimeoutSettings):
        self._page = page
        self._timeouts = timeouts

    @property
    def timeouts(self) -> TimeoutSettings:
        return self._timeouts

    def _timeout_error(
        self,
        what: str,
        timeout_ms: int,
        operation: str,
        fragment: Optional[str],
        strategy: Optional[str],
    ) -> InteractionTimeoutError:
        target = f" for '{fragment}' ({strategy})" if fragment else ""
        logger.error(f"{operation}: {what}{target} timed out after {timeout_ms}ms")
        return InteractionTimeoutError(
            f"{operation}: {what}{target} timed out after {timeout_ms}ms",
            timeout_ms=timeout_ms,
            operation=operation,
            fragment=fragment,
            strategy=strategy,
        )

    async def wait_visible(
        self,
        locator: "Locator",
        operation: str,
        fragment: Optional[str] = None,
        strategy: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ) -> None:
        timeout_ms = timeout_ms or self._timeouts.action_timeout_ms
        try:
            await locator.wait_for(state="visible", timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise self._timeout_error("wait for visible", timeout_ms, operation, fragment, strategy) from e

    async def wait_enabled(
        self,
        locator: "Locator",
        operation: str,
        fragment: Optional[str] = None,
        strategy: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ) -> None:
        """Wait until the locator's own element is enabled."""
        timeout_ms = timeout_ms or self._timeouts.action_timeout_ms
        try:
            await expect(locator).to_be_enabled(timeout=timeout_ms)
        except AssertionError as e:
            raise self._timeout_error("wait for enabled", timeout_ms, operation, fragment, strategy) from e

    async def wait_for_url(self, pattern: Union[str, Pattern[str]], operation: str) -> None:
        timeout_ms = self._timeouts.navigation_timeout_ms
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        try:
            await self._page.wait_for_url(regex, timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise self._timeout_error(
                f"wait for URL /{regex.pattern}/ (at {self._page.url})", timeout_ms, operation, None, None
            ) from e

    async def fill(
        self,
        locator: "Locator",
        value: str,
        operation: str,
        fragment: Optional[str] = None,
        strategy: Optional[str] = None,
    ) -> None:
        await self.wait_visible(locator, operation, fragment, strategy)
        timeout_ms = self._timeouts.action_timeout_ms
        try:
            await locator.fill(value, timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise self._timeout_error("fill", timeout_ms, operation, fragment, strategy) from e

    async def click(self, locator: "Locator", operation: str) -> None:
        """Click once the element is visible and enabled; never clicks a disabled control."""
        await self.wait_visible(locator, operation)
        await self.wait_enabled(locator, operation)
        timeout_ms = self._timeouts.action_timeout_ms
        try:
            await locator.click(timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise self._timeout_error("click", timeout_ms, operation, None, None) from e

    async def select_index(self, locator: "Locator", index: int, operation: str) -> None:
        await self.wait_visible(locator, operation)
        timeout_ms = self._timeouts.action_timeout_ms
        try:
            await locator.select_option(index=index, timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise self._timeout_error(f"select option #{index}", timeout_ms, operation, None, None) from e
