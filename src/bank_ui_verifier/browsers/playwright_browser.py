"""
Playwright Browser - browser lifecycle and isolated sessions.

One browser process is shared; every scenario gets its own browser context,
so sessions can run in parallel without sharing cookies or storage.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional
import logging

from playwright.async_api import Error as PlaywrightError

from bank_ui_verifier.config.credentials import Credentials
from bank_ui_verifier.config.settings import BrowserSettings, Settings
from bank_ui_verifier.exceptions import BrowserError, BrowserLaunchError
from bank_ui_verifier.pages.session import BankSession

logger = logging.getLogger(__name__)


class PlaywrightBrowser:
    """
    Playwright browser shared by the sessions of one run.

    Example:
        >>> browser = PlaywrightBrowser()
        >>> await browser.launch(settings.browser)
        >>> async with browser.session(settings) as session:
        ...     await session.login_page.login()
        >>> await browser.close()
    """

    def __init__(self):
        """Initialize the browser (not launched yet)."""
        self._playwright: Any = None
        self._browser: Any = None
        self._settings: Optional[BrowserSettings] = None

    @property
    def is_connected(self) -> bool:
        """Check if browser is connected."""
        return self._browser is not None and self._browser.is_connected()

    async def launch(self, settings: Optional[BrowserSettings] = None) -> None:
        """
        Launch the browser.

        Args:
            settings: Browser settings (defaults if omitted)
        """
        settings = settings or BrowserSettings()
        try:
            from playwright.async_api import async_playwright

            self._playwright = await async_playwright().start()

            launcher = getattr(self._playwright, settings.browser_type)
            options = {"headless": settings.headless, "slow_mo": settings.slow_mo}
            if settings.channel:
                options["channel"] = settings.channel

            self._browser = await launcher.launch(**options)
            self._settings = settings

            logger.info(f"Launched {settings.browser_type} browser (headless={settings.headless})")

        except PlaywrightError as e:
            await self.close()
            raise BrowserLaunchError(f"Failed to launch browser: {e}") from e

    async def new_context(self, settings: Settings) -> Any:
        """
        Create an isolated browser context.

        Args:
            settings: Settings providing viewport, locale and timeouts

        Returns:
            Playwright BrowserContext
        """
        if not self._browser:
            raise BrowserError("Browser not launched. Call launch() first.")

        context = await self._browser.new_context(
            viewport={
                "width": settings.browser.viewport_width,
                "height": settings.browser.viewport_height,
            },
            locale=settings.browser.locale,
        )
        context.set_default_timeout(settings.timeouts.action_timeout_ms)
        context.set_default_navigation_timeout(settings.timeouts.navigation_timeout_ms)
        return context

    @asynccontextmanager
    async def session(
        self,
        settings: Settings,
        credentials: Optional[Credentials] = None,
    ) -> AsyncIterator[BankSession]:
        """
        Open a session in a fresh context and close the context afterwards.

        Args:
            settings: Settings for the session
            credentials: Credentials to use instead of the configured source
        """
        context = await self.new_context(settings)
        try:
            page = await context.new_page()
            yield BankSession(page, settings, credentials=credentials)
        finally:
            await context.close()

    async def close(self) -> None:
        """Close the browser and cleanup."""
        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.info("Browser closed")
