"""
Pytest configuration and fixtures.
"""

from typing import Dict, List, Optional, Tuple

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError


# =============================================================================
# MOCK PAGE
# =============================================================================

class MockLocator:
    """
    Mock Playwright locator.

    Matches are configured per selector string on the owning MockPage.
    """

    def __init__(
        self,
        selector: str,
        count: int = 0,
        tag: Optional[str] = None,
        visible: bool = False,
        error: Optional[Exception] = None,
    ):
        self.selector = selector
        self._count = count
        self._tag = tag
        self._visible = visible
        self._error = error
        self.filled: List[str] = []
        self.clicked = 0
        self.counted = 0

    @property
    def first(self) -> "MockLocator":
        return self

    def or_(self, other: "MockLocator") -> "MockLocator":
        return MockLocator(
            f"{self.selector} | {other.selector}",
            count=self._count + other._count,
            tag=self._tag or other._tag,
            visible=self._visible or other._visible,
            error=self._error or other._error,
        )

    async def count(self) -> int:
        self.counted += 1
        if self._error:
            raise self._error
        return self._count

    async def evaluate(self, script: str, arg=None, timeout: Optional[float] = None):
        if self._error:
            raise self._error
        return self._tag

    async def wait_for(self, state: str = "visible", timeout: Optional[float] = None) -> None:
        if self._error:
            raise self._error
        if state == "visible" and not self._visible:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {self.selector}")

    async def fill(self, value: str, timeout: Optional[float] = None) -> None:
        self.filled.append(value)

    async def click(self, timeout: Optional[float] = None) -> None:
        self.clicked += 1


class MockPage:
    """
    Mock Playwright page.

    Args:
        matches: selector -> (count, tag) for selectors that match something
        url: Current URL
        title: Page title
    """

    def __init__(
        self,
        matches: Optional[Dict[str, Tuple[int, Optional[str]]]] = None,
        url: str = "https://demo-bank.vercel.app/",
        title: str = "Demobank - Bankowość Internetowa - Logowanie",
        error: Optional[Exception] = None,
    ):
        self._matches = matches or {}
        self._error = error
        self.url = url
        self._title = title
        self.queried: List[str] = []
        self.locators: Dict[str, MockLocator] = {}

    def locator(self, selector: str) -> MockLocator:
        self.queried.append(selector)
        if selector not in self.locators:
            count, tag = self._matches.get(selector, (0, None))
            self.locators[selector] = MockLocator(
                selector, count=count, tag=tag, visible=count > 0, error=self._error
            )
        return self.locators[selector]

    async def title(self) -> str:
        return self._title


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def settings():
    """Provide test settings with short timeouts."""
    from bank_ui_verifier.config import Settings, TimeoutSettings

    return Settings(
        base_url="http://bank.test/",
        timeouts=TimeoutSettings(
            action_timeout_ms=500,
            navigation_timeout_ms=500,
            presence_probe_ms=100,
            inspection_timeout_ms=100,
        ),
    )


@pytest.fixture
def mock_page():
    """Factory for mock pages."""
    def make(matches=None, **kwargs) -> MockPage:
        return MockPage(matches, **kwargs)
    return make


@pytest.fixture
def mock_locator():
    """Factory for standalone mock locators."""
    def make(selector: str = "mock", **kwargs) -> MockLocator:
        return MockLocator(selector, **kwargs)
    return make


@pytest.fixture
def playwright_error():
    """A non-timeout Playwright error, as raised for a detached element."""
    return PlaywrightError("Element is not attached to the DOM")
