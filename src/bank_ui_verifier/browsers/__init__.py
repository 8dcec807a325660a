"""
Browsers module - Playwright browser lifecycle.
"""

from bank_ui_verifier.browsers.playwright_browser import PlaywrightBrowser

__all__ = [
    "PlaywrightBrowser",
]
