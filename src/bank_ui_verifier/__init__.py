"""
Bank UI Verifier - browser-driven UI checks for a Polish demo banking app.

Form fields without stable identifiers are found by the text next to them
through an ordered chain of lookup strategies, and outcomes that differ
between environments are checked with a tolerant assertion policy.

Example:
    >>> from bank_ui_verifier import PlaywrightBrowser, load_config
    >>> settings = load_config()
    >>> browser = PlaywrightBrowser()
    >>> await browser.launch(settings.browser)
    >>> async with browser.session(settings) as session:
    ...     await session.login_page.login()
    ...     amount = await session.resolve_field("kwota")
"""

__version__ = "0.1.0"

# Public API exports
from bank_ui_verifier.config import Settings, load_config, load_credentials
from bank_ui_verifier.engine import (
    ElementKind,
    ElementKindDisambiguator,
    FieldResolver,
    StrategyChain,
    TolerantAssertionPolicy,
)
from bank_ui_verifier.browsers import PlaywrightBrowser
from bank_ui_verifier.pages import BankSession

__all__ = [
    "Settings",
    "load_config",
    "load_credentials",
    "ElementKind",
    "ElementKindDisambiguator",
    "FieldResolver",
    "StrategyChain",
    "TolerantAssertionPolicy",
    "PlaywrightBrowser",
    "BankSession",
    "__version__",
]
