"""
Bank Session - composition root for one scenario.

A session owns nothing but references: the Playwright page of an isolated
browser context, the settings, and the stateless collaborators (resolver,
disambiguator, assertion policy) that the page accessors share.
"""

from typing import Optional, Union, TYPE_CHECKING
from urllib.parse import urljoin
import logging

from playwright.async_api import Error as PlaywrightError

from bank_ui_verifier.config.credentials import Credentials, load_credentials
from bank_ui_verifier.config.settings import Settings
from bank_ui_verifier.engine.assertion_policy import TolerantAssertionPolicy
from bank_ui_verifier.engine.disambiguator import ElementKindDisambiguator
from bank_ui_verifier.engine.field_resolver import FieldResolver, ResolutionResult
from bank_ui_verifier.engine.strategies import ElementKind
from bank_ui_verifier.engine.text_matcher import AnchorFragment
from bank_ui_verifier.exceptions import NavigationError
from bank_ui_verifier.pages.dashboard import DashboardPage
from bank_ui_verifier.pages.interactions import Interactions
from bank_ui_verifier.pages.login import LoginPage
from bank_ui_verifier.pages.transfer import TransferPage
from bank_ui_verifier.reporting.verdicts import VerdictLog

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)


class BankSession:
    """
    One scenario's handle on the driven application.

    Example:
        >>> session = BankSession(page, settings)
        >>> await session.login_page.login()
        >>> await session.dashboard.verify_dashboard_visible()
    """

    def __init__(
        self,
        page: "Page",
        settings: Settings,
        credentials: Optional[Credentials] = None,
        resolver: Optional[FieldResolver] = None,
        disambiguator: Optional[ElementKindDisambiguator] = None,
        policy: Optional[TolerantAssertionPolicy] = None,
        verdicts: Optional[VerdictLog] = None,
    ):
        self.page = page
        self.settings = settings
        self.resolver = resolver or FieldResolver()
        self.disambiguator = disambiguator or ElementKindDisambiguator(
            chain=self.resolver.chain,
            inspection_timeout_ms=settings.timeouts.inspection_timeout_ms,
        )
        self.policy = policy or TolerantAssertionPolicy()
        self.verdicts = verdicts if verdicts is not None else VerdictLog()
        self.interactions = Interactions(page, settings.timeouts)

        self._credentials = credentials
        self.login_page = LoginPage(self)
        self.dashboard = DashboardPage(self)
        self.transfer = TransferPage(self)

    def credentials(self) -> Credentials:
        """Credentials for this session, read on first use only."""
        if self._credentials is None:
            self._credentials = load_credentials(self.settings)
        return self._credentials

    def url(self, path: str = "/") -> str:
        return urljoin(self.settings.base_url.rstrip("/") + "/", path.lstrip("/"))

    async def open(self, path: str = "/") -> None:
        """Navigate to a path under the configured base URL."""
        url = self.url(path)
        logger.debug(f"Navigating to {url}")
        try:
            await self.page.goto(url, timeout=self.settings.timeouts.navigation_timeout_ms)
        except PlaywrightError as e:
            raise NavigationError(f"Failed to navigate to {url}: {e}", url=url) from e

    async def resolve_field(
        self,
        fragment: Union[str, AnchorFragment],
        expected_kind: ElementKind = ElementKind.INPUT,
    ) -> ResolutionResult:
        """Resolve a field by nearby text and reconcile it with the expected kind."""
        result = await self.resolver.resolve(self.page, fragment)
        return await self.disambiguator.reconcile(self.page, result, expected_kind)
