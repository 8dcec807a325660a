"""
Element-Kind Disambiguator - corrective pass after resolution.

The known failure mode of text-anchored lookup is a ``select`` sharing a
container with the label of a free-text field. After resolving, the
disambiguator reads the tag of the element it got. When a text field was
wanted but a ``select`` came back, it reruns only the following-input
strategy and swaps that candidate in if there is one.

Inspection failures (element detached, navigation in progress, nothing
matched) count as UNKNOWN, which is never treated as a mismatch.
"""

from typing import Optional, Union, TYPE_CHECKING
import logging

from playwright.async_api import Error as PlaywrightError

from bank_ui_verifier.engine.field_resolver import FieldResolver, Found, ResolutionResult
from bank_ui_verifier.engine.strategies import CandidateStrategy, ElementKind, Relation, StrategyChain
from bank_ui_verifier.engine.text_matcher import AnchorFragment

if TYPE_CHECKING:
    from playwright.async_api import Locator, Page

logger = logging.getLogger(__name__)

TAG_NAME_JS = "el => el.tagName.toLowerCase()"


class ElementKindDisambiguator:
    """
    Reconcile a resolution result with the kind of element the caller wants.

    ``reconcile`` is idempotent: a second pass over its own output changes
    nothing.
    """

    def __init__(
        self,
        chain: Optional[StrategyChain] = None,
        inspection_timeout_ms: int = 1000,
    ):
        self._chain = chain or StrategyChain.default()
        self._inspection_timeout_ms = inspection_timeout_ms
        try:
            self._corrective: Optional[CandidateStrategy] = self._chain.strategy_for(
                Relation.FOLLOWING, ElementKind.INPUT
            )
        except KeyError:
            logger.debug("Chain has no following-input strategy; selects are never corrected")
            self._corrective = None

    async def inspect_kind(self, locator: "Locator") -> ElementKind:
        """
        Read the tag of the element behind a locator.

        Returns:
            The element's kind, or UNKNOWN if it cannot be inspected
        """
        try:
            if await locator.count() == 0:
                return ElementKind.UNKNOWN
            tag = await locator.evaluate(TAG_NAME_JS, timeout=self._inspection_timeout_ms)
        except PlaywrightError as e:
            logger.debug(f"Tag inspection failed, treating kind as unknown: {e}")
            return ElementKind.UNKNOWN
        return ElementKind.from_tag(tag)

    async def reconcile(
        self,
        page: "Page",
        result: ResolutionResult,
        expected_kind: ElementKind,
    ) -> ResolutionResult:
        """
        Swap a wrongly-kinded result for the following-input candidate.

        Args:
            page: Live page the result was resolved on
            result: Result from the field resolver
            expected_kind: Kind the caller intends to interact with

        Returns:
            The corrected result, or ``result`` itself when no correction
            applies or none was found (including chains without a
            following-input strategy)
        """
        if not expected_kind.is_text_entry:
            return result

        actual = await self.inspect_kind(result.locator)
        if actual is not ElementKind.SELECT:
            return result

        corrective = self._corrective
        if corrective is None:
            logger.warning(
                f"Wanted {expected_kind.value} for '{result.fragment}' but got a select; "
                "no following-input strategy to correct it with"
            )
            return result

        candidate = await corrective.find(page, AnchorFragment(result.fragment))
        if candidate is None:
            logger.warning(
                f"Wanted {expected_kind.value} for '{result.fragment}' but got a select; "
                f"{corrective.name} found nothing, keeping the select"
            )
            return result

        corrected = Found(
            locator=candidate.locator,
            fragment=result.fragment,
            kind=candidate.kind,
            rank=candidate.rank,
            strategy=candidate.strategy,
            corrected=True,
        )
        logger.info(f"Replaced select with {corrected.describe()}")
        return corrected


async def resolve_field(
    page: "Page",
    fragment: Union[str, AnchorFragment],
    expected_kind: ElementKind,
    resolver: Optional[FieldResolver] = None,
    disambiguator: Optional[ElementKindDisambiguator] = None,
) -> ResolutionResult:
    """
    Resolve a fragment and reconcile the result with the expected kind.

    Args:
        page: Live page
        fragment: Text near the wanted field
        expected_kind: Kind the caller intends to interact with
        resolver: Resolver to use (a default one if omitted)
        disambiguator: Disambiguator to use (a default one if omitted)

    Returns:
        Reconciled resolution result
    """
    resolver = resolver or FieldResolver()
    disambiguator = disambiguator or ElementKindDisambiguator(chain=resolver.chain)
    result = await resolver.resolve(page, fragment)
    return await disambiguator.reconcile(page, result, expected_kind)
