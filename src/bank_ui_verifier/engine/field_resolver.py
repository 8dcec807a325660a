"""
Field Resolver - find a form field by the text next to it.

Runs the candidate strategy chain in order and accepts the first strategy
that matches anything. When nothing matches, the resolver still returns a
locator: a ``Fallback`` wrapping the union query. It is valid to assert on,
but may resolve to zero elements, so callers check presence before
trusting it.

The resolver holds no state between calls and can be shared by sessions
running in parallel.
"""

from dataclasses import dataclass
from typing import Optional, Union, TYPE_CHECKING
import logging
import time

from bank_ui_verifier.engine.strategies import ElementKind, StrategyChain
from bank_ui_verifier.engine.text_matcher import AnchorFragment

if TYPE_CHECKING:
    from playwright.async_api import Locator, Page

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionResult:
    """
    Outcome of resolving one fragment.

    Attributes:
        locator: Locator to interact or assert with
        fragment: Folded fragment that was searched for
        rank: Rank of the strategy that produced the locator
        strategy: Name of that strategy
    """
    locator: "Locator"
    fragment: str
    rank: int = 0
    strategy: str = ""

    @property
    def is_found(self) -> bool:
        return False

    def describe(self) -> str:
        return f"'{self.fragment}' via {self.strategy} (rank {self.rank})"


@dataclass(frozen=True)
class Found(ResolutionResult):
    """
    A strategy matched at least one element.

    Attributes:
        kind: Kind of element the winning strategy searched for
        corrected: True when the element-kind disambiguator swapped it in
    """
    kind: ElementKind = ElementKind.UNKNOWN
    corrected: bool = False

    @property
    def is_found(self) -> bool:
        return True

    def describe(self) -> str:
        suffix = " (corrected)" if self.corrected else ""
        return f"'{self.fragment}' -> {self.kind.value} via {self.strategy} (rank {self.rank}){suffix}"


@dataclass(frozen=True)
class Fallback(ResolutionResult):
    """
    No strategy matched; best-effort union locator.

    Treat as "verify presence before trusting".
    """

    def describe(self) -> str:
        return f"'{self.fragment}' -> best effort via {self.strategy} (rank {self.rank})"


class FieldResolver:
    """
    Resolve fields that have no stable identifier.

    Example:
        >>> resolver = FieldResolver()
        >>> result = await resolver.resolve(page, "kwota")
        >>> if result.is_found:
        ...     await result.locator.fill("1.00")
    """

    def __init__(self, chain: Optional[StrategyChain] = None):
        self._chain = chain or StrategyChain.default()

    @property
    def chain(self) -> StrategyChain:
        return self._chain

    async def resolve(
        self,
        page: "Page",
        fragment: Union[str, AnchorFragment],
    ) -> ResolutionResult:
        """
        Resolve a fragment to a single field locator.

        Strategies run strictly one after another; the first one that finds
        anything wins.

        Args:
            page: Live page
            fragment: Text near the wanted field

        Returns:
            Found, or Fallback if no strategy matched

        Raises:
            EmptyFragmentError: The fragment is empty
        """
        anchor = AnchorFragment.coerce(fragment)
        start_time = time.time()

        for strategy in self._chain:
            candidate = await strategy.find(page, anchor)
            if candidate is None:
                logger.debug(f"{strategy.name} found nothing for '{anchor}'")
                continue

            result = Found(
                locator=candidate.locator,
                fragment=anchor.value,
                kind=candidate.kind,
                rank=candidate.rank,
                strategy=candidate.strategy,
            )
            elapsed = (time.time() - start_time) * 1000
            logger.info(f"Resolved {result.describe()} ({elapsed:.0f}ms)")
            return result

        union = self._chain.union
        logger.warning(
            f"No strategy matched '{anchor}', falling back to {union.name}; "
            "verify presence before trusting this locator"
        )
        return Fallback(
            locator=union.locator(page, anchor),
            fragment=anchor.value,
            rank=union.rank,
            strategy=union.name,
        )
