"""
Candidate Strategies - ordered lookups from an anchor to a form field.

Strategies (tried in order):
1. NESTED_INPUT     - input inside (or equal to) an anchor element
2. NESTED_TEXTAREA  - textarea inside (or equal to) an anchor element
3. FOLLOWING_INPUT  - first input after an anchor in document order
4. NESTED_SELECT    - select inside an anchor element
5. UNION_FALLBACK   - all of the above in one locator, never counted

"Inside" relations are more trustworthy than "following" ones: the next
input in document order may belong to a later, unrelated label. ``select``
comes last because the fields looked up by text are free-text fields, and
a dropdown sharing the label's container is usually a different field
(e.g. the recipient list).

Each strategy keeps only the first match in document order. There is no
scoring between several matches of the same strategy.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple, Union, TYPE_CHECKING
import logging

from bank_ui_verifier.engine.text_matcher import AnchorFragment, anchor_xpath

if TYPE_CHECKING:
    from playwright.async_api import Locator, Page

logger = logging.getLogger(__name__)


class ElementKind(Enum):
    """Kind of form element, as searched for or as inspected."""
    INPUT = "input"
    TEXTAREA = "textarea"
    SELECT = "select"
    UNKNOWN = "unknown"

    @classmethod
    def from_tag(cls, tag: Optional[str]) -> "ElementKind":
        """Map an HTML tag name to a kind; anything unexpected is UNKNOWN."""
        if not tag:
            return cls.UNKNOWN
        try:
            kind = cls(tag.strip().lower())
        except ValueError:
            return cls.UNKNOWN
        return kind

    @property
    def is_text_entry(self) -> bool:
        return self in (ElementKind.INPUT, ElementKind.TEXTAREA)


class Relation(Enum):
    """How a field relates to its anchor element."""
    NESTED = "nested"
    FOLLOWING = "following"


# Playwright selector filter keeping rendered elements only
VISIBLE_ONLY = "visible=true"

# Hidden inputs never hold a user-visible value
_FIELD_FILTERS = {
    ElementKind.INPUT: "[not(@type='hidden')]",
    ElementKind.TEXTAREA: "",
    ElementKind.SELECT: "",
}


@dataclass(frozen=True)
class Candidate:
    """
    First match produced by one strategy.

    Attributes:
        locator: Locator narrowed to the first match
        kind: Kind the strategy searched for
        rank: Position of the strategy in the chain (1-based)
        strategy: Strategy name, for logs and diagnostics
    """
    locator: "Locator"
    kind: ElementKind
    rank: int
    strategy: str


@dataclass(frozen=True)
class CandidateStrategy:
    """
    One anchor-to-field lookup.

    Side-effect free: the only browser call is ``count()`` on a lazily
    built locator.
    """
    rank: int
    name: str
    relation: Relation
    kind: ElementKind

    def __post_init__(self):
        if self.kind not in _FIELD_FILTERS:
            raise ValueError(f"Strategy kind must be a concrete field kind, got {self.kind}")

    def step(self) -> str:
        """XPath step from an anchor to the field."""
        node = f"{self.kind.value}{_FIELD_FILTERS[self.kind]}"
        if self.relation is Relation.NESTED:
            return f"/descendant-or-self::{node}"
        return f"/following::{node}[1]"

    def selector(self, fragment: Union[str, AnchorFragment]) -> str:
        """
        Chained selector: anchors, rendered anchors only, then the step.

        The step runs relative to each visible anchor, so text hidden by
        styles never leads to a field.
        """
        return f"xpath={anchor_xpath(fragment)} >> {VISIBLE_ONLY} >> xpath=.{self.step()}"

    def locator(self, page: "Page", fragment: Union[str, AnchorFragment]) -> "Locator":
        return page.locator(self.selector(fragment)).first

    async def find(self, page: "Page", fragment: Union[str, AnchorFragment]) -> Optional[Candidate]:
        """
        Look for the first matching field.

        Args:
            page: Live page
            fragment: Anchor fragment

        Returns:
            Candidate, or None if the strategy matched nothing
        """
        locator = self.locator(page, fragment)
        if await locator.count() > 0:
            return Candidate(locator=locator, kind=self.kind, rank=self.rank, strategy=self.name)
        return None


@dataclass(frozen=True)
class UnionStrategy:
    """
    Single query joining every strategy of the chain.

    Used to build the fallback locator. It is never counted: the result is
    allowed to resolve to zero elements when the caller asserts on it.
    """
    rank: int
    name: str
    members: Tuple[CandidateStrategy, ...]

    def selectors(self, fragment: Union[str, AnchorFragment]) -> Tuple[str, ...]:
        return tuple(member.selector(fragment) for member in self.members)

    def locator(self, page: "Page", fragment: Union[str, AnchorFragment]) -> "Locator":
        """Locator matching any member, joined with ``Locator.or_``."""
        selectors = self.selectors(fragment)
        union = page.locator(selectors[0])
        for selector in selectors[1:]:
            union = union.or_(page.locator(selector))
        return union.first


NESTED_INPUT = CandidateStrategy(1, "nested-input", Relation.NESTED, ElementKind.INPUT)
NESTED_TEXTAREA = CandidateStrategy(2, "nested-textarea", Relation.NESTED, ElementKind.TEXTAREA)
FOLLOWING_INPUT = CandidateStrategy(3, "following-input", Relation.FOLLOWING, ElementKind.INPUT)
NESTED_SELECT = CandidateStrategy(4, "nested-select", Relation.NESTED, ElementKind.SELECT)

DEFAULT_STRATEGIES = (NESTED_INPUT, NESTED_TEXTAREA, FOLLOWING_INPUT, NESTED_SELECT)


class StrategyChain:
    """
    Fixed-order sequence of candidate strategies plus the union fallback.

    Example:
        >>> chain = StrategyChain.default()
        >>> [s.rank for s in chain]
        [1, 2, 3, 4]
        >>> chain.union.rank
        5
    """

    def __init__(self, strategies: Tuple[CandidateStrategy, ...] = DEFAULT_STRATEGIES):
        if not strategies:
            raise ValueError("A strategy chain needs at least one strategy")
        ranks = [s.rank for s in strategies]
        if ranks != sorted(set(ranks)):
            raise ValueError(f"Strategy ranks must be unique and ascending, got {ranks}")
        self._strategies = tuple(strategies)
        self._union = UnionStrategy(
            rank=ranks[-1] + 1,
            name="union-fallback",
            members=self._strategies,
        )

    @classmethod
    def default(cls) -> "StrategyChain":
        return cls(DEFAULT_STRATEGIES)

    @property
    def union(self) -> UnionStrategy:
        return self._union

    def __iter__(self) -> Iterator[CandidateStrategy]:
        return iter(self._strategies)

    def __len__(self) -> int:
        return len(self._strategies)

    def strategy_for(self, relation: Relation, kind: ElementKind) -> CandidateStrategy:
        """
        Look up the strategy for a relation/kind pair.

        Raises:
            KeyError: The chain has no such strategy
        """
        for strategy in self._strategies:
            if strategy.relation is relation and strategy.kind is kind:
                return strategy
        raise KeyError(f"No {relation.value} strategy for {kind.value}")
