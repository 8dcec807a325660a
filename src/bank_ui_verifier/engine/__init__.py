"""
Engine Module - text-anchored field resolution.

- Text matching with Polish case folding
- Candidate strategy chain (nested / following / union)
- Field resolver with best-effort fallback
- Element-kind disambiguation
- Tolerant assertion policy
"""

from bank_ui_verifier.engine.text_matcher import AnchorFragment, fold_case, text_contains, anchor_xpath
from bank_ui_verifier.engine.strategies import (
    Candidate,
    CandidateStrategy,
    ElementKind,
    Relation,
    StrategyChain,
    UnionStrategy,
)
from bank_ui_verifier.engine.field_resolver import FieldResolver, ResolutionResult, Found, Fallback
from bank_ui_verifier.engine.disambiguator import ElementKindDisambiguator, resolve_field
from bank_ui_verifier.engine.assertion_policy import (
    OutcomeProbe,
    TolerantAssertionPolicy,
    attached,
    title_contains,
    url_matches,
    visible,
)

__all__ = [
    # Text matching
    "AnchorFragment",
    "fold_case",
    "text_contains",
    "anchor_xpath",
    # Strategies
    "Candidate",
    "CandidateStrategy",
    "ElementKind",
    "Relation",
    "StrategyChain",
    "UnionStrategy",
    # Resolution
    "FieldResolver",
    "ResolutionResult",
    "Found",
    "Fallback",
    "ElementKindDisambiguator",
    "resolve_field",
    # Tolerant checks
    "OutcomeProbe",
    "TolerantAssertionPolicy",
    "attached",
    "title_contains",
    "url_matches",
    "visible",
]
