"""
Text Matcher - case-folded substring matching for anchor text.

Anchor text on the driven application is Polish, so case folding has to
cover ``ĄĆĘŁŃÓŚŹŻ`` as well as ASCII. Diacritics are preserved: ``ł`` never
matches ``l``.

The same folding exists twice:
- ``fold_case`` / ``text_contains`` run in Python on text already read
  from the page (titles, labels in logs, tests).
- ``anchor_xpath`` runs in the browser through XPath ``translate()``, so
  anchors are matched against the live document rather than source HTML.

Both sides share ``UPPER`` / ``LOWER`` and must stay in sync.
"""

from dataclasses import dataclass
from typing import Union
import re

from bank_ui_verifier.exceptions import EmptyFragmentError


UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZĄĆĘŁŃÓŚŹŻ"
LOWER = "abcdefghijklmnopqrstuvwxyząćęłńóśźż"

# No-break space is common between Polish words ("dostępne&nbsp;środki")
NBSP = "\u00a0"

_FOLD_TABLE = str.maketrans(UPPER + NBSP, LOWER + " ")

# XPath normalize-space() only treats these four as whitespace
_XPATH_WHITESPACE = re.compile(r"[ \t\r\n]+")

# Elements whose text is never rendered
_NOT_RENDERED = (
    "ancestor-or-self::head",
    "ancestor-or-self::script",
    "ancestor-or-self::style",
    "ancestor-or-self::noscript",
    "ancestor-or-self::template",
    "ancestor-or-self::*[@hidden]",
)


def fold_case(text: str) -> str:
    """
    Fold case and collapse whitespace the way the browser-side XPath does.

    Args:
        text: Raw text as read from the page

    Returns:
        Lowercased (ASCII and Polish), whitespace-normalized text
    """
    return _XPATH_WHITESPACE.sub(" ", text.translate(_FOLD_TABLE)).strip()


@dataclass(frozen=True)
class AnchorFragment:
    """
    Search key used to find anchor elements.

    The value is folded on construction and is never empty. Matching is
    substring based, so partial words are fine: ``"tytu"`` matches
    "Tytułem".
    """
    value: str

    def __post_init__(self):
        raw = self.value
        folded = fold_case(raw) if isinstance(raw, str) else ""
        if not folded:
            raise EmptyFragmentError(raw)
        object.__setattr__(self, "value", folded)

    @classmethod
    def coerce(cls, fragment: Union[str, "AnchorFragment"]) -> "AnchorFragment":
        """Accept either a raw string or an existing fragment."""
        if isinstance(fragment, AnchorFragment):
            return fragment
        return cls(fragment)

    def __str__(self) -> str:
        return self.value


def text_contains(raw_text: str, fragment: Union[str, AnchorFragment]) -> bool:
    """
    Check whether text contains a fragment after case folding.

    Args:
        raw_text: Text read from the page (may be None-ish empty)
        fragment: Fragment to look for; empty fragments raise

    Returns:
        True if the folded text contains the folded fragment
    """
    anchor = AnchorFragment.coerce(fragment)
    return anchor.value in fold_case(raw_text or "")


def xpath_literal(value: str) -> str:
    """
    Quote a string as an XPath 1.0 literal.

    XPath has no escape sequences, so a value holding both quote kinds is
    split and joined with concat().
    """
    if '"' not in value:
        return f'"{value}"'
    if "'" not in value:
        return f"'{value}'"
    parts = value.split('"')
    pieces = []
    for i, part in enumerate(parts):
        if part:
            pieces.append(f'"{part}"')
        if i < len(parts) - 1:
            pieces.append("'\"'")
    return f"concat({', '.join(pieces)})"


def folded_text_expr(context: str = ".") -> str:
    """XPath expression for the folded string value of ``context``."""
    return (
        f"normalize-space(translate(string({context}), "
        f"'{UPPER}{NBSP}', '{LOWER} '))"
    )


def anchor_xpath(fragment: Union[str, AnchorFragment]) -> str:
    """
    XPath selecting the anchor elements for a fragment.

    An element is an anchor when one of its own text nodes contains the
    fragment, so a label keeps its anchor role even when a hint inside it
    ("kwota w PLN") repeats the text. A fragment split over several child
    elements is matched on the innermost element whose whole text contains
    it. Outer containers (form, body, html) hold no such text of their
    own and never become anchors.

    Text inside non-rendered containers never produces an anchor. Elements
    hidden by styles are filtered out by the strategies, which run this
    expression through a visibility filter.

    Args:
        fragment: Search fragment

    Returns:
        XPath 1.0 expression (without the ``xpath=`` engine prefix)
    """
    anchor = AnchorFragment.coerce(fragment)
    literal = xpath_literal(anchor.value)
    contains = f"contains({folded_text_expr()}, {literal})"
    own_text = f"text()[{contains}]"
    innermost = f"{contains} and not(*[{contains}])"
    hidden = " or ".join(_NOT_RENDERED)
    return f"//*[({own_text} or ({innermost})) and not({hidden})]"
