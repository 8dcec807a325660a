"""
Tests for FieldResolver - strategy order and best-effort fallback.
"""

import logging

import pytest

from bank_ui_verifier.engine.field_resolver import Fallback, FieldResolver, Found, ResolutionResult
from bank_ui_verifier.engine.strategies import (
    FOLLOWING_INPUT,
    NESTED_INPUT,
    NESTED_SELECT,
    NESTED_TEXTAREA,
    ElementKind,
    StrategyChain,
)
from bank_ui_verifier.exceptions import EmptyFragmentError


class TestResolutionResults:
    """Test the result dataclasses."""

    def test_found_is_found(self, mock_locator):
        result = Found(locator=mock_locator(), fragment="kwota", rank=3, strategy="following-input",
                       kind=ElementKind.INPUT)
        assert result.is_found is True
        assert result.corrected is False
        assert "following-input" in result.describe()

    def test_fallback_is_not_found(self, mock_locator):
        result = Fallback(locator=mock_locator(), fragment="kwota", rank=5, strategy="union-fallback")
        assert result.is_found is False
        assert isinstance(result, ResolutionResult)
        assert "best effort" in result.describe()

    def test_corrected_flag_described(self, mock_locator):
        result = Found(locator=mock_locator(), fragment="kwota", rank=3, strategy="following-input",
                       kind=ElementKind.INPUT, corrected=True)
        assert result.describe().endswith("(corrected)")

    def test_results_frozen(self, mock_locator):
        result = Fallback(locator=mock_locator(), fragment="kwota")
        with pytest.raises(AttributeError):
            result.rank = 1


class TestFieldResolver:
    """Test FieldResolver.resolve."""

    @pytest.fixture
    def resolver(self):
        return FieldResolver()

    @pytest.mark.asyncio
    async def test_nested_input_wins(self, resolver, mock_page):
        page = mock_page({
            NESTED_INPUT.selector("kwota"): (1, "input"),
            FOLLOWING_INPUT.selector("kwota"): (1, "input"),
        })

        result = await resolver.resolve(page, "kwota")

        assert isinstance(result, Found)
        assert result.rank == 1
        assert result.kind is ElementKind.INPUT

    @pytest.mark.asyncio
    async def test_stops_at_first_match(self, resolver, mock_page):
        """Later strategies are never queried once one matches."""
        page = mock_page({NESTED_TEXTAREA.selector("opis"): (1, "textarea")})

        result = await resolver.resolve(page, "opis")

        assert result.rank == 2
        assert result.kind is ElementKind.TEXTAREA
        assert page.queried == [NESTED_INPUT.selector("opis"), NESTED_TEXTAREA.selector("opis")]

    @pytest.mark.asyncio
    async def test_following_input_beats_nested_select(self, resolver, mock_page):
        page = mock_page({
            FOLLOWING_INPUT.selector("kwota"): (1, "input"),
            NESTED_SELECT.selector("kwota"): (1, "select"),
        })

        result = await resolver.resolve(page, "kwota")

        assert result.rank == 3
        assert result.strategy == "following-input"

    @pytest.mark.asyncio
    async def test_select_only(self, resolver, mock_page):
        page = mock_page({NESTED_SELECT.selector("odbiorca"): (1, "select")})

        result = await resolver.resolve(page, "odbiorca")

        assert result.rank == 4
        assert result.kind is ElementKind.SELECT

    @pytest.mark.asyncio
    async def test_fallback_when_nothing_matches(self, resolver, mock_page, caplog):
        page = mock_page()

        with caplog.at_level(logging.WARNING):
            result = await resolver.resolve(page, "nie istnieje")

        assert isinstance(result, Fallback)
        assert result.is_found is False
        assert result.rank == 5
        assert result.strategy == "union-fallback"
        assert result.locator.selector == " | ".join(StrategyChain.default().union.selectors("nie istnieje"))
        assert "verify presence" in caplog.text

    @pytest.mark.asyncio
    async def test_fallback_never_counted(self, resolver, mock_page):
        page = mock_page()

        result = await resolver.resolve(page, "kwota")

        assert result.locator.counted == 0
        # one count per strategy, then the union is only built
        union_selectors = list(StrategyChain.default().union.selectors("kwota"))
        assert page.queried[4:] == union_selectors
        assert len(page.queried) == 8

    @pytest.mark.asyncio
    async def test_fragment_folded(self, resolver, mock_page):
        page = mock_page({NESTED_INPUT.selector("tytułem"): (1, "input")})

        result = await resolver.resolve(page, "  TYTUŁEM ")

        assert result.fragment == "tytułem"
        assert result.is_found

    @pytest.mark.asyncio
    async def test_deterministic(self, resolver, mock_page):
        page = mock_page({FOLLOWING_INPUT.selector("kwota"): (1, "input")})

        first = await resolver.resolve(page, "kwota")
        second = await resolver.resolve(page, "kwota")

        assert (first.rank, first.strategy, first.locator.selector) == (
            second.rank, second.strategy, second.locator.selector,
        )

    @pytest.mark.asyncio
    async def test_empty_fragment_raises_before_query(self, resolver, mock_page):
        page = mock_page()

        with pytest.raises(EmptyFragmentError):
            await resolver.resolve(page, "   ")

        assert page.queried == []

    @pytest.mark.asyncio
    async def test_custom_chain(self, mock_page):
        resolver = FieldResolver(StrategyChain((FOLLOWING_INPUT,)))
        page = mock_page()

        result = await resolver.resolve(page, "kwota")

        assert isinstance(result, Fallback)
        assert result.rank == 4
        assert page.queried == [FOLLOWING_INPUT.selector("kwota"), *resolver.chain.union.selectors("kwota")]
