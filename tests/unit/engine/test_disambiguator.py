"""
Tests for the element-kind disambiguator.
"""

import pytest

from bank_ui_verifier.engine.disambiguator import ElementKindDisambiguator, resolve_field
from bank_ui_verifier.engine.field_resolver import Fallback, FieldResolver, Found
from bank_ui_verifier.engine.strategies import (
    FOLLOWING_INPUT,
    NESTED_INPUT,
    NESTED_SELECT,
    ElementKind,
    StrategyChain,
)


def _select_result(page, fragment="kwota"):
    return Found(
        locator=NESTED_SELECT.locator(page, fragment),
        fragment=fragment,
        kind=ElementKind.SELECT,
        rank=4,
        strategy="nested-select",
    )


class TestInspectKind:
    """Test ElementKindDisambiguator.inspect_kind."""

    @pytest.fixture
    def disambiguator(self):
        return ElementKindDisambiguator(inspection_timeout_ms=100)

    @pytest.mark.asyncio
    async def test_reads_tag(self, disambiguator, mock_locator):
        assert await disambiguator.inspect_kind(mock_locator(count=1, tag="SELECT")) is ElementKind.SELECT

    @pytest.mark.asyncio
    async def test_no_match_is_unknown(self, disambiguator, mock_locator):
        assert await disambiguator.inspect_kind(mock_locator(count=0)) is ElementKind.UNKNOWN

    @pytest.mark.asyncio
    async def test_error_is_unknown(self, disambiguator, mock_locator, playwright_error):
        locator = mock_locator(count=1, tag="input", error=playwright_error)
        assert await disambiguator.inspect_kind(locator) is ElementKind.UNKNOWN

    @pytest.mark.asyncio
    async def test_unexpected_tag_is_unknown(self, disambiguator, mock_locator):
        assert await disambiguator.inspect_kind(mock_locator(count=1, tag="div")) is ElementKind.UNKNOWN


class TestReconcile:
    """Test ElementKindDisambiguator.reconcile."""

    @pytest.fixture
    def disambiguator(self):
        return ElementKindDisambiguator()

    @pytest.mark.asyncio
    async def test_select_swapped_for_following_input(self, disambiguator, mock_page):
        page = mock_page({
            NESTED_SELECT.selector("kwota"): (1, "select"),
            FOLLOWING_INPUT.selector("kwota"): (1, "input"),
        })

        result = await disambiguator.reconcile(page, _select_result(page), ElementKind.INPUT)

        assert isinstance(result, Found)
        assert result.corrected is True
        assert result.kind is ElementKind.INPUT
        assert result.rank == 3
        assert result.locator.selector == FOLLOWING_INPUT.selector("kwota")

    @pytest.mark.asyncio
    async def test_textarea_expected_also_corrected(self, disambiguator, mock_page):
        page = mock_page({
            NESTED_SELECT.selector("opis"): (1, "select"),
            FOLLOWING_INPUT.selector("opis"): (1, "input"),
        })

        result = await disambiguator.reconcile(page, _select_result(page, "opis"), ElementKind.TEXTAREA)

        assert result.corrected is True

    @pytest.mark.asyncio
    async def test_select_kept_without_alternative(self, disambiguator, mock_page):
        page = mock_page({NESTED_SELECT.selector("kwota"): (1, "select")})
        original = _select_result(page)

        result = await disambiguator.reconcile(page, original, ElementKind.INPUT)

        assert result is original

    @pytest.mark.asyncio
    async def test_chain_without_following_input_keeps_select(self, mock_page):
        chain = StrategyChain((NESTED_INPUT, NESTED_SELECT))
        disambiguator = ElementKindDisambiguator(chain)
        page = mock_page({NESTED_SELECT.selector("kwota"): (1, "select")})
        original = _select_result(page)

        result = await disambiguator.reconcile(page, original, ElementKind.INPUT)

        assert result is original

    @pytest.mark.asyncio
    async def test_select_expected_untouched(self, disambiguator, mock_page):
        page = mock_page({
            NESTED_SELECT.selector("kwota"): (1, "select"),
            FOLLOWING_INPUT.selector("kwota"): (1, "input"),
        })
        original = _select_result(page)

        result = await disambiguator.reconcile(page, original, ElementKind.SELECT)

        assert result is original
        assert page.queried == [NESTED_SELECT.selector("kwota")]

    @pytest.mark.asyncio
    async def test_matching_kind_untouched(self, disambiguator, mock_page):
        page = mock_page({NESTED_INPUT.selector("kwota"): (1, "input")})
        original = Found(
            locator=NESTED_INPUT.locator(page, "kwota"),
            fragment="kwota",
            kind=ElementKind.INPUT,
            rank=1,
            strategy="nested-input",
        )

        assert await disambiguator.reconcile(page, original, ElementKind.INPUT) is original

    @pytest.mark.asyncio
    async def test_unknown_is_not_a_mismatch(self, disambiguator, mock_page, playwright_error):
        page = mock_page(error=playwright_error)
        original = _select_result(page)

        assert await disambiguator.reconcile(page, original, ElementKind.INPUT) is original

    @pytest.mark.asyncio
    async def test_fallback_with_no_match_untouched(self, disambiguator, mock_page):
        page = mock_page()
        union = FieldResolver().chain.union
        original = Fallback(
            locator=union.locator(page, "kwota"),
            fragment="kwota",
            rank=union.rank,
            strategy=union.name,
        )

        assert await disambiguator.reconcile(page, original, ElementKind.INPUT) is original

    @pytest.mark.asyncio
    async def test_idempotent(self, disambiguator, mock_page):
        page = mock_page({
            NESTED_SELECT.selector("kwota"): (1, "select"),
            FOLLOWING_INPUT.selector("kwota"): (1, "input"),
        })

        once = await disambiguator.reconcile(page, _select_result(page), ElementKind.INPUT)
        twice = await disambiguator.reconcile(page, once, ElementKind.INPUT)

        assert twice is once


class TestResolveField:
    """Test the resolve_field convenience function."""

    @pytest.mark.asyncio
    async def test_resolve_and_reconcile(self, mock_page):
        page = mock_page({
            NESTED_SELECT.selector("kwota"): (1, "select"),
            FOLLOWING_INPUT.selector("kwota"): (1, "input"),
        })

        result = await resolve_field(page, "kwota", ElementKind.INPUT)

        # following-input already outranks nested-select, no correction needed
        assert result.rank == 3
        assert result.corrected is False

    @pytest.mark.asyncio
    async def test_absent_fragment(self, mock_page):
        result = await resolve_field(mock_page(), "brak", ElementKind.INPUT)

        assert isinstance(result, Fallback)
