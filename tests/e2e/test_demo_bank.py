"""
Scenarios against the live demo bank.

Opt-in: set ``BANK_UI__BASE_URL`` (e.g. https://demo-bank.vercel.app) and
provide credentials through ``auth.json`` or ``BANK_UI__CREDENTIALS__*``.
"""

import os

import pytest

from bank_ui_verifier.browsers import PlaywrightBrowser
from bank_ui_verifier.config import load_config, load_credentials
from bank_ui_verifier.exceptions import BrowserLaunchError
from bank_ui_verifier.scenarios import SCENARIOS, run_scenarios

pytestmark = [
    pytest.mark.e2e,
    pytest.mark.skipif(
        not os.environ.get("BANK_UI__BASE_URL"),
        reason="BANK_UI__BASE_URL is not set",
    ),
]


@pytest.fixture
def settings():
    return load_config()


@pytest.fixture
async def browser(settings):
    browser = PlaywrightBrowser()
    try:
        await browser.launch(settings.browser)
    except BrowserLaunchError as e:
        pytest.skip(f"Browser is not available: {e}")

    yield browser

    await browser.close()


@pytest.mark.asyncio
@pytest.mark.parametrize("name", list(SCENARIOS))
async def test_scenario(browser, settings, name):
    credentials = load_credentials(settings)

    [result] = await run_scenarios(browser, settings, [name], credentials=credentials)

    assert result.passed, result.error


@pytest.mark.asyncio
async def test_parallel_sessions(browser, settings):
    credentials = load_credentials(settings)

    results = await run_scenarios(
        browser, settings, ["login", "dashboard", "transfer"], parallel=True, credentials=credentials
    )

    assert all(r.passed for r in results), [r.error for r in results if not r.passed]
