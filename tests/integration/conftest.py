"""
Integration fixtures: a real Chromium and an in-memory fake bank.

The fake bank is served through request routing, so no network access is
needed. Tests are skipped when Chromium is not installed.
"""

import re
from typing import Dict, Optional
from urllib.parse import urlparse

import pytest

from bank_ui_verifier.browsers import PlaywrightBrowser
from bank_ui_verifier.config import Credentials, Settings, TimeoutSettings
from bank_ui_verifier.exceptions import BrowserLaunchError

BASE_URL = "http://bank.test/"
LOGIN = "tester01"
PASSWORD = "secret123"

LOGIN_PAGE = """<!DOCTYPE html>
<html lang="pl">
<head><meta charset="utf-8"><title>Demobank - Bankowość Internetowa - Logowanie</title></head>
<body>
  <form id="login_form">
    <label>identyfikator <input id="login_id" data-testid="login-input"></label>
    <label>hasło <input id="login_password" type="password" data-testid="password-input"></label>
    <div id="error_login" role="alert" hidden></div>
    <button id="login_button" type="button" data-testid="login-button" disabled>zaloguj się</button>
  </form>
  <script>
    const login = document.getElementById("login_id");
    const password = document.getElementById("login_password");
    const button = document.getElementById("login_button");
    const alertBox = document.getElementById("error_login");
    const update = () => { button.disabled = !(login.value && password.value); };
    login.addEventListener("input", update);
    password.addEventListener("input", update);
    button.addEventListener("click", () => {
      if (password.value === "%(password)s" || %(lenient)s) {
        window.location.href = "pulpit.html";
      } else {
        alertBox.textContent = "Błędny identyfikator lub hasło";
        alertBox.hidden = false;
      }
    });
  </script>
</body>
</html>
"""

DASHBOARD_PAGE = """<!DOCTYPE html>
<html lang="pl">
<head><meta charset="utf-8"><title>Demobank - Bankowość Internetowa - Pulpit</title></head>
<body>
  <nav>
    <a href="quick_payment.html">szybki przelew</a>
    <a href="index.html">Wyloguj</a>
  </nav>
  <h2>Konta osobiste</h2>
  <div class="balance">Dostępne środki: <span>13 159,20 PLN</span></div>
  <h2>Ostatnie operacje</h2>
  <table>
    <tr><td>Opłata za kartę</td><td>-10,00 PLN</td></tr>
    <tr><td>Przelew przychodzący</td><td>1 000,00 PLN</td></tr>
  </table>
</body>
</html>
"""

TRANSFER_PAGE = """<!DOCTYPE html>
<html lang="pl">
<head><meta charset="utf-8"><title>Demobank - Szybki przelew</title></head>
<body>
  <form id="quick_payment">
    <div class="row">
      <label>do</label>
      %(recipient)s
    </div>
    <div class="row"><label>kwota</label> <input id="transfer_amount" type="text"></div>
    <div class="row"><label>tytułem</label> <input id="transfer_title" type="text"></div>
    <button id="execute_btn" type="button">wykonaj</button>
  </form>
</body>
</html>
"""

SELECT_RECIPIENT = """<select id="transfer_receiver">
        <option value="">wybierz odbiorcę przelewu</option>
        <option value="1">Jan Demobankowy</option>
        <option value="2">Chuck Demobankowy</option>
      </select>"""

CUSTOM_RECIPIENT = """<div id="transfer_receiver" role="combobox" aria-expanded="false" tabindex="0">
        wybierz odbiorcę przelewu
      </div>"""


class FakeBank:
    """
    Routes ``http://bank.test/`` to static pages mimicking the demo bank.

    Args:
        lenient_login: Redirect to the dashboard even on a wrong password
        custom_combobox: Render the recipient list as a non-select combobox
    """

    def __init__(self, lenient_login: bool = False, custom_combobox: bool = False):
        login_page = LOGIN_PAGE % {
            "password": PASSWORD,
            "lenient": "true" if lenient_login else "false",
        }
        transfer_page = TRANSFER_PAGE % {
            "recipient": CUSTOM_RECIPIENT if custom_combobox else SELECT_RECIPIENT,
        }
        self.pages: Dict[str, str] = {
            "": login_page,
            "index.html": login_page,
            "pulpit.html": DASHBOARD_PAGE,
            "quick_payment.html": transfer_page,
        }

    async def install(self, page) -> None:
        await page.route(re.compile(r"^http://bank\.test/"), self._handle)

    async def _handle(self, route) -> None:
        path = urlparse(route.request.url).path.lstrip("/")
        body: Optional[str] = self.pages.get(path)
        if body is None:
            await route.fulfill(status=404, content_type="text/plain", body="not found")
            return
        await route.fulfill(status=200, content_type="text/html; charset=utf-8", body=body)


@pytest.fixture
def settings():
    """Settings pointing at the fake bank, with timeouts suited to a real browser."""
    return Settings(
        base_url=BASE_URL,
        timeouts=TimeoutSettings(
            action_timeout_ms=5000,
            navigation_timeout_ms=5000,
            presence_probe_ms=500,
            inspection_timeout_ms=1000,
        ),
    )


@pytest.fixture
def credentials():
    return Credentials(login=LOGIN, password=PASSWORD)


@pytest.fixture
async def browser(settings):
    """Provide a launched Chromium, or skip."""
    browser = PlaywrightBrowser()
    try:
        await browser.launch(settings.browser)
    except BrowserLaunchError as e:
        pytest.skip(f"Chromium is not available: {e}")

    yield browser

    await browser.close()


@pytest.fixture
async def page(browser, settings):
    """Provide a blank page in its own context."""
    context = await browser.new_context(settings)
    page = await context.new_page()
    yield page
    await context.close()


@pytest.fixture
def fake_bank():
    return FakeBank()


@pytest.fixture
async def bank_session(browser, settings, credentials, fake_bank):
    """Provide a session wired to the fake bank."""
    async with browser.session(settings, credentials=credentials) as session:
        await fake_bank.install(session.page)
        yield session
