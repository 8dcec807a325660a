"""
Bank UI Verifier - CLI Entry Point.

Configuration Priority:
    1. CLI arguments (--base-url, --visible, etc.)
    2. Environment variables (BANK_UI__BASE_URL, etc.)
    3. Config file (bank-ui.yaml)

Usage:
    bank-ui-verifier smoke
    bank-ui-verifier smoke -s login -s wrong-password --visible
    bank-ui-verifier resolve https://demo-bank.vercel.app/quick_payment.html kwota
"""

from typing import Any, Dict, List, Optional
import asyncio

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from bank_ui_verifier import __version__
from bank_ui_verifier.browsers.playwright_browser import PlaywrightBrowser
from bank_ui_verifier.config import Credentials, Settings, load_config, load_credentials
from bank_ui_verifier.engine.strategies import ElementKind
from bank_ui_verifier.exceptions import BankUIVerifierError
from bank_ui_verifier.reporting.verdicts import print_verdicts
from bank_ui_verifier.scenarios import SCENARIOS, ScenarioResult, run_scenarios
from bank_ui_verifier.utils.logging import get_logger, setup_logging_from_settings

# Create the CLI app
app = typer.Typer(
    name="bank-ui-verifier",
    help="Browser-driven UI checks for the demo bank",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)


def _load_settings(
    config: Optional[str],
    base_url: Optional[str],
    visible: bool,
    browser: Optional[str] = None,
) -> Settings:
    overrides: Dict[str, Any] = {}
    if base_url:
        overrides["base_url"] = base_url
    browser_overrides: Dict[str, Any] = {}
    if visible:
        browser_overrides["headless"] = False
    if browser:
        browser_overrides["browser_type"] = browser
    if browser_overrides:
        overrides["browser"] = browser_overrides

    try:
        return load_config(config_path=config, **overrides)
    except (BankUIVerifierError, ValidationError) as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(1)


def _results_table(results: List[ScenarioResult]) -> Table:
    table = Table(title="Scenarios")
    table.add_column("Scenario")
    table.add_column("Result")
    table.add_column("Time", justify="right")
    table.add_column("Error")

    for result in results:
        if not result.passed:
            status = "[red]✗ failed[/red]"
        elif result.used_alternate_path:
            status = "[yellow]✓ passed (alternate)[/yellow]"
        else:
            status = "[green]✓ passed[/green]"
        table.add_row(result.name, status, f"{result.duration_ms:.0f}ms", result.error or "")

    return table


@app.command()
def smoke(
    scenario: Optional[List[str]] = typer.Option(None, "--scenario", "-s", help="Scenario to run (repeatable, default: all)"),
    base_url: Optional[str] = typer.Option(None, "--base-url", "-u", help="Application base URL (default: from config)"),
    visible: bool = typer.Option(False, "--visible", "-v", help="Run with visible browser"),
    browser: Optional[str] = typer.Option(None, "--browser", "-b", help="Browser: chromium, firefox, webkit"),
    parallel: bool = typer.Option(False, "--parallel", "-p", help="Run scenarios concurrently in separate contexts"),
    auth_file: Optional[str] = typer.Option(None, "--auth-file", "-a", help="Credentials JSON file"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Config file (YAML)"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output"),
):
    """
    Run the read-only smoke scenarios against the bank.

    Examples:
        bank-ui-verifier smoke
        bank-ui-verifier smoke -s transfer -s transfer-heuristic --visible
    """
    settings = _load_settings(config, base_url, visible, browser)
    setup_logging_from_settings(settings.logging, verbose=verbose)

    unknown = [name for name in scenario or [] if name not in SCENARIOS]
    if unknown:
        console.print(f"[red]Unknown scenario(s): {', '.join(unknown)}[/red]")
        console.print(f"Available: {', '.join(SCENARIOS)}")
        raise typer.Exit(2)

    credentials = None
    if auth_file:
        try:
            credentials = load_credentials(settings, path=auth_file)
        except BankUIVerifierError as e:
            console.print(f"[red]Configuration error: {e}[/red]")
            raise typer.Exit(1)

    console.print(f"\n[bold]Bank UI smoke[/bold] against {settings.base_url}")

    try:
        results = asyncio.run(_smoke_async(settings, scenario or None, parallel, credentials))
    except BankUIVerifierError as e:
        logger.debug("Smoke run aborted", exc_info=True)
        console.print(f"\n[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(_results_table(results))
    print_verdicts(console, [v for r in results for v in r.verdicts])

    failed = [r for r in results if not r.passed]
    alternates = [r for r in results if r.used_alternate_path]
    if alternates:
        console.print(
            f"[yellow]{len(alternates)} scenario(s) passed via an alternate path; review the log[/yellow]"
        )
    if failed:
        console.print(f"\n[red]✗ {len(failed)}/{len(results)} scenario(s) failed[/red]")
        raise typer.Exit(1)

    console.print(f"\n[green]✓ All {len(results)} scenario(s) passed[/green]")


async def _smoke_async(
    settings: Settings,
    names: Optional[List[str]],
    parallel: bool,
    credentials: Optional[Credentials],
) -> List[ScenarioResult]:
    browser = PlaywrightBrowser()
    await browser.launch(settings.browser)
    try:
        return await run_scenarios(browser, settings, names, parallel=parallel, credentials=credentials)
    finally:
        await browser.close()


@app.command()
def resolve(
    url: str = typer.Argument(..., help="Page to open"),
    fragment: str = typer.Argument(..., help="Text next to the wanted field"),
    expect_kind: str = typer.Option("input", "--expect", "-e", help="Expected kind: input, textarea, select"),
    visible: bool = typer.Option(False, "--visible", "-v", help="Run with visible browser"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Config file (YAML)"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output"),
):
    """
    Show which strategy resolves a fragment on a page.

    The page is opened without logging in.

    Examples:
        bank-ui-verifier resolve https://demo-bank.vercel.app/ "identyfikator"
    """
    kind = ElementKind.from_tag(expect_kind)
    if kind is ElementKind.UNKNOWN:
        console.print(f"[red]Unknown element kind: {expect_kind}[/red]")
        raise typer.Exit(2)

    settings = _load_settings(config, None, visible)
    setup_logging_from_settings(settings.logging, verbose=verbose)

    try:
        row = asyncio.run(_resolve_async(settings, url, fragment, kind))
    except BankUIVerifierError as e:
        logger.debug("Resolution aborted", exc_info=True)
        console.print(f"\n[red]Error: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Resolution of '{fragment}'")
    table.add_column("Field")
    table.add_column("Value")
    for key, value in row.items():
        table.add_row(key, str(value))
    console.print(table)


async def _resolve_async(settings: Settings, url: str, fragment: str, kind: ElementKind) -> Dict[str, Any]:
    browser = PlaywrightBrowser()
    await browser.launch(settings.browser)
    try:
        async with browser.session(settings) as session:
            await session.open(url)
            result = await session.resolve_field(fragment, kind)
            return {
                "found": result.is_found,
                "rank": result.rank,
                "strategy": result.strategy,
                "kind": getattr(result, "kind", ElementKind.UNKNOWN).value,
                "corrected": getattr(result, "corrected", False),
                "matches": await result.locator.count(),
            }
    finally:
        await browser.close()


@app.command("scenarios")
def list_scenarios():
    """List available scenarios."""
    for name, scenario in SCENARIOS.items():
        summary = (scenario.__doc__ or "").strip().splitlines()
        console.print(f"[bold]{name}[/bold]  [dim]{summary[0] if summary else ''}[/dim]")


@app.command()
def version():
    """Show version information."""
    console.print(f"[bold]Bank UI Verifier[/bold] v{__version__}")


if __name__ == "__main__":
    app()
