"""
Pattern Locator - CLI Entry Point.

Configuration Priority:
    1. CLI arguments (--pattern, --timeout, --dir, etc.)
    2. Environment variables (PATTERN_LOCATOR__RESOLVER__DEFAULT_PATTERN, etc.)
    3. Config file (pattern-locator.yaml / config.yaml)

Usage:
    pattern-locator parse "{{Header}} {Login Form} Submit[2]"
    pattern-locator verify --dir resources/locators/pattern
    pattern-locator resolve https://example.com/login button "Sign in" --pattern loginPage
"""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pattern_locator.browsers.playwright_browser import PlaywrightBrowser
from pattern_locator.config import Settings, get_settings
from pattern_locator.engine.field_reference import parse_field_reference
from pattern_locator.engine.locator_resolver import LocatorResolver
from pattern_locator.engine.orchestrator import ResolvedLocator
from pattern_locator.exceptions import PatternLocatorError
from pattern_locator.interfaces.browser import BrowserType
from pattern_locator.utils.logging import setup_logging
from pattern_locator.variables.patterns import (
    PATTERN_FILE_SUFFIX,
    load_page_objects,
    verify_pattern_file,
)
from pattern_locator.variables.store import VariableStore

# Create the CLI app
app = typer.Typer(
    name="pattern-locator",
    help="Resolve logical field names to live page elements using page-object patterns",
    add_completion=False,
)

console = Console()


def _configure_logging(settings: Settings, verbose: bool) -> None:
    """--verbose or settings.debug switches the log level to DEBUG."""
    setup_logging(
        "DEBUG" if verbose or settings.debug else settings.logging.level,
        settings.logging.file,
        json_format=settings.logging.json_format,
        fmt=settings.logging.format,
    )


@app.command()
def parse(
    field: str = typer.Argument(..., help="Field reference, e.g. \"{Login Form} Submit[2]\""),
):
    """
    Show how a field reference is parsed.
    """
    reference = parse_field_reference(field)

    table = Table(title=f"Field reference: {field}", show_header=True, header_style="bold cyan")
    table.add_column("Part", style="dim")
    table.add_column("Value")
    table.add_row("Location", reference.location_name or "-")
    table.add_row("Location value", reference.location_value or "-")
    table.add_row("Section", reference.section_name or "-")
    table.add_row("Section value", reference.section_value or "-")
    table.add_row("Field", reference.field_name)
    table.add_row("Instance", str(reference.instance))
    console.print(table)


@app.command()
def verify(
    directory: Optional[str] = typer.Option(None, "--dir", "-d", help="Pattern directory (default: from config)"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output"),
):
    """
    Check every pattern file in a directory and list the loaded page objects.
    """
    settings = get_settings()
    _configure_logging(settings, verbose)

    pattern_dir = Path(directory or settings.patterns.patterns_dir)
    if not pattern_dir.is_dir():
        console.print(f"[red]✗ Pattern directory not found: {pattern_dir}[/red]")
        raise typer.Exit(1)

    files = sorted(pattern_dir.glob(f"*{PATTERN_FILE_SUFFIX}"))
    if not files:
        console.print(f"[yellow]⚠ No pattern files found in {pattern_dir}[/yellow]")
        raise typer.Exit(1)

    failed = 0
    for path in files:
        problems = verify_pattern_file(path)
        if problems:
            failed += 1
            console.print(f"[red]✗ {path.name}[/red]")
            for problem in problems:
                console.print(f"    {problem}")
        else:
            console.print(f"[green]✓ {path.name}[/green]")

    if failed:
        console.print(f"\n[red]{failed} of {len(files)} pattern file(s) have problems[/red]")
        raise typer.Exit(1)

    store = VariableStore()
    codes = load_page_objects(store, pattern_dir)
    console.print(f"\n[bold]Page objects:[/bold] {', '.join(codes)}")


@app.command()
def resolve(
    url: str = typer.Argument(..., help="Page to open"),
    element_type: str = typer.Argument(..., help="Element type, e.g. button, input, link"),
    field: str = typer.Argument(..., help="Field reference or selector"),
    pattern: Optional[str] = typer.Option(None, "--pattern", "-p", help="Page object code override"),
    timeout: Optional[int] = typer.Option(None, "--timeout", "-t", help="Resolution timeout in milliseconds"),
    visible: bool = typer.Option(False, "--visible", "-v", help="Run with visible browser"),
    directory: Optional[str] = typer.Option(None, "--dir", "-d", help="Pattern directory (default: from config)"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output"),
):
    """
    Open a page and resolve one field reference against it.

    Examples:
        pattern-locator resolve https://example.com/login input "{Login Form} Username"
        pattern-locator resolve https://example.com button "Next[2]" -p checkoutPage --visible
    """
    settings = get_settings()
    _configure_logging(settings, verbose)

    if directory:
        settings = settings.merge_with({"patterns": {"patterns_dir": directory}})

    console.print(Panel.fit(
        f"[bold blue]Pattern Locator[/bold blue]\n"
        f"[dim]URL:[/dim] {url}\n"
        f"[dim]Type:[/dim] {element_type}\n"
        f"[dim]Field:[/dim] {field}"
        + (f"\n[dim]Page object:[/dim] {pattern}" if pattern else ""),
        border_style="blue",
    ))

    try:
        resolved = asyncio.run(_resolve_async(
            settings=settings,
            url=url,
            element_type=element_type,
            field=field,
            pattern=pattern,
            timeout=timeout,
            headless=not visible,
        ))
    except PatternLocatorError as e:
        console.print(f"\n[red]Error: {e}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("[dim]Interrupted[/dim]")
        raise typer.Exit(130)

    if resolved.is_resolved:
        console.print(f"\n[green]✓ Resolved[/green] ({resolved.outcome.value})")
        console.print(f"  Selector: {resolved.selector}")
        if resolved.pattern_code:
            console.print(f"  Page object: {resolved.pattern_code}")
        if resolved.for_id:
            console.print(f"  Label target: {resolved.for_id}")
        console.print(f"  Attempts: {resolved.attempts}  ({resolved.elapsed_ms:.0f}ms)")
    else:
        console.print(f"\n[red]✗ Not resolved[/red] ({resolved.outcome.value})")
        for strategy in resolved.strategies_tried:
            console.print(f"  [dim]tried[/dim] {strategy}")
        raise typer.Exit(1)


async def _resolve_async(
    settings: Settings,
    url: str,
    element_type: str,
    field: str,
    pattern: Optional[str],
    timeout: Optional[int],
    headless: bool,
) -> ResolvedLocator:
    """Launch a browser, open the page and resolve the field."""
    resolver = LocatorResolver.from_settings(settings)

    browser = PlaywrightBrowser()
    await browser.launch(
        headless=headless,
        browser_type=BrowserType(settings.browser.browser_type),
    )
    try:
        page = await browser.new_page()
        await page.goto(url, timeout=settings.browser.timeout_ms)
        return await resolver.resolve(
            page,
            element_type,
            field,
            override_pattern=pattern,
            timeout_ms=timeout,
        )
    finally:
        await browser.close()


if __name__ == "__main__":
    app()
