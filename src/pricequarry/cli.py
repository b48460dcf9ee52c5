"""Command-line interface for PriceQuarry."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import click
import structlog
from rich.console import Console
from rich.table import Table

from pricequarry import __version__
from pricequarry.classifier import classify_host, normalize_url, requires_headless
from pricequarry.config.config import load_config
from pricequarry.models import ErrorCode, ExtractionResult
from pricequarry.observability.logging import configure_logging
from pricequarry.scraper import ProductScraper

console = Console()
logger = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_NOT_EXTRACTED = 1
EXIT_INVALID_URL = 2
EXIT_FAILED = 3


def _result_table(result: ExtractionResult) -> Table:
    table = Table(title=f"Product ({result.source or 'unknown'})")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="magenta")
    for key, value in result.to_dict().items():
        table.add_row(key, "" if value is None else str(value))
    return table


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(exists=True), help="Configuration file path")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], log_level: Optional[str]) -> None:
    """PriceQuarry - product data extraction from e-commerce pages."""
    ctx.ensure_object(dict)
    settings = load_config(Path(config) if config else None)
    if log_level:
        settings.monitoring.log_level = log_level
    configure_logging(settings.monitoring)
    ctx.obj["config"] = settings


@cli.command()
@click.argument("url")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.option("--static-only", is_flag=True, help="Never fall back to the headless browser")
@click.pass_context
def scrape(ctx: click.Context, url: str, as_json: bool, static_only: bool) -> None:
    """Extract title, price, currency, image and brand from a product URL."""
    clean_url = normalize_url(url)
    if clean_url is None:
        payload = {"ok": False, "error": ErrorCode.INVALID_URL.value}
        if as_json:
            click.echo(json.dumps(payload))
        else:
            console.print(f"[red]Invalid or missing url: {url}[/red]")
        sys.exit(EXIT_INVALID_URL)

    config = ctx.obj["config"]
    if static_only:
        config.render.enabled = False

    try:
        result = asyncio.run(ProductScraper(config).scrape(clean_url))
    except Exception as e:
        logger.error("Scrape failed", url=clean_url, error=str(e), error_type=type(e).__name__)
        if as_json:
            click.echo(json.dumps({"ok": False, "error": str(e)}))
        else:
            console.print(f"[red]Scrape failed: {e}[/red]")
        sys.exit(EXIT_FAILED)

    if as_json:
        click.echo(json.dumps(result.to_dict(), ensure_ascii=False))
    else:
        console.print(_result_table(result))

    sys.exit(EXIT_OK if result.ok else EXIT_NOT_EXTRACTED)


@cli.command()
@click.argument("url")
def classify(url: str) -> None:
    """Show how a URL is classified and whether it needs a headless browser."""
    clean_url = normalize_url(url)
    if clean_url is None:
        console.print(f"[red]Invalid or missing url: {url}[/red]")
        sys.exit(EXIT_INVALID_URL)

    click.echo(
        json.dumps(
            {
                "url": clean_url,
                "source": classify_host(clean_url),
                "headless": requires_headless(clean_url),
            }
        )
    )


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
