"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import HttpxFetcher
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import TransportError
from core.domain.language import Website

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(settings: AppSettings, url: str) -> tuple[bool, str]:
    try:
        response = await HttpxFetcher(settings).fetch(url)
    except TransportError as exc:
        return False, str(exc)
    return response.ok, f"HTTP {response.status}"


@app.command()
def run(
    slug: str = typer.Option("rog-ally-2023", help="Device slug used for the connectivity check."),
) -> None:
    """Show the effective configuration and check the product page is reachable."""

    settings = AppSettings()

    table = Table(title="ROG Drivers Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Page locale", "OK", settings.page_locale)
    table.add_row("Data language", "OK", settings.default_website.label())
    table.add_row("API endpoint", "OK", settings.api_base_url)
    if settings.relay_prefix:
        table.add_row("Relay", "OK", settings.relay_prefix)
    else:
        table.add_row("Relay", "OPTIONAL", "Direct requests (no relay prefix)")

    page_url = settings.page_url(slug)
    ok_http, detail_http = asyncio.run(_check_http(settings, page_url))
    table.add_row("Product page", "OK" if ok_http else "FAIL", f"{detail_http} {page_url}")

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] If the vendor blocks direct requests, set a relay with `doctor setup`."
        )


@app.command()
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    website = typer.prompt(
        "Data language (website code)",
        default=Website.default().value,
        show_default=True,
    ).strip().lower()
    if website not in {w.value for w in Website}:
        raise typer.BadParameter(f"website must be one of: {', '.join(w.value for w in Website)}")

    relay = typer.prompt("Relay prefix (empty for none)", default="", show_default=False).strip()

    env_path = write_user_env_vars(
        {
            "ROG_DRIVERS_DEFAULT_WEBSITE": website,
            "ROG_DRIVERS_RELAY_PREFIX": relay or None,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
