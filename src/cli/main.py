"""Command line interface (Typer).

Why Typer + Rich:
- Typed options with help generated from signatures.
- Rich tables keep the catalog readable in a terminal.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from adapters.http_client import HttpxFetcher
from adapters.json_exporter import export_catalog_json
from adapters.text_exporter import export_latest_links
from cli import doctor
from cli.messages import STAGE_PROGRESS, describe_error
from cli.ui_components import (
    build_catalog_summary,
    build_category_table,
    build_devices_table,
    build_export_panel,
    print_banner,
)
from core.config import AppSettings
from core.domain.errors import DriverCatalogError
from core.domain.language import Website
from core.domain.models import Catalog, DeviceRequest
from core.interfaces.fetcher import PageFetcher
from core.services.export import assemble
from core.services.fetch_pipeline import FetchPipeline, PipelineHooks

KNOWN_DEVICES: dict[str, str] = {
    "rog-ally-2023": "ROG Ally (2023)",
    "rog-ally-x-2024": "ROG Ally X (2024)",
}

app = typer.Typer(no_args_is_help=True, help="ASUS ROG driver catalog and latest-version export.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )


def build_fetcher(settings: AppSettings) -> PageFetcher:
    return HttpxFetcher(settings)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr."),
) -> None:
    try:
        settings = AppSettings()
    except ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        _console.print(f"[red]Invalid configuration:[/red] {fields}")
        raise typer.Exit(code=2) from exc
    configure_logging("DEBUG" if verbose else settings.log_level)


@app.command()
def devices() -> None:
    """List device slugs known to work."""

    _console.print(build_devices_table(KNOWN_DEVICES))


def _run_pipeline(settings: AppSettings, request: DeviceRequest) -> Catalog:
    with _console.status(STAGE_PROGRESS["fetch-page"]) as status:
        hooks = PipelineHooks(stage_started=lambda stage: status.update(STAGE_PROGRESS.get(stage, stage)))
        pipeline = FetchPipeline(build_fetcher(settings), settings, hooks)
        return asyncio.run(pipeline.run(request))


@app.command()
def fetch(
    slug: str = typer.Argument(..., help="Device slug, e.g. rog-ally-2023 (see `devices`)."),
    website: Website | None = typer.Option(
        None,
        "--website",
        "-w",
        help="Data language of the listing (defaults to ROG_DRIVERS_DEFAULT_WEBSITE).",
    ),
    export: bool = typer.Option(False, "--export", "-e", help="Write latest-version links to a .txt file."),
    output_dir: Path | None = typer.Option(None, "--output-dir", "-o", help="Directory for exported files."),
    json_path: Path | None = typer.Option(None, "--json", help="Also write the full catalog as JSON."),
    latest_only: bool = typer.Option(False, "--latest-only", help="Only show files marked as latest."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Skip the banner."),
) -> None:
    """Fetch and show the driver catalog for a device."""

    settings = AppSettings()
    website = website or settings.default_website
    request = DeviceRequest(model_slug=slug, language_code=website.value)

    if not no_banner:
        print_banner(_console)

    try:
        catalog = _run_pipeline(settings, request)
    except DriverCatalogError as exc:
        _console.print(f"[red]Error:[/red] {describe_error(exc)}")
        raise typer.Exit(code=1) from exc

    _console.print(build_catalog_summary(catalog))
    for category in catalog.categories:
        _console.print(build_category_table(category, latest_only=latest_only, asset_host=settings.asset_host))

    if json_path is not None:
        written = export_catalog_json(catalog=catalog, output_path=json_path)
        _console.print(f"[green]Catalog JSON written to:[/green] {written}")

    if export:
        try:
            bundle = assemble(catalog, asset_host=settings.asset_host)
        except DriverCatalogError as exc:
            _console.print(f"[red]Error:[/red] {describe_error(exc)}")
            raise typer.Exit(code=1) from exc
        path = export_latest_links(bundle=bundle, output_dir=output_dir or settings.export_dir)
        _console.print(build_export_panel(bundle, str(path)))


def run() -> None:
    app()
