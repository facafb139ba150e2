"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Tables and panels can be reused across commands.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Catalog, DriverCategory, ExportBundle
from core.services.export import DEFAULT_ASSET_HOST, resolve_download_url


def print_banner(console: Console) -> None:
    """Print the welcome banner.

    Can be skipped in non-interactive modes (JSON, pipes).
    """

    title = Text("ROG Drivers", style="bold red")
    subtitle = Text("Support page -> driver catalog • latest versions • export", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="red", padding=(1, 4)))


def build_devices_table(devices: dict[str, str]) -> Table:
    table = Table(title="Known devices")
    table.add_column("Slug", style="cyan", no_wrap=True)
    table.add_column("Device", style="white")
    for slug, name in devices.items():
        table.add_row(slug, name)
    return table


def build_category_table(
    category: DriverCategory,
    *,
    latest_only: bool = False,
    asset_host: str = DEFAULT_ASSET_HOST,
) -> Table:
    """Rich table for one driver category."""

    table = Table(title=f"{category.name} ({category.declared_count})", title_justify="left")
    table.add_column("Title", style="white")
    table.add_column("Version", style="cyan")
    table.add_column("Released", style="magenta", no_wrap=True)
    table.add_column("Size", style="dim", no_wrap=True)
    table.add_column("Download", style="blue", overflow="fold")

    for file in category.files:
        if latest_only and not file.is_latest:
            continue
        title = Text(file.title)
        if file.is_latest:
            title.append("  LATEST", style="bold green")
        table.add_row(
            title,
            file.version,
            file.release_date_raw,
            file.file_size,
            resolve_download_url(file.download_url, asset_host) if file.download_url else "",
            style="on grey15" if file.is_latest else None,
        )
    return table


def build_catalog_summary(catalog: Catalog) -> Panel:
    files_total = sum(len(c.files) for c in catalog.categories)
    body = Text()
    body.append(f"Categories: {len(catalog.categories)}\n")
    body.append(f"Files: {files_total}\n")
    body.append(f"Latest versions: {len(catalog.latest_files())}")
    return Panel(body, title=Text(f"Device model: {catalog.model_name}", style="bold"), border_style="green")


def build_export_panel(bundle: ExportBundle, path: str) -> Panel:
    body = Text()
    body.append(f"{len(bundle.urls)} link(s) written to ")
    body.append(path, style="bold")
    return Panel(body, title="Export", border_style="cyan")
