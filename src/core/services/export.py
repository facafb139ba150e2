"""Latest-version link export.

Export picks its "latest" file differently from the on-screen badge
(`core.services.catalog.select_latest`): placeholders are dropped first and
the greatest release date wins, falling back to the group's first file when
only placeholders exist.
"""

from __future__ import annotations

import logging
from typing import Sequence

from core.domain.errors import ExportError
from core.domain.models import Catalog, DriverFile, ExportBundle
from core.services.catalog import date_sort_key, group_by_title, is_placeholder

logger = logging.getLogger(__name__)

DEFAULT_ASSET_HOST = "https://dlcdnets.asus.com"


def resolve_download_url(url: str, asset_host: str = DEFAULT_ASSET_HOST) -> str:
    if url.startswith("http"):
        return url
    return asset_host + url


def select_export_latest(group: Sequence[DriverFile]) -> DriverFile | None:
    """Export selection for one title group.

    Greatest `release_date` among non-placeholders; ties keep the first one
    seen. With no non-placeholder left, the group's first file is used.
    """

    if not group:
        return None
    versioned = [f for f in group if not is_placeholder(f.version)]
    if not versioned:
        return group[0]

    latest = versioned[0]
    for current in versioned[1:]:
        if date_sort_key(current) > date_sort_key(latest):
            latest = current
    return latest


def suggested_filename(model_name: str) -> str:
    return f"latest_drivers_{model_name.replace(' ', '_')}.txt"


def assemble(catalog: Catalog | None, *, asset_host: str = DEFAULT_ASSET_HOST) -> ExportBundle:
    """Collect one download URL per title across all categories.

    Raises `ExportError("no-catalog")` without a catalog and
    `ExportError("no-links")` when nothing is downloadable.
    """

    if catalog is None:
        raise ExportError("no-catalog")

    urls: list[str] = []
    for category in catalog.categories:
        downloadable = [f for f in category.files if f.download_url]
        for title, group in group_by_title(downloadable).items():
            chosen = select_export_latest(group)
            if chosen is None or not chosen.download_url:
                continue
            urls.append(resolve_download_url(chosen.download_url, asset_host))
            logger.debug("Export %s / %s -> %s", category.name, title, chosen.version)

    if not urls:
        raise ExportError("no-links")

    return ExportBundle(urls=urls, suggested_filename=suggested_filename(catalog.model_name))
