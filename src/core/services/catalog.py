"""Driver payload normalization.

Turns the raw `GetPDDrivers` body into a `Catalog`:
- categories sorted by name (locale-aware key),
- files sorted newest first (stable, unparseable dates last),
- files without a global download URL dropped,
- one "latest" badge per title, chosen by `select_latest`.

Either the whole catalog is built or `NormalizationError` is raised.
"""

from __future__ import annotations

import json
import logging
import unicodedata
from datetime import date, datetime
from typing import Any, Iterable, Sequence

from pydantic import ValidationError

from core.domain.errors import NormalizationError
from core.domain.models import (
    Catalog,
    DriverCategory,
    DriverFile,
    RawDriverCategory,
    RawDriverFile,
    RawDriverResult,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_MARKER = "latest version"

_DATE_FORMATS = (
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%Y-%m-%d",
    "%Y.%m.%d",
    "%m/%d/%Y",
)


def parse_release_date(value: str | None) -> date | None:
    """Parse a vendor release date; `None` when it cannot be read."""

    if not value:
        return None
    text = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def date_sort_key(file: DriverFile) -> date:
    return file.release_date or date.min


def is_placeholder(version: str) -> bool:
    """True for stand-in entries whose version only says "latest version"."""

    return PLACEHOLDER_MARKER in version


def group_by_title(files: Iterable[DriverFile]) -> dict[str, list[DriverFile]]:
    """Group files by title, keeping first-appearance order."""

    groups: dict[str, list[DriverFile]] = {}
    for file in files:
        groups.setdefault(file.title, []).append(file)
    return groups


def select_latest(files: Sequence[DriverFile]) -> DriverFile | None:
    """Badge selection: the first non-placeholder file in encounter order."""

    for file in files:
        if not is_placeholder(file.version):
            return file
    return None


def category_sort_key(name: str) -> tuple[str, str]:
    return unicodedata.normalize("NFKD", name).casefold(), name


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise NormalizationError("empty-or-malformed") from exc


def _unwrap_payload(raw_payload: Any) -> Any:
    # A raw body is decoded first; the endpoint may then have encoded its JSON
    # a second time as a string, which is unwrapped once more.
    if isinstance(raw_payload, (bytes, bytearray)):
        try:
            raw_payload = raw_payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise NormalizationError("empty-or-malformed") from exc
    if isinstance(raw_payload, str):
        raw_payload = _loads(raw_payload)
    if isinstance(raw_payload, str):
        raw_payload = _loads(raw_payload)
    return raw_payload


def has_download_url(raw: Any) -> bool:
    """True when a raw file record carries a non-blank `DownloadUrl.Global`."""

    if not isinstance(raw, dict):
        return False
    links = raw.get("DownloadUrl")
    if not isinstance(links, dict):
        return False
    url = links.get("Global")
    return isinstance(url, str) and bool(url.strip())


def _to_driver_file(raw: RawDriverFile) -> DriverFile:
    url = raw.download_url.global_url if raw.download_url else None
    return DriverFile(
        id=raw.id,
        title=raw.title,
        version=raw.version or "",
        release_date=parse_release_date(raw.release_date),
        release_date_raw=raw.release_date or "",
        file_size=raw.file_size or "",
        download_url=(url or "").strip(),
    )


def mark_latest(files: list[DriverFile]) -> list[DriverFile]:
    """Return `files` with `is_latest` set on each title's badge holder."""

    chosen = {
        id(pick)
        for pick in (select_latest(group) for group in group_by_title(files).values())
        if pick is not None
    }
    return [
        file.model_copy(update={"is_latest": id(file) in chosen})
        for file in files
    ]


def _normalize_category(raw: RawDriverCategory) -> DriverCategory:
    # Records without a link are skipped unvalidated.
    usable = [
        _to_driver_file(RawDriverFile.model_validate(record))
        for record in raw.files
        if has_download_url(record)
    ]
    skipped = len(raw.files) - len(usable)
    if skipped:
        logger.debug("Category %r: skipped %d file(s) without a download URL", raw.name, skipped)

    ordered = sorted(usable, key=date_sort_key, reverse=True)
    return DriverCategory(
        name=raw.name,
        declared_count=raw.count,
        files=mark_latest(ordered),
    )


def normalize(raw_payload: Any, *, fallback_model: str | None = None) -> Catalog:
    """Build a `Catalog` from the raw driver payload.

    Raises `NormalizationError("empty-or-malformed")` when `Result.Obj` is
    missing or empty, and `NormalizationError("invalid-record")` when a
    category or file cannot be read.
    """

    data = _unwrap_payload(raw_payload)
    if not isinstance(data, dict):
        raise NormalizationError("empty-or-malformed")

    result = data.get("Result")
    if not isinstance(result, dict):
        raise NormalizationError("empty-or-malformed")
    obj = result.get("Obj")
    if not isinstance(obj, list) or not obj:
        raise NormalizationError("empty-or-malformed")

    try:
        parsed = RawDriverResult.model_validate(result)
        categories = [
            _normalize_category(raw)
            for raw in sorted(parsed.obj, key=lambda c: category_sort_key(c.name))
        ]
    except ValidationError as exc:
        logger.debug("Driver payload failed validation: %s", exc)
        raise NormalizationError("invalid-record") from exc
    model_name = parsed.model or fallback_model or ""
    logger.info(
        "Normalized catalog for %s: %d categories, %d files",
        model_name or "<unknown>",
        len(categories),
        sum(len(c.files) for c in categories),
    )
    return Catalog(model_name=model_name, categories=categories)
