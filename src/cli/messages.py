"""User-facing messages for CLI output.

The core only raises typed errors; wording lives here.
"""

from __future__ import annotations

from core.domain.errors import (
    DriverCatalogError,
    ExportError,
    ExtractionError,
    NormalizationError,
    PipelineBusyError,
    StageError,
)

STAGE_PROGRESS: dict[str, str] = {
    "fetch-page": "Step 1/4: fetching the product page...",
    "parse-params": "Step 2/4: parsing API parameters...",
    "fetch-api": "Step 3/4: fetching the driver list...",
    "normalize": "Step 4/4: organizing drivers...",
}

_NORMALIZE_REASONS: dict[str, str] = {
    "empty-or-malformed": "The driver list was empty or could not be read.",
    "invalid-record": "The driver list contained an unreadable entry.",
}

_EXPORT_REASONS: dict[str, str] = {
    "no-catalog": "No driver data loaded; fetch a device first.",
    "no-links": "No downloadable links were found to export.",
}


def describe_error(exc: DriverCatalogError) -> str:
    if isinstance(exc, StageError):
        return _describe_stage(exc)
    if isinstance(exc, ExtractionError):
        return f"Could not find API parameters: {', '.join(exc.missing)}."
    if isinstance(exc, NormalizationError):
        return _NORMALIZE_REASONS.get(exc.reason, exc.reason)
    if isinstance(exc, ExportError):
        return _EXPORT_REASONS.get(exc.reason, exc.reason)
    if isinstance(exc, PipelineBusyError):
        return "A fetch is already running."
    return str(exc)


def _describe_stage(exc: StageError) -> str:
    detail = exc.detail
    if exc.stage == "fetch-page":
        return _http_message("Could not load the product page", detail)
    if exc.stage == "parse-params":
        missing = ", ".join(detail) if isinstance(detail, (tuple, list)) else str(detail)
        return f"Could not find API parameters in the product page: {missing}."
    if exc.stage == "fetch-api":
        return _http_message("Could not load the driver list", detail)
    if exc.stage == "normalize":
        return _NORMALIZE_REASONS.get(str(detail), f"Could not organize drivers: {detail}")
    if exc.stage == "cancelled":
        return f"Cancelled before {detail}."
    return str(exc)


def _http_message(prefix: str, detail: object) -> str:
    if isinstance(detail, int):
        return f"{prefix} (HTTP {detail})."
    return f"{prefix}: {detail}"
