"""Typed errors for the catalog pipeline.

Every failure carries enough context (stage, missing fields, HTTP status,
reason code) for the presentation layer to build a precise message. None of
them are retried by the core.
"""

from __future__ import annotations

from typing import Any


class DriverCatalogError(Exception):
    """Base class for all catalog errors."""


class ExtractionError(DriverCatalogError):
    """Required identifiers could not be found in the product page."""

    def __init__(self, missing: tuple[str, ...]) -> None:
        self.missing = tuple(missing)
        super().__init__(f"missing parameters: {', '.join(self.missing)}")


class NormalizationError(DriverCatalogError):
    """The driver payload was empty or malformed."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class ExportError(DriverCatalogError):
    """Nothing could be exported (`no-catalog` or `no-links`)."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class StageError(DriverCatalogError):
    """A pipeline stage failed.

    `detail` is the HTTP status for fetch stages, the tuple of missing fields
    for `parse-params`, and the reason code for `normalize`.
    """

    def __init__(self, stage: str, detail: Any = None) -> None:
        self.stage = stage
        self.detail = detail
        super().__init__(f"{stage}: {detail}")


class PipelineBusyError(DriverCatalogError):
    """A fetch run was requested while another one is still in flight."""


class TransportError(DriverCatalogError):
    """The HTTP request itself failed (DNS, TLS, timeout...)."""
