"""Fetch-and-normalize orchestration.

One run goes page fetch -> parameter extraction -> driver API fetch ->
normalization. Each stage fails on its own with a `StageError` tagged by
stage name; nothing is retried. The pipeline never holds on to a catalog:
`run` returns a fresh one and the caller decides what to keep.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from core.config import AppSettings
from core.domain.errors import (
    ExtractionError,
    NormalizationError,
    PipelineBusyError,
    StageError,
    TransportError,
)
from core.domain.models import Catalog, DeviceRequest
from core.interfaces.fetcher import FetchResponse, PageFetcher
from core.services.catalog import normalize
from core.services.extraction import extract
from core.services.query_builder import build_api_url

logger = logging.getLogger(__name__)

STAGE_FETCH_PAGE = "fetch-page"
STAGE_PARSE_PARAMS = "parse-params"
STAGE_FETCH_API = "fetch-api"
STAGE_NORMALIZE = "normalize"
STAGE_CANCELLED = "cancelled"

STAGES: tuple[str, ...] = (
    STAGE_FETCH_PAGE,
    STAGE_PARSE_PARAMS,
    STAGE_FETCH_API,
    STAGE_NORMALIZE,
)


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (progress)."""

    stage_started: Callable[[str], None] | None = None


class FetchPipeline:
    """Runs the four stages for one `DeviceRequest` at a time."""

    def __init__(
        self,
        fetcher: PageFetcher,
        settings: AppSettings | None = None,
        hooks: PipelineHooks | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._settings = settings or AppSettings()
        self._hooks = hooks or PipelineHooks()
        self._running = False
        self._cancel_requested = False

    @property
    def in_progress(self) -> bool:
        return self._running

    def cancel(self) -> None:
        """Ask the active run to stop before its next stage."""

        if self._running:
            self._cancel_requested = True

    async def run(self, request: DeviceRequest) -> Catalog:
        if self._running:
            raise PipelineBusyError(f"cannot start {request.model_slug}: a fetch run is already in progress")

        self._running = True
        self._cancel_requested = False
        try:
            return await self._run(request)
        finally:
            self._running = False
            self._cancel_requested = False

    async def _run(self, request: DeviceRequest) -> Catalog:
        # The page is always fetched in the reference locale; only the data
        # language (`website`) follows the request.
        self._enter(STAGE_FETCH_PAGE)
        page = await self._get(STAGE_FETCH_PAGE, self._settings.page_url(request.model_slug))

        self._enter(STAGE_PARSE_PARAMS)
        try:
            params = extract(page.body, model=request.model_slug, website=request.language_code)
        except ExtractionError as exc:
            raise StageError(STAGE_PARSE_PARAMS, exc.missing) from exc
        logger.info("Extracted m1id=%s systemCode=%s", params.product_id, params.system_code)

        self._enter(STAGE_FETCH_API)
        api = await self._get(STAGE_FETCH_API, build_api_url(params, self._settings.api_base_url))

        self._enter(STAGE_NORMALIZE)
        try:
            return normalize(api.body, fallback_model=request.model_slug)
        except NormalizationError as exc:
            raise StageError(STAGE_NORMALIZE, exc.reason) from exc

    def _enter(self, stage: str) -> None:
        if self._cancel_requested:
            logger.info("Run cancelled before stage %s", stage)
            raise StageError(STAGE_CANCELLED, stage)
        logger.debug("Stage %s", stage)
        if self._hooks.stage_started:
            self._hooks.stage_started(stage)

    async def _get(self, stage: str, url: str) -> FetchResponse:
        try:
            response = await self._fetcher.fetch(url)
        except TransportError as exc:
            raise StageError(stage, str(exc)) from exc
        if not response.ok:
            logger.warning("Stage %s: HTTP %d for %s", stage, response.status, url)
            raise StageError(stage, response.status)
        return response
