"""Driver endpoint query assembly."""

from __future__ import annotations

from core.domain.models import ApiQuery, ExtractedParams

# Empty `cpu` and `LevelTagId` are accepted by the endpoint; 52 is Windows 11.
DEFAULT_PDID = "0"
DEFAULT_OSID = "52"


def build_query(params: ExtractedParams) -> ApiQuery:
    return ApiQuery(
        website=params.website,
        model=params.model,
        pdid=DEFAULT_PDID,
        m1id=params.product_id,
        mode="",
        cpu="",
        osid=DEFAULT_OSID,
        active="",
        level_tag_id="",
        system_code=params.system_code,
    )


def build_api_url(params: ExtractedParams, base_url: str) -> str:
    """Full `GetPDDrivers` URL for `params`."""

    return f"{base_url}?{build_query(params).serialize()}"
