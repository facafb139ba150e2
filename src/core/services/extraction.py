"""Parameter extraction from the product support page.

The driver endpoint needs identifiers that the vendor only embeds in the
page markup and inline scripts. Each way of finding one is a named
`ExtractionRule`; rules for the same field are tried in declaration order,
so fallbacks are explicit and every rule can be tested on its own.

Pure text in, `ExtractedParams` out: no network, no DOM.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable

from core.domain.errors import ExtractionError
from core.domain.models import ExtractedParams

logger = logging.getLogger(__name__)

REQUIRED_FIELDS: tuple[str, ...] = ("product_id", "system_code", "model", "website")


@dataclass(frozen=True)
class ExtractionRule:
    """A named regex that captures one field from raw page text."""

    name: str
    field: str
    pattern: re.Pattern[str]

    def apply(self, text: str) -> str | None:
        match = self.pattern.search(text)
        if not match or match.group(1) is None:
            return None
        value = match.group(1).strip()
        return value or None


DEFAULT_RULES: tuple[ExtractionRule, ...] = (
    ExtractionRule(
        name="product_id.bv_product_attr",
        field="product_id",
        pattern=re.compile(r'data-bv-product-id="ROG_M1_(\d+)_P"'),
    ),
    ExtractionRule(
        name="product_id.m1id_json",
        field="product_id",
        pattern=re.compile(r'"m1Id":(\d+),'),
    ),
    ExtractionRule(
        name="system_code.js_system",
        field="system_code",
        pattern=re.compile(r"system:\s*['\"]([^'\"]+)['\"]"),
    ),
)


def rules_for(field: str, rules: Iterable[ExtractionRule] = DEFAULT_RULES) -> list[ExtractionRule]:
    return [rule for rule in rules if rule.field == field]


def first_match(text: str, rules: Iterable[ExtractionRule]) -> str | None:
    """Run `rules` in order and return the first usable capture."""

    for rule in rules:
        value = rule.apply(text)
        if value is not None:
            return value
        logger.debug("Extraction rule %s found nothing", rule.name)
    return None


def extract(
    html: str,
    *,
    model: str,
    website: str,
    rules: Iterable[ExtractionRule] = DEFAULT_RULES,
) -> ExtractedParams:
    """Extract the query identifiers from `html`.

    `model` and `website` come from the caller (device slug and data
    language) and are held to the same rule as page captures: blank after
    trimming counts as missing.

    Raises `ExtractionError` naming every missing field.
    """

    rules = tuple(rules)
    found: dict[str, str | None] = {
        "product_id": first_match(html, rules_for("product_id", rules)),
        "system_code": first_match(html, rules_for("system_code", rules)),
        "model": (model or "").strip() or None,
        "website": (website or "").strip() or None,
    }

    missing = tuple(name for name in REQUIRED_FIELDS if not found[name])
    if missing:
        logger.info("Parameter extraction failed; missing %s", ", ".join(missing))
        raise ExtractionError(missing)

    return ExtractedParams(**found)
