"""JSON export of the normalized catalog.

Why JSON:
- Interoperability with other tooling (diffing driver sets between runs).
- Keeps the full catalog, including `is_latest`, independent of the CLI view.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import Catalog


def export_catalog_json(*, catalog: Catalog, output_path: Path) -> Path:
    """Write `Catalog` as UTF-8 JSON with stable formatting."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = catalog.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
