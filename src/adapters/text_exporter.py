"""Plain-text export of latest download links (one URL per line)."""

from __future__ import annotations

from pathlib import Path

from core.domain.models import ExportBundle


def export_latest_links(*, bundle: ExportBundle, output_dir: Path, filename: str | None = None) -> Path:
    """Write `bundle` under `output_dir` using its suggested filename."""

    output_path = output_dir / (filename or bundle.suggested_filename)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(bundle.to_bytes())
    return output_path
