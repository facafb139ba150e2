"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) away from the CLI.
- Lets adapters (HTTP, exporters) read config consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.language import Website

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def get_user_config_dir() -> Path:
    """Per-user config directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "rog-drivers"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "rog-drivers"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "rog-drivers"
    return Path.home() / ".config" / "rog-drivers"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Write or update variables in the user's global .env.

    A value of `None` leaves the existing entry untouched.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# rog-drivers user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typed, validated env vars at the edge, without config logic in the core.
    - One configuration contract shared by the CLI and the adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="ROG_DRIVERS_",
        extra="ignore",
        case_sensitive=False,
        # Project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Per-request timeout (seconds).",
    )
    user_agent: str = Field(
        default="Mozilla/5.0 (Windows NT 10.0; Win64; x64) rog-drivers/0.1",
        min_length=1,
        description="User-Agent sent to the vendor site.",
    )

    page_locale: str = Field(
        default="us",
        min_length=1,
        description="Locale of the product page used for parameter extraction.",
    )
    page_url_template: str = Field(
        default="https://rog.asus.com/{locale}/gaming-handhelds/rog-ally/{slug}/helpdesk_download/",
        min_length=8,
        description="Product support page URL; receives `locale` and `slug`.",
    )
    api_base_url: str = Field(
        default="https://rog.asus.com/support/webapi/ProductV2/GetPDDrivers",
        min_length=8,
        description="Driver listing endpoint.",
    )
    asset_host: str = Field(
        default="https://dlcdnets.asus.com",
        min_length=8,
        description="Host used to resolve relative download URLs.",
    )
    relay_prefix: str | None = Field(
        default=None,
        description="Optional relay prepended to every URL (e.g. https://corsproxy.io/?).",
    )

    default_website: Website = Field(
        default=Website.GLOBAL,
        description="Website code used as the data language of the driver listing.",
    )

    log_level: LogLevel = Field(
        default="WARNING",
        description="Log level for the CLI (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    )
    export_dir: Path = Field(
        default=Path("exports"),
        description="Directory where exported link lists are written.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value

    def page_url(self, slug: str) -> str:
        return self.page_url_template.format(locale=self.page_locale, slug=slug)
