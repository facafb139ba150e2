"""Website codes for the driver listing.

The vendor API takes a `website` code that selects the language of the
returned titles and descriptions. Keeping the enum in the domain layer lets
the CLI and the pipeline share it without importing adapters.
"""

from __future__ import annotations

from enum import Enum


class Website(str, Enum):
    """Supported data-language choices for the driver listing."""

    GLOBAL = "global"
    US = "us"
    TAIWAN = "tw"
    JAPAN = "jp"

    @classmethod
    def default(cls) -> "Website":
        """Return the website code used when nothing else is configured."""

        return cls.GLOBAL

    @classmethod
    def from_locale(cls, locale: str) -> "Website":
        """Map a UI locale (e.g. `zh-TW`) to a website code."""

        tag = locale.strip().lower()
        if tag.startswith("zh"):
            return cls.TAIWAN
        if tag.startswith("ja"):
            return cls.JAPAN
        if tag == "en-us":
            return cls.US
        return cls.default()

    def label(self) -> str:
        """Human readable label for prompts and logging."""

        return {
            Website.GLOBAL: "Global (English)",
            Website.US: "United States",
            Website.TAIWAN: "Taiwan (Traditional Chinese)",
            Website.JAPAN: "Japan",
        }[self]
