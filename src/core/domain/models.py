"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  core to I/O libraries.
- The vendor payload uses PascalCase keys and loose types; aliases plus
  `extra="ignore"` absorb that at the edge.

Note:
- These models describe *what* the catalog is, not *how* it is fetched.
"""

from __future__ import annotations

from datetime import date
from typing import Any
from urllib.parse import urlencode

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class DeviceRequest(BaseModel):
    """Which product page to fetch and in which data language."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_slug: str = Field(
        ...,
        min_length=1,
        description="Device slug as used in the support URL (e.g. 'rog-ally-2023').",
    )
    language_code: str = Field(
        ...,
        min_length=1,
        description="Website code sent as the `website` query parameter.",
    )


class ExtractedParams(BaseModel):
    """Identifiers needed to query the driver endpoint.

    Only built when every field is present; see `core.services.extraction`.
    """

    model_config = ConfigDict(frozen=True)

    product_id: str = Field(..., min_length=1, description="Vendor product id (m1id).")
    system_code: str = Field(..., min_length=1, description="Site system code (e.g. 'rog').")
    model: str = Field(..., min_length=1, description="Device slug.")
    website: str = Field(..., min_length=1, description="Website code for the data language.")


class ApiQuery(BaseModel):
    """Query string for `GetPDDrivers`.

    Field order is the serialization order; do not reorder.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    website: str
    model: str
    pdid: str = "0"
    m1id: str
    mode: str = ""
    cpu: str = ""
    osid: str = "52"
    active: str = ""
    level_tag_id: str = Field(default="", alias="LevelTagId")
    system_code: str = Field(..., alias="systemCode")

    def as_params(self) -> list[tuple[str, str]]:
        return list(self.model_dump(by_alias=True).items())

    def serialize(self) -> str:
        return urlencode(self.as_params())


class DriverFile(BaseModel):
    """One downloadable file. Several files may share a `title`."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    version: str = ""
    release_date: date | None = None
    release_date_raw: str = ""
    file_size: str = ""
    download_url: str | None = None
    is_latest: bool = Field(
        default=False,
        description="Badge marker, derived per title when the catalog is normalized.",
    )


class DriverCategory(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    declared_count: int = 0
    files: list[DriverFile] = Field(default_factory=list)


class Catalog(BaseModel):
    """Normalized driver catalog for one device.

    Produced once per fetch run and replaced wholesale by the next one.
    """

    model_config = ConfigDict(frozen=True)

    model_name: str = ""
    categories: list[DriverCategory] = Field(default_factory=list)

    def latest_files(self) -> list[DriverFile]:
        return [f for c in self.categories for f in c.files if f.is_latest]


class ExportBundle(BaseModel):
    """Latest-version download links ready to be written as a text file."""

    model_config = ConfigDict(frozen=True)

    urls: list[str]
    suggested_filename: str

    @property
    def text(self) -> str:
        return "\n".join(self.urls)

    def to_bytes(self) -> bytes:
        return self.text.encode("utf-8")


# Raw vendor payload -------------------------------------------------------


class RawDownloadUrl(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    global_url: str | None = Field(default=None, alias="Global")


class RawDriverFile(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)

    id: str = Field(..., alias="Id")
    title: str = Field(default="", alias="Title")
    version: str | None = Field(default=None, alias="Version")
    release_date: str | None = Field(default=None, alias="ReleaseDate")
    file_size: str | None = Field(default=None, alias="FileSize")
    download_url: RawDownloadUrl | None = Field(default=None, alias="DownloadUrl")

    @field_validator("title", mode="before")
    @classmethod
    def _null_title(cls, value: Any) -> Any:
        return "" if value is None else value


class RawDriverCategory(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str = Field(..., alias="Name")
    count: int = Field(default=0, alias="Count")
    # Validated one by one as `RawDriverFile` once they are known to carry a link.
    files: list[Any] = Field(default_factory=list, alias="Files")

    @field_validator("count", mode="before")
    @classmethod
    def _null_count(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("files", mode="before")
    @classmethod
    def _null_files(cls, value: Any) -> Any:
        return [] if value is None else value


class RawDriverResult(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    obj: list[RawDriverCategory] = Field(..., alias="Obj")
    model: str | None = Field(default=None, alias="Model")
