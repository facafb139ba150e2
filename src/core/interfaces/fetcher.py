"""Page fetching contract.

Why Protocol:
- A structural contract (duck typing) without rigid inheritance.
- The pipeline can run against the httpx adapter or an in-memory stub in
  tests without knowing which.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class FetchResponse:
    status: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@runtime_checkable
class PageFetcher(Protocol):
    """Minimal HTTP GET capability.

    Design rules:
    - `fetch` is async because it performs network I/O.
    - A non-2xx status is returned, not raised; the caller decides.
    """

    async def fetch(self, url: str) -> FetchResponse:
        """GET `url` and return its status and decoded body."""

        ...
