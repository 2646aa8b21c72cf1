from __future__ import annotations

from typing import Optional, Protocol

from ..location.model import Coordinate


class FallbackGeocoder(Protocol):
    async def locate(self, query: str) -> Optional[Coordinate]:
        """Best-match coordinate for a place name, or None when unavailable."""

        raise NotImplementedError
