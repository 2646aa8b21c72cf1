from __future__ import annotations

import logging
from typing import Any, Optional

from geopy.adapters import AioHTTPAdapter
from geopy.exc import GeopyError
from geopy.geocoders import OpenCage

from ..core.constants import DEFAULT_GEOCODER_TIMEOUT_S
from ..core.exceptions import ValidationError
from ..location.model import Coordinate

logger = logging.getLogger(__name__)


class OpenCageFallbackGeocoder:
    """Approximate positioning from a place name through OpenCage.

    Without an API key the fallback is simply unavailable and every lookup
    returns None. Network failures and timeouts are logged and also yield None.

    Note: A new geocoder (and HTTP session) is opened per lookup; fallbacks are rare.
    """

    def __init__(
        self,
        api_key: Optional[str],
        *,
        timeout_s: float = DEFAULT_GEOCODER_TIMEOUT_S,
        geocoder: Any = None,
    ):
        self._api_key = (api_key or "").strip() or None
        self._timeout_s = float(timeout_s)
        self._geocoder = geocoder

    @property
    def enabled(self) -> bool:
        return self._api_key is not None

    async def locate(self, query: str) -> Optional[Coordinate]:
        query = (query or "").strip()
        if not query:
            return None
        if not self.enabled:
            logger.info("fallback geocoding skipped: no OpenCage API key configured")
            return None

        try:
            if self._geocoder is not None:
                location = await self._geocoder.geocode(query, exactly_one=True)
            else:
                async with OpenCage(
                    api_key=self._api_key,
                    timeout=self._timeout_s,
                    adapter_factory=AioHTTPAdapter,
                ) as geocoder:
                    location = await geocoder.geocode(query, exactly_one=True)
        except GeopyError as e:
            logger.warning("OpenCage lookup failed for %r: %s", query, e)
            return None

        if location is None:
            logger.info("OpenCage returned no result for %r", query)
            return None

        try:
            return Coordinate(latitude=location.latitude, longitude=location.longitude)
        except ValidationError as e:
            logger.warning("OpenCage returned an unusable coordinate for %r: %s", query, e)
            return None
