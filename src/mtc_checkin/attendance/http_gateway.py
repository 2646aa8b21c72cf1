from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_API_TIMEOUT_S
from ..core.exceptions import GatewayUnavailableError
from .model import AttendanceSubmission, GatewayResponse

logger = logging.getLogger(__name__)


async def _read_payload(resp: aiohttp.ClientResponse) -> dict[str, Any]:
    try:
        data = await resp.json(content_type=None)
    except ValueError:
        text = (await resp.text()).strip()
        return {"message": text} if text and resp.status >= 400 else {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        return {"data": data}
    return data


class AiohttpAttendanceGateway:
    """REST client for the attendance endpoints.

    Note: We open a short-lived ClientSession per request; a user submits at most once a day.
    """

    def __init__(self, base_url: str, *, timeout_s: float = DEFAULT_API_TIMEOUT_S):
        self._base_url = require_non_empty(base_url, "API base URL").rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=float(timeout_s))

    def url_for(self, endpoint: str) -> str:
        return f"{self._base_url}/{endpoint.lstrip('/')}"

    async def post_attendance(self, *, endpoint: str, submission: AttendanceSubmission, token: str) -> GatewayResponse:
        url = self.url_for(endpoint)
        headers = {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}
        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as http:
                async with http.post(url, json=submission.to_payload(), headers=headers) as resp:
                    payload = await _read_payload(resp)
                    logger.info("POST %s -> %s", url, resp.status)
                    return GatewayResponse(status=resp.status, payload=payload)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning("POST %s failed: %r", url, e)
            raise GatewayUnavailableError(str(e) or e.__class__.__name__) from e
