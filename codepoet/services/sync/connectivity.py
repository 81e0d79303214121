"""Network reachability probe used before talking to the cloud store."""

import logging

import httpx

from codepoet.config import settings

logger = logging.getLogger(__name__)


class ConnectivityService:
    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url or settings.connectivity_check_url
        self.timeout = timeout or settings.connectivity_timeout_seconds
        self._transport = transport

    async def is_connected(self) -> bool:
        """True when the probe URL answers at all; any transport error means offline."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                await client.head(self.url)
        except httpx.HTTPError as e:
            logger.info(f"Connectivity check to {self.url} failed: {e}")
            return False
        return True


connectivity_service = ConnectivityService()
