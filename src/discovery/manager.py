"""
Bridge discovery: static host list or the meethue cloud portal
"""

import asyncio
import logging
import time
import aiohttp
from typing import List

from .models import BridgeDescriptor
from config_loader import PlatformConfig
from http_helper import create_portal_session

logger = logging.getLogger(__name__)

PORTAL_URL = "https://www.meethue.com/api/nupnp"
ADDRESS_FIELD = "internalipaddress"

class BridgeDiscovery:
    """Locates bridges from configuration or via N-UPnP portal lookup"""

    def __init__(self, config: PlatformConfig, portal_url: str = PORTAL_URL):
        self.config = config
        self.portal_url = portal_url

    async def discover(self) -> List[BridgeDescriptor]:
        """
        Return the bridges to probe, in enumeration order
        Portal failures are logged and reported as an empty list
        """
        if self.config.hosts is not None:
            logger.debug(f"Using {len(self.config.hosts)} configured bridge host(s)")
            return [BridgeDescriptor(address=host) for host in self.config.hosts]

        return await self._discover_from_portal()

    async def _discover_from_portal(self) -> List[BridgeDescriptor]:
        logger.debug("contacting meethue portal")
        start_time = time.time()

        try:
            async with create_portal_session(self.config.timeout_seconds) as session:
                async with session.get(self.portal_url) as response:
                    if response.status != 200:
                        logger.error(f"meethue portal: status {response.status}")
                        return []
                    body = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"meethue portal: communication error {e!r}")
            return []

        if not body or not isinstance(body, list):
            logger.error("meethue portal: no bridges registered")
            return []

        descriptors = []
        for entry in body:
            address = entry.get(ADDRESS_FIELD) if isinstance(entry, dict) else None
            if not address:
                logger.error(f"meethue portal: malformed entry {entry!r}")
                return []
            descriptors.append(BridgeDescriptor(address=str(address)))

        duration = time.time() - start_time
        logger.info(f"meethue portal: {len(descriptors)} bridge(s) found in {duration:.1f}s")
        return descriptors
