"""
Runtime handle for one discovered bridge
"""

import logging
from typing import List

from .client import BridgeClient

logger = logging.getLogger(__name__)

class BridgeHandle:
    """Owns the client for one bridge address for the lifetime of the process"""

    def __init__(self, address: str, client: BridgeClient):
        self.address = address
        self.client = client

    async def accessories(self) -> List:
        logger.debug(f"probing bridge at {self.address}")
        return await self.client.accessories()

    async def heartbeat(self, beat: int) -> None:
        await self.client.heartbeat(beat)

    def __repr__(self):
        return f"BridgeHandle({self.address!r})"
