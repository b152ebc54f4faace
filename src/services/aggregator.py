"""
Accessory aggregation across all discovered bridges
"""

import asyncio
import logging
import time
from typing import Callable, List, Sequence

from bridge.client import BridgeClient
from bridge.handle import BridgeHandle
from discovery.models import BridgeDescriptor

logger = logging.getLogger(__name__)

# Hard limit of accessories behind a single bridged platform
MAX_ACCESSORIES = 99

class AccessoryAggregator:
    """Probes every bridge concurrently and flattens the results"""

    def __init__(self, client_factory: Callable[[str], BridgeClient], bridges: List[BridgeHandle]):
        self.client_factory = client_factory
        self.bridges = bridges

    async def aggregate(self, descriptors: Sequence[BridgeDescriptor]) -> List:
        """
        Create a handle per bridge, probe them all at once and join the results
        Fails as a whole if any single probe fails
        """
        handles = []
        for descriptor in descriptors:
            handle = BridgeHandle(descriptor.address, self.client_factory(descriptor.address))
            self.bridges.append(handle)
            handles.append(handle)

        if not handles:
            logger.info("No bridges to probe")
            return []

        start_time = time.time()
        tasks = [asyncio.create_task(handle.accessories()) for handle in handles]
        # TODO: collect successes and log failures per bridge instead of failing the whole join
        per_bridge = await asyncio.gather(*tasks)

        accessory_list = []
        for handle, accessories in zip(handles, per_bridge):
            logger.debug(f"{handle.address}: {len(accessories)} accessories")
            accessory_list.extend(accessories)

        while len(accessory_list) > MAX_ACCESSORIES:
            accessory = accessory_list.pop()
            logger.error(f"too many accessories, ignoring {getattr(accessory, 'name', accessory)}")

        duration = time.time() - start_time
        logger.info(f"{len(accessory_list)} accessories from {len(handles)} bridge(s) in {duration:.1f}s")
        return accessory_list
