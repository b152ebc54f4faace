"""
Hue Platform - discovers bridges, exposes their accessories and keeps them polled
"""

import asyncio
import logging
import platform
from importlib import metadata
from typing import Any, Callable, Dict, List, Optional, Sequence

from bridge.client import BridgeClient
from bridge.handle import BridgeHandle
from bridge.hue_client import HueBridgeClient
from bridge.models import CharacteristicDescriptor, CUSTOM_CHARACTERISTICS
from config_loader import PlatformConfig
from discovery.manager import BridgeDiscovery
from services.aggregator import AccessoryAggregator
from services.heartbeat import HeartbeatScheduler, BEAT_INTERVAL

logger = logging.getLogger(__name__)

PACKAGE_NAME = "hue-platform"

SetupHook = Callable[[Sequence[CharacteristicDescriptor]], None]

def _package_version() -> str:
    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        return "unknown"

class HuePlatform:
    """Main platform orchestrating discovery, aggregation and heartbeat"""

    def __init__(
        self,
        config: PlatformConfig,
        client_factory: Optional[Callable[[str], BridgeClient]] = None,
        setup_hook: Optional[SetupHook] = None,
        heartbeat_interval: float = BEAT_INTERVAL,
    ):
        self.config = config
        self.name = config.name
        self.client_factory = client_factory or (lambda address: HueBridgeClient(config, address))
        self.setup_hook = setup_hook

        self.bridges: List[BridgeHandle] = []
        self.discovery = BridgeDiscovery(config)
        self.aggregator = AccessoryAggregator(self.client_factory, self.bridges)
        self.heartbeat = HeartbeatScheduler(self.bridges, interval=heartbeat_interval)

        self.accessory_list: List = []
        self._enumerated = False
        self._stop_requested = False
        self._stopped: Optional[asyncio.Event] = None

        logger.info(f"{PACKAGE_NAME} v{_package_version()}, python {platform.python_version()}")

    async def accessories(self) -> List:
        """
        Discover bridges and return the aggregated accessory list
        Any probe failure leaves the platform with no accessories and no heartbeat
        """
        if self._enumerated:
            logger.warning("Accessories already enumerated - bridge set is fixed after startup")
            return list(self.accessory_list)
        self._enumerated = True

        if self.setup_hook is not None:
            self.setup_hook(CUSTOM_CHARACTERISTICS)

        descriptors = await self.discovery.discover()

        try:
            accessory_list = await self.aggregator.aggregate(descriptors)
        except Exception as e:
            if str(e):
                logger.error(str(e))
            return []

        if accessory_list:
            self.heartbeat.start()

        self.accessory_list = accessory_list
        return list(accessory_list)

    async def run(self) -> List:
        """Enumerate accessories and, when there are any, keep running until stopped"""
        accessory_list = await self.accessories()
        if accessory_list and not self._stop_requested:
            # Created here so the event belongs to the running loop
            self._stopped = asyncio.Event()
            await self._stopped.wait()
        return accessory_list

    async def stop(self) -> None:
        """Stop the heartbeat; the bridge list is kept as-is"""
        logger.info("Stopping platform...")
        self._stop_requested = True
        await self.heartbeat.stop()
        if self._stopped is not None:
            self._stopped.set()
        logger.info("Platform stopped")

    def get_status(self) -> Dict[str, Any]:
        """Get platform status for monitoring"""
        return {
            "name": self.name,
            "bridges": [bridge.address for bridge in self.bridges],
            "accessory_count": len(self.accessory_list),
            "heartbeat_running": self.heartbeat.running,
            "beat": self.heartbeat.beat,
            "heartbeat_ticks": self.heartbeat.tick_count,
        }
