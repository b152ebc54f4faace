"""
Bridge client interface
"""

from abc import ABC, abstractmethod
from typing import List


class BridgeError(Exception):
    """Raised when a bridge cannot be queried"""


class BridgeClient(ABC):
    """Talks to a single bridge on behalf of the platform"""

    @abstractmethod
    async def accessories(self) -> List:
        """Probe the bridge and return its accessories in bridge order"""

    @abstractmethod
    async def heartbeat(self, beat: int) -> None:
        """Handle one heartbeat tick"""
