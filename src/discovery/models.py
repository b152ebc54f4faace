"""
Discovery data structures and models
"""

from dataclasses import dataclass

@dataclass(frozen=True)
class BridgeDescriptor:
    """Network address of a discovered bridge"""
    address: str
