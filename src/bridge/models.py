"""
Bridge data structures and models
"""

from typing import Optional, Tuple
from dataclasses import dataclass

@dataclass(frozen=True)
class Accessory:
    """A controllable device exposed by a bridge"""
    name: str
    kind: str       # "light", "group", "sensor", "schedule", "rule"
    resource: str   # bridge API path, e.g. "/lights/3"
    bridge: str     # bridge address
    features: Tuple[str, ...] = ()

@dataclass(frozen=True)
class CharacteristicDescriptor:
    """Custom capability registered with the host accessory framework"""
    name: str
    uuid: str
    format: str
    perms: Tuple[str, ...]
    min_value: Optional[int] = None
    max_value: Optional[int] = None
    step_value: Optional[int] = None

CUSTOM_CHARACTERISTICS = (
    # Colour temperature in Kelvin
    CharacteristicDescriptor(
        name="Color Temperature",
        uuid="04200041-0000-1000-8000-0026BB765291",
        format="int",
        perms=("read", "notify", "write"),
        min_value=2000,
        max_value=6536,
        step_value=1,
    ),
    CharacteristicDescriptor(
        name="Last Updated",
        uuid="04200021-0000-1000-8000-0026BB765291",
        format="string",
        perms=("read", "notify"),
    ),
    # Colour temperature in mired, as used by the Hue app
    CharacteristicDescriptor(
        name="Color Temperature",
        uuid="E887EF67-509A-552D-A138-3DA215050F46",
        format="int",
        perms=("read", "notify", "write"),
        min_value=153,
        max_value=500,
        step_value=1,
    ),
    CharacteristicDescriptor(
        name="Unique ID",
        uuid="D8B76298-42E7-5FFD-B1D6-1782D9A1F936",
        format="string",
        perms=("read",),
    ),
)
