"""
Bridge module: per-bridge client and handle
"""

from .client import BridgeClient, BridgeError
from .handle import BridgeHandle
from .hue_client import HueBridgeClient
from .models import Accessory, CharacteristicDescriptor, CUSTOM_CHARACTERISTICS

__all__ = ['BridgeClient', 'BridgeError', 'BridgeHandle', 'HueBridgeClient',
           'Accessory', 'CharacteristicDescriptor', 'CUSTOM_CHARACTERISTICS']
