"""
Discovery module for Hue bridge discovery
"""

from .manager import BridgeDiscovery, PORTAL_URL
from .models import BridgeDescriptor

__all__ = ['BridgeDiscovery', 'BridgeDescriptor', 'PORTAL_URL']
