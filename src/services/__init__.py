"""
Platform services: accessory aggregation, heartbeat and orchestration
"""

from .aggregator import AccessoryAggregator, MAX_ACCESSORIES
from .heartbeat import HeartbeatScheduler, BEATS_PER_WEEK
from .hue_platform import HuePlatform

__all__ = ['AccessoryAggregator', 'MAX_ACCESSORIES', 'HeartbeatScheduler',
           'BEATS_PER_WEEK', 'HuePlatform']
