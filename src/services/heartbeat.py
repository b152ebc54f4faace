"""
Fixed-interval heartbeat for all known bridges
"""

import asyncio
import logging
from typing import List, Optional, Set

from bridge.handle import BridgeHandle

logger = logging.getLogger(__name__)

BEAT_INTERVAL = 1.0
BEATS_PER_WEEK = 7 * 24 * 3600

class HeartbeatScheduler:
    """
    Ticks every bridge once per interval with a wrapping beat counter
    Heartbeats are fire-and-forget: a slow or failing bridge never delays a tick
    """

    def __init__(self, bridges: List[BridgeHandle], interval: float = BEAT_INTERVAL, initial_beat: int = -1):
        self.bridges = bridges
        self.interval = interval
        self.beat = initial_beat
        self.running = False
        self.tick_count = 0
        self._task: Optional[asyncio.Task] = None
        self._pending: Set[asyncio.Task] = set()

    def start(self) -> None:
        """Start the timer; later calls are no-ops"""
        if self._task is not None:
            return
        self.running = True
        self._task = asyncio.create_task(self._run())
        logger.info(f"Heartbeat started for {len(self.bridges)} bridge(s) ({self.interval}s interval)")

    async def stop(self) -> None:
        """Cancel the timer and any heartbeats still in flight"""
        self.running = False
        if self._task is not None:
            self._task.cancel()
            await asyncio.gather(self._task, return_exceptions=True)
        pending = list(self._pending)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        logger.info(f"Heartbeat stopped after {self.tick_count} ticks")

    def tick(self) -> int:
        """Advance the beat and notify every bridge without waiting"""
        self.beat = (self.beat + 1) % BEATS_PER_WEEK
        self.tick_count += 1
        for bridge in self.bridges:
            task = asyncio.create_task(bridge.heartbeat(self.beat))
            self._pending.add(task)
            task.add_done_callback(self._heartbeat_done)
        return self.beat

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        next_fire = loop.time() + self.interval

        while self.running:
            await asyncio.sleep(max(0, next_fire - loop.time()))
            self.tick()
            next_fire += self.interval

            # Event loop was blocked for more than a full interval: resync rather than burst
            lag = loop.time() - next_fire
            if lag > self.interval:
                logger.warning(f"Heartbeat running {lag:.1f}s behind, resynchronizing")
                next_fire = loop.time() + self.interval

    def _heartbeat_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.debug(f"Heartbeat failed: {task.exception()!r}")
