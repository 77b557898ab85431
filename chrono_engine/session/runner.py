"""SessionRunner — serialises actions and regeneration for one session.

Design notes:
    - An asyncio.Lock guards every call into the PuzzleSession, so an
      action's affordability check, mutation and settle step are never
      interleaved with a regeneration tick or another action.
    - Lock arrival order is the total order of events.
    - Elapsed time is measured here, not in the engine.  Gains smaller
      than min_gain are deferred: the elapsed time keeps accumulating
      until it is worth applying.
    - Every action first credits the time elapsed since the previous
      tick, so regeneration always lands before a later action.
    - Time spent paused is never credited.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from chrono_engine.domain.outcome import ActionResult
from chrono_engine.domain.snapshot import SessionSnapshot
from chrono_engine.foundation.clock import monotonic_seconds
from chrono_engine.session.puzzle_session import PuzzleSession

logger = logging.getLogger(__name__)


class SessionRunner:
    """Async front door to a PuzzleSession.

    Args:
        session: The session to drive.
        tick_interval: Seconds between regeneration ticks in run().
        min_gain: Smallest energy gain worth applying on a tick.
    """

    def __init__(
        self,
        session: PuzzleSession,
        tick_interval: float = 1.0,
        min_gain: float = 0.01,
    ) -> None:
        if tick_interval <= 0:
            raise ValueError("tick_interval must be positive")
        if min_gain < 0:
            raise ValueError("min_gain must be non-negative")

        self._session = session
        self._tick_interval = tick_interval
        self._min_gain = min_gain
        self._lock = asyncio.Lock()
        self._last_tick: Optional[float] = None
        self._stopping = asyncio.Event()
        self._task: Optional[asyncio.Task] = None

    @property
    def session(self) -> PuzzleSession:
        return self._session

    # ── Actions ──────────────────────────────────────────────────────────

    async def start(self) -> ActionResult:
        async with self._lock:
            self._flush_locked()
            result = self._session.start()
            self._last_tick = monotonic_seconds()
            return result

    async def pause(self) -> None:
        async with self._lock:
            self._flush_locked()
            self._session.pause()
            self._last_tick = None

    async def reset(self) -> None:
        async with self._lock:
            self._session.reset()
            self._last_tick = None

    async def advance_level(self) -> ActionResult:
        async with self._lock:
            # Time already played is credited at the old level's rate
            self._flush_locked()
            return self._session.advance_level()

    async def move(self, fragment_id: int, x: int, y: int) -> ActionResult:
        async with self._lock:
            self._flush_locked()
            return self._session.move(fragment_id, x, y)

    async def nudge(self, fragment_id: int, dx: int, dy: int) -> ActionResult:
        async with self._lock:
            self._flush_locked()
            return self._session.nudge(fragment_id, dx, dy)

    async def rotate(self, fragment_id: int, delta: int) -> ActionResult:
        async with self._lock:
            self._flush_locked()
            return self._session.rotate(fragment_id, delta)

    async def snapshot(self) -> SessionSnapshot:
        async with self._lock:
            return self._session.snapshot()

    # ── Regeneration ─────────────────────────────────────────────────────

    async def regenerate(self) -> float:
        """Apply regeneration for the time elapsed since the previous tick.

        Returns the energy credited (0 when deferred, paused or full).
        """
        async with self._lock:
            if not self._session.is_playing:
                self._last_tick = None
                return 0.0

            now = monotonic_seconds()
            if self._last_tick is None:
                self._last_tick = now
                return 0.0

            elapsed = now - self._last_tick
            if self._session.regen_rate * elapsed < self._min_gain:
                return 0.0

            self._last_tick = now
            gained = self._session.tick(elapsed)
            logger.debug("Regenerated %.3f energy over %.3fs", gained, elapsed)
            return gained

    def _flush_locked(self) -> None:
        """Credit any pending elapsed time.  Must be called while holding self._lock."""
        if self._last_tick is None or not self._session.is_playing:
            return
        now = monotonic_seconds()
        self._session.tick(max(0.0, now - self._last_tick))
        self._last_tick = now

    # ── Background loop ──────────────────────────────────────────────────

    async def run(self) -> None:
        """Tick regeneration every tick_interval seconds until stop()."""
        self._stopping.clear()
        await self._loop()

    async def _loop(self) -> None:
        logger.info("Regeneration loop started (interval=%.2fs)", self._tick_interval)
        while not self._stopping.is_set():
            await self.regenerate()
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=self._tick_interval)
            except asyncio.TimeoutError:
                pass
        logger.info("Regeneration loop stopped")

    def start_background(self) -> asyncio.Task:
        """Spawn run() on the current event loop."""
        if self._task is None or self._task.done():
            self._stopping.clear()
            self._task = asyncio.create_task(self._loop())
        return self._task

    async def stop(self) -> None:
        self._stopping.set()
        if self._task is not None:
            await self._task
            self._task = None
