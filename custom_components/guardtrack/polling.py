"""
PollingScheduler - fixed-interval tick driver with start/stop lifecycle.

This is a pure asyncio primitive with no HA or network dependencies.
"""
from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import AsyncIterator, Awaitable, Callable

from .const import POLL_INTERVAL

_LOGGER = logging.getLogger(__name__)

TickCallback = Callable[[], Awaitable[None]]


class PollingScheduler:
    """
    Runs an async tick callback immediately on start() and then every
    `interval` seconds until stop().

    Ticks are spawned as tasks, so a slow tick never delays the timer phase
    and two ticks may overlap. stop() cancels the timer at once; a tick task
    that is already awaiting I/O keeps running, and callers use the
    generation number to recognise results that belong to a stopped run.
    """

    def __init__(self, interval: float = POLL_INTERVAL) -> None:
        self._interval = interval
        self._on_tick: TickCallback | None = None
        self._timer: asyncio.Task | None = None
        # Incremented on every start() and stop()
        self._generation = 0
        self._tick_tasks: set[asyncio.Task] = set()

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def active(self) -> bool:
        return self._on_tick is not None

    @property
    def generation(self) -> int:
        return self._generation

    def is_current(self, generation: int) -> bool:
        """True while the run that handed out `generation` is still active."""
        return self.active and generation == self._generation

    def start(self, on_tick: TickCallback) -> None:
        """Idle -> Active. Fires on_tick right away, then on every interval."""
        if self.active:
            raise RuntimeError("PollingScheduler is already running")
        self._generation += 1
        self._on_tick = on_tick
        self._spawn_tick()
        self._timer = asyncio.ensure_future(self._run(self._generation))
        _LOGGER.debug("Polling started (every %ss)", self._interval)

    def stop(self) -> None:
        """Active -> Idle. No further ticks fire, including ones already due."""
        if not self.active:
            return
        self._generation += 1
        self._on_tick = None
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        _LOGGER.debug("Polling stopped")

    async def refresh_now(self) -> None:
        """Run one tick out of band without touching the timer phase."""
        if not self.active:
            _LOGGER.debug("Manual refresh ignored, polling is not active")
            return
        await self._execute_tick(self._generation)

    @contextlib.asynccontextmanager
    async def running(self, on_tick: TickCallback) -> AsyncIterator["PollingScheduler"]:
        """Keep the scheduler active for the duration of the block."""
        self.start(on_tick)
        try:
            yield self
        finally:
            self.stop()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _run(self, generation: int) -> None:
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        while self.is_current(generation):
            next_tick += self._interval
            await asyncio.sleep(max(0.0, next_tick - loop.time()))
            self._spawn_tick()

    def _spawn_tick(self) -> None:
        task = asyncio.ensure_future(self._execute_tick(self._generation))
        self._tick_tasks.add(task)
        task.add_done_callback(self._tick_tasks.discard)

    async def _execute_tick(self, generation: int) -> None:
        # A tick that was due but had not started before stop() is dropped
        if not self.is_current(generation):
            return
        on_tick = self._on_tick
        try:
            await on_tick()
        except Exception:  # noqa: BLE001
            _LOGGER.exception("Polling tick failed")
