# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/lockstep/dv/clock.py

"""Tick sources.

A tick is one step of the shared timeline. ``wait_next_tick()`` is the only
place the pipeline suspends; it returns 0 on the first call and then
increases by exactly one per call.
"""

from __future__ import annotations

import asyncio
from typing import Callable

from . import utils_dv

EdgeCallback = Callable[[int], None]


class Clock:
    """Base tick source.

    Subclasses implement ``_advance()``, which must return only after the
    device has latched the inputs applied during the previous tick.
    """

    def __init__(self, period_ps: int = 10_000) -> None:
        if period_ps <= 0:
            raise ValueError("period_ps must be > 0")
        self.logger = utils_dv.component_logger("clock")
        self.period_ps = period_ps
        self._tick: int | None = None
        self._running = False

    @property
    def tick(self) -> int | None:
        """Current tick index, None before the first ``wait_next_tick()``."""
        return self._tick

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        self.logger.debug("start begin")
        self._running = True
        self.logger.debug("start end")

    def stop(self) -> None:
        self.logger.debug("stop begin")
        self._running = False
        self.logger.debug("stop end")

    async def wait_next_tick(self) -> int:
        """Suspend until the next tick and return its index."""
        if not self._running:
            raise RuntimeError("clock is not running; call start() first")
        if self._tick is None:
            await self._first()
            self._tick = 0
        else:
            await self._advance(self._tick)
            self._tick += 1
        return self._tick

    async def _first(self) -> None:
        """Hook for the wait before tick 0 (default: none)."""

    async def _advance(self, tick: int) -> None:
        raise NotImplementedError


class LogicalClock(Clock):
    """Pure-Python clock for running the pipeline without a simulator.

    The edge between tick t and t+1 is delivered to every callback
    registered with ``on_edge(cb)`` as ``cb(t)``, in registration order.
    A device double registers here to latch its inputs.
    """

    def __init__(self, period_ps: int = 10_000) -> None:
        super().__init__(period_ps)
        self._edge_callbacks: list[EdgeCallback] = []
        self.time_ps: int = 0

    def on_edge(self, cb: EdgeCallback) -> None:
        """Register a callback for every clock edge."""
        self._edge_callbacks.append(cb)

    async def _advance(self, tick: int) -> None:
        for cb in self._edge_callbacks:
            cb(tick)
        self.time_ps += self.period_ps
        # Yield so other tasks (e.g. a stop request) can run between ticks
        await asyncio.sleep(0)
