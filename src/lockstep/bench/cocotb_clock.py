# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/lockstep/bench/cocotb_clock.py

"""Tick source backed by a cocotb clock."""

from __future__ import annotations

from typing import Any, cast

import cocotb
from cocotb.clock import Clock as SimClock
from cocotb.handle import LogicObject
from cocotb.task import Task
from cocotb.triggers import NextTimeStep, ReadWrite

from lockstep.dv.clock import Clock

from . import utils_sim


class CocotbClock(Clock):
    """Drive the DUT clock and tick once per falling edge.

    Inputs are applied on the falling edge and latched by the DUT on the
    following rising edge, so tick t+1 samples the output produced by the
    inputs of tick t.

    Reference:
        C.E. Cummings, "Applying Stimulus & Sampling Outputs," SNUG 2016
    """

    def __init__(
        self,
        dut: Any,
        clock_name: str = "clk",
        period_ps: int = 1_000,
        start_high: bool = False,
    ) -> None:
        super().__init__(period_ps)
        self._clk = cast(LogicObject, utils_sim.get_signal(dut, clock_name))
        self.clock_name = clock_name
        self.start_high = start_high
        self._task: Task | None = None

    def start(self) -> None:
        """Start the clock coroutine (no-op if already running)."""
        self.logger.debug("start begin")
        if self._task is None:
            self._task = cocotb.start_soon(
                SimClock(self._clk, self.period_ps, unit="ps").start(
                    start_high=self.start_high
                )
            )
            self.logger.debug(
                "Started clock: dut.%s period=%d ps", self.clock_name, self.period_ps
            )
        super().start()
        self.logger.debug("start end")

    def stop(self) -> None:
        self.logger.debug("stop begin")
        if self._task is not None:
            self._task.cancel()
            self._task = None
        super().stop()
        self.logger.debug("stop end")

    async def drive_edge(self) -> None:
        await self._clk.falling_edge

    async def _first(self) -> None:
        await self.drive_edge()

    async def _advance(self, tick: int) -> None:
        await self.drive_edge()


async def pulse_reset(
    dut: Any,
    clock: CocotbClock,
    reset_name: str = "rst_n",
    active_low: bool = True,
    reset_cycles: int = 10,
    settle_cycles: int = 0,
) -> None:
    """Assert/deassert reset on the same drive edge as stimuli.

    The clock must already be started. Reset is deasserted on a falling
    edge, then ``settle_cycles`` more falling edges pass. The DUT pointer
    therefore sits at ``settle_cycles + 1`` (mod size) on the first tick of
    a run started right after this returns.
    """
    if reset_cycles < 0 or settle_cycles < 0:
        raise ValueError("reset_cycles and settle_cycles must be >= 0")
    rst = utils_sim.get_signal(dut, reset_name)
    active = 0 if active_low else 1

    rst.value = active
    await ReadWrite()  # like an NBA at t=0
    await NextTimeStep()

    for _ in range(reset_cycles):
        await clock.drive_edge()
    rst.value = 1 - active
    for _ in range(settle_cycles):
        await clock.drive_edge()
