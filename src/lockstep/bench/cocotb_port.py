# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/lockstep/bench/cocotb_port.py

"""DevicePort bound to a cocotb DUT handle."""

from __future__ import annotations

from typing import Any

from cocotb.triggers import NextTimeStep, ReadWrite

from lockstep.dv.item import ControlSnapshot

from . import utils_sim


class CocotbDevicePort:
    """Write-enable, read-enable, write-data in; read-data out.

    Signal names default to ``we``, ``re``, ``wdata`` and ``rdata``.
    """

    def __init__(
        self,
        dut: Any,
        we: str = "we",
        re: str = "re",
        wdata: str = "wdata",
        rdata: str = "rdata",
    ) -> None:
        self._we = utils_sim.get_signal(dut, we)
        self._re = utils_sim.get_signal(dut, re)
        self._wdata = utils_sim.get_signal(dut, wdata)
        self._rdata = utils_sim.get_signal(dut, rdata)

    def drive(self, snapshot: ControlSnapshot) -> None:
        self._we.value = int(snapshot.write_enable)
        self._re.value = int(snapshot.read_enable)
        self._wdata.value = snapshot.write_data

    def read_data(self) -> int | None:
        return utils_sim.get_signal_value_int(self._rdata)

    async def settle(self) -> None:
        """
        Reference: SNUG 2016 "Applying Stimulus & Sampling Outputs." Let the
        initial writes land with a non-blocking-style write and one delta.
        """
        await ReadWrite()
        await NextTimeStep()
