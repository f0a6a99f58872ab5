# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/lockstep/dv/port.py

"""Device port seen by the driver and the monitor."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .item import ControlSnapshot


@runtime_checkable
class DevicePort(Protocol):
    """Control inputs and data output of the device under test.

    ``drive`` sets write-enable, read-enable and write-data together once
    per tick. ``read_data`` returns the current output word, or None when
    the value cannot be resolved to an integer (X/Z under a simulator).
    ``settle`` waits until driven values are visible to the device; it is
    awaited once, after the initial inputs are applied.
    """

    def drive(self, snapshot: ControlSnapshot) -> None: ...

    def read_data(self) -> int | None: ...

    async def settle(self) -> None: ...
