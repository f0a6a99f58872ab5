# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/lockstep/__init__.py

"""lockstep: transaction-level verification of a wrapping memory.

lockstep stimulates a small clock-synchronous device (a memory with a
free-running address pointer and one-cycle read latency), samples its output
every cycle, and checks each read against a shadow reference model that
consumes exactly the control signals applied to the device.

Main Components:

dv:
    Simulator-independent pipeline: clock, items, sequences, sequencer,
    driver, monitor, reference model, scoreboard, coverage, environment.
    Runs on a logical clock against any object implementing DevicePort.

bench:
    cocotb/pyuvm bindings that run the same environment against an HDL
    device under a simulator.

utils:
    Common utilities used across the package
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

try:
    __version__ = pkg_version("lockstep")
except PackageNotFoundError:
    __version__ = "0+local"
