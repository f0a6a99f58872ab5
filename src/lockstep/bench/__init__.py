# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/lockstep/bench/__init__.py

"""Simulator back-end: cocotb clock, DUT port binding and pyuvm tests.

Importing this package requires a running cocotb simulation for anything
beyond class definitions; the pure pipeline lives in ``lockstep.dv``.
"""

from __future__ import annotations

from . import utils_sim
from .cocotb_clock import CocotbClock, pulse_reset
from .cocotb_port import CocotbDevicePort

__all__ = (
    "CocotbClock",
    "CocotbDevicePort",
    "pulse_reset",
    "utils_sim",
)
