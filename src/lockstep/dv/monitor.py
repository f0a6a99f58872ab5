# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/lockstep/dv/monitor.py

"""Output monitor."""

from __future__ import annotations

from . import utils_dv
from .item import OpKind, Transaction
from .port import DevicePort


class Monitor:
    """Sample the device output once per tick and broadcast it.

    Sampling is unconditional: the monitor does not know which ticks carry
    a valid read, the scoreboard decides that. A value that cannot be
    resolved is published with ``payload=None``.

    Attributes:
        ap: Analysis port for observed transactions
        item_count: Number of transactions observed
    """

    def __init__(self, port: DevicePort) -> None:
        self.logger = utils_dv.component_logger("monitor")
        self.port = port
        self.ap = utils_dv.analysis_port("monitor_ap")
        self.item_count: int = 0

    def sample(self, tick: int) -> Transaction:
        """Sample ``read_data`` for ``tick`` and publish it."""
        value = self.port.read_data()
        tr = Transaction(
            kind=OpKind.READ, payload=value, tick=tick, seq_id=self.item_count
        )
        self.item_count += 1
        if value is None:
            self.logger.debug("tick %d: output unresolved", tick)
        self.ap.write(tr)
        return tr
