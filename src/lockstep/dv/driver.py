# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/lockstep/dv/driver.py

"""Driver: turns stimulus items into per-tick control snapshots."""

from __future__ import annotations

from collections import deque

from . import utils_dv
from .errors import StimulusExhausted
from .item import ControlSnapshot, Transaction
from .port import DevicePort
from .sequencer import Sequencer


class Driver:
    """Apply one control snapshot to the device on every tick.

    The driver pulls one item at a time from the sequencer and holds it for
    ``drive_ticks`` ticks before releasing it with ``item_done()``. Ticks
    without an item are idle. Every applied snapshot, idle ones included, is
    published on ``snapshot_port`` in the same tick, so the reference model
    sees exactly what the device saw. Items are re-published on
    ``issued_port`` stamped with the tick they were first applied on.

    Attributes:
        snapshot_port: Analysis port for every applied ControlSnapshot
        issued_port: Analysis port for stimulus items, stamped with their tick
        items_driven: Number of items applied so far

    Example:
        >>> drv = Driver(port, Sequencer(gen))
        >>> drv.snapshot_port.connect(ref_model.analysis_export)
        >>> await drv.apply_initial_inputs()
        >>> drv.apply(0)
    """

    def __init__(
        self,
        port: DevicePort,
        sequencer: Sequencer,
        drive_ticks: int = 1,
        word_width_bits: int = 8,
    ) -> None:
        if drive_ticks < 1:
            raise ValueError("drive_ticks must be >= 1")
        self.logger = utils_dv.component_logger("driver")
        self.port = port
        self.sequencer = sequencer
        self.drive_ticks = drive_ticks
        self._data_mask = (1 << word_width_bits) - 1
        self.snapshot_port = utils_dv.analysis_port("snapshot_port")
        self.issued_port = utils_dv.analysis_port("issued_port")
        self.items_driven: int = 0
        self._current: Transaction | None = None
        self._held: int = 0
        self._exhausted = False

    async def apply_initial_inputs(self) -> None:
        """Deassert all controls before tick 0 and let them settle."""
        self.logger.debug("apply_initial_inputs begin")
        # tick -1 marks the pre-run state; it is never published
        self.port.drive(ControlSnapshot.idle(-1))
        await self.port.settle()
        self.logger.debug("apply_initial_inputs end")

    def _fetch(self) -> None:
        if self._current is not None or self._exhausted:
            return
        try:
            self._current = self.sequencer.get_next_item()
        except StimulusExhausted:
            self._exhausted = True

    def has_work(self) -> bool:
        """True while an item is in flight or more items may follow."""
        self._fetch()
        return self._current is not None

    def apply(self, tick: int) -> ControlSnapshot:
        """Drive and publish the controls for ``tick``."""
        self._fetch()
        tr = self._current
        if tr is None:
            snap = ControlSnapshot.idle(tick)
        else:
            snap = ControlSnapshot.from_item(tick, tr, self._data_mask)
            if self._held == 0:
                self.items_driven += 1
                self.issued_port.write(tr.issued_at(tick))
            self._held += 1
            if self._held >= self.drive_ticks:
                self.sequencer.item_done()
                self._current = None
                self._held = 0
        self.port.drive(snap)
        self.logger.debug("tick %d drive %s", tick, snap)
        self.snapshot_port.write(snap)
        return snap


class SnapshotDelay:
    """Forward snapshots ``lag`` ticks late, re-stamped with the current tick.

    Inserted between the driver and the reference model to model a
    reference fed out of step with the device. The first ``lag`` ticks
    forward idle snapshots. Snapshots come in on ``analysis_export`` and
    leave on ``ap``.
    """

    def __init__(self, lag: int) -> None:
        if lag < 1:
            raise ValueError("lag must be >= 1")
        self.lag = lag
        self.ap = utils_dv.analysis_port("snapshot_delay_ap")
        self.analysis_export = utils_dv.analysis_export(
            "snapshot_delay_export", self.write
        )
        self._line: deque[ControlSnapshot] = deque()

    @property
    def holds_read(self) -> bool:
        """True if a delayed snapshot with read-enable is still queued."""
        return any(s.read_enable for s in self._line)

    def write(self, snap: ControlSnapshot) -> None:
        self._line.append(snap)
        if len(self._line) > self.lag:
            old = self._line.popleft()
            out = ControlSnapshot(
                tick=snap.tick,
                write_enable=old.write_enable,
                read_enable=old.read_enable,
                write_data=old.write_data,
            )
        else:
            out = ControlSnapshot.idle(snap.tick)
        self.ap.write(out)
