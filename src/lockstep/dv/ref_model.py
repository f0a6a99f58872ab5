# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/lockstep/dv/ref_model.py

"""Shadow reference model of the wrapping memory."""

from __future__ import annotations

from dataclasses import dataclass

from . import utils_dv
from .errors import SynchronizationFault
from .item import ControlSnapshot, ExpectedRecord


@dataclass(frozen=True)
class ShadowState:
    """Point-in-time copy of the model state."""

    pointer: int
    words: tuple[int | None, ...]
    next_tick: int


class ReferenceModel:
    """Predict every read from the control snapshots the device received.

    The model holds a shadow copy of the memory and of the free-running
    address pointer. For each snapshot, in tick order:

    - a read captures shadow[pointer] before any write on the same tick
      (old value wins) and emits an ExpectedRecord due on the next tick;
    - a write stores write_data at shadow[pointer];
    - the pointer advances by one, modulo the address-space size,
      whether or not anything was enabled.

    Snapshots arrive on ``analysis_export`` and must be for consecutive
    ticks starting at 0; anything else raises SynchronizationFault.

    ``initial_value`` is the content of never-written words. With
    ``initial_value=None`` such words are unknown and reading them emits no
    expectation (counted in ``unchecked_reads``).

    Reference:
        C.E. Cummings, "OVM/UVM Scoreboards - Fundamental Architectures,"
        SNUG 2013
    """

    def __init__(
        self,
        address_space_size: int = 16,
        word_width_bits: int = 8,
        initial_pointer: int = 0,
        initial_value: int | None = 0,
    ) -> None:
        if address_space_size < 1:
            raise ValueError("address_space_size must be >= 1")
        if not 0 <= initial_pointer < address_space_size:
            raise ValueError("initial_pointer must be in [0, address_space_size)")
        self.logger = utils_dv.component_logger("ref_model")
        self.size = address_space_size
        self._mask = (1 << word_width_bits) - 1
        self.initial_pointer = initial_pointer
        self.initial_value = initial_value
        self.results_port = utils_dv.analysis_port("results_port")
        self.analysis_export = utils_dv.analysis_export(
            "ref_model_export", self.write
        )
        self.unchecked_reads: int = 0
        self.reset()

    def reset(self) -> None:
        """Return to the power-on state."""
        self.logger.debug("reset begin")
        self._shadow: list[int | None] = [self.initial_value] * self.size
        self._pointer: int = self.initial_pointer
        self._next_tick: int = 0
        self.unchecked_reads = 0
        self.logger.debug("reset end")

    @property
    def pointer(self) -> int:
        return self._pointer

    @property
    def shadow(self) -> tuple[int | None, ...]:
        return tuple(self._shadow)

    def snapshot_state(self) -> ShadowState:
        return ShadowState(self._pointer, tuple(self._shadow), self._next_tick)

    def write(self, snap: ControlSnapshot) -> None:
        """Consume the control snapshot for one tick."""
        if snap.tick != self._next_tick:
            raise SynchronizationFault(
                f"reference model expected tick {self._next_tick}, "
                f"got snapshot for tick {snap.tick}",
                tick=snap.tick,
            )
        ptr = self._pointer
        old = self._shadow[ptr]
        if snap.write_enable:
            self._shadow[ptr] = snap.write_data & self._mask
        self._pointer = (ptr + 1) % self.size
        self._next_tick += 1
        if snap.read_enable:
            if old is None:
                self.unchecked_reads += 1
                self.logger.debug("tick %d: read of unwritten addr %d", snap.tick, ptr)
            else:
                rec = ExpectedRecord(produced_at_tick=snap.tick + 1, value=old)
                self.logger.debug("tick %d: addr %d expect %s", snap.tick, ptr, rec)
                self.results_port.write(rec)
