# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/lockstep/dv/sequencer.py

"""Single-slot handoff between the sequence generator and the driver."""

from __future__ import annotations

from typing import Iterable, Iterator

from . import utils_dv
from .errors import StimulusExhausted
from .item import Transaction


class Sequencer:
    """Hand items to the driver one at a time.

    At most one item is in flight: ``get_next_item()`` pulls the next item
    from the source only after the previous one was released with
    ``item_done()``. The source is pulled lazily, so the generator never
    runs ahead of the driver.
    """

    def __init__(self, source: Iterable[Transaction]) -> None:
        self.logger = utils_dv.component_logger("sequencer")
        self._source: Iterator[Transaction] = iter(source)
        self._current: Transaction | None = None
        self._exhausted = False
        self.item_cnt: int = 0

    @property
    def in_flight(self) -> Transaction | None:
        return self._current

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def get_next_item(self) -> Transaction:
        """Return the next item; raise StimulusExhausted at the end."""
        if self._current is not None:
            raise RuntimeError(
                f"get_next_item() called with item {self._current.seq_id} in flight"
            )
        if self._exhausted:
            raise StimulusExhausted
        try:
            tr = next(self._source)
        except StopIteration:
            self._exhausted = True
            self.logger.debug("source exhausted after %d item(s)", self.item_cnt)
            raise StimulusExhausted from None
        self._current = tr
        self.item_cnt += 1
        return tr

    def item_done(self) -> None:
        """Release the in-flight item."""
        if self._current is None:
            raise RuntimeError("item_done() called with no item in flight")
        self._current = None
