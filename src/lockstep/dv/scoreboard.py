# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/lockstep/dv/scoreboard.py

"""Lock-step comparator of expected and observed read data."""

from __future__ import annotations

from collections import deque

from . import utils_dv
from .errors import CheckMismatch, SynchronizationFault
from .item import ExpectedRecord, Transaction


class Scoreboard:
    """Compare each observation against the expectation due on its tick.

    Architecture:
        ReferenceModel.results_port → exp_export → FIFO ──┐
                                                          ├→ Compare
        Monitor.ap ─────────────────→ analysis_export ────┘

    For an observation at tick T:

    - queue empty, or head due after T: nothing to check, the observation
      is discarded (``discarded``);
    - head due before T, or T not after the previous observation: the two
      timelines have slipped, SynchronizationFault;
    - otherwise the head is popped and compared bit-exactly. A match counts
      in ``comparisons``; a mismatch is recorded in ``mismatches`` and the
      run continues.

    Statistics:
        vect_cnt: Total number of comparisons performed
        comparisons: Number of passing comparisons
        mismatches: Every failed comparison, in tick order
        discarded: Observations with no expectation due
    """

    def __init__(self) -> None:
        self.logger = utils_dv.component_logger("scoreboard")
        self.exp_export = utils_dv.analysis_export("exp_export", self._push_expected)
        self.analysis_export = utils_dv.analysis_export("out_export", self.write)
        self._exp: deque[ExpectedRecord] = deque()
        self._last_obs_tick: int | None = None
        self.vect_cnt: int = 0
        self.comparisons: int = 0
        self.discarded: int = 0
        self.mismatches: list[CheckMismatch] = []

    @property
    def pending(self) -> int:
        """Expectations not yet matched."""
        return len(self._exp)

    @property
    def first_mismatch(self) -> CheckMismatch | None:
        return self.mismatches[0] if self.mismatches else None

    def _push_expected(self, rec: ExpectedRecord) -> None:
        if self._exp and rec.produced_at_tick <= self._exp[-1].produced_at_tick:
            raise SynchronizationFault(
                f"expected record for tick {rec.produced_at_tick} queued after "
                f"tick {self._exp[-1].produced_at_tick}",
                tick=rec.produced_at_tick,
            )
        self._exp.append(rec)

    def write(self, obs: Transaction) -> None:
        """Check one observed transaction."""
        tick = obs.tick
        if tick is None:
            raise SynchronizationFault("observation without a tick")
        if self._last_obs_tick is not None and tick <= self._last_obs_tick:
            raise SynchronizationFault(
                f"observation for tick {tick} after tick {self._last_obs_tick}",
                tick=tick,
            )
        self._last_obs_tick = tick

        if not self._exp or self._exp[0].produced_at_tick > tick:
            self.discarded += 1
            return
        head = self._exp[0]
        if head.produced_at_tick < tick:
            raise SynchronizationFault(
                f"expectation due at tick {head.produced_at_tick} was never "
                f"observed (now at tick {tick})",
                tick=tick,
            )

        self._exp.popleft()
        self.vect_cnt += 1
        if obs.payload == head.value:
            self.comparisons += 1
            self.logger.debug(
                "PASS tick=%d exp=0x%x act=0x%x vect_cnt=%d",
                tick,
                head.value,
                obs.payload,
                self.vect_cnt,
            )
        else:
            mm = CheckMismatch(tick=tick, expected=head.value, actual=obs.payload)
            self.mismatches.append(mm)
            self.logger.error("MISMATCH %s", mm)
