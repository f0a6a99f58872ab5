# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/lockstep/dv/errors.py

"""Error taxonomy for the verification pipeline.

- StimulusExhausted: the sequence has no more items (normal termination).
- SynchronizationFault: expected/observed tick misalignment (fatal).
- CheckMismatch: expected != observed on an aligned tick (recorded, non-fatal).
- ConfigurationError: invalid run configuration (raised before tick 0).
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass


class LockstepError(Exception):
    """Base class for pipeline errors."""


class ConfigurationError(LockstepError, ValueError):
    """Raised when a run configuration is rejected at construction."""


class SynchronizationFault(LockstepError):
    """Raised when the shadow model and the device are no longer aligned.

    Continued comparison is meaningless once this happens, so the
    environment aborts the run and records the fault in the report.
    """

    def __init__(self, message: str, *, tick: int | None = None) -> None:
        super().__init__(message)
        self.tick = tick


class StimulusExhausted(Exception):
    """The sequence has been fully consumed. Not an error."""


@dataclass(frozen=True)
class CheckMismatch:
    """One failed comparison, accumulated by the scoreboard."""

    tick: int
    expected: int
    actual: int | None

    def to_dict(self) -> dict[str, int | None]:
        """Structured view for logging/JSON."""
        return asdict(self)

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)
