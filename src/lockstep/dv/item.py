# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/lockstep/dv/item.py

"""Transaction items exchanged between pipeline components."""

from __future__ import annotations

import enum
import json
from dataclasses import asdict, dataclass, replace
from typing import Self


class OpKind(str, enum.Enum):
    """Operation carried by a stimulus transaction."""

    IDLE = "idle"
    WRITE = "write"
    READ = "read"
    WRITE_READ = "write_read"

    @property
    def writes(self) -> bool:
        """True when the operation asserts write-enable."""
        return self in (OpKind.WRITE, OpKind.WRITE_READ)

    @property
    def reads(self) -> bool:
        """True when the operation asserts read-enable."""
        return self in (OpKind.READ, OpKind.WRITE_READ)


@dataclass(frozen=True)
class Transaction:
    """Immutable stimulus or observation item.

    Stimulus items are created by the sequence generator without an issuing
    tick; the driver stamps the tick with ``issued_at()``, which derives a
    new item instead of mutating this one. Observed items are created by the
    monitor with the sampled value in ``payload``.

    Attributes:
        kind: Operation kind.
        payload: Write data for writes, sampled data for observations,
            None for reads/idles that have not been sampled.
        tick: Tick on which the item was applied or observed.
        seq_id: Position in the stream that produced the item.
    """

    kind: OpKind
    payload: int | None = None
    tick: int | None = None
    seq_id: int = 0

    def issued_at(self, tick: int) -> Self:
        """Return a copy of this item stamped with its issuing tick."""
        return replace(self, tick=tick)

    def to_dict(self) -> dict[str, object]:
        """Structured view for logging/JSON."""
        d = asdict(self)
        d["kind"] = self.kind.value
        return d

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)


@dataclass(frozen=True)
class ControlSnapshot:
    """The device control inputs for exactly one tick.

    A snapshot is applied to the device and published to the reference
    model as one unit; there is no partial application.
    """

    tick: int
    write_enable: bool = False
    read_enable: bool = False
    write_data: int = 0

    @classmethod
    def idle(cls, tick: int) -> Self:
        """All controls deasserted."""
        return cls(tick=tick)

    @classmethod
    def from_item(cls, tick: int, tr: Transaction, data_mask: int) -> Self:
        """Derive the controls that apply ``tr`` on ``tick``."""
        write_data = (tr.payload or 0) & data_mask if tr.kind.writes else 0
        return cls(
            tick=tick,
            write_enable=tr.kind.writes,
            read_enable=tr.kind.reads,
            write_data=write_data,
        )

    @property
    def kind(self) -> OpKind:
        """Operation kind implied by the enables."""
        if self.write_enable and self.read_enable:
            return OpKind.WRITE_READ
        if self.write_enable:
            return OpKind.WRITE
        if self.read_enable:
            return OpKind.READ
        return OpKind.IDLE

    def to_dict(self) -> dict[str, object]:
        """Structured view for logging/JSON."""
        return asdict(self)

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)


@dataclass(frozen=True)
class ExpectedRecord:
    """A predicted read value and the tick it must be observed on."""

    produced_at_tick: int
    value: int

    def __str__(self) -> str:
        return json.dumps(asdict(self), sort_keys=True)
