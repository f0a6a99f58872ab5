# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/lockstep/dv/coverage.py

"""Functional coverage subscriber (cocotb-coverage)."""

from __future__ import annotations

import itertools
import os
from collections import Counter

from cocotb_coverage.coverage import CoverCross, CoverPoint, coverage_db

from . import utils_dv
from .item import ControlSnapshot, OpKind


class Coverage:
    """Sample operation kind x address for every applied snapshot.

    Connect ``Driver.snapshot_port`` to ``analysis_export``. The address is
    derived from the tick with the pointer invariant, so no extra signal is
    needed.

    Coverage items are registered in ``coverage_db`` under ``name``
    (``<name>.kind``, ``<name>.address``, ``<name>.kind_x_address``). Each
    instance gets its own name because cocotb-coverage keeps one item per
    name for the whole process.

    Environment Variables:
        COV_YAML: Path to write coverage YAML report (optional)
    """

    _ids = itertools.count()

    def __init__(
        self,
        address_space_size: int = 16,
        initial_pointer: int = 0,
        enabled: bool = True,
        name: str | None = None,
    ) -> None:
        self.logger = utils_dv.component_logger("coverage")
        self.name = name or f"lockstep.coverage{next(Coverage._ids)}"
        self.size = address_space_size
        self.initial_pointer = initial_pointer
        self.enabled = enabled
        self.yaml_path: str | None = os.getenv("COV_YAML")
        self.total: int = 0
        self.kinds: Counter[OpKind] = Counter()
        self.addresses_hit: set[int] = set()
        self.analysis_export = utils_dv.analysis_export("coverage_export", self.write)

        @CoverPoint(
            f"{self.name}.kind",
            xf=lambda kind, addr: kind,
            bins=[k.value for k in OpKind],
        )
        @CoverPoint(
            f"{self.name}.address",
            xf=lambda kind, addr: addr,
            bins=list(range(address_space_size)),
        )
        @CoverCross(
            f"{self.name}.kind_x_address",
            items=[f"{self.name}.kind", f"{self.name}.address"],
        )
        def sample(kind: str, addr: int) -> None:
            pass

        self._sample = sample

    def address_at(self, tick: int) -> int:
        return (self.initial_pointer + tick) % self.size

    def write(self, snap: ControlSnapshot) -> None:
        if not self.enabled:
            return
        kind = snap.kind
        addr = self.address_at(snap.tick)
        self.total += 1
        self.kinds[kind] += 1
        if kind is not OpKind.IDLE:
            self.addresses_hit.add(addr)
        self._sample(kind.value, addr)

    @property
    def kind_coverage(self) -> float:
        """Percentage of operation kinds seen."""
        return coverage_db[f"{self.name}.kind"].cover_percentage

    def report(self) -> None:
        """Log the coverage report and export YAML if requested."""
        self.logger.debug("report begin")
        if not self.enabled:
            self.logger.debug("report end")
            return
        # coverage_db is process-wide; only this instance's items
        coverage_db.report_coverage(
            self.logger.debug, bins=False, node=f"{self.name}."
        )
        if self.yaml_path:
            coverage_db.export_to_yaml(self.yaml_path)
            self.logger.debug("Coverage YAML written to %s", self.yaml_path)
        self.logger.info(
            "Coverage summary: total=%d write=%d read=%d write_read=%d idle=%d"
            " addresses=%d/%d",
            self.total,
            self.kinds[OpKind.WRITE],
            self.kinds[OpKind.READ],
            self.kinds[OpKind.WRITE_READ],
            self.kinds[OpKind.IDLE],
            len(self.addresses_hit),
            self.size,
        )
        self.logger.debug("report end")
