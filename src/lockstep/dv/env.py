# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/lockstep/dv/env.py

"""Environment: builds, connects and runs the verification pipeline."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass

from lockstep import utils

from . import utils_dv
from .clock import Clock
from .config import RunConfig
from .coverage import Coverage
from .driver import Driver, SnapshotDelay
from .errors import CheckMismatch, SynchronizationFault
from .monitor import Monitor
from .port import DevicePort
from .ref_model import ReferenceModel
from .scoreboard import Scoreboard
from .sequence import Policy, SequenceContext, SequenceGenerator, make_policy
from .sequencer import Sequencer


@dataclass(frozen=True)
class Report:
    """Outcome of one run."""

    ticks_run: int
    comparisons: int
    mismatches: int
    first_mismatch: CheckMismatch | None
    seed: int
    policy: str
    discarded: int = 0
    sync_fault: str | None = None
    stopped: bool = False

    @property
    def passed(self) -> bool:
        return self.mismatches == 0 and self.sync_fault is None

    def to_dict(self) -> dict[str, object]:
        d = asdict(self)
        d["passed"] = self.passed
        return d

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)


class Environment:
    """Top-level pipeline that builds and connects all verification components.

    Construction validates the configuration, so a bad configuration raises
    ConfigurationError before any tick. ``run()`` then steps the shared
    timeline, one tick at a time, in causal order:

    1. the driver applies this tick's controls to the device and publishes
       the snapshot;
    2. the reference model consumes the same snapshot;
    3. the monitor samples the output produced by the previous tick and the
       scoreboard checks it.

    The run ends when the stimulus is exhausted and no expectation is
    pending, when a SynchronizationFault is raised, or when
    ``request_stop()`` is honoured at the next tick boundary.

    Components:
        sequencer, driver, monitor, ref_model, sb: the pipeline
        cov: Coverage collector (None when coverage_en is False)
        delay: SnapshotDelay in front of the reference model (None when
            ref_model_lag_ticks is 0)

    Example:
        >>> env = Environment(port, LogicalClock(), RunConfig(random_seed=7))
        >>> report = await env.run()
        >>> assert report.passed
    """

    def __init__(
        self,
        port: DevicePort,
        clock: Clock,
        config: RunConfig | None = None,
        policy: Policy | None = None,
    ) -> None:
        self.logger = utils_dv.component_logger("env")
        self.cfg = (config or RunConfig()).validate()
        cfg = self.cfg
        self.clock = clock
        self.port = port
        if policy is None:
            policy = make_policy(cfg.generator_policy)
        self.policy = policy

        self.generator = SequenceGenerator(
            self.policy,
            length=cfg.sequence_length,
            seed=cfg.random_seed,
            ctx=SequenceContext(cfg.address_space_size, cfg.word_width_bits),
        )
        self.sequencer = Sequencer(self.generator)
        self.driver = Driver(
            port,
            self.sequencer,
            drive_ticks=cfg.drive_ticks,
            word_width_bits=cfg.word_width_bits,
        )
        self.monitor = Monitor(port)
        self.ref_model = ReferenceModel(
            cfg.address_space_size,
            cfg.word_width_bits,
            initial_pointer=cfg.initial_pointer,
            initial_value=cfg.memory_init,
        )
        self.sb = Scoreboard()
        self.cov: Coverage | None = None
        if cfg.coverage_en:
            self.cov = Coverage(cfg.address_space_size, cfg.initial_pointer)
        self.delay: SnapshotDelay | None = None
        if cfg.ref_model_lag_ticks:
            self.delay = SnapshotDelay(cfg.ref_model_lag_ticks)

        self._connect()
        self._stop_requested = False
        self._started = False
        self.ticks_run: int = 0
        self.sync_fault: SynchronizationFault | None = None

    def _connect(self) -> None:
        self.logger.debug("connect begin")
        if self.delay is not None:
            self.driver.snapshot_port.connect(self.delay.analysis_export)
            self.delay.ap.connect(self.ref_model.analysis_export)
        else:
            self.driver.snapshot_port.connect(self.ref_model.analysis_export)
        if self.cov is not None:
            self.driver.snapshot_port.connect(self.cov.analysis_export)
        self.ref_model.results_port.connect(self.sb.exp_export)
        self.monitor.ap.connect(self.sb.analysis_export)
        self.logger.debug("connect end")

    def request_stop(self) -> None:
        """Stop at the next tick boundary; no further stimulus is applied."""
        self.logger.info("stop requested")
        self._stop_requested = True

    def _drained(self) -> bool:
        if self.driver.has_work() or self.sb.pending:
            return False
        return self.delay is None or not self.delay.holds_read

    def step(self, tick: int) -> None:
        """Run one tick of the pipeline."""
        self.driver.apply(tick)
        self.monitor.sample(tick)

    async def run(self) -> Report:
        """Run until done and return the report."""
        self.logger.debug("run begin")
        if self._started:
            raise RuntimeError("Environment.run() may only be called once")
        self._started = True
        stopped = False
        self.clock.start()
        try:
            await self.driver.apply_initial_inputs()
            while True:
                tick = await self.clock.wait_next_tick()
                if self._stop_requested:
                    stopped = True
                    break
                if self._drained():
                    break
                try:
                    self.step(tick)
                except SynchronizationFault as exc:
                    self.sync_fault = exc
                    self.logger.error("SYNC FAULT at tick %d: %s", tick, exc)
                    break
                self.ticks_run += 1
        finally:
            self.clock.stop()

        report = self.make_report(stopped)
        self.report(report)
        self.logger.debug("run end")
        return report

    def make_report(self, stopped: bool = False) -> Report:
        return Report(
            ticks_run=self.ticks_run,
            comparisons=self.sb.comparisons,
            mismatches=len(self.sb.mismatches),
            first_mismatch=self.sb.first_mismatch,
            seed=self.cfg.random_seed,
            policy=self.policy.name,
            discarded=self.sb.discarded,
            sync_fault=str(self.sync_fault) if self.sync_fault is not None else None,
            stopped=stopped,
        )

    def report(self, report: Report) -> None:
        """Log the run summary."""
        self.logger.debug("report begin")
        if self.cov is not None:
            self.cov.report()
        if report.stopped:
            self.logger.warning(
                utils.yellow("Run stopped early after %d tick(s)"), report.ticks_run
            )
        if report.passed and report.comparisons:
            self.logger.info(
                utils.green("*** TEST PASSED - %d ticks, %d compared (seed=%d) ***"),
                report.ticks_run,
                report.comparisons,
                report.seed,
            )
        elif report.passed:
            self.logger.warning(
                utils.yellow("*** TEST PASSED - %d ticks, nothing compared ***"),
                report.ticks_run,
            )
        else:
            self.logger.error(
                utils.red(
                    "*** TEST FAILED - %d ticks, %d passed, %d failed (seed=%d) ***"
                ),
                report.ticks_run,
                report.comparisons,
                report.mismatches,
                report.seed,
            )
            if report.first_mismatch is not None:
                self.logger.error("first mismatch: %s", report.first_mismatch)
            if report.sync_fault is not None:
                self.logger.error("sync fault: %s", report.sync_fault)
        self.logger.debug("report end")
