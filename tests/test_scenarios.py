# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_scenarios.py

"""Directed end-to-end scenarios against the device double."""

from __future__ import annotations

from lockstep.dv import (
    CheckMismatch,
    DirectedPolicy,
    Environment,
    LogicalClock,
    OpKind,
    RunConfig,
    utils_dv,
)

from wrapmem_double import UnresolvedDouble

W, R, I, WR = OpKind.WRITE, OpKind.READ, OpKind.IDLE, OpKind.WRITE_READ


def _directed(steps):
    policy = DirectedPolicy(steps)
    return RunConfig(sequence_length=len(policy)), policy


def test_write_then_read_after_full_wrap(make_env, run_env):
    # write 0xAB at pointer 0 on tick 0; the pointer is back at 0 on tick 16
    cfg, policy = _directed([(W, 0xAB)] + [(I, None)] * 15 + [(R, None)])
    env, dev = make_env(cfg, policy)

    report = run_env(env)

    assert report.passed
    assert report.comparisons == 1
    assert report.mismatches == 0
    assert report.first_mismatch is None
    assert report.ticks_run == 18
    assert dev.rdata == 0xAB
    by_tick = {s.tick: s for s in dev.drives}
    assert by_tick[16].read_enable
    assert not by_tick[17].read_enable
    assert env.sb.pending == 0


def test_adjacent_writes_read_back_in_order(make_env, run_env):
    steps = [(W, 0x5A), (W, 0xC3)] + [(I, None)] * 14 + [(R, None), (R, None)]
    cfg, policy = _directed(steps)
    env, _ = make_env(cfg, policy)

    report = run_env(env)

    assert report.passed
    assert report.comparisons == 2
    assert report.ticks_run == 19


def test_reference_fed_one_tick_late_is_caught(make_env, run_env):
    steps = [(W, 0x11), (W, 0x22)] + [(I, None)] * 14 + [(R, None), (R, None)]
    policy = DirectedPolicy(steps)
    cfg = RunConfig(sequence_length=len(policy), ref_model_lag_ticks=1)
    env, _ = make_env(cfg, policy)

    report = run_env(env)

    assert not report.passed
    assert report.mismatches >= 1
    assert report.first_mismatch == CheckMismatch(tick=18, expected=0x11, actual=0x22)


def test_same_tick_write_and_read_returns_old_value(make_env, run_env):
    steps = (
        [(W, 0x01)]
        + [(I, None)] * 15
        + [(WR, 0x02)]  # tick 16, pointer 0
        + [(I, None)] * 15
        + [(R, None)]  # tick 32, pointer 0
    )
    cfg, policy = _directed(steps)
    env, dev = make_env(cfg, policy)
    seen: list[int | None] = []

    def tap(tr):
        if tr.tick in (17, 33):
            seen.append(tr.payload)

    env.monitor.ap.connect(utils_dv.analysis_export("tap", tap))
    report = run_env(env)

    assert report.passed
    assert report.comparisons == 2
    assert seen == [0x01, 0x02]
    assert dev.mem[0] == 0x02


def test_broken_device_reports_every_read(make_env, run_env):
    cfg = RunConfig(generator_policy="address_wraparound", sequence_length=32)
    env, _ = make_env(cfg, corrupt_mask=0x01)

    report = run_env(env)

    assert not report.passed
    assert report.sync_fault is None
    assert report.mismatches == 16
    assert report.comparisons == 0
    first = report.first_mismatch
    assert first is not None
    assert first.tick == 17
    assert first.actual == first.expected ^ 0x01
    assert env.sb.mismatches[-1].tick == 32


def test_unresolved_output_is_a_mismatch(run_env):
    clock = LogicalClock()
    dev = UnresolvedDouble(clock)
    policy = DirectedPolicy([(W, 0x42), (I, None), (R, None)])
    env = Environment(dev, clock, RunConfig(sequence_length=3), policy=policy)

    report = run_env(env)

    assert report.mismatches == 1
    assert report.first_mismatch == CheckMismatch(tick=3, expected=0, actual=None)
