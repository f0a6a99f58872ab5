# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/conftest.py

"""Pytest configuration for the logical back-end tests."""

from __future__ import annotations

import asyncio
from typing import Any, Callable

import pytest

from lockstep.dv import Environment, LogicalClock, Policy, Report, RunConfig

from wrapmem_double import WrapMemDouble

_SETTINGS = (
    "ADDRESS_SPACE_SIZE",
    "WORD_WIDTH_BITS",
    "SEQUENCE_LENGTH",
    "RANDOM_SEED",
    "GENERATOR_POLICY",
    "DRIVE_TICKS",
    "INITIAL_POINTER",
    "REF_MODEL_LAG_TICKS",
    "COVERAGE_EN",
    "MEMORY_INIT",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's environment out of every test."""
    for name in _SETTINGS:
        monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(f"LOCKSTEP_{name}", raising=False)
    for name in (
        "PLUSARGS",
        "COCOTB_PLUSARGS",
        "LOCKSTEP_PLUSARGS",
        "COV_YAML",
        "LOCKSTEP_LOG_LEVEL",
        "COCOTB_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


EnvFactory = Callable[..., tuple[Environment, WrapMemDouble]]


@pytest.fixture
def make_env() -> EnvFactory:
    """Build an environment wired to a fresh device double."""

    def _make(
        config: RunConfig | None = None,
        policy: Policy | None = None,
        **double_kw: Any,
    ) -> tuple[Environment, WrapMemDouble]:
        cfg = config or RunConfig()
        clock = LogicalClock()
        dev = WrapMemDouble(
            clock,
            size=cfg.address_space_size,
            width=cfg.word_width_bits,
            pointer=cfg.initial_pointer,
            **double_kw,
        )
        return Environment(dev, clock, cfg, policy=policy), dev

    return _make


@pytest.fixture
def run_env() -> Callable[[Environment], Report]:
    """Run an environment to completion on a fresh event loop."""

    def _run(env: Environment) -> Report:
        return asyncio.run(env.run())

    return _run
