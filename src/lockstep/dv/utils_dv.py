# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/lockstep/dv/utils_dv.py

"""Logging and analysis-port helpers shared by all pipeline components.

Components own a plain ``logging.Logger`` named ``lockstep.<name>``. Levels
come from the environment so the same knobs work under pytest and under a
cocotb simulation:

    LOCKSTEP_LOG_LEVEL  (checked first)
    COCOTB_LOG_LEVEL

Handlers are never added here; records bubble up to the root logger (or to
cocotb's handlers when running under a simulator).

Pipeline components talk over pyuvm analysis ports. They are not built into
a pyuvm component tree, so their ports and exports are created without a
parent and pyuvm files them under ``uvm_root``; a numeric suffix keeps the
names unique when several pipelines live in one process.
"""

from __future__ import annotations

import itertools
import logging
import os
from typing import Any, Callable

import pyuvm

_port_ids = itertools.count()


def desired_log_level(default: int = logging.INFO) -> int:
    """Return desired log level from env vars or default."""
    name = (
        os.getenv("LOCKSTEP_LOG_LEVEL") or os.getenv("COCOTB_LOG_LEVEL") or ""
    ).upper()
    if not name:
        return default
    level = getattr(logging, name, default)
    return level if isinstance(level, int) else default


def component_logger(name: str) -> logging.Logger:
    """Return the configured logger for a pipeline component."""
    logger = logging.getLogger(f"lockstep.{name}")
    configure_non_component_logger(logger)
    return logger


def configure_non_component_logger(logger: logging.Logger) -> None:
    """Configure logger for a non-component"""
    logger.setLevel(desired_log_level())
    # Make sure it bubbles up to the root/cocotb handlers (don't add new handlers)
    logger.propagate = True


def analysis_port(name: str) -> pyuvm.uvm_analysis_port:
    """Create a free-standing pyuvm analysis port."""
    return pyuvm.uvm_analysis_port(f"{name}_{next(_port_ids)}", None)


def analysis_export(
    name: str, write_fn: Callable[[Any], None]
) -> pyuvm.uvm_analysis_export:
    """Create a free-standing analysis export that forwards to ``write_fn``.

    Example:
        >>> drv.snapshot_port.connect(analysis_export("tap", seen.append))
    """
    return pyuvm.uvm_subscriber.uvm_AnalysisImp(
        f"{name}_{next(_port_ids)}", None, write_fn
    )
