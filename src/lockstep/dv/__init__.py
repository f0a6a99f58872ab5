# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/lockstep/dv/__init__.py

"""Simulator-independent verification pipeline for the wrapping memory.

Pipeline:
- SequenceGenerator: Seeded stimulus stream selected by policy name
- Sequencer: Single-slot handoff between generator and driver
- Driver: Applies one ControlSnapshot per tick and publishes it
- Monitor: Samples the device output every tick
- ReferenceModel: Shadow memory and pointer, emits ExpectedRecords
- Scoreboard: Lock-step comparison of expected and observed data
- Coverage: Functional coverage of operation kind x address
- Environment: Builds, connects and runs all of the above

Time and devices:
- Clock / LogicalClock: Tick sources
- DevicePort: Protocol implemented by every device binding

Utilities:
- utils_dv: Logging helpers, pyuvm analysis ports and exports
- utils_cli: Env var / plusarg settings
"""

from __future__ import annotations

from lockstep import __version__

from . import utils_cli, utils_dv
from .clock import Clock, LogicalClock
from .config import RunConfig
from .coverage import Coverage
from .driver import Driver, SnapshotDelay
from .env import Environment, Report
from .errors import (
    CheckMismatch,
    ConfigurationError,
    LockstepError,
    StimulusExhausted,
    SynchronizationFault,
)
from .item import ControlSnapshot, ExpectedRecord, OpKind, Transaction
from .monitor import Monitor
from .port import DevicePort
from .ref_model import ReferenceModel, ShadowState
from .scoreboard import Scoreboard
from .sequence import (
    POLICIES,
    DirectedPolicy,
    Policy,
    SequenceContext,
    SequenceGenerator,
    WeightedPolicy,
    WraparoundPolicy,
    make_policy,
    register_policy,
)
from .sequencer import Sequencer

__all__ = (
    "CheckMismatch",
    "Clock",
    "ConfigurationError",
    "ControlSnapshot",
    "Coverage",
    "DevicePort",
    "DirectedPolicy",
    "Driver",
    "Environment",
    "ExpectedRecord",
    "LockstepError",
    "LogicalClock",
    "Monitor",
    "OpKind",
    "POLICIES",
    "Policy",
    "ReferenceModel",
    "Report",
    "RunConfig",
    "Scoreboard",
    "SequenceContext",
    "SequenceGenerator",
    "Sequencer",
    "ShadowState",
    "SnapshotDelay",
    "StimulusExhausted",
    "SynchronizationFault",
    "Transaction",
    "WeightedPolicy",
    "WraparoundPolicy",
    "make_policy",
    "register_policy",
    "utils_cli",
    "utils_dv",
    "__version__",
)
