# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/lockstep/bench/utils_sim.py

"""pyuvm config_db and cocotb signal helpers.

Functions:
    Config DB:
        uvm_config_db(): Return cached config DB instance
        uvm_config_db_get_try(): Get config value or None if missing
        uvm_config_db_get(): Get config value or raise ConfigKeyError
        uvm_config_db_set(): Set config value

    Signal Access:
        get_signal(): Get signal handle from DUT with validation
        get_signal_value_int(): Integer value of a handle (or None if X/Z)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, cast

import pyuvm
from cocotb.handle import SimHandleBase
from cocotb.types import Logic, LogicArray
from pyuvm import UVMConfigItemNotFound


class ConfigKeyError(KeyError):
    """Raised when a required key is missing from pyuvm's config_db."""


@lru_cache(maxsize=1)
def uvm_config_db() -> Any:
    """Return pyuvm's config DB singleton (cached)."""
    return pyuvm.ConfigDB()


def uvm_config_db_get_try(
    comp: pyuvm.uvm_component, key: str, inst: str = ""
) -> Any | None:
    """Return value or None if missing.
    Note: pyuvm allows wildcards only for set(), not get()."""
    try:
        return cast(Any, uvm_config_db().get(comp, inst, key))
    except UVMConfigItemNotFound:
        return None


def uvm_config_db_get(comp: pyuvm.uvm_component, key: str) -> object:
    """Like uvm_config_db_get_try but raises if key is missing."""
    val = uvm_config_db_get_try(comp, key)
    if val is not None:
        return val
    raise ConfigKeyError(
        f"config_db[{key!r}] missing for component '{comp.get_full_name()}'"
    )


def uvm_config_db_set(
    ctx: pyuvm.uvm_component | None, inst_name: str, key: str, value: Any
) -> None:
    uvm_config_db().set(ctx, inst_name, key, value)


def get_signal(dut: Any, signal_name: str) -> SimHandleBase:
    """Return dut.<signal_name> or raise RuntimeError/TypeError."""
    signal = getattr(dut, signal_name, None)
    if signal is None:
        raise RuntimeError(f"Signal '{signal_name}' not found on DUT")
    if not hasattr(signal, "value"):
        raise TypeError(f"Signal '{signal_name}' has no .value property")
    return cast(SimHandleBase, signal)


def get_signal_value_int(handle: Any) -> int | None:
    """Return the handle's integer value if resolvable (no X/Z), else None."""
    val = handle.value
    if isinstance(val, Logic):
        return int(val) if val.is_resolvable else None
    if isinstance(val, LogicArray):
        return val.to_unsigned() if val.is_resolvable else None
    return int(val)
