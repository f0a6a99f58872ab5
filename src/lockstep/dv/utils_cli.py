# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/lockstep/dv/utils_cli.py

"""Resolve run settings from environment variables and plusargs.

Configuration Precedence:
    1. Environment variables (NAME, then LOCKSTEP_NAME)
    2. Plusargs (+NAME or +NAME=value)
    3. Default values

The first source that sets a name decides its value. A value that does not
parse raises ConfigurationError naming the setting and where it came from;
it never falls through to a lower-precedence source or to the default.

Plusargs Format:
    Boolean flags: +NAME (treated as True) or +NAME=1/0/true/false/yes/no
    String values: +NAME=value
    Integer values: +NAME=123 or +NAME=0x7B (hex supported)

Environment Variables:
    PLUSARGS, COCOTB_PLUSARGS, or LOCKSTEP_PLUSARGS: Space-separated plusargs
    Individual settings: NAME or LOCKSTEP_NAME (e.g., ADDRESS_SPACE_SIZE=32)

Reference:
    UVM Class Reference Manual - uvm_cmdline_processor

Example:
    >>> size = get_int_setting("ADDRESS_SPACE_SIZE", 16)
    >>> enable = get_bool_setting("COVERAGE_EN", True)
"""

from __future__ import annotations

import os
from typing import Iterable

from .errors import ConfigurationError

_TRUE_SET = {"1", "true", "yes", "y", "on"}
_FALSE_SET = {"0", "false", "no", "n", "off"}


def iter_plusargs() -> Iterable[str]:
    """Yield +args from common env vars (first non-empty wins)."""
    s = (
        os.environ.get("PLUSARGS", "")
        or os.environ.get("COCOTB_PLUSARGS", "")
        or os.environ.get("LOCKSTEP_PLUSARGS", "")
    )
    return s.split()


def _lookup(name: str) -> tuple[str, str] | None:
    """Return (source, raw value) of the first source that sets ``name``.

    A bare ``+NAME`` plusarg reads as "1".
    """
    for key in (name, f"LOCKSTEP_{name}"):
        v = os.environ.get(key)
        if v is not None:
            return key, v
    prefix = f"+{name}="
    for tok in iter_plusargs():
        if tok.startswith(prefix):
            return f"+{name}", tok[len(prefix) :]
        if tok == f"+{name}":
            return f"+{name}", "1"
    return None


def get_raw_setting(name: str) -> str | None:
    """Return the unparsed setting (env > plusarg) or None if unset."""
    found = _lookup(name)
    return None if found is None else found[1]


def get_bool_setting(name: str, default: bool) -> bool:
    """Resolve a boolean setting; bare +NAME is treated as True.

    Raises:
        ConfigurationError: If the value is not a recognised boolean.
    """
    found = _lookup(name)
    if found is None:
        return default
    source, v = found
    s = v.strip().lower()
    if s in _TRUE_SET:
        return True
    if s in _FALSE_SET:
        return False
    raise ConfigurationError(f"{source}={v!r} is not a boolean")


def get_str_setting(name: str, default: str) -> str:
    """Resolve a string setting: env > plusarg > default (always returns str)."""
    v = get_raw_setting(name)
    return v if v is not None else default


def get_int_setting(name: str, default: int) -> int:
    """Resolve an int setting; "0x10" style prefixes are accepted.

    Raises:
        ConfigurationError: If the value is not an integer literal.
    """
    found = _lookup(name)
    if found is None:
        return default
    source, v = found
    try:
        return int(v, 0)
    except ValueError:
        raise ConfigurationError(f"{source}={v!r} is not an integer") from None
