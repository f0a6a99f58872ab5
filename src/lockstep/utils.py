# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/lockstep/utils.py

"""Utility functions shared by the dv pipeline and the simulator bench."""

from __future__ import annotations

import random

RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
RESET = "\033[0m"


def green(s: str) -> str:
    """Wrap text in green ANSI escape codes."""
    return f"{GREEN}{s}{RESET}"


def normalize_seed(rng: random.Random, s: str | int) -> int:
    """
    Normalize a seed (int or string) to a 32-bit int.
    Supports 'rand'/'random'/'auto' and 0x... hex.
    Raises ValueError on invalid input.
    """
    if isinstance(s, bool):
        raise ValueError(f"Invalid seed {s!r}. Use decimal, 0x..., or 'random'.")
    if isinstance(s, int):
        return s & 0xFFFF_FFFF
    low = s.strip().lower()
    if low in {"rand", "random", "auto"}:
        return rng.getrandbits(32)
    try:
        return int(low, 0) & 0xFFFF_FFFF
    except ValueError as exc:
        raise ValueError(
            f"Invalid seed '{s}'. Use decimal, 0x..., or 'random'."
        ) from exc


def red(s: str) -> str:
    """Wrap text in red ANSI escape codes."""
    return f"{RED}{s}{RESET}"


def yellow(s: str) -> str:
    """Wrap text in yellow ANSI escape codes."""
    return f"{YELLOW}{s}{RESET}"
