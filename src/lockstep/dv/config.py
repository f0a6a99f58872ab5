# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/lockstep/dv/config.py

"""Run configuration.

Settings (env var NAME or LOCKSTEP_NAME > plusarg +NAME=value > default):

    ADDRESS_SPACE_SIZE   words in the memory (16)
    WORD_WIDTH_BITS      bits per word (8)
    SEQUENCE_LENGTH      stimulus items (10)
    RANDOM_SEED          int, 0x... or "random" (42)
    GENERATOR_POLICY     registered policy name ("uniform_random")
    DRIVE_TICKS          ticks each item is held (1)
    INITIAL_POINTER      device pointer at tick 0 (0)
    REF_MODEL_LAG_TICKS  feed the reference model this many ticks late (0)
    COVERAGE_EN          collect functional coverage (True)
    MEMORY_INIT          content of unwritten words, or "x" if unknown (0)
"""

from __future__ import annotations

import random
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Self

import yaml

from lockstep import utils

from . import utils_cli
from .errors import ConfigurationError
from .sequence import POLICIES

_UNKNOWN_INIT = {"x", "unknown", "none"}


def _parse_memory_init(v: Any) -> int | None:
    if v is None:
        return None
    if isinstance(v, str):
        if v.strip().lower() in _UNKNOWN_INIT:
            return None
        try:
            return int(v, 0)
        except ValueError as exc:
            raise ConfigurationError(f"Invalid memory_init {v!r}") from exc
    return v


@dataclass(frozen=True)
class RunConfig:
    """Validated parameters of one verification run.

    Build with keyword arguments, ``from_settings()`` or ``from_yaml()``,
    then call ``validate()``; the environment does this itself before the
    first tick.
    """

    address_space_size: int = 16
    word_width_bits: int = 8
    sequence_length: int = 10
    random_seed: int | str = 42
    generator_policy: str = "uniform_random"
    drive_ticks: int = 1
    initial_pointer: int = 0
    ref_model_lag_ticks: int = 0
    coverage_en: bool = True
    memory_init: int | None = 0

    def validate(self) -> Self:
        """Return a checked copy with the seed resolved to an int.

        Raises:
            ConfigurationError: On any invalid field.
        """
        for name in (
            "address_space_size",
            "word_width_bits",
            "sequence_length",
            "drive_ticks",
            "initial_pointer",
            "ref_model_lag_ticks",
        ):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, int):
                raise ConfigurationError(f"{name} must be an int, got {v!r}")
        if self.address_space_size < 1:
            raise ConfigurationError("address_space_size must be >= 1")
        if not 1 <= self.word_width_bits <= 64:
            raise ConfigurationError("word_width_bits must be in [1, 64]")
        if self.sequence_length < 1:
            raise ConfigurationError("sequence_length must be >= 1")
        if self.drive_ticks < 1:
            raise ConfigurationError("drive_ticks must be >= 1")
        if not 0 <= self.initial_pointer < self.address_space_size:
            raise ConfigurationError(
                f"initial_pointer must be in [0, {self.address_space_size})"
            )
        if self.ref_model_lag_ticks < 0:
            raise ConfigurationError("ref_model_lag_ticks must be >= 0")
        if self.generator_policy not in POLICIES:
            known = ", ".join(sorted(POLICIES))
            raise ConfigurationError(
                f"Unknown generator policy {self.generator_policy!r} (known: {known})"
            )
        if not isinstance(self.coverage_en, bool):
            raise ConfigurationError("coverage_en must be a bool")
        init = self.memory_init
        if init is not None and (
            isinstance(init, bool)
            or not isinstance(init, int)
            or not 0 <= init < (1 << self.word_width_bits)
        ):
            raise ConfigurationError(
                f"memory_init must fit in {self.word_width_bits} bits, got {init!r}"
            )
        if not isinstance(self.random_seed, (int, str)):
            raise ConfigurationError(f"Invalid seed {self.random_seed!r}")
        try:
            seed = utils.normalize_seed(random.Random(), self.random_seed)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc
        return replace(self, random_seed=seed)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_settings(cls) -> Self:
        """Resolve every field from env vars and plusargs.

        Values are parsed but not range-checked; call ``validate()``.

        Raises:
            ConfigurationError: If a setting does not parse as its type.
        """
        d = cls()
        seed = utils_cli.get_raw_setting("RANDOM_SEED")
        init = utils_cli.get_raw_setting("MEMORY_INIT")
        return cls(
            address_space_size=utils_cli.get_int_setting(
                "ADDRESS_SPACE_SIZE", d.address_space_size
            ),
            word_width_bits=utils_cli.get_int_setting(
                "WORD_WIDTH_BITS", d.word_width_bits
            ),
            sequence_length=utils_cli.get_int_setting(
                "SEQUENCE_LENGTH", d.sequence_length
            ),
            random_seed=seed if seed is not None else d.random_seed,
            generator_policy=utils_cli.get_str_setting(
                "GENERATOR_POLICY", d.generator_policy
            ),
            drive_ticks=utils_cli.get_int_setting("DRIVE_TICKS", d.drive_ticks),
            initial_pointer=utils_cli.get_int_setting(
                "INITIAL_POINTER", d.initial_pointer
            ),
            ref_model_lag_ticks=utils_cli.get_int_setting(
                "REF_MODEL_LAG_TICKS", d.ref_model_lag_ticks
            ),
            coverage_en=utils_cli.get_bool_setting("COVERAGE_EN", d.coverage_en),
            memory_init=_parse_memory_init(init) if init is not None else d.memory_init,
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> Self:
        """Load a mapping of field names to values (unvalidated).

        Raises:
            ConfigurationError: If the file is not a mapping or names an
                unknown field.
        """
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path}: run configuration must be a mapping")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"{path}: unknown setting(s) {unknown}")
        if "memory_init" in data:
            data["memory_init"] = _parse_memory_init(data["memory_init"])
        return cls(**data)
