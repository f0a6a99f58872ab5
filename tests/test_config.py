# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_config.py

"""Run configuration, settings resolution and seeds."""

from __future__ import annotations

import random

import pytest

from lockstep import utils
from lockstep.dv import ConfigurationError, RunConfig, utils_cli


def test_defaults():
    cfg = RunConfig().validate()
    assert cfg.address_space_size == 16
    assert cfg.word_width_bits == 8
    assert cfg.sequence_length == 10
    assert cfg.random_seed == 42
    assert cfg.generator_policy == "uniform_random"
    assert cfg.drive_ticks == 1
    assert cfg.initial_pointer == 0
    assert cfg.ref_model_lag_ticks == 0
    assert cfg.coverage_en is True
    assert cfg.memory_init == 0


def test_validate_resolves_seed_strings():
    assert RunConfig(random_seed="0x10").validate().random_seed == 16
    assert RunConfig(random_seed=" 12 ").validate().random_seed == 12
    seed = RunConfig(random_seed="random").validate().random_seed
    assert isinstance(seed, int)


@pytest.mark.parametrize(
    "kw",
    [
        {"address_space_size": True},
        {"address_space_size": "16"},
        {"word_width_bits": 65},
        {"random_seed": 1.5},
        {"random_seed": True},
        {"coverage_en": "yes"},
        {"memory_init": 256},
        {"memory_init": -1},
    ],
)
def test_validate_rejects(kw):
    with pytest.raises(ConfigurationError):
        RunConfig(**kw).validate()


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        RunConfig(sequence_length=-3).validate()


def test_from_settings_precedence(monkeypatch):
    monkeypatch.setenv(
        "PLUSARGS",
        "+ADDRESS_SPACE_SIZE=8 +GENERATOR_POLICY=mixed "
        "+COVERAGE_EN=0 +RANDOM_SEED=0x20",
    )
    monkeypatch.setenv("ADDRESS_SPACE_SIZE", "32")
    monkeypatch.setenv("LOCKSTEP_SEQUENCE_LENGTH", "77")
    monkeypatch.setenv("MEMORY_INIT", "x")

    cfg = RunConfig.from_settings().validate()

    assert cfg.address_space_size == 32  # env beats plusarg
    assert cfg.generator_policy == "mixed"
    assert cfg.coverage_en is False
    assert cfg.random_seed == 0x20
    assert cfg.sequence_length == 77
    assert cfg.memory_init is None
    assert cfg.word_width_bits == 8


def test_from_settings_bad_seed(monkeypatch):
    monkeypatch.setenv("RANDOM_SEED", "banana")
    with pytest.raises(ConfigurationError):
        RunConfig.from_settings().validate()


def test_from_yaml(tmp_path):
    path = tmp_path / "run.yaml"
    path.write_text(
        "address_space_size: 8\n"
        "generator_policy: address_wraparound\n"
        "random_seed: '0xff'\n"
        "memory_init: x\n",
        encoding="utf-8",
    )
    cfg = RunConfig.from_yaml(path).validate()

    assert cfg.address_space_size == 8
    assert cfg.generator_policy == "address_wraparound"
    assert cfg.random_seed == 0xFF
    assert cfg.memory_init is None


def test_from_yaml_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert RunConfig.from_yaml(path) == RunConfig()


@pytest.mark.parametrize("text", ["- 1\n- 2\n", "colour: blue\n"])
def test_from_yaml_rejects(tmp_path, text):
    path = tmp_path / "bad.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        RunConfig.from_yaml(path)


def test_settings_helpers(monkeypatch):
    monkeypatch.setenv("COCOTB_PLUSARGS", "+FLAG +COUNT=0x1f +NAME=abc")
    assert utils_cli.get_bool_setting("FLAG", False) is True
    assert utils_cli.get_int_setting("COUNT", 0) == 31
    assert utils_cli.get_str_setting("NAME", "") == "abc"
    assert utils_cli.get_int_setting("MISSING", 9) == 9
    assert utils_cli.get_raw_setting("MISSING") is None

    monkeypatch.setenv("LOCKSTEP_FLAG", "off")
    assert utils_cli.get_bool_setting("FLAG", True) is False


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("ADDRESS_SPACE_SIZE", "sixteen"),
        ("SEQUENCE_LENGTH", "ten"),
        ("COVERAGE_EN", "maybe"),
        ("DRIVE_TICKS", "1.5"),
    ],
)
def test_malformed_setting_is_rejected(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigurationError, match=name):
        RunConfig.from_settings().validate()


def test_malformed_plusarg_is_rejected(monkeypatch):
    monkeypatch.setenv("PLUSARGS", "+WORD_WIDTH_BITS=wide +COUNT=zz")
    with pytest.raises(ConfigurationError, match=r"\+WORD_WIDTH_BITS"):
        RunConfig.from_settings()
    with pytest.raises(ConfigurationError, match="COUNT"):
        utils_cli.get_int_setting("COUNT", 5)


def test_first_source_decides(monkeypatch):
    # a bad env value does not fall through to LOCKSTEP_ or a plusarg
    monkeypatch.setenv("ADDRESS_SPACE_SIZE", "lots")
    monkeypatch.setenv("LOCKSTEP_ADDRESS_SPACE_SIZE", "8")
    monkeypatch.setenv("PLUSARGS", "+ADDRESS_SPACE_SIZE=4")
    with pytest.raises(ConfigurationError):
        RunConfig.from_settings()

    monkeypatch.delenv("ADDRESS_SPACE_SIZE")
    assert RunConfig.from_settings().address_space_size == 8


def test_normalize_seed():
    rng = random.Random(0)
    assert utils.normalize_seed(rng, 5) == 5
    assert utils.normalize_seed(rng, -1) == 0xFFFF_FFFF
    assert utils.normalize_seed(rng, "0x1_0") == 16
    assert 0 <= utils.normalize_seed(rng, "AUTO") < 2**32
    with pytest.raises(ValueError):
        utils.normalize_seed(rng, "seven")
    with pytest.raises(ValueError):
        utils.normalize_seed(rng, False)
