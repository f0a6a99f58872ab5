# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_ref_model.py

"""Shadow reference model."""

from __future__ import annotations

import pytest

from lockstep.dv import (
    ControlSnapshot,
    ExpectedRecord,
    ReferenceModel,
    SynchronizationFault,
)

from recorder import Recorder


def _model(**kw) -> tuple[ReferenceModel, Recorder]:
    model = ReferenceModel(**kw)
    sink = Recorder("sink")
    model.results_port.connect(sink.analysis_export)
    return model, sink


def test_pointer_advances_every_tick():
    model, _ = _model(address_space_size=5, initial_pointer=3)
    for t in range(23):
        assert model.pointer == (3 + t) % 5
        model.write(ControlSnapshot.idle(t))
    assert model.pointer == (3 + 23) % 5


def test_write_then_read_one_lap_later():
    model, sink = _model(address_space_size=4)
    model.write(ControlSnapshot(0, write_enable=True, write_data=0x3C))
    for t in range(1, 4):
        model.write(ControlSnapshot.idle(t))
    model.write(ControlSnapshot(4, read_enable=True))

    assert sink.items == [ExpectedRecord(produced_at_tick=5, value=0x3C)]


def test_read_sees_value_before_same_tick_write():
    model, sink = _model(address_space_size=2)
    model.write(ControlSnapshot(0, write_enable=True, write_data=0x10))
    model.write(ControlSnapshot.idle(1))
    model.write(ControlSnapshot(2, True, True, write_data=0x20))

    assert sink.items == [ExpectedRecord(3, 0x10)]
    assert model.shadow == (0x20, 0)


def test_write_data_is_masked_to_word_width():
    model, _ = _model(address_space_size=2, word_width_bits=4)
    model.write(ControlSnapshot(0, write_enable=True, write_data=0x1F))
    assert model.shadow[0] == 0xF


def test_records_are_produced_in_tick_order():
    model, sink = _model(address_space_size=3)
    for t in range(9):
        model.write(ControlSnapshot(t, read_enable=t % 2 == 0))
    assert [r.produced_at_tick for r in sink.items] == [1, 3, 5, 7, 9]


@pytest.mark.parametrize("ticks", [[1], [0, 0], [0, 2], [0, 1, 1]])
def test_non_consecutive_tick_is_a_sync_fault(ticks):
    model, _ = _model()
    with pytest.raises(SynchronizationFault) as exc_info:
        for t in ticks:
            model.write(ControlSnapshot.idle(t))
    assert exc_info.value.tick == ticks[-1]


def test_reset_restores_power_on_state():
    model, _ = _model(address_space_size=4, initial_pointer=2)
    model.write(ControlSnapshot(0, write_enable=True, write_data=7))
    model.reset()

    state = model.snapshot_state()
    assert state.pointer == 2
    assert state.words == (0, 0, 0, 0)
    assert state.next_tick == 0
    model.write(ControlSnapshot.idle(0))


def test_unknown_words_emit_no_expectation():
    model, sink = _model(address_space_size=2, initial_value=None)
    model.write(ControlSnapshot(0, read_enable=True))
    model.write(ControlSnapshot(1, write_enable=True, write_data=5))
    model.write(ControlSnapshot.idle(2))
    model.write(ControlSnapshot(3, read_enable=True))

    assert model.unchecked_reads == 1
    assert sink.items == [ExpectedRecord(4, 5)]


@pytest.mark.parametrize(
    "kw", [{"address_space_size": 0}, {"initial_pointer": 16}, {"initial_pointer": -1}]
)
def test_bad_geometry(kw):
    with pytest.raises(ValueError):
        ReferenceModel(**kw)


def test_snapshots_arrive_through_export():
    model, sink = _model(initial_value=0x5A)
    model.analysis_export.write(ControlSnapshot(0, read_enable=True))

    assert sink.items == [ExpectedRecord(produced_at_tick=1, value=0x5A)]
    with pytest.raises(SynchronizationFault):
        model.analysis_export.write(ControlSnapshot.idle(0))
