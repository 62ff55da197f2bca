from types import SimpleNamespace

import pytest

from pychip8.utils.trace import TraceRecorder


def _state(pc: int, **kwargs):
    defaults = {
        "pc": pc,
        "index": 0x000,
        "sp": 0,
        "v": [0] * 16,
        "delay_timer": 0,
        "sound_timer": 0,
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def test_trace_recorder_overwrites_old_entries():
    recorder = TraceRecorder(capacity=2)

    recorder.record_step(_state(0x200), 0x6A02, mnemonic="LD")
    recorder.record_step(_state(0x202, index=0x2EA), 0xA2EA, mnemonic="LD")
    recorder.record_step(_state(0x204, sp=1), 0x22D4, mnemonic="CALL", note="call")

    lines = list(recorder.format_entries())
    assert len(recorder) == 2
    assert len(lines) == 2
    assert "pc=202" in lines[0]
    assert "I=2EA" in lines[0]
    assert "pc=204" in lines[1]
    assert "SP=1" in lines[1]
    assert "note=call" in lines[1]


def test_trace_recorder_handles_missing_opcode():
    recorder = TraceRecorder(1)
    recorder.record_step(_state(0x300), None)
    lines = list(recorder.format_entries())
    assert len(lines) == 1
    assert "opcode=----" in lines[0]
    assert recorder.last_entry().pc == 0x300


def test_trace_recorder_pc_override_and_limit():
    recorder = TraceRecorder(4)
    for pc in (0x200, 0x202, 0x204):
        recorder.record_step(_state(pc + 2), 0x1000 | pc, pc=pc)

    assert [entry.pc for entry in recorder.entries(limit=2)] == [0x202, 0x204]

    recorder.clear()
    assert recorder.last_entry() is None
    assert list(recorder.entries()) == []


def test_trace_recorder_rejects_bad_capacity():
    with pytest.raises(ValueError):
        TraceRecorder(0)
