# tests/core/test_snapshot.py
"""
chip8_tracer.core.snapshotモジュールの単体テスト。
"""
import dataclasses

import pytest

from chip8_tracer.core.state import CpuState
from chip8_tracer.core.snapshot import Operation, Metadata, Snapshot, DecodeFailure
from chip8_tracer.transport.bus import BusAccess, BusAccessType

# @intent:test_suite Operation, Metadata, Snapshotの不変性と表現を検証します。

def test_operation_is_frozen():
    op = Operation(opcode=0x00E0, mnemonic="CLS")
    with pytest.raises(dataclasses.FrozenInstanceError):
        op.mnemonic = "RET"

def test_operation_without_kind_is_invalid():
    assert not Operation(opcode=0xFFFF, mnemonic="UNKNOWN").is_valid

def test_operation_hex_and_assembly():
    op = Operation(opcode=0x6A12, mnemonic="LD", operands=["VA", "#$12"])
    assert op.opcode_hex == "6A12"
    assert op.to_assembly() == "LD VA, #$12"
    assert Operation(opcode=0x00E0, mnemonic="CLS").to_assembly() == "CLS"

def test_decode_failure_str():
    assert str(DecodeFailure(opcode=0x0ABC, pc=0x2FE)) == "Illegal opcode 0ABC at PC 2FE"

def test_snapshot_fields():
    state = CpuState(pc=0x202)
    op = Operation(opcode=0x00E0, mnemonic="CLS")
    access = BusAccess(address=0x200, data=0x00, access_type=BusAccessType.READ)
    snapshot = Snapshot(state=state, operation=op, metadata=Metadata(step_count=1), bus_activity=[access])
    assert snapshot.ok
    assert snapshot.metadata.symbol_info is None
    assert snapshot.bus_activity == [access]
    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.state = CpuState()

def test_snapshot_with_failure():
    snapshot = Snapshot(
        state=CpuState(),
        operation=Operation(opcode=0xFFFF, mnemonic="UNKNOWN"),
        metadata=Metadata(step_count=1),
        decode_failure=DecodeFailure(opcode=0xFFFF, pc=0x200),
    )
    assert not snapshot.ok
