# tests/core/test_cpu.py
"""
chip8_tracer.core.cpuモジュールの単体テスト。
"""
import pytest
from enum import Enum
from typing import Dict, List, Tuple

from chip8_tracer.core.state import CpuState
from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.transport.bus import Bus, RAM
from chip8_tracer.common.types import RegisterLayoutInfo, RegisterInfo

# @intent:test_suite CPUの状態管理と抽象CPUの命令サイクル（Template Method）を検証します。

class _Kind(Enum):
    NOP = "NOP"
    POKE = "POKE"

class DummyCpu(AbstractCpu):
    """
    命令語0x00をNOP、0x01をアドレス0x20への書き込みとして扱う最小のテスト用CPU。
    それ以外はデコード失敗になります。
    """
    def __init__(self, bus: Bus, initial_pc: int = 0x0000):
        self._initial_pc = initial_pc
        self.after_execute_calls = 0
        super().__init__(bus)

    def _create_initial_state(self) -> CpuState:
        return CpuState(pc=self._initial_pc)

    def _fetch(self) -> int:
        return self._bus.read_byte(self._state.pc)

    def _decode(self, opcode: int) -> Operation:
        if opcode == 0x00:
            return Operation(opcode=opcode, mnemonic="NOP", kind=_Kind.NOP, length=1)
        if opcode == 0x01:
            return Operation(opcode=opcode, mnemonic="POKE", kind=_Kind.POKE, length=1)
        return Operation(opcode=opcode, mnemonic="UNKNOWN", length=1)

    def _execute(self, operation: Operation) -> None:
        if operation.kind == _Kind.POKE:
            self._bus.write_byte(0x0020, 0xFF)

    def _after_execute(self) -> None:
        self.after_execute_calls += 1

    def get_register_map(self) -> Dict[str, int]:
        return {"PC": self._state.pc, "SP": self._state.sp}

    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [RegisterLayoutInfo("Test Group", [RegisterInfo("PC", 16), RegisterInfo("SP", 8)])]

    def get_flag_state(self) -> Dict[str, bool]:
        return {}

    def disassemble(self, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
        return []


@pytest.fixture
def bus():
    bus = Bus(write_floor=0x0000)
    bus.register_device(0x0000, 0x00FF, RAM(0x100))
    return bus


class TestCpuState:
    def test_defaults(self):
        state = CpuState()
        assert state.pc == 0
        assert state.sp == 0

class TestAbstractCpu:
    def test_cannot_instantiate_abstract(self, bus):
        with pytest.raises(TypeError):
            AbstractCpu(bus)

    # @intent:test_case_step 1ステップでPCが進み、後処理フックが呼ばれ、Snapshotが生成されることを検証します。
    def test_step_runs_template(self, bus):
        cpu = DummyCpu(bus)
        snapshot = cpu.step()
        assert snapshot.ok
        assert snapshot.operation.mnemonic == "NOP"
        assert snapshot.state.pc == 1
        assert snapshot.metadata.step_count == 1
        assert cpu.after_execute_calls == 1
        assert cpu.step_count == 1

    def test_step_collects_bus_activity(self, bus):
        bus.load(0x00, b"\x01")
        cpu = DummyCpu(bus)
        snapshot = cpu.step()
        assert [(a.address, a.data) for a in snapshot.bus_activity] == [(0x00, 0x01), (0x20, 0xFF)]
        assert snapshot.bus_activity[1].previous_data == 0x00

    def test_stale_log_is_discarded(self, bus):
        cpu = DummyCpu(bus)
        bus.read_byte(0x50)
        snapshot = cpu.step()
        assert [a.address for a in snapshot.bus_activity] == [0x00]

    # @intent:test_case_decode_failure デコード失敗時に実行・後処理が行われないことを検証します。
    def test_decode_failure_skips_execute(self, bus):
        bus.load(0x10, b"\x7F")
        cpu = DummyCpu(bus, initial_pc=0x10)
        snapshot = cpu.step()
        assert not snapshot.ok
        assert snapshot.decode_failure.opcode == 0x7F
        assert snapshot.decode_failure.pc == 0x10
        assert cpu.get_state().pc == 0x11
        assert cpu.after_execute_calls == 0

    def test_reset(self, bus):
        cpu = DummyCpu(bus, initial_pc=0x10)
        cpu.step()
        cpu.reset()
        assert cpu.get_state().pc == 0x10
        assert cpu.step_count == 0

    def test_restore_state_copies(self, bus):
        cpu = DummyCpu(bus)
        saved = CpuState(pc=0x42, sp=3)
        cpu.restore_state(saved)
        saved.pc = 0
        assert cpu.get_state().pc == 0x42
        assert cpu.get_state().sp == 3

    def test_symbol_map(self, bus):
        cpu = DummyCpu(bus)
        cpu.set_symbol_map({"start": 0x00})
        assert cpu.get_symbol_map() == {"start": 0x00}
        assert cpu.step().metadata.symbol_info == "start: NOP"
        assert cpu.step().metadata.symbol_info == "NOP"
