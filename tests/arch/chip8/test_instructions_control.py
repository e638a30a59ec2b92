# tests/arch/chip8/test_instructions_control.py
"""
CHIP-8 制御フロー命令の単体テスト。
"""
import pytest

from chip8_tracer.core.errors import StackOverflowError, StackUnderflowError, StackError
from chip8_tracer.arch.chip8.state import STACK_DEPTH

# @intent:test_suite ジャンプ、サブルーチン呼び出し、条件スキップ、キー判定スキップを検証します。

class TestJumps:
    def test_jp(self, load_program):
        cpu = load_program(0x1300)
        cpu.step()
        assert cpu.get_state().pc == 0x300

    def test_jp_v0_adds_register(self, load_program):
        cpu = load_program(0x6010, 0xB300)
        cpu.step()
        cpu.step()
        assert cpu.get_state().pc == 0x310

class TestSubroutines:
    # @intent:test_case_call_ret CALLとRETでフェッチ後のアドレスに戻ることを検証します。
    def test_call_and_return(self, load_program):
        cpu = load_program(0x2300)
        cpu.load(bytes([0x00, 0xEE]), 0x300)

        cpu.step()
        state = cpu.get_state()
        assert state.pc == 0x300
        assert state.sp == 1
        assert state.stack[0] == 0x202

        cpu.step()
        assert state.pc == 0x202
        assert state.sp == 0

    def test_sys_behaves_as_call(self, load_program):
        cpu = load_program(0x0300)
        cpu.step()
        state = cpu.get_state()
        assert state.pc == 0x300
        assert state.stack[0] == 0x202
        assert state.sp == 1

    # @intent:test_case_overflow 17段目のCALLがスタックオーバーフローとして報告されることを検証します。
    def test_stack_overflow(self, load_program):
        # 自分自身を呼び出し続ける
        cpu = load_program(0x2200)
        for _ in range(STACK_DEPTH):
            cpu.step()
        assert cpu.get_state().sp == STACK_DEPTH

        with pytest.raises(StackOverflowError) as excinfo:
            cpu.step()
        assert excinfo.value.depth == STACK_DEPTH
        assert isinstance(excinfo.value, StackError)

    def test_stack_underflow(self, load_program):
        cpu = load_program(0x00EE)
        with pytest.raises(StackUnderflowError) as excinfo:
            cpu.step()
        assert excinfo.value.depth == 0

class TestSkips:
    @pytest.mark.parametrize("program, expected_pc", [
        ((0x6A12, 0x3A12), 0x206),  # SE Vx, nn (一致)
        ((0x6A12, 0x3A13), 0x204),  # SE Vx, nn (不一致)
        ((0x6A12, 0x4A13), 0x206),  # SNE Vx, nn (不一致)
        ((0x6A12, 0x4A12), 0x204),  # SNE Vx, nn (一致)
        ((0x6A12, 0x5AB0), 0x204),  # SE Vx, Vy (VB=0)
        ((0x6A12, 0x9AB0), 0x206),  # SNE Vx, Vy
    ])
    def test_conditional_skip(self, load_program, program, expected_pc):
        cpu = load_program(*program)
        cpu.step()
        cpu.step()
        assert cpu.get_state().pc == expected_pc

    # @intent:test_case_keys EX9E/EXA1がキーパッドの状態に応じてスキップすることを検証します。
    def test_skp_and_sknp(self, load_program, keypad):
        cpu = load_program(0x6105, 0xE19E, 0x0000, 0xE1A1)
        keypad.press(0x5)
        cpu.step()
        cpu.step()
        assert cpu.get_state().pc == 0x206

        cpu.step()
        assert cpu.get_state().pc == 0x208

    def test_sknp_skips_when_released(self, load_program):
        cpu = load_program(0x6105, 0xE1A1)
        cpu.step()
        cpu.step()
        assert cpu.get_state().pc == 0x206

    def test_skp_uses_low_nibble_of_register(self, load_program, keypad):
        cpu = load_program(0x6115, 0xE19E)
        keypad.press(0x5)
        cpu.step()
        cpu.step()
        assert cpu.get_state().pc == 0x206
