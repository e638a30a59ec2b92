# tests/arch/chip8/test_instructions_load.py
"""
CHIP-8 ロード/ストア命令の単体テスト。
"""
import pytest

from chip8_tracer.core.errors import ProtectedWriteError
from chip8_tracer.transport.bus import BusAccessType
from chip8_tracer.arch.chip8.font import FONTSET, GLYPH_SIZE

# @intent:test_suite レジスタ・インデックス・タイマー・メモリ間の転送命令を検証します。

class TestRegisterLoads:
    def test_ld_vx_nn_and_ld_i(self, load_program):
        cpu = load_program(0x6A12, 0xA2F0)
        cpu.step()
        cpu.step()
        state = cpu.get_state()
        assert state.v[0xA] == 0x12
        assert state.i == 0x2F0

    def test_add_i_vx(self, load_program):
        cpu = load_program(0xA300, 0x6110, 0xF11E)
        for _ in range(3):
            cpu.step()
        assert cpu.get_state().i == 0x310

    def test_add_i_vx_does_not_touch_vf(self, load_program):
        cpu = load_program(0xAFFF, 0x61FF, 0xF11E)
        for _ in range(3):
            cpu.step()
        state = cpu.get_state()
        assert state.i == 0x10FE
        assert state.vf == 0

class TestTimerLoads:
    # @intent:test_case_timers FX15/FX18でタイマーを設定し、FX07で読み出せることを検証します。
    def test_set_and_read_delay_timer(self, load_program):
        cpu = load_program(0x6320, 0xF315, 0xF407)
        cpu.step()
        cpu.step()
        # FX15を実行したステップの終わりで1回減算されている
        assert cpu.get_state().timer_delay == 0x1F
        cpu.step()
        # FX07はステップ開始時点の値を読む
        assert cpu.get_state().v[0x4] == 0x1F
        assert cpu.get_state().timer_delay == 0x1E

    def test_set_sound_timer(self, load_program):
        cpu = load_program(0x6305, 0xF318)
        cpu.step()
        cpu.step()
        assert cpu.get_state().timer_sound == 0x04

class TestMemoryLoads:
    # @intent:test_case_bcd FX33でVxの10進3桁がI, I+1, I+2に書き込まれることを検証します。
    def test_bcd(self, load_program):
        cpu = load_program(0x609C, 0xA300, 0xF033)
        for _ in range(3):
            snapshot = cpu.step()
        assert [cpu.bus.peek(0x300 + k) for k in range(3)] == [1, 5, 6]
        writes = [a for a in snapshot.bus_activity if a.access_type == BusAccessType.WRITE]
        assert [w.address for w in writes] == [0x300, 0x301, 0x302]
        assert cpu.get_state().i == 0x300

    def test_bcd_into_reserved_region_rejected(self, load_program):
        cpu = load_program(0x609C, 0xA100, 0xF033)
        cpu.step()
        cpu.step()
        with pytest.raises(ProtectedWriteError):
            cpu.step()

    # @intent:test_case_store_load FX55で保存した値をFX65で復元でき、Iがx+1進むことを検証します。
    def test_store_and_load_registers(self, load_program):
        cpu = load_program(
            0x6011, 0x6122, 0x6233,  # V0..V2
            0xA400,                  # LD I, $400
            0xF255,                  # LD [I], V2
            0x6000, 0x6100, 0x6200,  # V0..V2をクリア
            0xA400,
            0xF265,                  # LD V2, [I]
        )
        for _ in range(5):
            cpu.step()
        assert [cpu.bus.peek(0x400 + k) for k in range(3)] == [0x11, 0x22, 0x33]
        assert cpu.get_state().i == 0x403

        for _ in range(5):
            cpu.step()
        state = cpu.get_state()
        assert state.v[0:3] == [0x11, 0x22, 0x33]
        assert state.i == 0x403

    def test_store_only_up_to_x(self, load_program):
        cpu = load_program(0x6011, 0x6122, 0xA400, 0xF055)
        for _ in range(4):
            cpu.step()
        assert cpu.bus.peek(0x400) == 0x11
        assert cpu.bus.peek(0x401) == 0x00
        assert cpu.get_state().i == 0x401

    # @intent:test_case_font FX29でIがVxのグリフアドレスを指すことを検証します。
    @pytest.mark.parametrize("digit", [0x0, 0x7, 0xF])
    def test_font_glyph_address(self, load_program, digit):
        cpu = load_program(0x6500 | digit, 0xF529)
        cpu.step()
        cpu.step()
        i = cpu.get_state().i
        assert i == digit * GLYPH_SIZE
        glyph = bytes(cpu.bus.peek(i + k) for k in range(GLYPH_SIZE))
        assert glyph == FONTSET[digit * GLYPH_SIZE:(digit + 1) * GLYPH_SIZE]
