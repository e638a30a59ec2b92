# tests/transport/test_keypad.py
"""
chip8_tracer.transport.keypadモジュールの単体テスト。
"""
import pytest

from chip8_tracer.transport.keypad import Keypad, KEY_COUNT

# @intent:test_suite ホストによるキー状態更新とCPUからの参照を検証します。

class TestKeypad:
    def test_initially_released(self):
        keypad = Keypad()
        assert keypad.snapshot() == [False] * KEY_COUNT
        assert keypad.first_pressed() is None

    def test_press_release(self):
        keypad = Keypad()
        keypad.press(0xA)
        assert keypad.is_pressed(0xA)
        keypad.release(0xA)
        assert not keypad.is_pressed(0xA)

    def test_first_pressed_returns_lowest_index(self):
        keypad = Keypad()
        keypad.press(0xC)
        keypad.press(0x3)
        assert keypad.first_pressed() == 0x3

    # @intent:test_case_mask レジスタ値の下位4bitがキー番号として扱われることを検証します。
    def test_is_pressed_uses_low_nibble(self):
        keypad = Keypad()
        keypad.press(0x5)
        assert keypad.is_pressed(0x15)

    def test_invalid_key_rejected(self):
        keypad = Keypad()
        with pytest.raises(ValueError):
            keypad.press(KEY_COUNT)

    def test_release_all(self):
        keypad = Keypad()
        keypad.set(0x1, True)
        keypad.set(0x2, True)
        keypad.release_all()
        assert keypad.first_pressed() is None
