# chip8_tracer/transport/keypad.py
"""
Transport Layer (キーパッド)

16キーの押下状態を保持します。状態を変更するのはホストのみで、
CPUは読み取り専用で参照します。
"""
from typing import List, Optional

KEY_COUNT = 16

# @intent:responsibility 16個のキー押下状態を保持し、ホストからの更新とCPUからの参照を仲介します。
class Keypad:
    def __init__(self):
        self._keys: List[bool] = [False] * KEY_COUNT

    @staticmethod
    def _check_key(key: int) -> None:
        if not 0 <= key < KEY_COUNT:
            raise ValueError(f"Key {key} is not a valid CHIP-8 key (0x0-0xF).")

    def press(self, key: int) -> None:
        self.set(key, True)

    def release(self, key: int) -> None:
        self.set(key, False)

    def set(self, key: int, pressed: bool) -> None:
        self._check_key(key)
        self._keys[key] = bool(pressed)

    def release_all(self) -> None:
        self._keys = [False] * KEY_COUNT

    # @intent:responsibility キーが押下されているかを返します。
    # @intent:rationale レジスタ値は8bitのため、下位4bitをキー番号として扱います。
    def is_pressed(self, key: int) -> bool:
        return self._keys[key & 0x0F]

    # @intent:responsibility 押下中のキーのうち最小の番号を返します。押下がなければNone。
    def first_pressed(self) -> Optional[int]:
        for key, pressed in enumerate(self._keys):
            if pressed:
                return key
        return None

    def snapshot(self) -> List[bool]:
        return list(self._keys)
