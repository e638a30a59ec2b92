# tests/arch/chip8/conftest.py
"""
CHIP-8アーキテクチャテスト用の共通フィクスチャ。
"""
import pytest

from chip8_tracer.transport.bus import create_chip8_bus
from chip8_tracer.transport.keypad import Keypad
from chip8_tracer.arch.chip8.cpu import Chip8Cpu


# @intent:utility_function 16bit命令語の列をビッグエンディアンのバイト列に変換します。
def assemble(*words: int) -> bytes:
    return b"".join(word.to_bytes(2, "big") for word in words)


@pytest.fixture
def keypad():
    return Keypad()


@pytest.fixture
def cpu(keypad):
    return Chip8Cpu(create_chip8_bus(), keypad=keypad, seed=1234)


@pytest.fixture
def load_program(cpu):
    """
    命令語の列を0x200に配置し、CPUを返すフィクスチャ。
    """
    def _load(*words: int) -> Chip8Cpu:
        cpu.load(assemble(*words))
        return cpu
    return _load
