# chip8_tracer/loader/loader.py
"""
ROMローダーモジュール。
生のバイナリ形式のCHIP-8プログラムを読み込み、プログラム領域に配置します。
"""
import logging
import os

from chip8_tracer.core.errors import RomLoadError
from chip8_tracer.transport.bus import MEMORY_SIZE, PROGRAM_START
from chip8_tracer.arch.chip8.cpu import Chip8Cpu

logger = logging.getLogger(__name__)

# @intent:constant プログラム領域に収まる最大ROMサイズ。
MAX_ROM_SIZE = MEMORY_SIZE - PROGRAM_START

class RomLoader:
    """
    ROMファイルを読み込み、CPUのメモリへロードするローダー。
    サイズ検証はホスト側（このローダー）の責務です。
    """
    def read_rom(self, file_path: str) -> bytes:
        if not os.path.isfile(file_path):
            raise RomLoadError(f"ROM file not found: {file_path}")
        with open(file_path, 'rb') as f:
            data = f.read(MAX_ROM_SIZE + 1)
        self.validate(data, file_path)
        return data

    def validate(self, data: bytes, source: str = "<bytes>") -> None:
        if not data:
            raise RomLoadError(f"ROM is empty: {source}")
        if len(data) > MAX_ROM_SIZE:
            raise RomLoadError(f"ROM too large: {source} exceeds {MAX_ROM_SIZE} bytes")

    # @intent:responsibility ROMファイルを読み込み、0x200からロードして読み込んだバイト数を返します。
    def load_rom(self, file_path: str, cpu: Chip8Cpu) -> int:
        data = self.read_rom(file_path)
        cpu.load(data, PROGRAM_START)
        logger.info("Rom bytes read: %d (%s)", len(data), file_path)
        return len(data)

    def load_bytes(self, data: bytes, cpu: Chip8Cpu) -> int:
        self.validate(data)
        cpu.load(data, PROGRAM_START)
        return len(data)
