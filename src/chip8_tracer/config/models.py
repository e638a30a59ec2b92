from dataclasses import dataclass, field
from typing import List, Optional

from chip8_tracer.common.types import KeyMap
from chip8_tracer.transport.bus import MEMORY_SIZE, PROGRAM_START

# @intent:constant COSMAC VIPの16キー配列を、PCキーボードの左上4x4ブロックに割り当てた標準キーマップ。
DEFAULT_KEYMAP: KeyMap = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}

@dataclass
class MemoryRegion:
    start: int
    end: int
    type: str  # "RAM", "ROM"
    label: str = ""

def default_memory_map() -> List[MemoryRegion]:
    return [
        MemoryRegion(start=0x000, end=PROGRAM_START - 1, type="ROM", label="Font"),
        MemoryRegion(start=PROGRAM_START, end=MEMORY_SIZE - 1, type="RAM", label="Program"),
    ]

@dataclass
class CpuInitialState:
    pc: int = PROGRAM_START
    registers: dict = field(default_factory=dict)

@dataclass
class TimingConfig:
    steps_per_frame: int = 10
    frame_rate: int = 60

@dataclass
class DisplayConfig:
    scale: int = 10
    foreground: str = "#33FF66"
    background: str = "#101010"

@dataclass
class SystemConfig:
    memory_map: List[MemoryRegion] = field(default_factory=default_memory_map)
    initial_state: CpuInitialState = field(default_factory=CpuInitialState)
    timing: TimingConfig = field(default_factory=TimingConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    keymap: KeyMap = field(default_factory=lambda: dict(DEFAULT_KEYMAP))
    seed: Optional[int] = None
    rom: Optional[str] = None
