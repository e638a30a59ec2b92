# src/chip8_tracer/arch/chip8/state.py
"""
CHIP-8 CPU固有の状態定義。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from chip8_tracer.core.state import CpuState
from chip8_tracer.transport.bus import PROGRAM_START

# @intent:constant レジスタ数とコールスタックの深さ。
REGISTER_COUNT = 16
STACK_DEPTH = 16
# @intent:constant フラグ（キャリー/ボロー/衝突）に使われるレジスタ番号。
VF = 0xF

# @intent:responsibility CHIP-8 CPUの全てのレジスタ（V0-VF, I, PC, SP）、スタック、タイマーの状態を保持します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUのレジスタ状態を保持するデータクラス。
    spはスタックの深さ(0-16)を表します。
    awaiting_keyはFX0Aでキー入力を待っている間、格納先のレジスタ番号を保持します。
    """
    pc: int = PROGRAM_START
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    i: int = 0x000     # Index Register
    stack: List[int] = field(default_factory=lambda: [0] * STACK_DEPTH)
    timer_delay: int = 0
    timer_sound: int = 0
    awaiting_key: Optional[int] = None

    # @intent:accessor キャリー/ボロー/衝突フラグとして使われるVFへのアクセスを提供します。
    @property
    def vf(self) -> int:
        return self.v[VF]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[VF] = value & 0xFF
