# chip8_tracer/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1ステップ実行後のCPUとバスの状態を記録した不変のデータ構造を定義します。
ホストやデバッガへの情報提供と、デコード失敗の報告に用いる責務を負います。
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from chip8_tracer.core.state import CpuState
from chip8_tracer.transport.bus import BusAccess


# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    デコードされた命令の詳細（オペコード、ニーモニック、オペランド、ビットフィールド）を記録するデータクラス。
    kindがNoneの場合、対応する命令が存在しない（デコード失敗）ことを示します。
    """
    opcode: int # 例: 0x6A12
    mnemonic: str # 例: "LD"
    operands: List[str] = field(default_factory=list) # 例: ["VA", "#$12"]
    kind: Optional[Enum] = None # ディスパッチ用のタグ
    x: int = 0
    y: int = 0
    n: int = 0
    nn: int = 0
    nnn: int = 0
    length: int = 2 # 命令のバイト長

    @property
    def opcode_hex(self) -> str:
        return f"{self.opcode:04X}"

    @property
    def is_valid(self) -> bool:
        return self.kind is not None

    # @intent:responsibility "LD VA, #$12" 形式のアセンブリ表現を返します。
    def to_assembly(self) -> str:
        if self.operands:
            return f"{self.mnemonic} {', '.join(self.operands)}"
        return self.mnemonic

# @intent:responsibility デコード失敗を報告する値です。例外ではなくSnapshotに格納されます。
@dataclass(frozen=True)
class DecodeFailure:
    opcode: int
    pc: int

    def __str__(self) -> str:
        return f"Illegal opcode {self.opcode:04X} at PC {self.pc:03X}"

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True) # 不変データ構造
class Metadata:
    """
    実行に関するメタデータ（累計ステップ数、シンボル情報など）を記録するデータクラス。
    """
    step_count: int
    symbol_info: Optional[str] = None # 例: "main_loop: JP $200"

# @intent:responsibility ある一時点におけるCPUとバスの状態を不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    1ステップ実行直後のCPUの状態（コピー）、実行した命令、バスアクティビティを記録した不変のデータ構造。
    decode_failureがNoneでなければ、そのステップはデコード失敗です。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
    bus_activity: List[BusAccess] = field(default_factory=list)
    decode_failure: Optional[DecodeFailure] = None

    @property
    def ok(self) -> bool:
        return self.decode_failure is None
