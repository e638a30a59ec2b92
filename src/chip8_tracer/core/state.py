# chip8_tracer/core/state.py
"""
Core Layer (CPU状態)

AbstractCpuが扱う最小限のレジスタ状態です。
アーキテクチャ固有のレジスタ、スタック、タイマーはサブクラスで追加します。
"""
from dataclasses import dataclass

# @intent:responsibility 全アーキテクチャに共通するPCとSPを保持します。
# @intent:rationale Snapshotはこの型をディープコピーして保持するため、フィールドは値型かリストに限ります。
@dataclass
class CpuState:
    pc: int = 0x0000
    sp: int = 0  # CHIP-8ではアドレスではなくスタックの深さ
