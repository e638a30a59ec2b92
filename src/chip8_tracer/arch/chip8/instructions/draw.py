# src/chip8_tracer/arch/chip8/instructions/draw.py
"""
画面操作命令（画面クリア、スプライト描画）の実装。
"""
from typing import TYPE_CHECKING

from chip8_tracer.core.snapshot import Operation
from chip8_tracer.arch.chip8.state import Chip8CpuState

if TYPE_CHECKING:
    from chip8_tracer.arch.chip8.cpu import Chip8Cpu

# --- CLS (00E0) ---
def execute_cls(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    cpu.framebuffer.clear()
    cpu.request_redraw()

# --- DRW Vx, Vy, n (DXYN) ---
# @intent:responsibility メモリ[I, I+n)のスプライトを(Vx, Vy)にXOR描画し、衝突をVFに設定します。
# @intent:pre-condition 座標はVFのクリアより前に読み出します（x, yがFの場合に備える）。
def execute_drw(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    x, y = state.v[op.x], state.v[op.y]
    sprite = [cpu.bus.read_byte(state.i + row) for row in range(op.n)]
    state.vf = 0
    if cpu.framebuffer.draw_sprite(x, y, sprite):
        state.vf = 1
    cpu.request_redraw()
