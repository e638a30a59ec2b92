# src/chip8_tracer/arch/chip8/instructions/control.py
"""
制御フロー命令（ジャンプ、コール、リターン、条件スキップ）の実装。
"""
from typing import TYPE_CHECKING

from chip8_tracer.core.snapshot import Operation
from chip8_tracer.arch.chip8.state import Chip8CpuState
from .base import skip_next, push_stack, pop_stack

if TYPE_CHECKING:
    from chip8_tracer.arch.chip8.cpu import Chip8Cpu

# --- RET (00EE) ---
# @intent:responsibility スタックからリターンアドレスを取り出してPCに設定します。
def execute_ret(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    state.pc = pop_stack(state)

# --- CALL (2NNN) / SYS (0NNN) ---
# @intent:responsibility フェッチ後のPCをスタックに積み、nnnへジャンプします。
# @intent:rationale 0NNNも2NNNと同じサブルーチン呼び出しとして扱います。
def execute_call(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    push_stack(state, state.pc)
    state.pc = op.nnn

# --- JP (1NNN) ---
def execute_jp(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    state.pc = op.nnn

# --- JP V0 (BNNN) ---
def execute_jp_v0(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    state.pc = (op.nnn + state.v[0]) & 0xFFFF

# --- SE / SNE ---
def execute_se_vx_nn(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    if state.v[op.x] == op.nn:
        skip_next(state)

def execute_sne_vx_nn(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    if state.v[op.x] != op.nn:
        skip_next(state)

def execute_se_vx_vy(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    if state.v[op.x] == state.v[op.y]:
        skip_next(state)

def execute_sne_vx_vy(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    if state.v[op.x] != state.v[op.y]:
        skip_next(state)

# --- SKP / SKNP (EX9E / EXA1) ---
# @intent:responsibility Vxの値をキー番号として、キーパッドの押下状態に応じてスキップします。
def execute_skp(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    if cpu.keypad.is_pressed(state.v[op.x]):
        skip_next(state)

def execute_sknp(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    if not cpu.keypad.is_pressed(state.v[op.x]):
        skip_next(state)
