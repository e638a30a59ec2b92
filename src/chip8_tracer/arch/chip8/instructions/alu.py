# src/chip8_tracer/arch/chip8/instructions/alu.py
"""
算術論理演算命令の実装。
8bitレジスタ演算は全て256で折り返します。VFはキャリー/ボローフラグとして上書きされます。
"""
from typing import TYPE_CHECKING

from chip8_tracer.core.snapshot import Operation
from chip8_tracer.arch.chip8.state import Chip8CpuState

if TYPE_CHECKING:
    from chip8_tracer.arch.chip8.cpu import Chip8Cpu

# --- ADD Vx, nn (7XNN) ---
# @intent:responsibility Vxにnnを加算します。VFは変化しません。
def execute_add_vx_nn(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    state.v[op.x] = (state.v[op.x] + op.nn) & 0xFF

# --- OR / AND / XOR (8XY1-8XY3) ---
def execute_or(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    state.v[op.x] |= state.v[op.y]

def execute_and(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    state.v[op.x] &= state.v[op.y]

def execute_xor(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    state.v[op.x] ^= state.v[op.y]

# --- ADD Vx, Vy (8XY4) ---
# @intent:responsibility 9bitの和が255を超えた場合にVF=1とします。結果の格納後にVFを設定します。
def execute_add_vx_vy(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    res = state.v[op.x] + state.v[op.y]
    state.v[op.x] = res & 0xFF
    state.vf = 1 if res > 0xFF else 0

# --- SUB Vx, Vy (8XY5) ---
# @intent:responsibility Vx := Vx - Vy。ボロー(Vy > Vx)ならVF=0、そうでなければVF=1。
def execute_sub(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    vx, vy = state.v[op.x], state.v[op.y]
    borrow = vy > vx
    state.v[op.x] = (vx - vy) & 0xFF
    state.vf = 0 if borrow else 1

# --- SUBN Vx, Vy (8XY7) ---
# @intent:responsibility Vx := Vy - Vx。ボロー(Vx > Vy)ならVF=0、そうでなければVF=1。
def execute_subn(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    vx, vy = state.v[op.x], state.v[op.y]
    borrow = vx > vy
    state.v[op.x] = (vy - vx) & 0xFF
    state.vf = 0 if borrow else 1

# --- SHR Vx (8XY6) ---
# @intent:responsibility シフト前の最下位ビットをVFに設定してから、Vxを右シフトします。
def execute_shr(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    vx = state.v[op.x]
    state.vf = vx & 0x01
    state.v[op.x] = vx >> 1

# --- SHL Vx (8XYE) ---
# @intent:responsibility シフト前の最上位ビットをVFに設定してから、Vxを左シフトします。
def execute_shl(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    vx = state.v[op.x]
    state.vf = vx >> 7
    state.v[op.x] = (vx << 1) & 0xFF

# --- RND Vx, nn (CXNN) ---
def execute_rnd(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    state.v[op.x] = cpu.random_byte() & op.nn
