# src/chip8_tracer/arch/chip8/instructions/load.py
"""
ロード/ストア命令（レジスタ、インデックスレジスタ、タイマー、メモリ）の実装。
"""
from typing import TYPE_CHECKING

from chip8_tracer.core.snapshot import Operation
from chip8_tracer.arch.chip8.state import Chip8CpuState
from chip8_tracer.arch.chip8.font import glyph_address

if TYPE_CHECKING:
    from chip8_tracer.arch.chip8.cpu import Chip8Cpu

# --- LD Vx, nn (6XNN) / LD Vx, Vy (8XY0) ---
def execute_ld_vx_nn(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    state.v[op.x] = op.nn

def execute_ld_vx_vy(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    state.v[op.x] = state.v[op.y]

# --- LD I, nnn (ANNN) ---
def execute_ld_i(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    state.i = op.nnn

# --- Timers (FX07 / FX15 / FX18) ---
def execute_ld_vx_dt(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    state.v[op.x] = state.timer_delay

def execute_ld_dt_vx(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    state.timer_delay = state.v[op.x]

def execute_ld_st_vx(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    state.timer_sound = state.v[op.x]

# --- LD Vx, K (FX0A) ---
# @intent:responsibility キーが押されていれば即座にVxへ格納し、なければキー待ち状態に入ります。
# @intent:rationale CPU内部でのビジーウェイトを避け、待ち状態をstate.awaiting_keyとしてホストに公開します。
def execute_ld_vx_k(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    key = cpu.keypad.first_pressed()
    if key is not None:
        state.v[op.x] = key
    else:
        state.awaiting_key = op.x

# --- ADD I, Vx (FX1E) ---
def execute_add_i_vx(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    state.i = (state.i + state.v[op.x]) & 0xFFFF

# --- LD F, Vx (FX29) ---
# @intent:responsibility Vxの数字に対応する組み込みグリフのアドレスをIに設定します。
def execute_ld_f_vx(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    state.i = glyph_address(state.v[op.x])

# --- LD B, Vx (FX33) ---
# @intent:responsibility Vxの10進表現（百の位、十の位、一の位）をI, I+1, I+2に書き込みます。
def execute_ld_b_vx(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    vx = state.v[op.x]
    cpu.bus.write_byte(state.i, vx // 100)
    cpu.bus.write_byte(state.i + 1, (vx // 10) % 10)
    cpu.bus.write_byte(state.i + 2, vx % 10)

# --- LD [I], Vx (FX55) ---
# @intent:responsibility V0..Vx をIから始まるメモリに書き込み、I を x+1 進めます。
def execute_ld_i_vx(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    for reg in range(op.x + 1):
        cpu.bus.write_byte(state.i + reg, state.v[reg])
    state.i = (state.i + op.x + 1) & 0xFFFF

# --- LD Vx, [I] (FX65) ---
# @intent:responsibility Iから始まるメモリを V0..Vx に読み込み、I を x+1 進めます。
def execute_ld_vx_i(state: Chip8CpuState, cpu: "Chip8Cpu", op: Operation) -> None:
    for reg in range(op.x + 1):
        state.v[reg] = cpu.bus.read_byte(state.i + reg)
    state.i = (state.i + op.x + 1) & 0xFFFF
