# src/chip8_tracer/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。
"""
from enum import Enum
from typing import Dict, List, NamedTuple, Tuple

from chip8_tracer.core.errors import StackOverflowError, StackUnderflowError
from chip8_tracer.arch.chip8.state import Chip8CpuState, STACK_DEPTH

# @intent:data_structure デコード結果のタグ。実行テーブルのキーとして使用します。
class OpKind(Enum):
    CLS = "00E0"
    RET = "00EE"
    SYS = "0NNN"
    JP = "1NNN"
    CALL = "2NNN"
    SE_VX_NN = "3XNN"
    SNE_VX_NN = "4XNN"
    SE_VX_VY = "5XY0"
    LD_VX_NN = "6XNN"
    ADD_VX_NN = "7XNN"
    LD_VX_VY = "8XY0"
    OR = "8XY1"
    AND = "8XY2"
    XOR = "8XY3"
    ADD_VX_VY = "8XY4"
    SUB = "8XY5"
    SHR = "8XY6"
    SUBN = "8XY7"
    SHL = "8XYE"
    SNE_VX_VY = "9XY0"
    LD_I = "ANNN"
    JP_V0 = "BNNN"
    RND = "CXNN"
    DRW = "DXYN"
    SKP = "EX9E"
    SKNP = "EXA1"
    LD_VX_DT = "FX07"
    LD_VX_K = "FX0A"
    LD_DT_VX = "FX15"
    LD_ST_VX = "FX18"
    ADD_I_VX = "FX1E"
    LD_F_VX = "FX29"
    LD_B_VX = "FX33"
    LD_I_VX = "FX55"
    LD_VX_I = "FX65"


# @intent:data_structure オペコードから切り出したビットフィールド。
class Fields(NamedTuple):
    x: int
    y: int
    n: int
    nn: int
    nnn: int


# @intent:utility_function 16bitオペコードからx, y, n, nn, nnnを切り出します。
def decode_fields(opcode: int) -> Fields:
    return Fields(
        x=(opcode >> 8) & 0x0F,
        y=(opcode >> 4) & 0x0F,
        n=opcode & 0x00F,
        nn=opcode & 0x0FF,
        nnn=opcode & 0xFFF,
    )


# @intent:map 命令種別からニーモニックとオペランド書式へのマッピング。
# 書式はstr.formatでFieldsの各要素を参照します。
ASSEMBLY_FORMATS: Dict[OpKind, Tuple[str, List[str]]] = {
    OpKind.CLS: ("CLS", []),
    OpKind.RET: ("RET", []),
    OpKind.SYS: ("SYS", ["${nnn:03X}"]),
    OpKind.JP: ("JP", ["${nnn:03X}"]),
    OpKind.CALL: ("CALL", ["${nnn:03X}"]),
    OpKind.SE_VX_NN: ("SE", ["V{x:X}", "#${nn:02X}"]),
    OpKind.SNE_VX_NN: ("SNE", ["V{x:X}", "#${nn:02X}"]),
    OpKind.SE_VX_VY: ("SE", ["V{x:X}", "V{y:X}"]),
    OpKind.LD_VX_NN: ("LD", ["V{x:X}", "#${nn:02X}"]),
    OpKind.ADD_VX_NN: ("ADD", ["V{x:X}", "#${nn:02X}"]),
    OpKind.LD_VX_VY: ("LD", ["V{x:X}", "V{y:X}"]),
    OpKind.OR: ("OR", ["V{x:X}", "V{y:X}"]),
    OpKind.AND: ("AND", ["V{x:X}", "V{y:X}"]),
    OpKind.XOR: ("XOR", ["V{x:X}", "V{y:X}"]),
    OpKind.ADD_VX_VY: ("ADD", ["V{x:X}", "V{y:X}"]),
    OpKind.SUB: ("SUB", ["V{x:X}", "V{y:X}"]),
    OpKind.SHR: ("SHR", ["V{x:X}"]),
    OpKind.SUBN: ("SUBN", ["V{x:X}", "V{y:X}"]),
    OpKind.SHL: ("SHL", ["V{x:X}"]),
    OpKind.SNE_VX_VY: ("SNE", ["V{x:X}", "V{y:X}"]),
    OpKind.LD_I: ("LD", ["I", "${nnn:03X}"]),
    OpKind.JP_V0: ("JP", ["V0", "${nnn:03X}"]),
    OpKind.RND: ("RND", ["V{x:X}", "#${nn:02X}"]),
    OpKind.DRW: ("DRW", ["V{x:X}", "V{y:X}", "#{n:X}"]),
    OpKind.SKP: ("SKP", ["V{x:X}"]),
    OpKind.SKNP: ("SKNP", ["V{x:X}"]),
    OpKind.LD_VX_DT: ("LD", ["V{x:X}", "DT"]),
    OpKind.LD_VX_K: ("LD", ["V{x:X}", "K"]),
    OpKind.LD_DT_VX: ("LD", ["DT", "V{x:X}"]),
    OpKind.LD_ST_VX: ("LD", ["ST", "V{x:X}"]),
    OpKind.ADD_I_VX: ("ADD", ["I", "V{x:X}"]),
    OpKind.LD_F_VX: ("LD", ["F", "V{x:X}"]),
    OpKind.LD_B_VX: ("LD", ["B", "V{x:X}"]),
    OpKind.LD_I_VX: ("LD", ["[I]", "V{x:X}"]),
    OpKind.LD_VX_I: ("LD", ["V{x:X}", "[I]"]),
}


# @intent:utility_function 次の命令をスキップします（PCをさらに2進める）。
def skip_next(state: Chip8CpuState) -> None:
    state.pc = (state.pc + 2) & 0xFFFF


# @intent:utility_function リターンアドレスをコールスタックへ積みます。
# @intent:pre-condition スタックの深さが16未満である必要があります。
def push_stack(state: Chip8CpuState, address: int) -> None:
    if state.sp >= STACK_DEPTH:
        raise StackOverflowError("Call stack overflow", pc=state.pc, depth=state.sp)
    state.stack[state.sp] = address
    state.sp += 1


# @intent:utility_function コールスタックからリターンアドレスを取り出します。
# @intent:pre-condition スタックが空でない必要があります。
def pop_stack(state: Chip8CpuState) -> int:
    if state.sp <= 0:
        raise StackUnderflowError("Call stack underflow", pc=state.pc, depth=state.sp)
    state.sp -= 1
    return state.stack[state.sp]
