# src/chip8_tracer/arch/chip8/instructions/maps.py
"""
オペコードと命令実装のマッピング定義。
"""
from . import alu
from . import control
from . import draw
from . import load
from .base import OpKind

# @intent:map (マスク, パターン表) のリスト。上から順に opcode & mask をパターン表で引き、最初に一致した命令種別を採用します。
# @intent:rationale 第2段のディスパッチ（0/8/E/Fグループのn, nnによる分岐）をマスクの違いとして平坦に表現します。
DECODE_TABLES = [
    (0xFFFF, {
        0x00E0: OpKind.CLS,
        0x00EE: OpKind.RET,
    }),
    (0xF0FF, {
        0xE09E: OpKind.SKP,
        0xE0A1: OpKind.SKNP,
        0xF007: OpKind.LD_VX_DT,
        0xF00A: OpKind.LD_VX_K,
        0xF015: OpKind.LD_DT_VX,
        0xF018: OpKind.LD_ST_VX,
        0xF01E: OpKind.ADD_I_VX,
        0xF029: OpKind.LD_F_VX,
        0xF033: OpKind.LD_B_VX,
        0xF055: OpKind.LD_I_VX,
        0xF065: OpKind.LD_VX_I,
    }),
    (0xF00F, {
        0x5000: OpKind.SE_VX_VY,
        0x8000: OpKind.LD_VX_VY,
        0x8001: OpKind.OR,
        0x8002: OpKind.AND,
        0x8003: OpKind.XOR,
        0x8004: OpKind.ADD_VX_VY,
        0x8005: OpKind.SUB,
        0x8006: OpKind.SHR,
        0x8007: OpKind.SUBN,
        0x800E: OpKind.SHL,
        0x9000: OpKind.SNE_VX_VY,
    }),
    (0xF000, {
        0x0000: OpKind.SYS,
        0x1000: OpKind.JP,
        0x2000: OpKind.CALL,
        0x3000: OpKind.SE_VX_NN,
        0x4000: OpKind.SNE_VX_NN,
        0x6000: OpKind.LD_VX_NN,
        0x7000: OpKind.ADD_VX_NN,
        0xA000: OpKind.LD_I,
        0xB000: OpKind.JP_V0,
        0xC000: OpKind.RND,
        0xD000: OpKind.DRW,
    }),
]

# @intent:map 命令種別から実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # Control
    OpKind.RET: control.execute_ret,
    OpKind.SYS: control.execute_call,
    OpKind.JP: control.execute_jp,
    OpKind.CALL: control.execute_call,
    OpKind.SE_VX_NN: control.execute_se_vx_nn,
    OpKind.SNE_VX_NN: control.execute_sne_vx_nn,
    OpKind.SE_VX_VY: control.execute_se_vx_vy,
    OpKind.SNE_VX_VY: control.execute_sne_vx_vy,
    OpKind.JP_V0: control.execute_jp_v0,
    OpKind.SKP: control.execute_skp,
    OpKind.SKNP: control.execute_sknp,

    # ALU
    OpKind.ADD_VX_NN: alu.execute_add_vx_nn,
    OpKind.OR: alu.execute_or,
    OpKind.AND: alu.execute_and,
    OpKind.XOR: alu.execute_xor,
    OpKind.ADD_VX_VY: alu.execute_add_vx_vy,
    OpKind.SUB: alu.execute_sub,
    OpKind.SHR: alu.execute_shr,
    OpKind.SUBN: alu.execute_subn,
    OpKind.SHL: alu.execute_shl,
    OpKind.RND: alu.execute_rnd,

    # Load/Store
    OpKind.LD_VX_NN: load.execute_ld_vx_nn,
    OpKind.LD_VX_VY: load.execute_ld_vx_vy,
    OpKind.LD_I: load.execute_ld_i,
    OpKind.LD_VX_DT: load.execute_ld_vx_dt,
    OpKind.LD_VX_K: load.execute_ld_vx_k,
    OpKind.LD_DT_VX: load.execute_ld_dt_vx,
    OpKind.LD_ST_VX: load.execute_ld_st_vx,
    OpKind.ADD_I_VX: load.execute_add_i_vx,
    OpKind.LD_F_VX: load.execute_ld_f_vx,
    OpKind.LD_B_VX: load.execute_ld_b_vx,
    OpKind.LD_I_VX: load.execute_ld_i_vx,
    OpKind.LD_VX_I: load.execute_ld_vx_i,

    # Display
    OpKind.CLS: draw.execute_cls,
    OpKind.DRW: draw.execute_drw,
}
