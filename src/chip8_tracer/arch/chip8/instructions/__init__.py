# src/chip8_tracer/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from typing import Optional, TYPE_CHECKING

from chip8_tracer.core.snapshot import Operation
from chip8_tracer.arch.chip8.state import Chip8CpuState
from .base import OpKind, ASSEMBLY_FORMATS, decode_fields
from .maps import DECODE_TABLES, EXECUTE_MAP

if TYPE_CHECKING:
    from chip8_tracer.arch.chip8.cpu import Chip8Cpu

# @intent:responsibility オペコードに対応する命令種別を検索します。該当なしの場合はNone。
def lookup_kind(opcode: int) -> Optional[OpKind]:
    for mask, table in DECODE_TABLES:
        kind = table.get(opcode & mask)
        if kind is not None:
            return kind
    return None

# @intent:responsibility CHIP-8のオペコードをデコードします。
def decode_opcode(opcode: int) -> Operation:
    """
    16bitオペコードをデコードし、ビットフィールドと命令種別を持つOperationオブジェクトを返します。
    未定義のオペコードは kind=None, mnemonic="UNKNOWN" のOperationになります。
    """
    fields = decode_fields(opcode)
    kind = lookup_kind(opcode)
    if kind is None:
        return Operation(opcode=opcode, mnemonic="UNKNOWN", operands=[f"${opcode:04X}"],
                         x=fields.x, y=fields.y, n=fields.n, nn=fields.nn, nnn=fields.nnn)

    mnemonic, templates = ASSEMBLY_FORMATS[kind]
    operands = [t.format(**fields._asdict()) for t in templates]
    return Operation(opcode=opcode, mnemonic=mnemonic, operands=operands, kind=kind,
                     x=fields.x, y=fields.y, n=fields.n, nn=fields.nn, nnn=fields.nnn)

# @intent:responsibility デコードされたCHIP-8命令を実行します。
def execute_instruction(operation: Operation, state: Chip8CpuState, cpu: "Chip8Cpu") -> None:
    """
    デコードされたCHIP-8命令を実行し、CPUの状態を変更します。
    """
    executor = EXECUTE_MAP.get(operation.kind)
    if executor is None:
        raise ValueError(f"No executor for opcode {operation.opcode_hex}")
    executor(state, cpu, operation)
