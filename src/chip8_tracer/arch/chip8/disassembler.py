# src/chip8_tracer/arch/chip8/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、CHIP-8のアセンブリ言語（ニーモニック）に変換します。
Instruction Layerのデコードロジックを再利用し、バスアクセスログを汚さないように
peek（ログなし読み込み）を使用します。
"""
from typing import List

from chip8_tracer.common.types import DisassemblyLine
from chip8_tracer.core.errors import MemoryAccessError
from chip8_tracer.transport.bus import Bus, MEMORY_SIZE
from chip8_tracer.arch.chip8.instructions import decode_opcode

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(bus: Bus, start_addr: int, length: int) -> List[DisassemblyLine]:
    """
    指定された範囲のメモリを2バイト単位で逆アセンブルします。

    Returns:
        List of DisassemblyLine(address, hex_bytes, mnemonic).
    """
    result = []
    current_addr = start_addr
    end_addr = min(start_addr + length, MEMORY_SIZE)

    while current_addr + 1 < end_addr:
        try:
            opcode = (bus.peek(current_addr) << 8) | bus.peek(current_addr + 1)
        except MemoryAccessError:
            break

        operation = decode_opcode(opcode)
        mnemonic_str = operation.to_assembly() if operation.is_valid else f"DW ${opcode:04X}"
        result.append(DisassemblyLine(current_addr, operation.opcode_hex, mnemonic_str))
        current_addr += operation.length

    return result
