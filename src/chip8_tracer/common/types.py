"""
レイヤー間で受け渡される軽量な型の定義。
コア・デバッガ・UIのいずれからも参照されるため、他のモジュールには依存しません。
"""
from typing import Dict, List, NamedTuple

# @intent:data_structure ラベル名からアドレスへの対応表。Snapshotのシンボル表示に使用します。
SymbolMap = Dict[str, int]

# @intent:data_structure ホストのキー名（大文字）からCHIP-8キー番号(0x0-0xF)への対応表。
KeyMap = Dict[str, int]

# @intent:data_structure レジスタ1本分の表示情報。widthはビット幅で、UIが16進桁数を決めるのに使います。
class RegisterInfo(NamedTuple):
    name: str
    width: int

# @intent:data_structure まとめて表示するレジスタの組（"General", "Timers"など）。
class RegisterLayoutInfo(NamedTuple):
    group_name: str
    registers: List[RegisterInfo]

# @intent:data_structure 逆アセンブル結果の1行。hex_bytesは命令語の16進表記（"6A12"など）です。
class DisassemblyLine(NamedTuple):
    address: int
    hex_bytes: str
    mnemonic: str
