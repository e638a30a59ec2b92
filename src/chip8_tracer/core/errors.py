# chip8_tracer/core/errors.py
"""
コア層の例外定義。

デコード失敗は例外ではなくSnapshotの値として報告されます。
ここで定義する例外は、不正なプログラムまたはコアの欠陥を示す
契約違反であり、現在のセッションでは回復不能として扱われます。
"""


# @intent:responsibility 本パッケージが送出する全ての例外の基底クラス。
class Chip8Error(Exception):
    pass


# @intent:responsibility アドレス空間外へのアクセスを表します。
# @intent:rationale IndexErrorも継承し、既存のインデックス系エラー処理と互換にします。
class MemoryAccessError(Chip8Error, IndexError):
    def __init__(self, message: str, address: int):
        super().__init__(message)
        self.address = address


# @intent:responsibility 予約領域(フォント領域)への書き込みを表します。
class ProtectedWriteError(MemoryAccessError):
    pass


# @intent:responsibility コールスタックの契約違反を表します。診断用にPCと深さを保持します。
class StackError(Chip8Error):
    def __init__(self, message: str, pc: int, depth: int):
        super().__init__(f"{message} (PC={pc:#05x}, depth={depth})")
        self.pc = pc
        self.depth = depth


class StackOverflowError(StackError):
    pass


class StackUnderflowError(StackError):
    pass


# @intent:responsibility ROMファイルのロード失敗を表します。
class RomLoadError(Chip8Error, ValueError):
    pass


# @intent:responsibility システム構成ファイルの不正を表します。
class ConfigError(Chip8Error, ValueError):
    pass
