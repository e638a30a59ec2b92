# chip8_tracer/transport/bus.py
"""
Transport Layer (共通バス)

このモジュールは、CHIP-8の4KBアドレス空間を抽象化し、
読み書きアクセスを適切なデバイスに委譲する責務を負います。
0x000-0x1FFはフォントを格納する予約領域、0x200以降がプログラム領域です。
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from dataclasses import dataclass
from enum import Enum

from chip8_tracer.core.errors import MemoryAccessError, ProtectedWriteError

# @intent:constant CHIP-8のメモリマップを定義します。
MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200

# @intent:responsibility バスアクセスを記録するためのタイプを定義します。
class BusAccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"

# @intent:responsibility 個々のバスアクセス操作を記録します。
@dataclass(frozen=True) # 不変データ構造
class BusAccess:
    """
    バス上で行われた単一のアクセス（読み込みまたは書き込み）を記録するデータクラス。
    書き込みの場合は、書き込み前の値をprevious_dataに保持します。
    """
    address: int
    data: int # 8bit value
    access_type: BusAccessType
    previous_data: Optional[int] = None

# @intent:responsibility バスの抽象デバイスインターフェースを定義します。
class Device(ABC):
    """
    バスに接続されるデバイスの抽象基底クラス。
    全てのデバイスはreadとwriteのインターフェースを実装する必要があります。
    """
    # @intent:responsibility 指定されたアドレスから8bitのデータを読み出す責務を負います。
    # @intent:pre-condition アドレスはデバイスの有効範囲内である必要があります。
    @abstractmethod
    def read(self, address: int) -> int:
        """
        指定されたアドレスから8bitのデータを読み出します。
        アドレスはデバイス内でのオフセットとして扱われます。
        """
        pass

    # @intent:responsibility 指定されたアドレスに8bitのデータを書き込みます。
    # @intent:pre-condition アドレスはデバイスの有効範囲内であり、データは8bit値である必要があります。
    @abstractmethod
    def write(self, address: int, data: int) -> None:
        """
        指定されたアドレスに8bitのデータを書き込みます。
        アドレスはデバイス内でのオフセットとして扱われます。
        """
        pass

# @intent:responsibility 基本的なRAMデバイスの機能を提供します。
class RAM(Device):
    """
    プログラム領域およびテスト用のRAMデバイス。
    """
    # @intent:responsibility 指定されたサイズのメモリ領域を初期化します。
    # @intent:pre-condition sizeは正の整数である必要があります。
    def __init__(self, size: int):
        if not isinstance(size, int) or size <= 0:
            raise ValueError("RAM size must be a positive integer.")
        self._memory = bytearray(size)
        self._size = size

    def _check_offset(self, address: int) -> None:
        if not 0 <= address < self._size:
            raise MemoryAccessError(
                f"Address {address} out of bounds for {type(self).__name__} of size {self._size}.", address
            )

    def read(self, address: int) -> int:
        self._check_offset(address)
        return self._memory[address]

    def write(self, address: int, data: int) -> None:
        self._check_offset(address)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._memory[address] = data

    # @intent:responsibility 初期化用の書き込みです。RAMでは通常の書き込みと同じです。
    def load_data(self, address: int, data: int) -> None:
        RAM.write(self, address, data)

    # @intent:responsibility RAMのサイズを返します。
    def get_size(self) -> int:
        return self._size

# @intent:responsibility 読み込み専用メモリ(ROM)の機能を提供します。
class ROM(RAM):
    """
    読み込み専用メモリデバイス。フォント領域に使用します。
    実行中の書き込みはProtectedWriteErrorとして拒否されます。
    初期化用の load_data メソッド経由では書き込み可能です。
    """
    # @intent:responsibility 実行中の書き込みを拒否します。
    # @intent:rationale 予約領域への書き込みは不正なプログラムを示すため、無視せずに報告します。
    def write(self, address: int, data: int) -> None:
        self._check_offset(address)
        raise ProtectedWriteError(f"Write to read-only offset {address:#05x} rejected.", address)

# @intent:responsibility メモリアドレス空間を管理し、デバイスへのアクセスをディスパッチする共通バス。
# @intent:rationale バスの全てのアクセスを記録し、Snapshotに含めることでシステムの観測可能性を高めます。
class Bus:
    """
    メモリアドレス空間を管理し、デバイスへのアクセスをディスパッチする共通バス。
    バス上で行われた全てのメモリアクセスを記録する機能を提供します。
    """
    # @intent:responsibility 空のメモリマップとバスアクティビティログを初期化します。
    # @intent:pre-condition write_floor未満のアドレスへの書き込みは常に拒否されます。
    def __init__(self, write_floor: int = PROGRAM_START):
        # メモリマップ: (start_address, end_address, device) のタプルリスト
        self._memory_map: List[Tuple[int, int, Device]] = []
        self._bus_activity_log: List[BusAccess] = []
        self._write_floor = write_floor

    @property
    def write_floor(self) -> int:
        return self._write_floor

    def _log_access(self, address: int, data: int, access_type: BusAccessType, previous: Optional[int] = None) -> None:
        self._bus_activity_log.append(
            BusAccess(address=address, data=data, access_type=access_type, previous_data=previous)
        )

    # @intent:responsibility 記録されたバスアクティビティログを取得し、クリアします。
    def get_and_clear_activity_log(self) -> List[BusAccess]:
        """
        現在のバスアクティビティログを返し、内部ログをクリアします。
        """
        log = self._bus_activity_log
        self._bus_activity_log = []
        return log

    # @intent:responsibility 指定されたアドレス範囲にデバイスを登録します。
    # @intent:pre-condition start_address <= end_addressかつ非負であり、deviceはDeviceのインスタンスである必要があります。
    def register_device(self, start_address: int, end_address: int, device: Device) -> None:
        """
        指定されたアドレス範囲にデバイスを登録します。
        アドレス範囲の重複チェックは行いません。呼び出し元が責任を持ちます。
        """
        if not (0 <= start_address <= end_address):
            raise ValueError("Invalid address range: start_address must be <= end_address and non-negative.")
        if not isinstance(device, Device):
            raise TypeError("Device must be an instance of a class derived from Device.")

        if isinstance(device, RAM):
            expected_size = end_address - start_address + 1
            if device.get_size() != expected_size:
                raise ValueError(
                    f"Registered {type(device).__name__} device size ({device.get_size()} bytes) does not match "
                    f"the specified address range size ({expected_size} bytes)."
                )

        self._memory_map.append((start_address, end_address, device))

    # @intent:responsibility 指定されたアドレスに対応するデバイスとオフセットを検索します。
    # @intent:post-condition デバイスが見つからなかった場合、MemoryAccessErrorを発生させます。
    def _find_device(self, address: int) -> Tuple[Device, int]:
        for start, end, device in self._memory_map:
            if start <= address <= end:
                return device, address - start
        raise MemoryAccessError(f"Address {address:#06x} not mapped to any device.", address)

    # @intent:responsibility 指定されたアドレスから8bitのデータを読み出します。
    def read_byte(self, address: int) -> int:
        """
        指定されたアドレスから8bitのデータを読み出します。
        アクセスはログに記録されます。
        """
        device, offset = self._find_device(address)
        data = device.read(offset)
        self._log_access(address, data, BusAccessType.READ)
        return data

    # @intent:responsibility ビッグエンディアンで16bitワードを読み出します。
    def read_word(self, address: int) -> int:
        return (self.read_byte(address) << 8) | self.read_byte(address + 1)

    # @intent:responsibility ログを記録せずに指定されたアドレスからデータを読み出します。
    def peek(self, address: int) -> int:
        """
        指定されたアドレスから8bitのデータを読み出します（ログ記録なし）。
        逆アセンブラやUIなどのインスペクタ用。
        """
        device, offset = self._find_device(address)
        return device.read(offset)

    # @intent:responsibility 指定されたアドレスに8bitのデータを書き込みます。
    # @intent:pre-condition addressはwrite_floor以上である必要があります。
    def write_byte(self, address: int, data: int) -> None:
        """
        指定されたアドレスに8bitのデータを書き込みます。
        予約領域（write_floor未満またはROM）への書き込みはProtectedWriteErrorとなります。
        """
        device, offset = self._find_device(address)
        if address < self._write_floor or isinstance(device, ROM):
            raise ProtectedWriteError(
                f"Write to reserved address {address:#05x} rejected (program region starts at {self._write_floor:#05x}).",
                address,
            )
        previous = device.read(offset)
        device.write(offset, data)
        self._log_access(address, data, BusAccessType.WRITE, previous)

    # @intent:responsibility ホストによる初期化用の一括書き込みを行います（ログ記録なし）。
    # @intent:rationale フォントやROMイメージの配置は実行中の書き込みではないため、予約領域にも書き込めます。
    def load(self, address: int, data: bytes) -> None:
        """
        addressから始まる領域にdataをコピーします。
        アドレス空間を超える場合は、何も書き込まずにMemoryAccessErrorを発生させます。
        """
        end = address + len(data) - 1
        if data:
            # 先に両端を検証し、途中まで書き込まれた状態を残さない
            self._find_device(address)
            self._find_device(end)
        for i, value in enumerate(data):
            device, offset = self._find_device(address + i)
            if isinstance(device, RAM):
                device.load_data(offset, value)
            else:
                device.write(offset, value)


# @intent:responsibility 標準的なCHIP-8メモリマップ（フォントROM + プログラムRAM）を持つバスを生成します。
def create_chip8_bus() -> Bus:
    bus = Bus()
    bus.register_device(0x000, PROGRAM_START - 1, ROM(PROGRAM_START))
    bus.register_device(PROGRAM_START, MEMORY_SIZE - 1, RAM(MEMORY_SIZE - PROGRAM_START))
    return bus
