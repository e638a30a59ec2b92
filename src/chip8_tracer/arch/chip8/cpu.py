# src/chip8_tracer/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。

Chip8Cpuは1つのエミュレーションセッションを表し、CPU状態・メモリ（Bus）・
フレームバッファ・再描画/サウンドフラグを所有します。キーパッドはホストから注入されます。
"""
import logging
import random
from typing import Dict, List, Optional

from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.core.errors import Chip8Error
from chip8_tracer.core.snapshot import Operation, Snapshot
from chip8_tracer.common.types import RegisterLayoutInfo, RegisterInfo, DisassemblyLine
from chip8_tracer.transport.bus import Bus, PROGRAM_START
from chip8_tracer.transport.framebuffer import Framebuffer
from chip8_tracer.transport.keypad import Keypad, KEY_COUNT
from chip8_tracer.arch.chip8.state import Chip8CpuState, REGISTER_COUNT
from chip8_tracer.arch.chip8.font import FONTSET, FONT_ADDRESS
from chip8_tracer.arch.chip8.instructions import decode_opcode, execute_instruction
from chip8_tracer.arch.chip8 import disassembler

logger = logging.getLogger(__name__)

# @intent:responsibility CHIP-8 CPUの具体的なエミュレーションロジック（フェッチ、デコード、実行、タイマー）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 CPUをエミュレートするクラス。

    ホストは step() を繰り返し呼び出し、redraw_flag / sound_flag を観測して
    描画や発音を行った後にフラグをクリアします（consume_redraw / consume_sound）。
    """
    # @intent:responsibility Chip8Cpuを初期化します。
    # @intent:pre-condition busは0x000から0xFFFまでがマップされている必要があります。
    def __init__(self, bus: Bus, framebuffer: Optional[Framebuffer] = None,
                 keypad: Optional[Keypad] = None, seed: Optional[int] = None):
        self._framebuffer = framebuffer if framebuffer is not None else Framebuffer()
        self._keypad = keypad if keypad is not None else Keypad()
        self._seed = seed
        self._random = random.Random(seed)
        self.redraw_flag = False
        self.sound_flag = False
        super().__init__(bus)
        self.initialize()

    # @intent:responsibility CHIP-8の初期状態（全レジスタ0、PC=0x200）を生成します。
    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState()

    # @intent:responsibility セッションを初期状態に戻します。
    def reset(self) -> None:
        """
        レジスタ・スタック・タイマーをクリアしてPCを0x200に設定し、
        フレームバッファとフラグをクリア、フォントを再配置、乱数源を再シードします。
        """
        super().reset()
        self._framebuffer.clear()
        self.redraw_flag = False
        self.sound_flag = False
        self._random.seed(self._seed)
        self._bus.load(FONT_ADDRESS, FONTSET)

    # @intent:responsibility reset()の別名です。
    def initialize(self) -> None:
        self.reset()

    @property
    def framebuffer(self) -> Framebuffer:
        return self._framebuffer

    @property
    def keypad(self) -> Keypad:
        return self._keypad

    @property
    def is_awaiting_key(self) -> bool:
        return self._state.awaiting_key is not None

    # @intent:responsibility バイト列をメモリに配置します。
    # @intent:pre-condition 配置範囲がアドレス空間内に収まる必要があります（超える場合はMemoryAccessError）。
    def load(self, data: bytes, address: int = PROGRAM_START) -> None:
        self._bus.load(address, bytes(data))

    # @intent:responsibility CXNN命令用の乱数バイトを返します。
    def random_byte(self) -> int:
        return self._random.randrange(0x100)

    # @intent:responsibility フレームバッファの内容が変化したことをホストに通知します。
    def request_redraw(self) -> None:
        self.redraw_flag = True

    # @intent:responsibility 再描画フラグを読み出してクリアします。
    def consume_redraw(self) -> bool:
        flag = self.redraw_flag
        self.redraw_flag = False
        return flag

    # @intent:responsibility サウンドフラグを読み出してクリアします。
    def consume_sound(self) -> bool:
        flag = self.sound_flag
        self.sound_flag = False
        return flag

    # @intent:responsibility キー待ち状態をホストから完了させます。
    # @intent:return 待ち状態であった場合True。
    def supply_key(self, key: int) -> bool:
        if not 0 <= key < KEY_COUNT:
            raise ValueError(f"Key {key} is not a valid CHIP-8 key (0x0-0xF).")
        if self._state.awaiting_key is None:
            return False
        self._state.v[self._state.awaiting_key] = key
        self._state.awaiting_key = None
        return True

    # @intent:responsibility 現在のPCから16bit命令語をビッグエンディアンでフェッチします。
    def _fetch(self) -> int:
        return self._bus.read_word(self._state.pc)

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode)

    def _execute(self, operation: Operation) -> None:
        logger.debug("%03X: %s", (self._state.pc - operation.length) & 0xFFFF, operation.to_assembly())
        try:
            execute_instruction(operation, self._state, self)
        except Chip8Error as e:
            logger.error("%s failed: %s", operation.to_assembly(), e)
            raise

    # @intent:responsibility 命令実行後にタイマーを1減算します。
    def _after_execute(self) -> None:
        self._tick_timers()

    # @intent:responsibility 遅延タイマーとサウンドタイマーを減算します。
    # @intent:post-condition サウンドタイマーが正の値から0になったステップでのみsound_flagを立てます。
    def _tick_timers(self) -> None:
        s = self._state
        if s.timer_delay > 0:
            s.timer_delay -= 1
        if s.timer_sound > 0:
            s.timer_sound -= 1
            if s.timer_sound == 0:
                self.sound_flag = True

    # @intent:responsibility キー待ち状態（FX0A）の間はフェッチせず、キーパッドを確認します。
    # @intent:rationale 待機中もタイマーは減算し続けます。
    def _handle_wait(self, current_pc: int) -> Optional[Snapshot]:
        reg = self._state.awaiting_key
        if reg is None:
            return None

        key = self._keypad.first_pressed()
        if key is not None:
            self._state.v[reg] = key
            self._state.awaiting_key = None
        self._tick_timers()
        # 待機対象の命令はFX0Aそのもの（PCは既にその次を指している）
        return self._create_snapshot(current_pc, decode_opcode(0xF00A | (reg << 8)))

    # @intent:responsibility UI表示用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        regs = {f"V{idx:X}": s.v[idx] for idx in range(REGISTER_COUNT)}
        regs.update({"I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.timer_delay, "ST": s.timer_sound})
        return regs

    # @intent:responsibility UIのレジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{idx:X}", 8) for idx in range(REGISTER_COUNT)]),
            RegisterLayoutInfo("Index/Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ]),
        ]

    # @intent:responsibility UI表示用に、フラグ状態を辞書形式で提供します。
    def get_flag_state(self) -> Dict[str, bool]:
        return {
            "VF": self._state.vf != 0,
            "REDRAW": self.redraw_flag,
            "SOUND": self.sound_flag,
            "KEYWAIT": self.is_awaiting_key,
        }

    # @intent:responsibility 指定範囲のメモリを逆アセンブルします。
    def disassemble(self, start_addr: int, length: int) -> List[DisassemblyLine]:
        return disassembler.disassemble(self._bus, start_addr, length)
