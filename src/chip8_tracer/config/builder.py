import logging
from typing import Tuple

from chip8_tracer.core.errors import ConfigError
from chip8_tracer.transport.bus import Bus, RAM, ROM, MEMORY_SIZE
from chip8_tracer.transport.framebuffer import Framebuffer
from chip8_tracer.transport.keypad import Keypad
from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.arch.chip8.state import REGISTER_COUNT
from .models import SystemConfig, CpuInitialState

logger = logging.getLogger(__name__)

VX_NAMES = [f"v{idx:x}" for idx in range(REGISTER_COUNT)]

# @intent:constant 初期状態として受け付ける値の範囲（両端を含む）。
REGISTER_LIMITS = {"i": 0xFFFF, "timer_delay": 0xFF, "timer_sound": 0xFF}
BYTE_MAX = 0xFF
PC_MAX = MEMORY_SIZE - 2

# @intent:responsibility システム構成（Config）に基づいて、Bus、Device、Keypad、CPUを生成・接続し、初期状態を適用します。
class SystemBuilder:
    def build_system(self, config: SystemConfig) -> Tuple[Chip8Cpu, Bus]:
        bus = Bus()

        for region in config.memory_map:
            if not (0 <= region.start <= region.end < MEMORY_SIZE):
                raise ConfigError(f"Region {region.label or region.type} {region.start:03X}-{region.end:03X} out of range")
            size = region.end - region.start + 1
            device = ROM(size) if region.type == "ROM" else RAM(size)
            bus.register_device(region.start, region.end, device)
            logger.debug("Mapped %s %03X-%03X (%s)", region.type, region.start, region.end, region.label)

        cpu = Chip8Cpu(bus, framebuffer=Framebuffer(), keypad=Keypad(), seed=config.seed)

        # 初期状態の適用
        self.apply_initial_state(cpu, config.initial_state)

        return cpu, bus

    # @intent:responsibility Configで定義された初期状態をCPUに適用します。
    # @intent:rationale レジスタ名は "v0".."vf"、"i"、"timer_delay"、"timer_sound" を受け付けます。
    def apply_initial_state(self, cpu: Chip8Cpu, config_state: CpuInitialState):
        """
        CPUをリセットし、Configから指定された初期値を適用します。
        """
        cpu.reset()
        state = cpu.get_state()
        state.pc = self._check_range("pc", config_state.pc, PC_MAX)

        for reg_name, value in config_state.registers.items():
            name = reg_name.lower()
            if name in VX_NAMES:
                state.v[VX_NAMES.index(name)] = self._check_range(reg_name, value, BYTE_MAX)
            elif name in REGISTER_LIMITS:
                setattr(state, name, self._check_range(reg_name, value, REGISTER_LIMITS[name]))
            else:
                raise ConfigError(f"Unknown register '{reg_name}'")

    def _check_range(self, name: str, value: int, maximum: int) -> int:
        if not 0 <= value <= maximum:
            raise ConfigError(f"Initial value of '{name}' out of range: {value:#x} (0x0-{maximum:#x})")
        return value
