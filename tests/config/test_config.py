# tests/config/test_config.py
"""
chip8_tracer.configパッケージ（YAMLローダーとシステムビルダー）の単体テスト。
"""
import pytest

from chip8_tracer.core.errors import ConfigError, ProtectedWriteError
from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.builder import SystemBuilder
from chip8_tracer.config.models import (
    SystemConfig, MemoryRegion, CpuInitialState, DEFAULT_KEYMAP,
)
from chip8_tracer.transport.bus import PROGRAM_START

# @intent:test_suite 構成ファイルの解析・検証と、構成からのシステム構築を検証します。

SAMPLE_YAML = """
memory_map:
  - start: 0x000
    end: 0x1FF
    type: ROM
    label: Font
  - start: "0x200"
    end: "0xFFF"
    type: RAM
    label: Program
initial_state:
  pc: 0x200
  registers:
    v0: 0x12
    VF: 1
    i: "0x300"
timing:
  steps_per_frame: 12
  frame_rate: 60
display:
  scale: 8
  foreground: "#FFFFFF"
keymap:
  x: 0
  k: 0xF
seed: 7
rom: roms/pong.ch8
"""

class TestConfigLoader:
    @pytest.fixture
    def loader(self):
        return ConfigLoader()

    # @intent:test_case_parse YAML文字列が各設定項目に正しく解析されることを検証します。
    def test_parse_sample(self, loader):
        config = loader.load_from_string(SAMPLE_YAML)
        assert [(r.start, r.end, r.type) for r in config.memory_map] == [
            (0x000, 0x1FF, "ROM"), (0x200, 0xFFF, "RAM"),
        ]
        assert config.initial_state.pc == 0x200
        assert config.initial_state.registers == {"v0": 0x12, "VF": 1, "i": 0x300}
        assert config.timing.steps_per_frame == 12
        assert config.display.scale == 8
        assert config.display.foreground == "#FFFFFF"
        assert config.display.background == "#101010"
        assert config.keymap["X"] == 0x0
        assert config.keymap["K"] == 0xF
        assert config.keymap["1"] == DEFAULT_KEYMAP["1"]
        assert config.seed == 7
        assert config.rom == "roms/pong.ch8"

    def test_empty_document_gives_defaults(self, loader):
        config = loader.load_from_string("")
        assert config == SystemConfig()

    def test_load_from_file(self, loader, tmp_path):
        path = tmp_path / "chip8.yaml"
        path.write_text(SAMPLE_YAML)
        assert loader.load_from_file(str(path)).seed == 7

    @pytest.mark.parametrize("text", [
        "- a\n- b\n",                                                   # ルートがリストである
        "memory_map:\n  - {start: 0, end: 0xFFF, type: FLASH}\n",        # 不明なデバイス種別
        "initial_state:\n  pc: zzz\n",                                  # 数値でない
        "initial_state:\n  registers:\n    v0: true\n",                  # 真偽値
        "timing:\n  frame_rate: 0\n",                                   # 正でない
        "keymap:\n  a: 16\n",                                           # キー番号が範囲外
        "memory_map: [\n",                                              # YAML構文エラー
    ])
    def test_invalid_config_rejected(self, loader, text):
        with pytest.raises(ConfigError):
            loader.load_from_string(text)

class TestSystemBuilder:
    # @intent:test_case_build 既定の構成からフォント配置済みのCPUとバスが構築されることを検証します。
    def test_build_default_system(self):
        cpu, bus = SystemBuilder().build_system(SystemConfig())
        assert cpu.bus is bus
        assert cpu.get_state().pc == PROGRAM_START
        assert bus.peek(0x000) == 0xF0
        with pytest.raises(ProtectedWriteError):
            bus.write_byte(0x000, 0x00)
        bus.write_byte(PROGRAM_START, 0x12)

    def test_initial_state_applied(self):
        config = ConfigLoader().load_from_string(SAMPLE_YAML)
        cpu, _ = SystemBuilder().build_system(config)
        state = cpu.get_state()
        assert state.v[0x0] == 0x12
        assert state.vf == 1
        assert state.i == 0x300

    def test_seed_makes_rnd_reproducible(self):
        config = SystemConfig(seed=99)
        values = []
        for _ in range(2):
            cpu, _ = SystemBuilder().build_system(config)
            cpu.load(bytes([0xC0, 0xFF]))
            cpu.step()
            values.append(cpu.get_state().v[0])
        assert values[0] == values[1]

    def test_region_out_of_range(self):
        config = SystemConfig(memory_map=[MemoryRegion(start=0x000, end=0x1000, type="RAM")])
        with pytest.raises(ConfigError):
            SystemBuilder().build_system(config)

    def test_unknown_register_rejected(self):
        config = SystemConfig(initial_state=CpuInitialState(registers={"vx": 1}))
        with pytest.raises(ConfigError, match="Unknown register"):
            SystemBuilder().build_system(config)

    # @intent:test_case_range 範囲外の初期値はマスクされずにConfigErrorとして拒否されることを検証します。
    @pytest.mark.parametrize("registers", [
        {"timer_delay": 0x1FF},
        {"timer_sound": 0x100},
        {"v0": 0x100},
        {"VF": -1},
        {"i": 0x10000},
    ])
    def test_out_of_range_register_rejected(self, registers):
        config = SystemConfig(initial_state=CpuInitialState(registers=registers))
        with pytest.raises(ConfigError, match="out of range"):
            SystemBuilder().build_system(config)

    @pytest.mark.parametrize("pc", [-1, 0xFFF, 0x1000])
    def test_out_of_range_pc_rejected(self, pc):
        config = SystemConfig(initial_state=CpuInitialState(pc=pc))
        with pytest.raises(ConfigError, match="out of range"):
            SystemBuilder().build_system(config)

    def test_boundary_initial_values_accepted(self):
        config = SystemConfig(initial_state=CpuInitialState(
            pc=0xFFE, registers={"v0": 0xFF, "i": 0xFFFF, "timer_delay": 0xFF, "timer_sound": 0xFF}))
        cpu, _ = SystemBuilder().build_system(config)
        state = cpu.get_state()
        assert state.pc == 0xFFE
        assert state.v[0] == 0xFF
        assert state.i == 0xFFFF
        assert state.timer_delay == 0xFF

    # @intent:test_case_yaml 構成ファイル経由の範囲外タイマー値が、実行前に拒否されることを検証します。
    def test_out_of_range_timer_from_yaml_rejected(self):
        config = ConfigLoader().load_from_string("initial_state:\n  registers:\n    timer_delay: 0x1FF\n")
        with pytest.raises(ConfigError):
            SystemBuilder().build_system(config)
