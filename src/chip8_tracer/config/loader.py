import yaml
from typing import Dict, Any

from chip8_tracer.core.errors import ConfigError
from chip8_tracer.transport.keypad import KEY_COUNT
from .models import (
    SystemConfig, MemoryRegion, CpuInitialState, TimingConfig, DisplayConfig,
    DEFAULT_KEYMAP, default_memory_map,
)

class ConfigLoader:
    def load_from_file(self, path: str) -> SystemConfig:
        with open(path, 'r') as f:
            return self.load_from_string(f.read())

    def load_from_string(self, text: str) -> SystemConfig:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}") from e
        return self.parse(data or {})

    def parse(self, data: Dict[str, Any]) -> SystemConfig:
        if not isinstance(data, dict):
            raise ConfigError("Config root must be a mapping.")

        # Parse Memory Map
        memory_map = []
        for region_data in data.get("memory_map") or []:
            rtype = region_data.get("type", "RAM")
            if rtype not in ("RAM", "ROM"):
                raise ConfigError(f"Unknown device type '{rtype}'")
            memory_map.append(MemoryRegion(
                start=self._parse_int(region_data.get("start")),
                end=self._parse_int(region_data.get("end")),
                type=rtype,
                label=region_data.get("label", ""),
            ))

        # Parse Initial State
        initial_state_data = data.get("initial_state") or {}
        registers = {
            name: self._parse_int(value)
            for name, value in (initial_state_data.get("registers") or {}).items()
        }
        initial_state = CpuInitialState(
            pc=self._parse_int(initial_state_data.get("pc", CpuInitialState.pc)),
            registers=registers,
        )

        timing_data = data.get("timing") or {}
        timing = TimingConfig(
            steps_per_frame=self._parse_positive(timing_data, "steps_per_frame", TimingConfig.steps_per_frame),
            frame_rate=self._parse_positive(timing_data, "frame_rate", TimingConfig.frame_rate),
        )

        display_data = data.get("display") or {}
        display = DisplayConfig(
            scale=self._parse_positive(display_data, "scale", DisplayConfig.scale),
            foreground=str(display_data.get("foreground", DisplayConfig.foreground)),
            background=str(display_data.get("background", DisplayConfig.background)),
        )

        keymap = dict(DEFAULT_KEYMAP)
        for name, key in (data.get("keymap") or {}).items():
            key = self._parse_int(key)
            if not 0 <= key < KEY_COUNT:
                raise ConfigError(f"Keymap entry '{name}' maps to invalid key {key}")
            keymap[str(name).upper()] = key

        seed = data.get("seed")
        return SystemConfig(
            memory_map=memory_map or default_memory_map(),
            initial_state=initial_state,
            timing=timing,
            display=display,
            keymap=keymap,
            seed=self._parse_int(seed) if seed is not None else None,
            rom=data.get("rom"),
        )

    def _parse_positive(self, section: Dict[str, Any], key: str, default: int) -> int:
        value = self._parse_int(section.get(key, default))
        if value <= 0:
            raise ConfigError(f"'{key}' must be positive, got {value}")
        return value

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ConfigError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                if value.lower().startswith("0x"):
                    return int(value, 16)
                return int(value)
            except ValueError:
                pass
        raise ConfigError(f"Invalid integer format: {value}")
