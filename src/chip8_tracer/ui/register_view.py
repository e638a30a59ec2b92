# src/chip8_tracer/ui/register_view.py
"""
CPUのレジスタを表示するウィジェット。
AbstractCpuのメタデータを利用して動的にUIを構築します。
"""
from typing import Dict, Optional
from PySide6.QtWidgets import QWidget, QVBoxLayout, QGridLayout, QLabel, QGroupBox
from PySide6.QtCore import Qt

from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.ui.fonts import get_monospace_font_family

# @intent:responsibility CPUのレジスタ値とフラグを表示するUIウィジェットを提供します。
class RegisterView(QWidget):
    """
    CPUのレジスタ状態を表示するウィジェット。
    get_register_layout() のグループごとに、2列のグリッドでレジスタを並べます。
    """
    COLUMNS = 2

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet("background-color: #121212; color: #BBBBBB;")

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(5, 5, 5, 5)

        self._font_family = get_monospace_font_family()
        self._register_labels: Dict[str, QLabel] = {}
        self._register_widths: Dict[str, int] = {}
        self._flags_label = QLabel()
        self._cpu: Optional[AbstractCpu] = None

    # @intent:responsibility 表示対象のCPUを設定し、UIレイアウトを構築します。
    def set_cpu(self, cpu: AbstractCpu) -> None:
        self._cpu = cpu
        self._setup_ui()
        self.update_registers()

    def _setup_ui(self):
        while self._layout.count():
            item = self._layout.takeAt(0)
            if item.widget() and item.widget() is not self._flags_label:
                item.widget().deleteLater()
        self._register_labels.clear()
        self._register_widths.clear()

        for group in self._cpu.get_register_layout():
            group_box = QGroupBox(group.group_name)
            group_box.setStyleSheet(
                "QGroupBox { font-weight: bold; border: 1px solid #222; margin-top: 18px; color: #EEE; }"
                "QGroupBox::title { subcontrol-origin: margin; left: 10px; color: #00AAAA; }"
            )
            grid = QGridLayout(group_box)
            grid.setContentsMargins(10, 15, 10, 10)

            for idx, reg in enumerate(group.registers):
                hex_width = (reg.width + 3) // 4 # 16bit -> 4chars, 8bit -> 2chars
                self._register_widths[reg.name] = hex_width

                label_name = QLabel(f"{reg.name}:")
                label_value = QLabel(f"0x{'0' * hex_width}")
                label_value.setStyleSheet(f"font-family: '{self._font_family}', monospace; color: #FFD700;")
                label_value.setAlignment(Qt.AlignRight)

                row, col = divmod(idx, self.COLUMNS)
                grid.addWidget(label_name, row, col * 2)
                grid.addWidget(label_value, row, col * 2 + 1)
                self._register_labels[reg.name] = label_value

            self._layout.addWidget(group_box)

        self._flags_label.setStyleSheet(f"font-family: '{self._font_family}', monospace; color: #99FF99;")
        self._layout.addWidget(self._flags_label)
        self._layout.addStretch()

    # @intent:responsibility 現在のCPU状態を取得し、レジスタとフラグの表示値を更新します。
    def update_registers(self):
        if not self._cpu:
            return

        for name, value in self._cpu.get_register_map().items():
            if name in self._register_labels:
                width = self._register_widths[name]
                self._register_labels[name].setText(f"0x{value:0{width}X}")

        flags = self._cpu.get_flag_state()
        self._flags_label.setText("  ".join(name for name, on in flags.items() if on) or "-")
