# src/chip8_tracer/ui/display_view.py
"""
フレームバッファ表示ウィジェット。

CPUが所有するFramebufferを読み取り専用で参照し、指定倍率で描画します。
"""
from typing import Optional

from PySide6.QtWidgets import QWidget
from PySide6.QtCore import QSize
from PySide6.QtGui import QPainter, QColor, QPaintEvent

from chip8_tracer.transport.framebuffer import Framebuffer
from chip8_tracer.config.models import DisplayConfig

# @intent:responsibility フレームバッファの画素を拡大して描画します。
class DisplayView(QWidget):
    def __init__(self, display_config: DisplayConfig, parent=None):
        super().__init__(parent)
        self._framebuffer: Optional[Framebuffer] = None
        self._scale = display_config.scale
        self._foreground = QColor(display_config.foreground)
        self._background = QColor(display_config.background)

    def set_framebuffer(self, framebuffer: Framebuffer) -> None:
        self._framebuffer = framebuffer
        self.setFixedSize(self.sizeHint())
        self.update()

    def sizeHint(self) -> QSize:
        if self._framebuffer is None:
            return QSize(64 * self._scale, 32 * self._scale)
        return QSize(self._framebuffer.width * self._scale, self._framebuffer.height * self._scale)

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        painter.fillRect(self.rect(), self._background)
        if self._framebuffer is not None:
            s = self._scale
            for y, row in enumerate(self._framebuffer.rows()):
                for x, lit in enumerate(row):
                    if lit:
                        painter.fillRect(x * s, y * s, s, s, self._foreground)
        painter.end()
