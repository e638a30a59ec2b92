# src/chip8_tracer/ui/main_window.py
"""
メインウィンドウの実装。

セッション（Chip8Cpu）を所有し、QTimerによる実行ループ、キー入力のキーパッドへの反映、
再描画・サウンドフラグの消費を担当します。コアはこのモジュールを参照しません。
"""
import logging
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QApplication, QDockWidget, QToolBar, QFileDialog, QMessageBox
from PySide6.QtGui import QAction, QKeyEvent, QKeySequence, QCloseEvent
from PySide6.QtCore import Qt, QTimer, Slot

from chip8_tracer.core.errors import Chip8Error
from chip8_tracer.config.models import SystemConfig
from chip8_tracer.config.builder import SystemBuilder
from chip8_tracer.loader.loader import RomLoader
from .display_view import DisplayView
from .register_view import RegisterView

logger = logging.getLogger(__name__)

# @intent:responsibility アプリケーションのメインウィンドウを定義し、ホスト側の実行ループを駆動します。
class MainWindow(QMainWindow):
    def __init__(self, config: SystemConfig, rom_path: Optional[str] = None, parent=None):
        super().__init__(parent)
        self.setWindowTitle("CHIP-8 Core Tracer")
        self._config = config
        self._rom_path = rom_path

        self.cpu, self.bus = SystemBuilder().build_system(config)

        self._timer = QTimer(self)
        self._timer.setInterval(max(1, 1000 // config.timing.frame_rate))
        self._timer.timeout.connect(self._on_frame)

        self.display_view = DisplayView(config.display)
        self.display_view.set_framebuffer(self.cpu.framebuffer)
        self.setCentralWidget(self.display_view)

        self._create_toolbar()
        self._create_register_dock()
        self._create_menus()

        if rom_path:
            self._load_rom(rom_path)

    # @intent:responsibility 実行制御用のツールバーを作成します。
    def _create_toolbar(self):
        toolbar = QToolBar("Main Toolbar")
        self.addToolBar(toolbar)

        self.run_action = QAction("Run", self)
        self.run_action.triggered.connect(self.start)
        toolbar.addAction(self.run_action)

        self.stop_action = QAction("Stop", self)
        self.stop_action.triggered.connect(self.stop)
        toolbar.addAction(self.stop_action)

        self.step_action = QAction("Step", self)
        self.step_action.triggered.connect(self._step_once)
        toolbar.addAction(self.step_action)

        self.reset_action = QAction("Reset", self)
        self.reset_action.triggered.connect(self._reset)
        toolbar.addAction(self.reset_action)

    def _create_register_dock(self):
        dock = QDockWidget("Registers", self)
        dock.setAllowedAreas(Qt.RightDockWidgetArea)
        self.register_view = RegisterView()
        self.register_view.set_cpu(self.cpu)
        dock.setWidget(self.register_view)
        self.addDockWidget(Qt.RightDockWidgetArea, dock)

    def _create_menus(self):
        file_menu = self.menuBar().addMenu("File")
        open_action = QAction("Open ROM...", self)
        open_action.setShortcut("Ctrl+O")
        open_action.triggered.connect(self._open_rom_dialog)
        file_menu.addAction(open_action)

    @Slot()
    def _open_rom_dialog(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open CHIP-8 ROM", "", "CHIP-8 ROMs (*.ch8 *.c8);;All Files (*)")
        if file_name:
            self._load_rom(file_name)

    # @intent:responsibility セッションをリセットしてROMをロードし、実行を開始します。
    def _load_rom(self, path: str) -> None:
        self.stop()
        try:
            self.cpu.initialize()
            RomLoader().load_rom(path, self.cpu)
        except Chip8Error as e:
            logger.error("Failed to load ROM: %s", e)
            QMessageBox.critical(self, "Error", f"Failed to load ROM: {e}")
            return
        self._rom_path = path
        self._refresh()
        self.statusBar().showMessage(f"Loaded {path}")
        self.start()

    @Slot()
    def start(self):
        self._timer.start()

    @Slot()
    def stop(self):
        self._timer.stop()

    @Slot()
    def _reset(self):
        if self._rom_path:
            self._load_rom(self._rom_path)
        else:
            self.cpu.initialize()
            self._refresh()

    @Slot()
    def _step_once(self):
        self.stop()
        self._run_steps(1)
        self._refresh()

    # @intent:responsibility 1フレーム分（steps_per_frame回）のステップを実行し、フラグを消費します。
    @Slot()
    def _on_frame(self):
        self._run_steps(self._config.timing.steps_per_frame)
        self._refresh()

    # @intent:responsibility count回ステップを実行します。キー待ち中も打ち切らず、タイマーは1フレームでcount回減算されます。
    def _run_steps(self, count: int) -> None:
        try:
            for _ in range(count):
                snapshot = self.cpu.step()
                if not snapshot.ok:
                    self.stop()
                    self.statusBar().showMessage(str(snapshot.decode_failure))
                    return
        except Chip8Error as e:
            self.stop()
            logger.exception("Session halted")
            self.statusBar().showMessage(f"Halted: {e}")

    # @intent:responsibility 再描画フラグとサウンドフラグを消費し、表示と発音を行います。
    def _refresh(self) -> None:
        if self.cpu.consume_redraw():
            self.display_view.update()
        if self.cpu.consume_sound():
            QApplication.beep()
        self.register_view.update_registers()

    # @intent:responsibility Qtのキーイベントをキーマップ経由でキーパッドへ反映します。
    def _map_key(self, event: QKeyEvent) -> Optional[int]:
        name = QKeySequence(event.key()).toString().upper()
        return self._config.keymap.get(name)

    def keyPressEvent(self, event: QKeyEvent):
        key = self._map_key(event)
        if key is None or event.isAutoRepeat():
            super().keyPressEvent(event)
            return
        self.cpu.keypad.press(key)

    def keyReleaseEvent(self, event: QKeyEvent):
        key = self._map_key(event)
        if key is None or event.isAutoRepeat():
            super().keyReleaseEvent(event)
            return
        self.cpu.keypad.release(key)

    def closeEvent(self, event: QCloseEvent):
        self.stop()
        event.accept()
