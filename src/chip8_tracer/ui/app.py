# src/chip8_tracer/ui/app.py
"""
Qtアプリケーションのエントリポイント。
コマンドライン引数の解析、ロギング設定、構成ファイルの読み込みを行い、メインウィンドウを起動します。
"""
import argparse
import logging
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from chip8_tracer.core.errors import ConfigError
from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.models import SystemConfig
from .main_window import MainWindow


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chip8-tracer", description="CHIP-8 interpreter")
    parser.add_argument("rom", nargs="?", help="CHIP-8 ROM file")
    parser.add_argument("-c", "--config", help="YAML system config")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase log verbosity (-v info, -vv debug)")
    return parser


def _configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


# @intent:responsibility アプリケーションを起動し、メインウィンドウを表示します。
def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    logger = logging.getLogger("chip8_tracer.app")

    try:
        config = ConfigLoader().load_from_file(args.config) if args.config else SystemConfig()
    except (OSError, ConfigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # 構成ファイル側のROM指定より、コマンドライン引数を優先する
    rom_path = args.rom or config.rom

    app = QApplication(sys.argv[:1])
    window = MainWindow(config, rom_path)
    window.show()
    logger.info("Starting emulation ...")
    return app.exec()


if __name__ == '__main__':
    sys.exit(main())
