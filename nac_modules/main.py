#!/usr/bin/env python3
"""
NAC Modules - autotiling module painter
"""

import argparse
import logging
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt

from . import __version__
from .logging_config import setup_logging
from .models import Settings
from .ui import MainWindow

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        prog="nac-modules",
        description="Paint autotiling module glyphs and export them as SVG or PNG."
    )
    ap.add_argument("--config", help="JSON settings file")
    ap.add_argument("--data-dir", help="Directory with {glyph}_{nn}.svg assets")
    ap.add_argument("--export-dir", help="Directory for exported images")
    ap.add_argument("--tile-size", type=int, help="Cell pitch in pixels")
    ap.add_argument("--log-level", default="INFO",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    ap.add_argument("--log-file", help="Also write logs to this file")
    return ap.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Settings from the optional config file, overridden by command-line flags."""
    settings = Settings.load(args.config) if args.config else Settings()
    if args.data_dir:
        settings.data_dir = args.data_dir
    if args.export_dir:
        settings.export_dir = args.export_dir
    if args.tile_size is not None:
        settings.tile_size = args.tile_size
    settings.validate()
    return settings


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)
    
    try:
        settings = build_settings(args)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Invalid settings: %s", e)
        return 2
    
    # Enable high DPI scaling
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )
    
    app = QApplication(sys.argv[:1])
    app.setApplicationName("NAC Modules")
    app.setApplicationVersion(__version__)
    app.setStyle("Fusion")
    
    window = MainWindow(settings)
    window.show()
    
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
