"""
Main application window.
"""

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QToolBar, QLabel, QPushButton,
    QComboBox, QColorDialog, QMessageBox, QStatusBar, QSizePolicy
)
from PySide6.QtGui import QColor, QKeyEvent
from PySide6.QtCore import Qt, Slot, QThread

from ..core.catalog import VariantCatalog
from ..core.session import PaintSession
from ..models import Settings
from .catalog_worker import CatalogWorker
from .paint_canvas import PaintCanvas

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window for NAC Modules."""
    
    def __init__(self, settings: Optional[Settings] = None):
        super().__init__()
        
        self._settings = settings or Settings()
        self._session: Optional[PaintSession] = None
        self._load_thread: Optional[QThread] = None
        self._worker: Optional[CatalogWorker] = None
        
        self._setup_ui()
        self._connect_signals()
        self._update_ui_state()
        self._start_loading()
    
    def _setup_ui(self):
        self.setWindowTitle("NAC Modules")
        self.setMinimumSize(640, 480)
        self.resize(1200, 800)
        
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        
        self._create_toolbar()
        
        self._canvas = PaintCanvas()
        self._canvas.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        layout.addWidget(self._canvas, 1)
        
        self._create_status_bar()
    
    def _create_toolbar(self):
        toolbar = QToolBar()
        toolbar.setMovable(False)
        toolbar.setFloatable(False)
        self.addToolBar(toolbar)
        
        self._export_svg_btn = QPushButton("Save SVG")
        self._export_svg_btn.clicked.connect(self._on_export_svg)
        toolbar.addWidget(self._export_svg_btn)
        
        self._export_png_btn = QPushButton("Save PNG")
        self._export_png_btn.clicked.connect(self._on_export_png)
        toolbar.addWidget(self._export_png_btn)
        
        self._clear_btn = QPushButton("Clear")
        self._clear_btn.clicked.connect(self._on_clear)
        toolbar.addWidget(self._clear_btn)
        
        toolbar.addSeparator()
        
        toolbar.addWidget(QLabel(" Tileset: "))
        self._glyph_combo = QComboBox()
        self._glyph_combo.addItems(self._settings.glyphs)
        self._glyph_combo.setFocusPolicy(Qt.NoFocus)
        self._glyph_combo.currentTextChanged.connect(self._on_glyph_selected)
        toolbar.addWidget(self._glyph_combo)
        
        toolbar.addSeparator()
        
        toolbar.addWidget(QLabel(" Colour: "))
        self._palette_btns = []
        for key, value in self._settings.palette.items():
            btn = QPushButton(key)
            btn.setToolTip(value)
            btn.setFixedWidth(28)
            btn.setStyleSheet(f"background-color: {value}; color: white;")
            btn.clicked.connect(lambda checked=False, k=key: self._on_palette(k))
            toolbar.addWidget(btn)
            self._palette_btns.append(btn)
        
        self._custom_color_btn = QPushButton("…")
        self._custom_color_btn.setToolTip("Custom colour")
        self._custom_color_btn.clicked.connect(self._on_custom_color)
        toolbar.addWidget(self._custom_color_btn)
        
        toolbar.addSeparator()
        
        self._random_btn = QPushButton("Random")
        self._random_btn.setCheckable(True)
        self._random_btn.clicked.connect(self._on_toggle_random)
        toolbar.addWidget(self._random_btn)
        
        self._grid_btn = QPushButton("Grid")
        self._grid_btn.setCheckable(True)
        self._grid_btn.clicked.connect(self._on_toggle_grid)
        toolbar.addWidget(self._grid_btn)
        
        self._debug_btn = QPushButton("Debug")
        self._debug_btn.setCheckable(True)
        self._debug_btn.clicked.connect(self._on_toggle_debug)
        toolbar.addWidget(self._debug_btn)
    
    def _create_status_bar(self):
        status = QStatusBar()
        self.setStatusBar(status)
        
        self._status_label = QLabel("Loading modules…")
        status.addWidget(self._status_label)
        
        status.addWidget(QLabel(" │ "))
        
        self._cells_label = QLabel("Cells: 0")
        status.addWidget(self._cells_label)
        
        self._tool_label = QLabel("")
        status.addPermanentWidget(self._tool_label)
    
    def _connect_signals(self):
        self._canvas.grid_changed.connect(self._on_grid_changed)
    
    def _start_loading(self):
        """Load the catalog on a worker thread; the canvas stays blocked until done."""
        self._load_thread = QThread(self)
        self._worker = CatalogWorker(
            self._settings.data_dir, self._settings.glyphs, self._settings.max_workers
        )
        self._worker.moveToThread(self._load_thread)
        
        self._load_thread.started.connect(self._worker.run)
        self._worker.progress.connect(self._canvas.set_progress)
        self._worker.loaded.connect(self._on_catalog_loaded)
        self._worker.failed.connect(self._on_catalog_failed)
        self._worker.loaded.connect(self._load_thread.quit)
        self._worker.failed.connect(self._load_thread.quit)
        
        self._load_thread.start()
    
    def _update_ui_state(self):
        """Update UI enabled states based on current state."""
        ready = self._session is not None
        
        for widget in (
            self._export_svg_btn, self._export_png_btn, self._clear_btn,
            self._glyph_combo, self._custom_color_btn,
            self._random_btn, self._grid_btn, self._debug_btn, *self._palette_btns
        ):
            widget.setEnabled(ready)
        
        if not ready:
            return
        
        session = self._session
        self._random_btn.setChecked(session.random_mode)
        self._grid_btn.setChecked(session.show_grid)
        self._debug_btn.setChecked(session.debug)
        if self._glyph_combo.currentText() != session.active_glyph:
            self._glyph_combo.setCurrentText(session.active_glyph)
        
        self._tool_label.setText(
            f"Tileset: {session.active_glyph}   Colour: {session.active_color.hex}"
            f"   Random: {'ON' if session.random_mode else 'off'}"
        )
        self._cells_label.setText(f"Cells: {session.grid.occupied_count}")
    
    def _refresh(self):
        self._update_ui_state()
        self._canvas.update()
    
    # === Slots ===
    
    @Slot(object)
    def _on_catalog_loaded(self, catalog: VariantCatalog):
        self._session = PaintSession.for_viewport(
            catalog,
            max(self._canvas.width(), self._settings.tile_size),
            max(self._canvas.height(), self._settings.tile_size),
            self._settings
        )
        self._canvas.set_session(self._session)
        self._status_label.setText(f"Loaded {len(catalog)} modules")
        self._update_ui_state()
    
    @Slot(str)
    def _on_catalog_failed(self, message: str):
        self._canvas.set_failure(message)
        self._status_label.setText("Failed to load modules")
        QMessageBox.critical(self, "Error", f"Failed to load modules:\n{message}")
    
    @Slot()
    def _on_grid_changed(self):
        if self._session is not None:
            self._cells_label.setText(f"Cells: {self._session.grid.occupied_count}")
    
    @Slot()
    def _on_export_svg(self):
        if self._session is None:
            return
        try:
            path = self._session.export_svg()
        except OSError as e:
            QMessageBox.critical(self, "Error", f"Failed to export:\n{e}")
            return
        if path is not None:
            self._status_label.setText(f"Exported to {Path(path).name}")
    
    @Slot()
    def _on_export_png(self):
        if self._session is None:
            return
        try:
            path = self._session.export_png()
        except OSError as e:
            QMessageBox.critical(self, "Error", f"Failed to export:\n{e}")
            return
        if path is not None:
            self._status_label.setText(f"Exported to {Path(path).name}")
    
    @Slot()
    def _on_clear(self):
        if self._session is None:
            return
        self._session.clear()
        self._status_label.setText("All cells cleared")
        self._refresh()
    
    @Slot(str)
    def _on_glyph_selected(self, glyph: str):
        if self._session is None or not glyph:
            return
        self._session.select_glyph(glyph)
        self._update_ui_state()
    
    def _on_palette(self, key: str):
        if self._session is not None and self._session.select_palette(key):
            self._update_ui_state()
    
    @Slot()
    def _on_custom_color(self):
        if self._session is None:
            return
        color = QColorDialog.getColor(QColor(self._session.active_color.hex), self, "Module colour")
        if color.isValid():
            self._session.select_color(color.name())
            self._update_ui_state()
    
    @Slot()
    def _on_toggle_random(self):
        if self._session is not None:
            self._session.toggle_random()
            self._update_ui_state()
    
    @Slot()
    def _on_toggle_grid(self):
        if self._session is not None:
            self._session.toggle_grid()
            self._refresh()
    
    @Slot()
    def _on_toggle_debug(self):
        if self._session is not None:
            self._session.toggle_debug()
            self._refresh()
    
    def keyPressEvent(self, event: QKeyEvent):
        """Handle keyboard shortcuts."""
        if self._session is None:
            super().keyPressEvent(event)
            return
        
        key = event.key()
        text = event.text().upper()
        
        if key in (Qt.Key_Backspace, Qt.Key_Delete):
            self._on_clear()
        elif text == 'S':
            self._on_export_svg()
        elif text == 'P':
            self._on_export_png()
        elif text == 'G':
            self._on_toggle_grid()
        elif text == 'D':
            self._on_toggle_debug()
        elif text == 'R':
            self._on_toggle_random()
        elif text and self._session.catalog.has_glyph(text):
            self._session.select_glyph(text)
            self._update_ui_state()
        elif text and event.text().lower() in self._settings.palette:
            self._on_palette(event.text().lower())
        else:
            super().keyPressEvent(event)
    
    def closeEvent(self, event):
        if self._load_thread is not None and self._load_thread.isRunning():
            self._load_thread.quit()
            self._load_thread.wait()
        super().closeEvent(event)
