"""
Paint surface: draws the composition and turns pointer input into commands.
"""

import logging
from typing import Optional

from PySide6.QtWidgets import QWidget
from PySide6.QtGui import QPainter, QColor, QMouseEvent, QPaintEvent, QResizeEvent
from PySide6.QtCore import Qt, Signal

from ..core.errors import InvalidDimensionsError
from ..core.session import PaintSession
from ..utils.image_utils import ImageUtils

logger = logging.getLogger(__name__)


class PaintCanvas(QWidget):
    """
    Canvas widget for the module grid.
    
    Shows a blocking progress bar until a session is attached. Left button
    paints, right button erases, both while dragging.
    
    Signals:
        grid_changed(): Emitted after any paint, erase or resize
    """
    
    grid_changed = Signal()
    
    BACKGROUND_COLOR = QColor(255, 255, 255)
    
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setCursor(Qt.CrossCursor)
        self.setMouseTracking(False)
        self.setFocusPolicy(Qt.StrongFocus)
        
        self._session: Optional[PaintSession] = None
        self._loaded = 0
        self._total = 0
        self._failure: Optional[str] = None
    
    @property
    def session(self) -> Optional[PaintSession]:
        return self._session
    
    def set_session(self, session: PaintSession):
        """Attach a session; painting is enabled from here on."""
        self._session = session
        self._resize_grid()
        self.update()
    
    def set_progress(self, loaded: int, total: int):
        self._loaded = loaded
        self._total = total
        self.update()
    
    def set_failure(self, message: str):
        """Switch to the failed-to-load state. Painting stays disabled."""
        self._failure = message
        self.update()
    
    # === Drawing ===
    
    def paintEvent(self, event: QPaintEvent):
        painter = QPainter(self)
        try:
            painter.fillRect(self.rect(), self.BACKGROUND_COLOR)
            
            if self._failure is not None:
                ImageUtils.draw_failure_message(painter, self.width(), self.height(), self._failure)
                return
            
            if self._session is None:
                ImageUtils.draw_loading_bar(painter, self.width(), self.height(), self._loaded, self._total)
                return
            
            painter.setRenderHint(QPainter.Antialiasing)
            if self._session.show_grid:
                self._session.compositor.paint_grid_lines(painter)
            self._session.compositor.paint(painter, debug=self._session.debug)
        finally:
            painter.end()
    
    # === Input handling ===
    
    def _apply_pointer(self, event: QMouseEvent) -> bool:
        if self._session is None:
            return False
        
        pos = event.position()
        buttons = event.buttons()
        if buttons & Qt.LeftButton:
            self._session.place_at_pixel(pos.x(), pos.y())
        elif buttons & Qt.RightButton:
            self._session.erase_at_pixel(pos.x(), pos.y())
        else:
            return False
        
        self.grid_changed.emit()
        self.update()
        return True
    
    def mousePressEvent(self, event: QMouseEvent):
        if self._apply_pointer(event):
            event.accept()
            return
        super().mousePressEvent(event)
    
    def mouseMoveEvent(self, event: QMouseEvent):
        if self._apply_pointer(event):
            event.accept()
            return
        super().mouseMoveEvent(event)
    
    def contextMenuEvent(self, event):
        # Right button erases
        event.accept()
    
    def resizeEvent(self, event: QResizeEvent):
        super().resizeEvent(event)
        self._resize_grid()
    
    def _resize_grid(self):
        if self._session is None:
            return
        try:
            self._session.resize_viewport(self.width(), self.height())
        except InvalidDimensionsError as e:
            # e.g. a minimized window; keep the current grid
            logger.debug("Ignoring resize: %s", e)
            return
        self.grid_changed.emit()
