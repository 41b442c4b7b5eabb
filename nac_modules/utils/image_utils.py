"""
Painter helpers shared by the live canvas and the raster export.
"""

from PySide6.QtGui import QPainter, QColor, QPen
from PySide6.QtCore import Qt, QRectF, QLineF


class ImageUtils:
    """Utility class for drawing overlays."""
    
    GRID_COLOR = QColor(204, 204, 204)
    LABEL_COLOR = QColor(102, 102, 102)
    
    @staticmethod
    def draw_grid_lines(
        painter: QPainter,
        columns: int,
        rows: int,
        pitch: float,
        color: QColor = None,
        width: float = 0.5
    ):
        """Draw cell boundary lines for a columns x rows block starting at (0, 0)."""
        if color is None:
            color = ImageUtils.GRID_COLOR
        
        painter.save()
        pen = QPen(color)
        pen.setWidthF(width)
        painter.setPen(pen)
        painter.setBrush(Qt.NoBrush)
        
        total_width = columns * pitch
        total_height = rows * pitch
        for col in range(columns + 1):
            x = col * pitch
            painter.drawLine(QLineF(x, 0, x, total_height))
        for row in range(rows + 1):
            y = row * pitch
            painter.drawLine(QLineF(0, y, total_width, y))
        
        painter.restore()
    
    @staticmethod
    def draw_debug_label(painter: QPainter, rect: QRectF, glyph: str, variant: int, bits: str):
        """Overlay glyph id, variant index and neighbour pattern on a cell."""
        painter.save()
        font = painter.font()
        font.setPixelSize(9)
        painter.setFont(font)
        painter.setPen(ImageUtils.LABEL_COLOR)
        painter.drawText(rect, Qt.AlignCenter, f"{glyph}\n{variant}\n{bits}")
        painter.restore()
    
    @staticmethod
    def draw_loading_bar(painter: QPainter, width: int, height: int, loaded: int, total: int):
        """Draw the centered asset-loading progress bar."""
        fraction = loaded / total if total > 0 else 0.0
        bar_width = width * 0.4
        bar_height = 12
        bx = (width - bar_width) / 2
        by = height / 2 - bar_height / 2
        
        painter.save()
        painter.setRenderHint(QPainter.Antialiasing)
        painter.setPen(Qt.NoPen)
        
        painter.setBrush(QColor(220, 220, 220))
        painter.drawRoundedRect(QRectF(bx, by, bar_width, bar_height), 6, 6)
        
        painter.setBrush(QColor(132, 218, 222))  # teal
        painter.drawRoundedRect(QRectF(bx, by, bar_width * fraction, bar_height), 6, 6)
        
        painter.setPen(QColor(60, 60, 60))
        font = painter.font()
        font.setPixelSize(14)
        painter.setFont(font)
        painter.drawText(
            QRectF(0, by - 40, width, 24), Qt.AlignCenter,
            f"Loading modules… {loaded} / {total}"
        )
        painter.restore()
    
    @staticmethod
    def draw_failure_message(painter: QPainter, width: int, height: int, message: str):
        """Draw the blocking failed-to-load state."""
        painter.save()
        painter.setPen(QColor(200, 50, 50))
        font = painter.font()
        font.setPixelSize(14)
        painter.setFont(font)
        painter.drawText(
            QRectF(width * 0.1, 0, width * 0.8, height),
            Qt.AlignCenter | Qt.TextWordWrap,
            f"Failed to load modules\n\n{message}"
        )
        painter.restore()
