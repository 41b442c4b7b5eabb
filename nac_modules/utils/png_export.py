"""
Export the composition to a PNG image.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from PySide6.QtGui import QImage, QPainter, QColor

from ..core.compositor import Compositor
from ..core.svg_export import timestamp_filename

logger = logging.getLogger(__name__)


def export_grid_to_png(
    filepath: Union[str, Path],
    compositor: Compositor,
    show_grid: bool = False,
    scale: float = 1.0,
    background_color: QColor = None
) -> bool:
    """
    Render the occupied region (plus one cell of padding) to a PNG file.
    
    Covers exactly the region the SVG export covers.
    
    Args:
        filepath: Output PNG file path
        compositor: Compositor bound to the grid and render cache
        show_grid: Draw the grid-line overlay
        scale: Output pixels per canvas pixel
        background_color: Background fill (white by default)
        
    Returns:
        True if the file was written, False if the grid is empty or saving failed
    """
    bounds = compositor.grid.occupied_bounds(padding=1)
    if bounds is None:
        return False
    
    if background_color is None:
        background_color = QColor(255, 255, 255)
    
    img_width = max(1, round(bounds.width * compositor.pitch * scale))
    img_height = max(1, round(bounds.height * compositor.pitch * scale))
    
    image = QImage(img_width, img_height, QImage.Format_ARGB32)
    image.fill(background_color)
    
    painter = QPainter(image)
    try:
        painter.setRenderHint(QPainter.Antialiasing)
        painter.scale(scale, scale)
        if show_grid:
            compositor.paint_grid_lines(painter, bounds)
        compositor.paint(painter, bounds=bounds)
    finally:
        painter.end()
    
    path = Path(filepath)
    return image.save(str(path), "PNG")


def export_png(
    directory: Union[str, Path],
    compositor: Compositor,
    show_grid: bool = False,
    now: Optional[datetime] = None
) -> Optional[Path]:
    """
    Write a timestamped PNG into `directory`.
    
    Returns:
        Path of the written file, or None when nothing was written
    """
    path = Path(directory) / timestamp_filename(now, '.png')
    path.parent.mkdir(parents=True, exist_ok=True)
    if not export_grid_to_png(path, compositor, show_grid):
        logger.info("PNG export skipped: grid is empty or could not be saved")
        return None
    logger.info("Exported PNG to %s", path)
    return path
