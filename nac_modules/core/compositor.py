"""
Per-frame composition: resolve every occupied cell and draw it through the cache.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from PySide6.QtCore import QRectF
from PySide6.QtGui import QPainter

from ..models import Bounds, Color
from ..utils.image_utils import ImageUtils
from .autotile import resolve, variant_bits
from .errors import MalformedAssetError
from .grid_store import GridStore
from .render_cache import RenderCache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TilePlacement:
    """One occupied cell with its resolved variant."""
    x: int
    y: int
    glyph: str
    variant: int
    color: Color
    
    @property
    def bits(self) -> str:
        return variant_bits(self.variant)


class Compositor:
    """
    Walks the grid once per pass and draws each occupied cell.
    
    Cell (x, y) covers the pixel square of side `pitch` whose top-left corner
    is (pitch * (x - 1), pitch * (y - 1)); with a `bounds` argument the origin
    moves to the bounds' top-left cell.
    """
    
    def __init__(self, grid: GridStore, cache: RenderCache, pitch: int):
        if pitch < 1:
            raise ValueError(f"pitch must be positive, got {pitch}")
        self.grid = grid
        self.cache = cache
        self.pitch = pitch
    
    def placements(self, bounds: Optional[Bounds] = None) -> Iterator[TilePlacement]:
        """Resolved placements in row-major order, optionally limited to `bounds`."""
        for x, y, cell in self.grid.occupied_cells():
            if bounds is not None and not bounds.contains(x, y):
                continue
            yield TilePlacement(x, y, cell.glyph, resolve(self.grid, x, y), cell.color)
    
    def cell_rect(self, x: int, y: int, bounds: Optional[Bounds] = None) -> QRectF:
        origin_x, origin_y = (bounds.min_x, bounds.min_y) if bounds is not None else (1, 1)
        return QRectF(
            self.pitch * (x - origin_x),
            self.pitch * (y - origin_y),
            self.pitch, self.pitch
        )
    
    def paint(self, painter: QPainter, debug: bool = False, bounds: Optional[Bounds] = None) -> int:
        """
        Draw all occupied cells.
        
        A cell whose shape cannot be rendered is logged and skipped; the rest
        of the pass continues.
        
        Returns:
            Number of cells drawn
        """
        drawn = 0
        for placement in self.placements(bounds):
            rect = self.cell_rect(placement.x, placement.y, bounds)
            try:
                image = self.cache.get_image(placement.glyph, placement.variant, placement.color)
                image.render(painter, rect)
            except MalformedAssetError as e:
                logger.warning("Skipping cell (%d, %d): %s", placement.x, placement.y, e)
                continue
            drawn += 1
            
            if debug:
                ImageUtils.draw_debug_label(
                    painter, rect, placement.glyph, placement.variant, placement.bits
                )
        return drawn
    
    def paint_grid_lines(self, painter: QPainter, bounds: Optional[Bounds] = None):
        """Draw cell boundaries over the interior (or over `bounds`)."""
        if bounds is None:
            columns, rows = self.grid.width, self.grid.height
        else:
            columns, rows = bounds.width, bounds.height
        ImageUtils.draw_grid_lines(painter, columns, rows, self.pitch)
