"""
Paint session: the command interface between input handling and the core.
"""

import logging
import math
import random
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple, Union

from ..models import Color, ColorLike, Settings
from ..utils import png_export
from .catalog import VariantCatalog
from .compositor import Compositor
from .errors import UnknownGlyphError
from .grid_store import GridStore
from .render_cache import RenderCache
from .svg_export import SvgExporter

logger = logging.getLogger(__name__)


class PaintSession:
    """
    Owns the grid, cache, compositor and exporter for one canvas, plus the
    current tool state (glyph, colour and mode toggles).
    
    Input layers call place/erase/clear/resize; they never touch the grid
    directly.
    """
    
    def __init__(
        self,
        catalog: VariantCatalog,
        grid: GridStore,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None
    ):
        if settings is None:
            settings = Settings(glyphs=list(catalog.glyphs))
        
        self.settings = settings
        self.catalog = catalog
        self.grid = grid
        self.cache = RenderCache(catalog)
        self.compositor = Compositor(grid, self.cache, settings.tile_size)
        self.exporter = SvgExporter(grid, catalog, settings.tile_size)
        self._rng = rng or random.Random()
        
        self.active_glyph: str = catalog.glyphs[0]
        self.active_color: Color = Color.parse(settings.default_color)
        self.random_mode = settings.random_mode
        self.show_grid = settings.show_grid
        self.debug = settings.debug
    
    @classmethod
    def for_viewport(
        cls,
        catalog: VariantCatalog,
        viewport_width: float,
        viewport_height: float,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None
    ) -> 'PaintSession':
        """Create a session whose grid covers a viewport."""
        pitch = settings.tile_size if settings is not None else Settings().tile_size
        grid = GridStore.for_viewport(viewport_width, viewport_height, pitch)
        return cls(catalog, grid, settings, rng)
    
    @property
    def pitch(self) -> int:
        return self.settings.tile_size
    
    # --- Tool state ---
    
    def select_glyph(self, glyph: str):
        if not self.catalog.has_glyph(glyph):
            raise UnknownGlyphError(glyph)
        self.active_glyph = glyph
    
    def select_color(self, color: ColorLike):
        self.active_color = Color.parse(color)
    
    def select_palette(self, key: str) -> bool:
        """Pick a palette colour by its shortcut key. Returns False if unknown."""
        value = self.settings.palette.get(key)
        if value is None:
            return False
        self.select_color(value)
        return True
    
    def toggle_random(self) -> bool:
        self.random_mode = not self.random_mode
        return self.random_mode
    
    def toggle_grid(self) -> bool:
        self.show_grid = not self.show_grid
        return self.show_grid
    
    def toggle_debug(self) -> bool:
        self.debug = not self.debug
        return self.debug
    
    def next_glyph(self) -> str:
        """The glyph the next placement uses (random pick in random mode)."""
        if self.random_mode:
            return self._rng.choice(self.catalog.glyphs)
        return self.active_glyph
    
    # --- Commands ---
    
    def pixel_to_cell(self, px: float, py: float) -> Tuple[int, int]:
        """Grid cell under a pointer position, clamped into the interior."""
        return self.grid.clamp(
            math.floor(px / self.pitch) + 1,
            math.floor(py / self.pitch) + 1
        )
    
    def place(self, x: int, y: int) -> Tuple[int, int]:
        return self.grid.place(x, y, self.next_glyph(), self.active_color)
    
    def erase(self, x: int, y: int) -> Tuple[int, int]:
        return self.grid.erase(x, y)
    
    def place_at_pixel(self, px: float, py: float) -> Tuple[int, int]:
        return self.place(*self.pixel_to_cell(px, py))
    
    def erase_at_pixel(self, px: float, py: float) -> Tuple[int, int]:
        return self.erase(*self.pixel_to_cell(px, py))
    
    def clear(self):
        self.grid.clear()
        logger.debug("Canvas cleared")
    
    def resize(self, width: int, height: int):
        self.grid.resize(width, height)
    
    def resize_viewport(self, viewport_width: float, viewport_height: float):
        self.grid.resize_viewport(viewport_width, viewport_height, self.pitch)
    
    # --- Export ---
    
    def export_svg(self, directory: Union[str, Path, None] = None,
                   now: Optional[datetime] = None) -> Optional[Path]:
        """Export the composition as SVG; None when the grid is empty."""
        if directory is None:
            directory = self.settings.export_dir
        return self.exporter.export(directory, self.show_grid, now)
    
    def export_png(self, directory: Union[str, Path, None] = None,
                   now: Optional[datetime] = None) -> Optional[Path]:
        """Export the composition as PNG; None when the grid is empty."""
        if directory is None:
            directory = self.settings.export_dir
        return png_export.export_png(directory, self.compositor, self.show_grid, now)
