from .color import Color, ColorLike, WHITE, BLACK
from .cell import Cell, Bounds, EMPTY_CELL
from .settings import Settings, DEFAULT_GLYPHS, DEFAULT_PALETTE

__all__ = [
    'Color', 'ColorLike', 'WHITE', 'BLACK',
    'Cell', 'Bounds', 'EMPTY_CELL',
    'Settings', 'DEFAULT_GLYPHS', 'DEFAULT_PALETTE'
]
