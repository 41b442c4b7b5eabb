from dataclasses import dataclass
from typing import Optional

from .color import Color, WHITE


@dataclass(frozen=True)
class Cell:
    """
    State of a single grid cell.
    Unoccupied cells keep a defined colour so lookups never see partial state.
    """
    glyph: Optional[str] = None       # glyph id, None when empty
    color: Color = WHITE
    
    @property
    def occupied(self) -> bool:
        return self.glyph is not None


EMPTY_CELL = Cell()


@dataclass(frozen=True)
class Bounds:
    """Inclusive rectangle of interior grid coordinates."""
    min_x: int
    min_y: int
    max_x: int
    max_y: int
    
    @property
    def width(self) -> int:
        """Number of columns covered."""
        return self.max_x - self.min_x + 1
    
    @property
    def height(self) -> int:
        """Number of rows covered."""
        return self.max_y - self.min_y + 1
    
    def contains(self, x: int, y: int) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y
