"""
Resizable cell grid with a permanently empty one-cell border.
"""

import logging
import math
from typing import Iterator, List, Optional, Tuple

from ..models import Bounds, Cell, Color, ColorLike, WHITE
from .errors import InvalidDimensionsError

logger = logging.getLogger(__name__)


def cells_for_viewport(viewport: float, pitch: float) -> int:
    """Interior cell count along one axis: viewport / pitch rounded half up."""
    if pitch <= 0:
        raise InvalidDimensionsError(f"Cell pitch must be positive, got {pitch}")
    return int(math.floor(viewport / pitch + 0.5))


def _check_dimensions(width: int, height: int):
    if width < 1 or height < 1:
        raise InvalidDimensionsError(f"Grid dimensions must be positive, got {width}x{height}")


class GridStore:
    """
    2-D array of cells addressed as [x][y].
    
    The array is (width + 2) x (height + 2); the outer ring is a sentinel
    border that no public operation ever sets, so every interior cell has
    four in-bounds neighbours. Interior coordinates run 1..width and 1..height.
    """
    
    def __init__(self, width: int, height: int, default_color: ColorLike = WHITE):
        _check_dimensions(width, height)
        self._empty = Cell(None, Color.parse(default_color))
        self._width = width
        self._height = height
        self._cells: List[List[Cell]] = self._allocate(width, height)
    
    @classmethod
    def for_viewport(cls, viewport_width: float, viewport_height: float, pitch: float,
                     default_color: ColorLike = WHITE) -> 'GridStore':
        """Create a grid sized to cover a viewport at the given cell pitch."""
        return cls(
            cells_for_viewport(viewport_width, pitch),
            cells_for_viewport(viewport_height, pitch),
            default_color
        )
    
    def _allocate(self, width: int, height: int) -> List[List[Cell]]:
        # Cells are immutable, so sharing the empty instance is safe
        return [[self._empty] * (height + 2) for _ in range(width + 2)]
    
    # --- Dimensions ---
    
    @property
    def width(self) -> int:
        """Interior width in cells."""
        return self._width
    
    @property
    def height(self) -> int:
        """Interior height in cells."""
        return self._height
    
    @property
    def columns(self) -> int:
        """Full array width including the border."""
        return self._width + 2
    
    @property
    def rows(self) -> int:
        """Full array height including the border."""
        return self._height + 2
    
    @property
    def default_color(self) -> Color:
        return self._empty.color
    
    def clamp(self, x: int, y: int) -> Tuple[int, int]:
        """Clamp coordinates into the interior range."""
        return (
            min(max(int(x), 1), self._width),
            min(max(int(y), 1), self._height)
        )
    
    def is_interior(self, x: int, y: int) -> bool:
        return 1 <= x <= self._width and 1 <= y <= self._height
    
    # --- Queries ---
    
    def cell(self, x: int, y: int) -> Cell:
        """Get the cell at array coordinates (border cells included)."""
        if not (0 <= x < self.columns and 0 <= y < self.rows):
            raise IndexError(f"({x}, {y}) is outside the grid")
        return self._cells[x][y]
    
    def is_occupied(self, x: int, y: int) -> bool:
        return self.cell(x, y).occupied
    
    def occupied_cells(self) -> Iterator[Tuple[int, int, Cell]]:
        """Yield (x, y, cell) for every occupied interior cell, row-major."""
        for y in range(1, self._height + 1):
            for x in range(1, self._width + 1):
                cell = self._cells[x][y]
                if cell.occupied:
                    yield x, y, cell
    
    @property
    def occupied_count(self) -> int:
        return sum(1 for _ in self.occupied_cells())
    
    def neighbor_occupancy(self, x: int, y: int) -> Tuple[bool, bool, bool, bool]:
        """
        Occupancy of the four direct neighbours in (north, west, south, east) order.
        
        Raises:
            IndexError: If (x, y) is a border cell or outside the grid
        """
        if not self.is_interior(x, y):
            raise IndexError(f"({x}, {y}) is not an interior cell")
        cells = self._cells
        return (
            cells[x][y - 1].occupied,
            cells[x - 1][y].occupied,
            cells[x][y + 1].occupied,
            cells[x + 1][y].occupied
        )
    
    def occupied_bounds(self, padding: int = 1) -> Optional[Bounds]:
        """
        Smallest interior rectangle covering all occupied cells, grown by
        `padding` cells on each side and clamped to the interior.
        
        Returns:
            Bounds, or None if no cell is occupied
        """
        min_x, min_y = self._width + 1, self._height + 1
        max_x = max_y = 0
        found = False
        for x, y, _ in self.occupied_cells():
            min_x = min(min_x, x)
            max_x = max(max_x, x)
            min_y = min(min_y, y)
            max_y = max(max_y, y)
            found = True
        
        if not found:
            return None
        
        return Bounds(
            min_x=max(1, min_x - padding),
            min_y=max(1, min_y - padding),
            max_x=min(self._width, max_x + padding),
            max_y=min(self._height, max_y + padding)
        )
    
    # --- Mutation ---
    
    def place(self, x: int, y: int, glyph: str, color: ColorLike) -> Tuple[int, int]:
        """
        Occupy a cell with a glyph and colour.
        Out-of-range coordinates are clamped into the interior.
        
        Returns:
            The clamped (x, y) actually written
        """
        if not glyph:
            raise ValueError("glyph must be a non-empty id")
        x, y = self.clamp(x, y)
        self._cells[x][y] = Cell(glyph, Color.parse(color))
        return x, y
    
    def erase(self, x: int, y: int) -> Tuple[int, int]:
        """Empty a cell (coordinates clamped). Returns the clamped (x, y)."""
        x, y = self.clamp(x, y)
        self._cells[x][y] = self._empty
        return x, y
    
    def clear(self):
        """Reset every cell to empty, keeping the current dimensions."""
        self._cells = self._allocate(self._width, self._height)
    
    def resize(self, width: int, height: int):
        """
        Reallocate to new interior dimensions.
        
        Cells whose coordinates exist in both the old and the new interior
        keep their content; new cells are empty.
        
        Raises:
            InvalidDimensionsError: For zero or negative dimensions (grid unchanged)
        """
        _check_dimensions(width, height)
        if (width, height) == (self._width, self._height):
            return
        
        cells = self._allocate(width, height)
        for x in range(1, min(width, self._width) + 1):
            for y in range(1, min(height, self._height) + 1):
                cells[x][y] = self._cells[x][y]
        
        logger.debug("Grid resized %dx%d -> %dx%d", self._width, self._height, width, height)
        self._width = width
        self._height = height
        self._cells = cells
    
    def resize_viewport(self, viewport_width: float, viewport_height: float, pitch: float):
        """Resize to cover a viewport at the given cell pitch."""
        self.resize(
            cells_for_viewport(viewport_width, pitch),
            cells_for_viewport(viewport_height, pitch)
        )
