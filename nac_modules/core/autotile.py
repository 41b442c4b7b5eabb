"""
Neighbourhood autotiling: maps a cell's N-W-S-E occupancy to a variant index.

The pattern is read as a binary number with north as the most significant
bit and east as the least significant, so a cell with neighbours only to the
north and south has pattern "1010" and variant 10.
"""

from .grid_store import GridStore

VARIANT_COUNT = 16
NEIGHBOR_ORDER = ('north', 'west', 'south', 'east')


def resolve(grid: GridStore, x: int, y: int) -> int:
    """Variant index in [0, 15] for the interior cell at (x, y)."""
    index = 0
    for occupied in grid.neighbor_occupancy(x, y):
        index = (index << 1) | int(occupied)
    return index


def neighbor_bits(grid: GridStore, x: int, y: int) -> str:
    """The 4-character occupancy pattern, e.g. '1010'."""
    return ''.join('1' if occupied else '0' for occupied in grid.neighbor_occupancy(x, y))


def variant_bits(variant: int) -> str:
    """Pattern string for a variant index."""
    if not 0 <= variant < VARIANT_COUNT:
        raise ValueError(f"Variant index out of range: {variant}")
    return format(variant, '04b')
