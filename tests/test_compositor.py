"""Tests for per-frame composition."""

import pytest
from PySide6.QtCore import Qt
from PySide6.QtGui import QImage, QPainter

from nac_modules.core import Compositor, MalformedAssetError, RenderCache
from nac_modules.models import Bounds, Color

PINK = Color(255, 0, 110)


class FakeCache:
    """Records lookups and fails for one glyph."""
    
    def __init__(self, cache, broken_glyph):
        self.cache = cache
        self.broken_glyph = broken_glyph
        self.requests = []
    
    def get_image(self, glyph, variant, color):
        self.requests.append((glyph, variant))
        if glyph == self.broken_glyph:
            raise MalformedAssetError(f"broken {glyph}")
        return self.cache.get_image(glyph, variant, color)


def _canvas(width=500, height=500):
    image = QImage(width, height, QImage.Format_ARGB32)
    image.fill(Qt.white)
    return image


def test_placements_row_major_with_variants(catalog, grid):
    grid.place(3, 2, '1', PINK)
    grid.place(2, 3, 'E', PINK)
    grid.place(3, 3, '1', PINK)
    
    placements = list(Compositor(grid, RenderCache(catalog), 50).placements())
    assert [(p.x, p.y, p.glyph, p.variant) for p in placements] == [
        (3, 2, '1', 0b0010),
        (2, 3, 'E', 0b0001),
        (3, 3, '1', 0b1100),
    ]
    assert placements[2].bits == '1100'


def test_placements_limited_to_bounds(catalog, grid):
    grid.place(1, 1, '1', PINK)
    grid.place(8, 8, '1', PINK)
    compositor = Compositor(grid, RenderCache(catalog), 50)
    assert [(p.x, p.y) for p in compositor.placements(Bounds(5, 5, 10, 10))] == [(8, 8)]


def test_cell_rect(catalog, grid):
    compositor = Compositor(grid, RenderCache(catalog), 50)
    rect = compositor.cell_rect(1, 1)
    assert (rect.x(), rect.y(), rect.width(), rect.height()) == (0, 0, 50, 50)
    rect = compositor.cell_rect(4, 2)
    assert (rect.x(), rect.y()) == (150, 50)
    rect = compositor.cell_rect(4, 2, Bounds(2, 1, 6, 4))
    assert (rect.x(), rect.y()) == (100, 50)


def test_invalid_pitch(catalog, grid):
    with pytest.raises(ValueError):
        Compositor(grid, RenderCache(catalog), 0)


def test_paint_draws_cells(catalog, grid, qapp):
    grid.place(2, 2, '1', PINK)
    compositor = Compositor(grid, RenderCache(catalog), 50)
    image = _canvas()
    painter = QPainter(image)
    try:
        drawn = compositor.paint(painter)
    finally:
        painter.end()
    
    assert drawn == 1
    # Cell (2, 2) spans 50..100; the centre block covers 65..85
    centre = image.pixelColor(75, 75)
    assert centre.red() > 200 and centre.green() < 50
    background = image.pixelColor(10, 10)
    assert (background.red(), background.green(), background.blue()) == (255, 255, 255)


def test_paint_skips_broken_cells(catalog, grid, qapp):
    grid.place(2, 2, '1', PINK)
    grid.place(5, 5, 'E', PINK)
    grid.place(7, 7, '1', PINK)
    fake = FakeCache(RenderCache(catalog), broken_glyph='E')
    compositor = Compositor(grid, fake, 50)
    
    image = _canvas()
    painter = QPainter(image)
    try:
        drawn = compositor.paint(painter)
    finally:
        painter.end()
    
    assert drawn == 2
    assert fake.requests == [('1', 0), ('E', 0), ('1', 0)]


def test_paint_debug_and_grid_lines(catalog, grid, qapp):
    grid.place(1, 1, 'E', PINK)
    compositor = Compositor(grid, RenderCache(catalog), 50)
    image = _canvas()
    painter = QPainter(image)
    try:
        compositor.paint_grid_lines(painter)
        drawn = compositor.paint(painter, debug=True)
    finally:
        painter.end()
    assert drawn == 1
