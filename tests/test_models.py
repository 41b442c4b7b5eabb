"""Tests for colour and cell values."""

import pytest

from nac_modules.models import BLACK, EMPTY_CELL, WHITE, Bounds, Cell, Color


@pytest.mark.parametrize("value", [
    '#84DADE',
    '#84dade',
    'rgb(132,218,222)',
    (132, 218, 222),
    [132.0, 218.0, 222.0, 255],
    Color(132, 218, 222),
])
def test_equivalent_notations(value):
    assert Color.parse(value) == Color(132, 218, 222)


def test_named_colour():
    assert Color.parse('teal') == Color(0, 128, 128)
    assert Color.parse('white') == WHITE
    assert Color.parse('#000') == BLACK


@pytest.mark.parametrize("value", ['not-a-colour', (1, 2), (256, 0, 0), (-1, 0, 0)])
def test_invalid_colours(value):
    with pytest.raises(ValueError):
        Color.parse(value)


def test_colour_formats():
    pink = Color(255, 0, 110)
    assert pink.css == 'rgb(255,0,110)'
    assert pink.hex == '#ff006e'


def test_cells():
    assert not EMPTY_CELL.occupied
    assert EMPTY_CELL.color == WHITE
    assert Cell('E', BLACK).occupied


def test_bounds():
    bounds = Bounds(2, 3, 5, 4)
    assert (bounds.width, bounds.height) == (4, 2)
    assert bounds.contains(2, 4)
    assert not bounds.contains(6, 4)
