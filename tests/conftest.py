"""Shared test fixtures."""

import os

# Rasterizing tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from nac_modules.core import GridStore, VariantCatalog
from nac_modules.core.asset_loader import asset_filename
from nac_modules.core.recolor import SVG_NS

GLYPHS = ['1', 'E']

# Centre block plus one arm per occupied neighbour, in N-W-S-E bit order
_CENTRE = '<rect x="30" y="30" width="40" height="40"/>'
_ARMS = [
    '<rect x="40" y="0" width="20" height="30"/>',    # north
    '<rect x="0" y="40" width="30" height="20"/>',    # west
    '<rect x="40" y="70" width="20" height="30"/>',   # south
    '<rect x="70" y="40" width="30" height="20"/>',   # east
]


def make_variant_svg(variant: int, grouped: bool = True) -> str:
    """Synthetic variant shape; `grouped` wraps the paths in a bare <g>."""
    bits = format(variant, '04b')
    body = _CENTRE + ''.join(arm for arm, bit in zip(_ARMS, bits) if bit == '1')
    if grouped:
        body = f'<g>{body}</g>'
    return f'<svg xmlns="{SVG_NS}" viewBox="0 0 100 100">{body}</svg>'


def make_documents(glyphs=GLYPHS) -> dict:
    """Glyph '1' is group-wrapped, every other glyph has root-level paths."""
    return {
        (glyph, variant): make_variant_svg(variant, grouped=(glyph == '1'))
        for glyph in glyphs
        for variant in range(16)
    }


@pytest.fixture
def glyphs():
    return list(GLYPHS)


@pytest.fixture
def catalog():
    return VariantCatalog.from_documents(GLYPHS, make_documents())


@pytest.fixture
def grid():
    return GridStore(10, 10)


@pytest.fixture
def asset_dir(tmp_path):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    for (glyph, variant), text in make_documents().items():
        (data_dir / asset_filename(glyph, variant)).write_text(text, encoding="utf-8")
    return data_dir


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtGui import QGuiApplication
    app = QGuiApplication.instance()
    if app is None:
        app = QGuiApplication([])
    yield app
