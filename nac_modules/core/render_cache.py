"""
Memoized, recoloured renderables keyed by (glyph, variant, colour).
"""

import logging
from typing import Dict, NamedTuple

from PySide6.QtCore import QByteArray, QRectF, Qt
from PySide6.QtGui import QImage, QPainter
from PySide6.QtSvg import QSvgRenderer

from ..models import Color, ColorLike
from .catalog import VariantCatalog
from .errors import MalformedAssetError
from .recolor import recolor_document

logger = logging.getLogger(__name__)


class CacheKey(NamedTuple):
    """Composite cache identity; the colour is always normalized."""
    glyph: str
    variant: int
    color: Color


class TileImage:
    """
    A recoloured variant ready to draw.
    
    Holds the recoloured SVG text; the vector renderer and raster copies are
    built on first use.
    """
    
    def __init__(self, key: CacheKey, svg: str):
        self.key = key
        self.svg = svg
        self._renderer = None
        self._images: Dict[int, QImage] = {}
    
    def renderer(self) -> QSvgRenderer:
        """
        Get the vector renderer for this image.
        
        Raises:
            MalformedAssetError: If Qt cannot render the document
        """
        if self._renderer is None:
            renderer = QSvgRenderer(QByteArray(self.svg.encode('utf-8')))
            if not renderer.isValid():
                raise MalformedAssetError(
                    f"Cannot render glyph {self.key.glyph!r} variant {self.key.variant}"
                )
            self._renderer = renderer
        return self._renderer
    
    def render(self, painter: QPainter, rect: QRectF):
        """Draw the shape scaled into `rect`."""
        self.renderer().render(painter, rect)
    
    def to_image(self, size: int) -> QImage:
        """Rasterize to a transparent size x size image (memoized per size)."""
        image = self._images.get(size)
        if image is not None:
            return image
        
        image = QImage(size, size, QImage.Format_ARGB32_Premultiplied)
        image.fill(Qt.transparent)
        painter = QPainter(image)
        try:
            painter.setRenderHint(QPainter.Antialiasing)
            self.render(painter, QRectF(0, 0, size, size))
        finally:
            painter.end()
        
        self._images[size] = image
        return image


class RenderCache:
    """
    Append-only cache of TileImages.
    
    A colour change creates a new entry; existing entries are never mutated
    or evicted.
    """
    
    def __init__(self, catalog: VariantCatalog):
        self._catalog = catalog
        self._entries: Dict[CacheKey, TileImage] = {}
        self.hits = 0
        self.misses = 0
    
    @staticmethod
    def make_key(glyph: str, variant: int, color: ColorLike) -> CacheKey:
        return CacheKey(glyph, variant, Color.parse(color))
    
    def get_image(self, glyph: str, variant: int, color: ColorLike) -> TileImage:
        """
        Get the renderable for a glyph variant in a colour.
        
        Raises:
            VariantNotFoundError: If the catalog has no such variant
        """
        key = self.make_key(glyph, variant, color)
        image = self._entries.get(key)
        if image is not None:
            self.hits += 1
            return image
        
        geometry = self._catalog.geometry(glyph, variant)
        image = TileImage(key, recolor_document(geometry, key.color))
        self._entries[key] = image
        self.misses += 1
        logger.debug("Cached %s/%02d in %s (%d entries)", glyph, variant, key.color.hex, len(self._entries))
        return image
    
    def __len__(self) -> int:
        return len(self._entries)
    
    def __contains__(self, key) -> bool:
        return key in self._entries
