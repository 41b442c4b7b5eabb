"""
Variant catalog: the immutable shape for every (glyph, variant) pair.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple, Union

from .autotile import VARIANT_COUNT
from .errors import UnknownGlyphError, VariantNotFoundError
from .recolor import DEFAULT_VIEW_BOX, ViewBox, normalize_shape


@dataclass(frozen=True, eq=False)
class VariantGeometry:
    """Normalized vector shape of one glyph variant."""
    glyph: str
    variant: int
    root: ET.Element = field(repr=False)
    wrapper: ET.Element = field(repr=False)    # the single group that receives the fill
    view_box: ViewBox = DEFAULT_VIEW_BOX
    
    @classmethod
    def parse(cls, glyph: str, variant: int, svg_text: Union[str, bytes]) -> 'VariantGeometry':
        """Parse and normalize a variant document."""
        root, wrapper, view_box = normalize_shape(svg_text)
        return cls(glyph=glyph, variant=variant, root=root, wrapper=wrapper, view_box=view_box)


class VariantCatalog:
    """
    Container for all variant geometries of the configured glyph set.
    
    Filled once at startup and treated as read-only afterwards.
    """
    
    def __init__(self, glyphs: Sequence[str], geometries: Iterable[VariantGeometry] = ()):
        self._glyphs: Tuple[str, ...] = tuple(glyphs)
        if not self._glyphs:
            raise ValueError("Glyph set is empty")
        self._geometries: Dict[Tuple[str, int], VariantGeometry] = {}
        for geometry in geometries:
            self.add(geometry)
    
    @classmethod
    def from_documents(
        cls,
        glyphs: Sequence[str],
        documents: Mapping[Tuple[str, int], Union[str, bytes]]
    ) -> 'VariantCatalog':
        """Build a catalog from in-memory documents keyed by (glyph, variant)."""
        return cls(glyphs, (
            VariantGeometry.parse(glyph, variant, text)
            for (glyph, variant), text in documents.items()
        ))
    
    @property
    def glyphs(self) -> Tuple[str, ...]:
        return self._glyphs
    
    @property
    def expected_size(self) -> int:
        return len(self._glyphs) * VARIANT_COUNT
    
    def add(self, geometry: VariantGeometry) -> None:
        """Register a geometry while loading."""
        if geometry.glyph not in self._glyphs:
            raise UnknownGlyphError(geometry.glyph)
        if not 0 <= geometry.variant < VARIANT_COUNT:
            raise ValueError(f"Variant index out of range: {geometry.variant}")
        self._geometries[(geometry.glyph, geometry.variant)] = geometry
    
    def geometry(self, glyph: str, variant: int) -> VariantGeometry:
        """
        Get the shape for a glyph variant.
        
        Raises:
            VariantNotFoundError: If the pair is not in the catalog
        """
        geometry = self._geometries.get((glyph, variant))
        if geometry is None:
            raise VariantNotFoundError(glyph, variant)
        return geometry
    
    def has_glyph(self, glyph: str) -> bool:
        return glyph in self._glyphs
    
    def missing(self) -> List[Tuple[str, int]]:
        """(glyph, variant) pairs that still have no geometry."""
        return [
            (glyph, variant)
            for glyph in self._glyphs
            for variant in range(VARIANT_COUNT)
            if (glyph, variant) not in self._geometries
        ]
    
    def is_complete(self) -> bool:
        return len(self._geometries) == self.expected_size
    
    def __len__(self) -> int:
        return len(self._geometries)
    
    def __contains__(self, key) -> bool:
        return key in self._geometries
