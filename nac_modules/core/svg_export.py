"""
Export the composition to a self-contained SVG document.

The document is rebuilt from the grid and catalog with the same variant
resolution and fill substitution as the live renderer, so it matches what is
on screen path for path.
"""

import copy
import logging
import re
import xml.etree.ElementTree as ET
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, NamedTuple, Optional, Tuple, Union

from ..models import Bounds, Cell
from .autotile import resolve
from .catalog import VariantCatalog, VariantGeometry
from .grid_store import GridStore
from .recolor import local_name, recolored_group, svg_tag
from .svg_scope import collect_ids, prefixed, scope_element, scope_prefix

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

_TRANSLATE_RE = re.compile(r'translate\(\s*([-0-9.e]+)[\s,]+([-0-9.e]+)\s*\)')


def timestamp_filename(now: Optional[datetime] = None, suffix: str = '.svg') -> str:
    """Sortable export name, e.g. '261019_142305.svg'."""
    if now is None:
        now = datetime.now()
    return now.strftime('%y%m%d_%H%M%S') + suffix


def _fmt(value: float) -> str:
    """Compact number formatting for attributes."""
    text = f"{value:.6f}".rstrip('0').rstrip('.')
    return '0' if text in ('', '-0') else text


def _definitions(geometry: VariantGeometry) -> List[ET.Element]:
    """The shape's root-level <defs> and <style> elements."""
    return [
        child for child in geometry.root
        if child is not geometry.wrapper and local_name(child.tag) in ('defs', 'style')
    ]


def _definition_ids(geometry: VariantGeometry) -> set:
    return collect_ids(_definitions(geometry))


class SvgExporter:
    """Serializes the occupied region of a grid to SVG."""
    
    BACKGROUND = 'white'
    GRID_STROKE = '#cccccc'
    GRID_STROKE_WIDTH = 0.5
    
    def __init__(self, grid: GridStore, catalog: VariantCatalog, pitch: int):
        self.grid = grid
        self.catalog = catalog
        self.pitch = pitch
    
    def bounds(self) -> Optional[Bounds]:
        """Occupied region plus one cell of padding, or None if empty."""
        return self.grid.occupied_bounds(padding=1)
    
    def build_document(self, show_grid: bool = False) -> Optional[str]:
        """
        Build the SVG document text.
        
        Args:
            show_grid: Include the grid-line overlay
            
        Returns:
            The document, or None when no cell is occupied
        """
        bounds = self.bounds()
        if bounds is None:
            return None
        
        width = bounds.width * self.pitch
        height = bounds.height * self.pitch
        
        root = ET.Element(svg_tag('svg'), {
            'version': '1.1',
            'width': _fmt(width),
            'height': _fmt(height),
            'viewBox': f"0 0 {_fmt(width)} {_fmt(height)}"
        })
        
        ET.SubElement(root, svg_tag('rect'), {
            'x': '0', 'y': '0',
            'width': _fmt(width), 'height': _fmt(height),
            'fill': self.BACKGROUND
        })
        
        cells = [
            (x, y, cell, self.catalog.geometry(cell.glyph, resolve(self.grid, x, y)))
            for x, y, cell in self.grid.occupied_cells()
        ]
        
        shared = self._shared_definitions(geometry for _, _, _, geometry in cells)
        if len(shared):
            root.append(shared)
        
        if show_grid:
            root.append(self._grid_lines(bounds, width, height))
        
        for x, y, cell, geometry in cells:
            root.append(self._cell_group(geometry, cell, x, y, bounds))
        
        return XML_DECLARATION + ET.tostring(root, encoding='unicode')
    
    def _grid_lines(self, bounds: Bounds, width: float, height: float) -> ET.Element:
        group = ET.Element(svg_tag('g'), {
            'fill': 'none',
            'stroke': self.GRID_STROKE,
            'stroke-width': _fmt(self.GRID_STROKE_WIDTH)
        })
        for col in range(bounds.width + 1):
            x = _fmt(col * self.pitch)
            ET.SubElement(group, svg_tag('line'), {'x1': x, 'y1': '0', 'x2': x, 'y2': _fmt(height)})
        for row in range(bounds.height + 1):
            y = _fmt(row * self.pitch)
            ET.SubElement(group, svg_tag('line'), {'x1': '0', 'y1': y, 'x2': _fmt(width), 'y2': y})
        return group
    
    def _shared_definitions(self, geometries: Iterable[VariantGeometry]) -> ET.Element:
        """
        One <defs> holding the definitions and stylesheets of every variant
        in use, each copied once with its ids and classes scoped to the variant.
        """
        shared = ET.Element(svg_tag('defs'))
        seen = set()
        for geometry in geometries:
            key = (geometry.glyph, geometry.variant)
            if key in seen:
                continue
            seen.add(key)
            
            prefix = scope_prefix(geometry.glyph, geometry.variant)
            id_map = prefixed(_definition_ids(geometry), prefix)
            for child in _definitions(geometry):
                scoped = scope_element(copy.deepcopy(child), id_map, prefix)
                if local_name(child.tag) == 'defs':
                    shared.extend(list(scoped))
                else:
                    shared.append(scoped)
        return shared
    
    def _cell_group(self, geometry: VariantGeometry, cell: Cell, x: int, y: int,
                    bounds: Bounds) -> ET.Element:
        vb_x, vb_y, vb_width, vb_height = geometry.view_box
        transform = "translate({} {}) scale({} {})".format(
            _fmt(self.pitch * (x - bounds.min_x)),
            _fmt(self.pitch * (y - bounds.min_y)),
            _fmt(self.pitch / vb_width),
            _fmt(self.pitch / vb_height)
        )
        if vb_x or vb_y:
            transform += f" translate({_fmt(-vb_x)} {_fmt(-vb_y)})"
        
        group = ET.Element(svg_tag('g'), {
            'transform': transform,
            'data-cell': f"{x},{y}",
            'data-glyph': cell.glyph,
            'data-variant': str(geometry.variant)
        })
        
        # Ids inside the drawn content repeat for every cell of a variant
        prefix = scope_prefix(geometry.glyph, geometry.variant)
        content = recolored_group(geometry, cell.color)
        id_map = prefixed(_definition_ids(geometry), prefix)
        id_map.update(prefixed(collect_ids([content]), f"{prefix}c{x}_{y}_"))
        group.append(scope_element(content, id_map, prefix))
        return group
    
    def export(
        self,
        directory: Union[str, Path],
        show_grid: bool = False,
        now: Optional[datetime] = None
    ) -> Optional[Path]:
        """
        Write the document to a timestamped file in `directory`.
        
        Returns:
            Path of the written file, or None when there was nothing to export
        """
        document = self.build_document(show_grid)
        if document is None:
            logger.info("Nothing to export: grid is empty")
            return None
        
        path = Path(directory) / timestamp_filename(now, '.svg')
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(document, encoding='utf-8')
        logger.info("Exported SVG to %s", path)
        return path


class ExportedCell(NamedTuple):
    """A cell group read back from an exported document."""
    x: int
    y: int
    glyph: str
    variant: int
    offset: Tuple[float, float]    # pixel translate of the group


def cell_offset(group: ET.Element) -> Tuple[float, float]:
    """Pixel offset of an exported cell group, parsed from its transform."""
    match = _TRANSLATE_RE.search(group.get('transform', ''))
    if match is None:
        raise ValueError("Cell group has no translate()")
    return float(match.group(1)), float(match.group(2))


def read_layout(svg_text: str) -> List[ExportedCell]:
    """
    Re-read the cell layout of an exported document.
    
    Returns:
        One ExportedCell per cell group, in document order
    """
    root = ET.fromstring(svg_text.encode('utf-8'))
    layout = []
    for element in root.iter():
        cell = element.get('data-cell')
        if cell is None:
            continue
        x, y = (int(v) for v in cell.split(','))
        layout.append(ExportedCell(
            x=x, y=y,
            glyph=element.get('data-glyph'),
            variant=int(element.get('data-variant')),
            offset=cell_offset(element)
        ))
    return layout
