from .errors import (
    NacModulesError, CatalogLoadError, VariantNotFoundError,
    UnknownGlyphError, MalformedAssetError, InvalidDimensionsError
)
from .grid_store import GridStore
from .autotile import resolve, neighbor_bits, variant_bits, VARIANT_COUNT
from .recolor import normalize_shape, recolored_group, recolor_document
from .catalog import VariantCatalog, VariantGeometry
from .asset_loader import load_catalog, asset_filename
from .render_cache import RenderCache, TileImage, CacheKey
from .compositor import Compositor, TilePlacement
from .svg_export import SvgExporter, read_layout, timestamp_filename
from .session import PaintSession

__all__ = [
    'NacModulesError', 'CatalogLoadError', 'VariantNotFoundError',
    'UnknownGlyphError', 'MalformedAssetError', 'InvalidDimensionsError',
    'GridStore',
    'resolve', 'neighbor_bits', 'variant_bits', 'VARIANT_COUNT',
    'normalize_shape', 'recolored_group', 'recolor_document',
    'VariantCatalog', 'VariantGeometry',
    'load_catalog', 'asset_filename',
    'RenderCache', 'TileImage', 'CacheKey',
    'Compositor', 'TilePlacement',
    'SvgExporter', 'read_layout', 'timestamp_filename',
    'PaintSession'
]
