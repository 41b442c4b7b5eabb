"""
Load the variant catalog from a directory of SVG assets.

Assets follow the naming convention {glyph}_{variant:02d}.svg. All loads are
issued concurrently and complete independently; the catalog is returned only
after every one of them has succeeded.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from .autotile import VARIANT_COUNT
from .catalog import VariantCatalog, VariantGeometry
from .errors import CatalogLoadError, MalformedAssetError

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


def asset_filename(glyph: str, variant: int) -> str:
    """File name of a variant asset, e.g. 'E_07.svg'."""
    return f"{glyph}_{variant:02d}.svg"


def _load_variant(data_dir: Path, glyph: str, variant: int) -> VariantGeometry:
    data = (data_dir / asset_filename(glyph, variant)).read_bytes()
    return VariantGeometry.parse(glyph, variant, data)


def load_catalog(
    data_dir: Union[str, Path],
    glyphs: Sequence[str],
    on_progress: Optional[ProgressCallback] = None,
    max_workers: int = 16
) -> VariantCatalog:
    """
    Load every variant of every glyph.
    
    Args:
        data_dir: Directory containing the asset files
        glyphs: The glyph set to load
        on_progress: Called with (loaded, total) after each asset completes
        max_workers: Number of concurrent loads
        
    Returns:
        A complete VariantCatalog
        
    Raises:
        CatalogLoadError: If the directory is missing or any asset fails to
            read or parse
    """
    path = Path(data_dir)
    if not path.is_dir():
        raise CatalogLoadError(f"Asset directory not found: {data_dir}")
    
    catalog = VariantCatalog(glyphs)
    total = catalog.expected_size
    loaded = 0
    logger.info("Loading %d assets from %s", total, path)
    
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = {
            pool.submit(_load_variant, path, glyph, variant): (glyph, variant)
            for glyph in catalog.glyphs
            for variant in range(VARIANT_COUNT)
        }
        
        for future in as_completed(futures):
            glyph, variant = futures[future]
            try:
                geometry = future.result()
            except (OSError, MalformedAssetError) as e:
                for pending in futures:
                    pending.cancel()
                logger.error("Failed to load %s: %s", asset_filename(glyph, variant), e)
                raise CatalogLoadError(
                    f"Failed to load {asset_filename(glyph, variant)}: {e}"
                ) from e
            
            catalog.add(geometry)
            loaded += 1
            if on_progress is not None:
                on_progress(loaded, total)
    
    if not catalog.is_complete():
        raise CatalogLoadError(f"Catalog incomplete, missing {catalog.missing()[:5]}")
    
    logger.info("Loaded %d assets for %d glyphs", loaded, len(catalog.glyphs))
    return catalog
