"""
Background catalog loading for the desktop shell.
"""

import logging
from typing import Sequence

from PySide6.QtCore import QObject, Signal, Slot

from ..core.asset_loader import load_catalog
from ..core.errors import CatalogLoadError

logger = logging.getLogger(__name__)


class CatalogWorker(QObject):
    """
    Loads the variant catalog off the GUI thread.
    
    Signals:
        progress(loaded, total): Emitted as each asset completes
        loaded(catalog): Emitted once with the complete VariantCatalog
        failed(message): Emitted once if any asset could not be loaded
    """
    
    progress = Signal(int, int)
    loaded = Signal(object)
    failed = Signal(str)
    
    def __init__(self, data_dir: str, glyphs: Sequence[str], max_workers: int = 16):
        super().__init__()
        self._data_dir = data_dir
        self._glyphs = list(glyphs)
        self._max_workers = max_workers
    
    @Slot()
    def run(self):
        try:
            catalog = load_catalog(
                self._data_dir, self._glyphs,
                on_progress=self.progress.emit,
                max_workers=self._max_workers
            )
        except CatalogLoadError as e:
            logger.error("Catalog load failed: %s", e)
            self.failed.emit(str(e))
            return
        except Exception as e:
            # Nothing above this thread would report it
            logger.exception("Unexpected error while loading the catalog")
            self.failed.emit(f"Unexpected error: {e}")
            return
        self.loaded.emit(catalog)
