from .main_window import MainWindow
from .paint_canvas import PaintCanvas
from .catalog_worker import CatalogWorker

__all__ = ['MainWindow', 'PaintCanvas', 'CatalogWorker']
