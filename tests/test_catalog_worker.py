"""Tests for the background catalog loader's signals."""

from nac_modules.ui import catalog_worker
from nac_modules.ui.catalog_worker import CatalogWorker

from tests.conftest import GLYPHS


def _run(worker):
    events = {'progress': [], 'loaded': [], 'failed': []}
    worker.progress.connect(lambda n, total: events['progress'].append((n, total)))
    worker.loaded.connect(lambda catalog: events['loaded'].append(catalog))
    worker.failed.connect(lambda message: events['failed'].append(message))
    worker.run()
    return events


def test_loaded_signal(asset_dir, qapp):
    events = _run(CatalogWorker(str(asset_dir), GLYPHS, max_workers=4))
    assert len(events['loaded']) == 1
    assert events['loaded'][0].is_complete()
    assert events['progress'][-1] == (32, 32)
    assert events['failed'] == []


def test_load_error_reported(tmp_path, qapp):
    events = _run(CatalogWorker(str(tmp_path / 'missing'), GLYPHS))
    assert events['loaded'] == []
    assert len(events['failed']) == 1
    assert 'missing' in events['failed'][0]


def test_unexpected_error_reported(asset_dir, qapp, monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError("disk on fire")
    monkeypatch.setattr(catalog_worker, 'load_catalog', broken)
    
    events = _run(CatalogWorker(str(asset_dir), GLYPHS))
    assert events['loaded'] == []
    assert len(events['failed']) == 1
    assert 'disk on fire' in events['failed'][0]
