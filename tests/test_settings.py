"""Tests for settings and command-line configuration."""

import json

import pytest

from nac_modules.main import build_settings, parse_args
from nac_modules.models import DEFAULT_GLYPHS, Settings


def test_defaults():
    settings = Settings()
    assert settings.tile_size == 50
    assert settings.glyphs == DEFAULT_GLYPHS
    assert len(settings.glyphs) == 15
    assert settings.palette == {'c': '#000000', 'x': '#84DADE', 'z': '#ff006e'}
    settings.validate()


def test_dict_round_trip():
    settings = Settings(tile_size=32, glyphs=['A', 'B'], debug=True)
    assert Settings.from_dict(settings.to_dict()) == settings


def test_from_dict_keeps_defaults_for_missing_keys():
    settings = Settings.from_dict({'tile_size': '40'})
    assert settings.tile_size == 40
    assert settings.glyphs == DEFAULT_GLYPHS


@pytest.mark.parametrize("data", [
    {'tile_size': 0},
    {'glyphs': []},
    {'glyphs': ['1', '1']},
    {'max_workers': 0},
])
def test_invalid_values(data):
    with pytest.raises(ValueError):
        Settings.from_dict(data)


def test_load(tmp_path):
    path = tmp_path / 'settings.json'
    path.write_text(json.dumps({'data_dir': 'assets', 'random_mode': True}), encoding='utf-8')
    settings = Settings.load(path)
    assert settings.data_dir == 'assets'
    assert settings.random_mode is True


def test_load_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        Settings.load(tmp_path / 'missing.json')
    
    broken = tmp_path / 'broken.json'
    broken.write_text('{not json', encoding='utf-8')
    with pytest.raises(ValueError):
        Settings.load(broken)
    
    listing = tmp_path / 'list.json'
    listing.write_text('[1, 2]', encoding='utf-8')
    with pytest.raises(ValueError):
        Settings.load(listing)


def test_command_line_overrides_config(tmp_path):
    path = tmp_path / 'settings.json'
    path.write_text(json.dumps({'tile_size': 40, 'export_dir': 'out'}), encoding='utf-8')
    
    settings = build_settings(parse_args(['--config', str(path), '--tile-size', '32', '--data-dir', 'assets']))
    assert settings.tile_size == 32
    assert settings.data_dir == 'assets'
    assert settings.export_dir == 'out'


def test_command_line_validation():
    with pytest.raises(ValueError):
        build_settings(parse_args(['--tile-size', '0']))
