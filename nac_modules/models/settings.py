import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Union

DEFAULT_GLYPHS = ['1', '2', '3', '4', '5', '6', '7', '8', '9', 'E', 'Q', 'T', 'W', 'Y', 'U']

DEFAULT_PALETTE = {
    'c': '#000000',   # black
    'x': '#84DADE',   # teal
    'z': '#ff006e',   # pink
}


@dataclass
class Settings:
    """
    Application settings: asset location, cell pitch, glyph set and initial modes.
    """
    tile_size: int = 50                      # cell pitch in pixels
    data_dir: str = 'data'                   # directory holding {glyph}_{nn}.svg assets
    export_dir: str = '.'                    # where exported images are written
    glyphs: List[str] = field(default_factory=lambda: list(DEFAULT_GLYPHS))
    palette: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_PALETTE))
    default_color: str = '#000000'
    show_grid: bool = True
    debug: bool = False
    random_mode: bool = False
    max_workers: int = 16                    # concurrent asset loads
    
    def to_dict(self) -> dict:
        return {
            'tile_size': self.tile_size,
            'data_dir': self.data_dir,
            'export_dir': self.export_dir,
            'glyphs': list(self.glyphs),
            'palette': dict(self.palette),
            'default_color': self.default_color,
            'show_grid': self.show_grid,
            'debug': self.debug,
            'random_mode': self.random_mode,
            'max_workers': self.max_workers
        }
    
    @classmethod
    def from_dict(cls, data: dict) -> 'Settings':
        defaults = cls()
        settings = cls(
            tile_size=int(data.get('tile_size', defaults.tile_size)),
            data_dir=str(data.get('data_dir', defaults.data_dir)),
            export_dir=str(data.get('export_dir', defaults.export_dir)),
            glyphs=[str(g) for g in data.get('glyphs', defaults.glyphs)],
            palette=dict(data.get('palette', defaults.palette)),
            default_color=data.get('default_color', defaults.default_color),
            show_grid=bool(data.get('show_grid', defaults.show_grid)),
            debug=bool(data.get('debug', defaults.debug)),
            random_mode=bool(data.get('random_mode', defaults.random_mode)),
            max_workers=int(data.get('max_workers', defaults.max_workers))
        )
        settings.validate()
        return settings
    
    @classmethod
    def load(cls, file_path: Union[str, Path]) -> 'Settings':
        """
        Load settings from a JSON file. Missing keys keep their defaults.
        
        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file is not valid JSON or holds invalid values
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {file_path}")
        
        try:
            data = json.loads(path.read_text(encoding='utf-8'))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid config file: {e}")
        
        if not isinstance(data, dict):
            raise ValueError("Invalid config file: expected a JSON object")
        return cls.from_dict(data)
    
    def validate(self) -> None:
        """Raise ValueError for settings the core cannot run with."""
        if self.tile_size < 1:
            raise ValueError(f"tile_size must be positive, got {self.tile_size}")
        if not self.glyphs:
            raise ValueError("glyphs must not be empty")
        if len(set(self.glyphs)) != len(self.glyphs):
            raise ValueError("glyphs must be unique")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be positive, got {self.max_workers}")
