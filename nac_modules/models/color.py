"""
Colour values for cells, cache keys and exported fills.
"""

from typing import NamedTuple, Sequence, Union

from PIL import ImageColor


class Color(NamedTuple):
    """An opaque RGB colour with integer channels in 0-255."""
    r: int
    g: int
    b: int
    
    @classmethod
    def parse(cls, value: "ColorLike") -> "Color":
        """
        Normalize any supported colour notation to a Color.
        
        Accepts CSS strings ('#84DADE', 'rgb(0,0,0)', 'teal'), RGB or RGBA
        sequences, and Color instances. Equal colours written differently
        produce equal values.
        
        Raises:
            ValueError: If the value is not a recognizable colour
        """
        if isinstance(value, Color):
            return value
        
        if isinstance(value, str):
            try:
                rgb = ImageColor.getrgb(value.strip())
            except ValueError:
                raise ValueError(f"Unrecognized colour: {value!r}")
            return cls(*rgb[:3])
        
        if len(value) not in (3, 4):
            raise ValueError(f"Expected 3 or 4 channels, got {len(value)}")
        
        channels = [int(round(c)) for c in value[:3]]
        for channel in channels:
            if not 0 <= channel <= 255:
                raise ValueError(f"Channel out of range: {channel}")
        return cls(*channels)
    
    @property
    def css(self) -> str:
        """CSS functional notation, the form written into fill attributes."""
        return f"rgb({self.r},{self.g},{self.b})"
    
    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


ColorLike = Union[Color, str, Sequence[float]]

WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)
