"""
Exceptions raised by the painting core.
"""


class NacModulesError(Exception):
    """Base class for all core errors."""


class CatalogLoadError(NacModulesError):
    """The variant catalog could not be fully loaded. Fatal at startup."""


class VariantNotFoundError(NacModulesError, KeyError):
    """No geometry exists for a (glyph, variant) pair."""
    
    def __init__(self, glyph: str, variant: int):
        super().__init__(f"No geometry for glyph {glyph!r} variant {variant}")
        self.glyph = glyph
        self.variant = variant
    
    def __str__(self):
        # KeyError would repr() the message
        return self.args[0]


class UnknownGlyphError(NacModulesError, KeyError):
    """A glyph id outside the configured glyph set."""
    
    def __init__(self, glyph: str):
        super().__init__(f"Unknown glyph: {glyph!r}")
        self.glyph = glyph
    
    def __str__(self):
        return self.args[0]


class MalformedAssetError(NacModulesError, ValueError):
    """A shape document cannot be parsed or recoloured."""


class InvalidDimensionsError(NacModulesError, ValueError):
    """A grid was requested with zero or negative dimensions."""
