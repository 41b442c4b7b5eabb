"""
NAC Modules - paint autotiling module glyphs and export them as SVG or PNG.
"""

__version__ = '1.0.0'
