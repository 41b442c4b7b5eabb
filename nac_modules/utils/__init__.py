"""
Drawing and raster export helpers.
"""
