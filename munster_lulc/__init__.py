"""
Helpers for the Muenster land-use classification pipeline.
Earth Engine stages, local raster summaries and charts.
"""

__version__ = '0.1.0'
