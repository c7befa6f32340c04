"""
Local summaries of GeoTIFFs downloaded from Earth Engine.

Per-class areas use the geographic footprint of each pixel (cell area on
the sphere for lat/lon rasters), mirroring ee.Image.pixelArea().
"""

import numpy as np
import pandas as pd
import rasterio

from gee_config import LULC_CLASSES, INDEX_BANDS
from munster_lulc.indices import normalized_difference

# Authalic radius (m), used by Earth Engine's pixelArea for geographic grids
EARTH_RADIUS_M = 6371007.181


def pixel_area_m2(transform, height, width, geographic=True):
    """
    Area of every pixel in m2.

    Args:
        transform: affine transform of the raster (north-up)
        height, width: raster shape
        geographic: True for lat/lon grids, False for projected metre grids

    Returns:
        (height, width) array
    """
    if not geographic:
        return np.full((height, width), abs(transform.a * transform.e))

    rows = np.arange(height + 1)
    lat_edges = np.radians(transform.f + rows * transform.e)
    dlon = np.radians(abs(transform.a))
    row_area = (EARTH_RADIUS_M ** 2) * dlon * np.abs(np.sin(lat_edges[:-1]) - np.sin(lat_edges[1:]))
    return np.repeat(row_area[:, None], width, axis=1)


def class_areas_km2(classified, pixel_area, class_values=None, nodata=None):
    """
    Sum of pixel areas per class, in km2 (not rounded).

    Pixels equal to `nodata` or NaN are excluded.
    """
    classified = np.asarray(classified)
    pixel_area = np.asarray(pixel_area, dtype=np.float64)
    class_values = class_values if class_values is not None else sorted(LULC_CLASSES)

    valid = ~np.isnan(classified.astype(np.float64))
    if nodata is not None:
        valid &= classified != nodata

    return {int(value): float(pixel_area[valid & (classified == value)].sum() / 1e6)
            for value in class_values}


def summarize_classified_geotiff(path, classes=None, nodata=None):
    """
    Per-class area table for a downloaded classified map.

    `nodata` overrides the file's own no-data value (downloads carry none).

    Returns:
        pd.DataFrame with value, class, area_km2 and share_pct columns
    """
    classes = classes or LULC_CLASSES
    with rasterio.open(path) as src:
        data = src.read(1)
        geographic = src.crs is None or src.crs.is_geographic
        area = pixel_area_m2(src.transform, src.height, src.width, geographic)
        if nodata is None:
            nodata = src.nodata

    areas = class_areas_km2(data, area, sorted(classes), nodata)
    total = sum(areas.values())
    rows = [{
        'value': value,
        'class': classes[value]['name'],
        'area_km2': round(km2),
        'share_pct': round(100.0 * km2 / total, 2) if total else 0.0,
    } for value, km2 in areas.items()]
    return pd.DataFrame(rows)


def index_means_from_composite(path, index_names=None):
    """
    Mean NDVI / NDBI of a downloaded multi-band composite.

    Bands are looked up by their descriptions (Earth Engine writes band
    names there). No-data pixels are ignored.
    """
    index_names = index_names or list(INDEX_BANDS)
    with rasterio.open(path) as src:
        names = list(src.descriptions)
        bands = {}
        for index_name in index_names:
            for band in INDEX_BANDS[index_name]:
                if band not in bands:
                    if band not in names:
                        raise KeyError(f"Band {band} not found in {path} ({names})")
                    bands[band] = src.read(names.index(band) + 1, masked=True).astype('float64').filled(np.nan)

    means = {}
    for index_name in index_names:
        first, second = INDEX_BANDS[index_name]
        values = normalized_difference(bands[first], bands[second])
        means[index_name] = float(np.nanmean(values)) if np.isfinite(values).any() else None
    return means
