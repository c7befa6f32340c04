"""
Sentinel-2 filtering and median composites.
"""

import ee

from gee_config import (
    COLLECTIONS, CLOUD_PROPERTY, CLOUD_THRESHOLD, BAND_PATTERN
)
from munster_lulc.utils import log


def annual_window(year):
    """(start, end) date strings for a calendar year, end exclusive."""
    return f'{year}-01-01', f'{year + 1}-01-01'


def build_sentinel2_filters(cloud_percentage, start_date, end_date, geometry):
    """
    The three scene predicates: cloud cover strictly below the threshold,
    acquisition date in [start_date, end_date), footprint intersecting geometry.
    """
    return [
        ee.Filter.lt(CLOUD_PROPERTY, cloud_percentage),
        ee.Filter.date(start_date, end_date),
        ee.Filter.bounds(geometry),
    ]


def filter_sentinel2(s2_collection, cloud_percentage, start_date, end_date, geometry,
                     bands=BAND_PATTERN):
    """Filter a Sentinel-2 collection by cloud cover, date range and region."""
    filtered = s2_collection
    for scene_filter in build_sentinel2_filters(cloud_percentage, start_date, end_date, geometry):
        filtered = filtered.filter(scene_filter)
    if bands:
        filtered = filtered.select(bands)
    return filtered


def sentinel2_collection():
    return ee.ImageCollection(COLLECTIONS['sentinel2'])


def create_sentinel2_composite(start_date, end_date, region,
                               cloud_percentage=CLOUD_THRESHOLD, collection=None):
    """
    Median composite of the filtered Sentinel-2 scenes.

    The composite is left unclipped: training, classification and index
    reductions use it as is, displays and exports clip to the region.

    Returns:
        (ee.Image composite, ee.Number with the number of scenes)
    """
    collection = collection if collection is not None else sentinel2_collection()
    filtered = filter_sentinel2(collection, cloud_percentage, start_date, end_date, region)
    return filtered.median(), filtered.size()


def create_annual_composite(year, region, cloud_percentage=CLOUD_THRESHOLD, collection=None):
    start, end = annual_window(year)
    return create_sentinel2_composite(start, end, region, cloud_percentage, collection)


def check_scene_count(n_images, label):
    """Log the scene count; an empty collection gives an all no-data composite."""
    if n_images is None:
        log(f"  WARNING: scene count unavailable for {label}")
    elif not n_images:
        log(f"  WARNING: no scenes for {label}, composite will be empty (no-data)")
    else:
        log(f"  {label}: {n_images} scenes")
    return n_images
