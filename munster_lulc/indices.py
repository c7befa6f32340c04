"""
Normalized-difference indices (NDVI, NDBI).

Server side the index images come from ee.Image.normalizedDifference; the
array version below is used on downloaded GeoTIFFs.

    ND(a, b) = (a - b) / (a + b)
    NDVI = ND(B8, B4)      NDBI = ND(B11, B8)
"""

import ee
import numpy as np
import pandas as pd

from gee_config import (
    INDEX_BANDS, CLOUD_THRESHOLD, REDUCTION_PARAMS, MEAN_FALLBACK
)
from munster_lulc.composites import filter_sentinel2, sentinel2_collection
from munster_lulc.utils import feature_collection_to_records


def normalized_difference(band_a, band_b):
    """
    Pixel-wise (a - b) / (a + b) on arrays.

    Pixels where a + b == 0, or either input is NaN, are NaN (no-data).
    """
    a = np.asarray(band_a, dtype=np.float64)
    b = np.asarray(band_b, dtype=np.float64)
    denominator = a + b
    with np.errstate(divide='ignore', invalid='ignore'):
        result = np.where(denominator == 0, np.nan, (a - b) / denominator)
    return result


# ============================================================
# SERVER-SIDE INDEX IMAGES
# ============================================================

def compute_index(image, index_name):
    """Single-band index image named after the index."""
    first, second = INDEX_BANDS[index_name]
    return image.normalizedDifference([first, second]).rename(index_name)


def compute_index_for_period(index_name, start_date, end_date, region,
                             cloud_percentage=CLOUD_THRESHOLD, collection=None):
    """Index of the median composite of one filtered period."""
    collection = collection if collection is not None else sentinel2_collection()
    filtered = filter_sentinel2(collection, cloud_percentage, start_date, end_date, region,
                                bands=None)
    return compute_index(filtered.median(), index_name)


def region_mean(index_image, index_name, region, scale=None, fallback=MEAN_FALLBACK):
    """
    Best-effort spatial mean of an index over the region.

    The reducer drops the key when there is no valid pixel (empty composite),
    in which case `fallback` is returned.
    """
    stats = index_image.reduceRegion(
        reducer=ee.Reducer.mean(),
        geometry=region,
        scale=scale or REDUCTION_PARAMS['scale'],
        bestEffort=REDUCTION_PARAMS['bestEffort'],
    )
    return ee.Number(stats.get(index_name, fallback))


def yearly_index_feature(year, index_name, region, cloud_percentage=CLOUD_THRESHOLD,
                         collection=None):
    """ee.Feature(None, {'date': 'YYYY', index_name: mean}) for one year."""
    collection = collection if collection is not None else sentinel2_collection()
    start = ee.Date.fromYMD(year, 1, 1)
    end = start.advance(1, 'year')

    index_image = compute_index_for_period(index_name, start, end, region,
                                           cloud_percentage, collection)
    mean_value = region_mean(index_image, index_name, region)
    return ee.Feature(None, {'date': start.format('YYYY'), index_name: mean_value})


def index_time_series(index_name, first_year, last_year, region,
                      cloud_percentage=CLOUD_THRESHOLD, collection=None):
    """FeatureCollection with one feature per year, both ends inclusive."""
    collection = collection if collection is not None else sentinel2_collection()
    years = ee.List.sequence(first_year, last_year)
    return ee.FeatureCollection(years.map(
        lambda year: yearly_index_feature(year, index_name, region, cloud_percentage, collection)
    ))


def time_series_to_frame(fc_info, index_name, fallback=MEAN_FALLBACK):
    """
    Tabulate a fetched index time series.

    Returns:
        pd.DataFrame with 'year' (int) and the index column, sorted by year
    """
    rows = []
    for props in feature_collection_to_records(fc_info):
        value = props.get(index_name)
        rows.append({
            'year': int(props['date']),
            index_name: fallback if value is None else float(value),
        })
    df = pd.DataFrame(rows, columns=['year', index_name])
    return df.sort_values('year').reset_index(drop=True)
