"""
Per-class area of the classified maps (Earth Engine side).
"""

import ee
import pandas as pd

from gee_config import LULC_CLASSES, CLASSIFICATION_BAND, REDUCTION_PARAMS


def class_area_km2(classified, class_value, geometry, band=CLASSIFICATION_BAND,
                   scale=None, max_pixels=None):
    """
    Area of one class in km2, rounded to the nearest integer.

    Indicator mask (pixel == class) times ee.Image.pixelArea(), summed over
    the region.
    """
    class_mask = classified.eq(class_value)
    area_image = class_mask.multiply(ee.Image.pixelArea())
    area_result = area_image.reduceRegion(
        reducer=ee.Reducer.sum(),
        geometry=geometry,
        scale=scale or REDUCTION_PARAMS['scale'],
        maxPixels=max_pixels or REDUCTION_PARAMS['maxPixels'],
    )
    return ee.Number(area_result.get(band)).divide(1e6).round()


def calculate_landcover_areas(classified, geometry, classes=None, band=CLASSIFICATION_BAND,
                              scale=None, max_pixels=None):
    """
    Area per class, fetched in a single request.

    Returns:
        dict class name -> km2
    """
    classes = classes or LULC_CLASSES
    areas = ee.Dictionary({
        info['name']: class_area_km2(classified, value, geometry, band, scale, max_pixels)
        for value, info in classes.items()
    })
    return areas.getInfo()


def area_table(areas_by_year, classes=None):
    """
    Class x year table of areas.

    Args:
        areas_by_year: {year: {class name: km2}}

    Returns:
        pd.DataFrame indexed by class name, one column per year, plus a
        'Total' row
    """
    classes = classes or LULC_CLASSES
    names = [info['name'] for _, info in sorted(classes.items())]
    df = pd.DataFrame({year: [areas.get(name) for name in names]
                       for year, areas in sorted(areas_by_year.items())},
                      index=names)
    df.index.name = 'class'
    df.loc['Total'] = df.sum(axis=0, min_count=1)
    return df
