"""
Ground control points, train/validation split and pixel sampling.
"""

from dataclasses import dataclass

import ee
import numpy as np
import pandas as pd

from gee_config import CLASS_PROPERTY, LULC_CLASSES, SPLIT_PARAMS, SAMPLING_PARAMS
from munster_lulc.errors import TrainingDataError
from munster_lulc.training_points import TRAINING_POINTS
from munster_lulc.utils import log


# ============================================================
# GROUND CONTROL POINTS
# ============================================================

def load_points_csv(path, class_property=CLASS_PROPERTY):
    """
    Read training points from a CSV with lon, lat and class columns.

    Returns:
        dict class value -> list of (lon, lat), same shape as TRAINING_POINTS
    """
    df = pd.read_csv(path)
    missing = [c for c in ('lon', 'lat', class_property) if c not in df.columns]
    if missing:
        raise TrainingDataError(f"{path}: missing columns {missing}")
    if df[['lon', 'lat', class_property]].isna().any().any():
        raise TrainingDataError(f"{path}: empty lon/lat/{class_property} values")

    labels = pd.to_numeric(df[class_property], errors='coerce')
    if labels.isna().any() or not np.all(np.mod(labels, 1) == 0):
        raise TrainingDataError(f"{path}: non-integer {class_property} values")
    labels = labels.astype(int)

    unknown = sorted(set(labels) - set(LULC_CLASSES))
    if unknown:
        raise TrainingDataError(f"{path}: unknown classes {unknown}")

    points = {}
    for value, group in df.groupby(labels):
        points[int(value)] = list(zip(group['lon'].astype(float), group['lat'].astype(float)))
    return points


def build_gcps(points=None, class_property=CLASS_PROPERTY):
    """Merge the per-class point lists into one labelled FeatureCollection."""
    points = TRAINING_POINTS if points is None else points
    gcps = None
    for value in sorted(points):
        fc = ee.FeatureCollection([
            ee.Feature(ee.Geometry.Point([lon, lat]), {class_property: value})
            for lon, lat in points[value]
        ])
        gcps = fc if gcps is None else gcps.merge(fc)
    if gcps is None:
        raise TrainingDataError("No training points given")
    return gcps


def count_points(points=None):
    points = TRAINING_POINTS if points is None else points
    return {value: len(coords) for value, coords in sorted(points.items())}


# ============================================================
# TRAIN / VALIDATION SPLIT
# ============================================================

@dataclass(frozen=True)
class SplitRule:
    """
    Threshold split on a uniform random column.

    training:   random <  train_below
    validation: random >= validation_from

    With validation_from < train_below the subsets share the points in
    [validation_from, train_below).
    """

    train_below: float = SPLIT_PARAMS['train_below']
    validation_from: float = SPLIT_PARAMS['validation_from']
    column: str = SPLIT_PARAMS['column']
    seed: int = SPLIT_PARAMS['seed']

    @property
    def overlaps(self):
        return self.validation_from < self.train_below

    def membership(self, values):
        """Boolean (training, validation) masks for an array of random values."""
        values = np.asarray(values, dtype=np.float64)
        return values < self.train_below, values >= self.validation_from

    def apply(self, gcps):
        """
        Attach the random column to `gcps` and filter both subsets.

        Returns:
            (training ee.FeatureCollection, validation ee.FeatureCollection)
        """
        if self.overlaps:
            log(f"  WARNING: training (< {self.train_below}) and validation "
                f"(>= {self.validation_from}) subsets overlap")
        gcp = gcps.randomColumn(self.column, self.seed)
        training = gcp.filter(ee.Filter.lt(self.column, self.train_below))
        validation = gcp.filter(ee.Filter.gte(self.column, self.validation_from))
        return training, validation


def split_train_validation(gcps, rule=None):
    return (rule or SplitRule()).apply(gcps)


# ============================================================
# PIXEL SAMPLING
# ============================================================

def sample_regions(image, collection, properties=None, scale=None, tile_scale=None):
    """Overlay the points on the image to get band values per point."""
    return image.sampleRegions(
        collection=collection,
        properties=properties or [CLASS_PROPERTY],
        scale=scale or SAMPLING_PARAMS['scale'],
        tileScale=tile_scale or SAMPLING_PARAMS['tileScale'],
    )
