"""
Shared fixtures. Earth Engine is never contacted: modules under test get a
MagicMock in place of their module-level ``ee`` name.
"""

from unittest.mock import MagicMock

import numpy as np
import pytest
import rasterio
from rasterio.transform import from_origin

from munster_lulc import utils


@pytest.fixture
def mock_ee(monkeypatch):
    """Return a function that swaps ``module.ee`` for a MagicMock."""

    def _patch(*modules):
        fake = MagicMock(name='ee')
        for module in modules:
            monkeypatch.setattr(module, 'ee', fake)
        return fake

    return _patch


@pytest.fixture(autouse=True)
def no_log_file(monkeypatch):
    monkeypatch.setattr(utils, '_LOG_PATH', None)


@pytest.fixture
def chain_collection():
    """Collection mock whose filter/select return itself."""
    coll = MagicMock(name='collection')
    coll.filter.return_value = coll
    coll.select.return_value = coll
    return coll


def write_geotiff(path, data, nodata=None, descriptions=None, lon=7.0, lat=52.3, res=0.01):
    """Write a (bands, rows, cols) or (rows, cols) array as an EPSG:4326 GeoTIFF."""
    data = np.asarray(data)
    if data.ndim == 2:
        data = data[None, :, :]
    count, height, width = data.shape
    with rasterio.open(
        path, 'w',
        driver='GTiff',
        height=height,
        width=width,
        count=count,
        dtype=data.dtype.name,
        crs='EPSG:4326',
        transform=from_origin(lon, lat, res, res),
        nodata=nodata,
    ) as dst:
        dst.write(data)
        for i, name in enumerate(descriptions or [], start=1):
            dst.set_band_description(i, name)
    return path
