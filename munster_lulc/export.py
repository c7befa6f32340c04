"""
Exports: classified maps and tables to Google Drive, direct GeoTIFF downloads.

Drive exports are started and left running on Earth Engine; progress is
visible at https://code.earthengine.google.com/tasks
"""

import ee
import os
import zipfile
import urllib.request

from gee_config import EXPORT_PARAMS, DOWNLOAD_SCALE, DOWNLOAD_CRS
from munster_lulc.errors import ExportError
from munster_lulc.utils import log


def build_export_params(image, description, folder, file_name_prefix, region, scale, max_pixels):
    """Keyword arguments for ee.batch.Export.image.toDrive, passed through unchanged."""
    if scale is None or scale <= 0:
        raise ExportError(f"Invalid export scale: {scale!r}")
    if max_pixels is None or max_pixels <= 0:
        raise ExportError(f"Invalid maxPixels: {max_pixels!r}")
    return {
        'image': image,
        'description': description,
        'folder': folder,
        'fileNamePrefix': file_name_prefix,
        'region': region,
        'scale': scale,
        'maxPixels': max_pixels,
    }


def export_image_to_drive(params):
    """Start a Drive export task; the task is not awaited."""
    task = ee.batch.Export.image.toDrive(**params)
    task.start()
    log(f"  Exporting: {params['description']}")
    return task


def classified_export_params(classified, region, year, folder=None, scale=None, max_pixels=None):
    """Clipped, float-cast classified map with the configured names for `year`."""
    return build_export_params(
        image=classified.clip(region).toFloat(),
        description=EXPORT_PARAMS['description'].format(year=year),
        folder=folder or EXPORT_PARAMS['folder'],
        file_name_prefix=EXPORT_PARAMS['fileNamePrefix'].format(year=year),
        region=region,
        scale=scale if scale is not None else EXPORT_PARAMS['scale'],
        max_pixels=max_pixels if max_pixels is not None else EXPORT_PARAMS['maxPixels'],
    )


def export_classified_to_drive(classified, region, year, **kwargs):
    return export_image_to_drive(classified_export_params(classified, region, year, **kwargs))


def export_table_to_drive(fc, description, folder=None):
    """Export a FeatureCollection to Google Drive as CSV."""
    task = ee.batch.Export.table.toDrive(
        collection=fc,
        description=description,
        folder=folder or EXPORT_PARAMS['folder'],
        fileFormat='CSV',
    )
    task.start()
    log(f"  Exporting table: {description}")
    return task


# ============================================================
# DIRECT DOWNLOAD
# ============================================================

def download_params(region, scale=None, crs=None, bands=None):
    params = {
        'scale': scale or DOWNLOAD_SCALE,
        'crs': crs or DOWNLOAD_CRS,
        'region': region,
        'format': 'GEO_TIFF',
    }
    if bands:
        params['bands'] = bands
    return params


def download_image(image, output_path, region, scale=None, bands=None):
    """
    Download an Earth Engine image to a local GeoTIFF via getDownloadURL.

    getDownloadURL only serves small requests, hence the coarse default scale.
    """
    os.makedirs(os.path.dirname(os.path.abspath(output_path)), exist_ok=True)
    try:
        url = image.getDownloadURL(download_params(region, scale, bands=bands))
    except ee.EEException as e:
        raise ExportError(f"Download URL request failed for {output_path}: {e}") from e

    tmp_path = output_path + '.tmp'
    urllib.request.urlretrieve(url, tmp_path)

    # Older endpoints wrap the GeoTIFF in a zip
    if zipfile.is_zipfile(tmp_path):
        with zipfile.ZipFile(tmp_path, 'r') as z:
            tif_files = [f for f in z.namelist() if f.endswith('.tif')]
            if not tif_files:
                raise ExportError(f"No GeoTIFF in download for {output_path}")
            with z.open(tif_files[0]) as src, open(output_path, 'wb') as dst:
                dst.write(src.read())
        os.remove(tmp_path)
    else:
        os.replace(tmp_path, output_path)

    log(f"  [OK] {output_path}")
    return output_path
