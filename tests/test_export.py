"""Drive export parameters and direct GeoTIFF downloads."""

import zipfile
from unittest.mock import MagicMock

import ee
import pytest

from munster_lulc import export
from munster_lulc.errors import ExportError


@pytest.mark.parametrize('scale,max_pixels,folder', [
    (10, 1e10, 'earthengine'),
    (30, 1e9, 'lulc_runs'),
    (100, 5e8, 'tmp'),
])
def test_params_pass_through(scale, max_pixels, folder):
    image, region = MagicMock(), MagicMock()
    params = export.build_export_params(image, 'desc', folder, 'prefix', region, scale, max_pixels)
    assert params == {
        'image': image,
        'description': 'desc',
        'folder': folder,
        'fileNamePrefix': 'prefix',
        'region': region,
        'scale': scale,
        'maxPixels': max_pixels,
    }


@pytest.mark.parametrize('scale,max_pixels', [(0, None), (None, 0), (-10, None)])
def test_classified_params_keep_explicit_values(scale, max_pixels):
    with pytest.raises(ExportError):
        export.classified_export_params(MagicMock(), MagicMock(), 2016,
                                        scale=scale, max_pixels=max_pixels)


@pytest.mark.parametrize('scale,max_pixels', [(0, 1e10), (-10, 1e10), (None, 1e10), (10, 0)])
def test_invalid_params(scale, max_pixels):
    with pytest.raises(ExportError):
        export.build_export_params(MagicMock(), 'd', 'f', 'p', MagicMock(), scale, max_pixels)


def test_classified_export_names():
    classified, region = MagicMock(), MagicMock()
    params = export.classified_export_params(classified, region, 2016)

    classified.clip.assert_called_once_with(region)
    assert params['image'] is classified.clip.return_value.toFloat.return_value
    assert params['description'] == 'Classified2016_Image_Export'
    assert params['fileNamePrefix'] == 'classified2016'
    assert params['folder'] == 'earthengine'
    assert params['scale'] == 10
    assert params['maxPixels'] == 1e10


def test_export_starts_task(mock_ee):
    fake = mock_ee(export)
    task = export.export_classified_to_drive(MagicMock(), MagicMock(), 2023, folder='runs')

    kwargs = fake.batch.Export.image.toDrive.call_args.kwargs
    assert kwargs['description'] == 'Classified2023_Image_Export'
    assert kwargs['folder'] == 'runs'
    task.start.assert_called_once_with()


def test_table_export_is_csv(mock_ee):
    fake = mock_ee(export)
    fc = MagicMock()
    export.export_table_to_drive(fc, 'ConfusionMatrix2016_Export')
    fake.batch.Export.table.toDrive.assert_called_once_with(
        collection=fc, description='ConfusionMatrix2016_Export',
        folder='earthengine', fileFormat='CSV',
    )
    fake.batch.Export.table.toDrive.return_value.start.assert_called_once_with()


def test_download_params():
    region = MagicMock()
    params = export.download_params(region, bands=['B4', 'B8'])
    assert params == {
        'scale': 100, 'crs': 'EPSG:4326', 'region': region,
        'format': 'GEO_TIFF', 'bands': ['B4', 'B8'],
    }
    assert 'bands' not in export.download_params(region)


class TestDownload:

    def _fake_retrieve(self, payload, zipped):
        def retrieve(url, path):
            if zipped:
                with zipfile.ZipFile(path, 'w') as z:
                    z.writestr('download.classification.tif', payload)
            else:
                with open(path, 'wb') as f:
                    f.write(payload)
            return path, None
        return retrieve

    @pytest.mark.parametrize('zipped', [False, True])
    def test_writes_geotiff(self, tmp_path, monkeypatch, zipped):
        monkeypatch.setattr(export.urllib.request, 'urlretrieve',
                            self._fake_retrieve(b'II*\x00tiff', zipped))
        image = MagicMock()
        image.getDownloadURL.return_value = 'https://example.org/dl'
        out = str(tmp_path / 'rasters' / 'classified2016.tif')

        assert export.download_image(image, out, MagicMock()) == out
        with open(out, 'rb') as f:
            assert f.read() == b'II*\x00tiff'
        assert not (tmp_path / 'rasters' / 'classified2016.tif.tmp').exists()

    def test_zip_without_tif(self, tmp_path, monkeypatch):
        def retrieve(url, path):
            with zipfile.ZipFile(path, 'w') as z:
                z.writestr('readme.txt', 'nothing')
        monkeypatch.setattr(export.urllib.request, 'urlretrieve', retrieve)
        image = MagicMock()
        image.getDownloadURL.return_value = 'https://example.org/dl'
        with pytest.raises(ExportError):
            export.download_image(image, str(tmp_path / 'x.tif'), MagicMock())

    def test_url_error(self, tmp_path):
        image = MagicMock()
        image.getDownloadURL.side_effect = ee.EEException('Total request size must be less')
        with pytest.raises(ExportError, match='request size'):
            export.download_image(image, str(tmp_path / 'x.tif'), MagicMock())
