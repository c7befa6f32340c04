"""Logging, JSON outputs and visualization helpers."""

import json
from unittest.mock import MagicMock

from munster_lulc import utils


def test_lulc_palette():
    vis = utils.get_lulc_vis_params()
    assert vis == {'min': 0, 'max': 3,
                   'palette': ['#ef101f', '#38c740', '#4416e9', '#1b7a1d']}


def test_vis_params_are_copies():
    vis = utils.get_index_vis_params('NDVI')
    vis['min'] = 99
    assert utils.get_index_vis_params('NDVI')['min'] == 0
    assert utils.get_rgb_vis_params()['bands'] == ['B4', 'B3', 'B2']


def test_save_json(tmp_path):
    path = utils.save_json({2016: {'Urban': 80}}, str(tmp_path / 'out'), 'areas.json')
    with open(path) as f:
        assert json.load(f) == {'2016': {'Urban': 80}}


def test_log_file(tmp_path, capsys):
    log_path = tmp_path / 'logs' / 'pipeline.log'
    utils.set_log_file(str(log_path))
    utils.log('stage one')
    utils.banner('STAGE 2')

    lines = log_path.read_text().splitlines()
    assert lines[0].endswith('stage one')
    assert lines[2].endswith('STAGE 2')
    assert len(lines) == 4
    assert 'stage one' in capsys.readouterr().out


def test_safe_getinfo():
    ok = MagicMock()
    ok.getInfo.return_value = 12
    assert utils.safe_getinfo(ok) == 12

    bad = MagicMock()
    bad.getInfo.side_effect = RuntimeError('Computation timed out')
    assert utils.safe_getinfo(bad, 'n_img') is None


def test_thumbnail_url():
    image, region = MagicMock(), MagicMock()
    utils.thumbnail_url(image, {'min': 0, 'max': 3}, region, dimensions=512)
    image.clip.assert_called_once_with(region)
    image.clip.return_value.getThumbURL.assert_called_once_with({
        'min': 0, 'max': 3, 'region': region, 'dimensions': 512, 'format': 'png',
    })


def test_records_and_names():
    info = {'features': [{'properties': {'landcover': 2, 'B4': 310}}, {'properties': None}]}
    assert utils.feature_collection_to_records(info) == [{'landcover': 2, 'B4': 310}, {}]
    assert utils.feature_collection_to_records(None) == []
    assert utils.class_name(3) == 'Vegetation'
    assert utils.class_name(7) == 'Class 7'
