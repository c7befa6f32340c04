"""Chart outputs."""

import pandas as pd

from munster_lulc import charts
from munster_lulc.area import area_table


def test_index_chart(tmp_path):
    df = pd.DataFrame({'year': [2016, 2017, 2018], 'NDVI': [0.41, 0.44, 0.39]})
    path = charts.plot_index_time_series(df, 'NDVI', str(tmp_path / 'figures' / 'ndvi.png'))
    assert path.endswith('ndvi.png')
    assert (tmp_path / 'figures' / 'ndvi.png').stat().st_size > 0


def test_area_chart(tmp_path):
    table = area_table({
        2016: {'Urban': 80, 'Agriculture': 150, 'Water': 5, 'Vegetation': 65},
        2023: {'Urban': 90, 'Agriculture': 140, 'Water': None, 'Vegetation': 64},
    })
    path = charts.plot_class_areas(table, str(tmp_path / 'areas.png'))
    assert (tmp_path / 'areas.png').exists()
    assert path == str(tmp_path / 'areas.png')
