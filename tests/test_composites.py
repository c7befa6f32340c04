"""Scene filtering and median composites."""

from munster_lulc import composites


def test_annual_window_end_is_next_january():
    assert composites.annual_window(2016) == ('2016-01-01', '2017-01-01')
    assert composites.annual_window(2023) == ('2023-01-01', '2024-01-01')


def test_build_filters_cloud_date_bounds(mock_ee):
    ee = mock_ee(composites)
    geometry = object()

    filters = composites.build_sentinel2_filters(30, '2023-01-01', '2024-01-01', geometry)

    ee.Filter.lt.assert_called_once_with('CLOUDY_PIXEL_PERCENTAGE', 30)
    ee.Filter.date.assert_called_once_with('2023-01-01', '2024-01-01')
    ee.Filter.bounds.assert_called_once_with(geometry)
    assert filters == [
        ee.Filter.lt.return_value,
        ee.Filter.date.return_value,
        ee.Filter.bounds.return_value,
    ]


def test_filter_sentinel2_applies_all_three_predicates(mock_ee, chain_collection):
    ee = mock_ee(composites)
    geometry = object()

    result = composites.filter_sentinel2(
        chain_collection, end_date='2017-01-01', geometry=geometry,
        start_date='2016-01-01', cloud_percentage=12.5,
    )

    applied = [call.args[0] for call in chain_collection.filter.call_args_list]
    assert len(applied) == 3
    for predicate in (ee.Filter.lt.return_value, ee.Filter.date.return_value,
                      ee.Filter.bounds.return_value):
        assert any(p is predicate for p in applied)
    ee.Filter.lt.assert_called_once_with('CLOUDY_PIXEL_PERCENTAGE', 12.5)
    chain_collection.select.assert_called_once_with('B.*')
    assert result is chain_collection


def test_filter_without_band_selection(mock_ee, chain_collection):
    mock_ee(composites)
    composites.filter_sentinel2(chain_collection, 30, 'a', 'b', object(), bands=None)
    chain_collection.select.assert_not_called()


def test_composite_is_median_of_filtered(mock_ee, chain_collection):
    mock_ee(composites)
    region = object()

    composite, n_images = composites.create_sentinel2_composite(
        '2016-01-01', '2017-01-01', region, collection=chain_collection
    )

    assert composite is chain_collection.median.return_value
    assert n_images is chain_collection.size.return_value
    chain_collection.median.return_value.clip.assert_not_called()


def test_annual_composite_uses_calendar_year(mock_ee, chain_collection):
    ee = mock_ee(composites)
    composites.create_annual_composite(2023, object(), collection=chain_collection)
    ee.Filter.date.assert_called_once_with('2023-01-01', '2024-01-01')


def test_empty_collection_is_a_warning(capsys):
    assert composites.check_scene_count(0, '2016') == 0
    assert 'WARNING' in capsys.readouterr().out
    assert composites.check_scene_count(41, '2023') == 41


def test_unavailable_count_is_not_reported_as_empty(capsys):
    assert composites.check_scene_count(None, '2016') is None
    out = capsys.readouterr().out
    assert 'scene count unavailable for 2016' in out
    assert 'no scenes' not in out
