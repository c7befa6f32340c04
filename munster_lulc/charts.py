"""
Charts: yearly NDVI / NDBI series and class areas per year.
"""

import numpy as np

from gee_config import CHART_OPTIONS
from munster_lulc.figure_style import (
    setup_style, save_figure, DOUBLE_COL_WIDTH, SINGLE_COL_WIDTH, LULC_COLORS, LULC_NAMES
)


def plot_index_time_series(df, index_name, output_path, options=None):
    """
    Scatter chart with connecting line of a yearly index series.

    Args:
        df: DataFrame with 'year' and `index_name` columns
        index_name: 'NDVI' or 'NDBI'
        output_path: PNG path
        options: title / color / ylim (defaults to CHART_OPTIONS[index_name])

    Returns:
        path of the saved PNG
    """
    plt = setup_style()
    options = options or CHART_OPTIONS[index_name]

    fig, ax = plt.subplots(figsize=(DOUBLE_COL_WIDTH, SINGLE_COL_WIDTH))
    ax.plot(df['year'], df[index_name], '-o', color=options['color'], label=index_name)
    ax.set_title(options['title'])
    ax.set_xlabel('Year')
    ax.set_ylabel(index_name)
    ax.set_ylim(*options['ylim'])
    ax.set_xticks(list(df['year']))

    path = save_figure(fig, output_path)
    plt.close(fig)
    return path


def plot_class_areas(table, output_path, title='Land cover area by year (km²)'):
    """
    Grouped bars of class areas, one group per class, one bar per year.

    Args:
        table: area_table() DataFrame (the 'Total' row is skipped)
    """
    plt = setup_style()
    data = table.drop(index='Total', errors='ignore')
    years = list(data.columns)
    x = np.arange(len(data.index))
    width = 0.8 / max(len(years), 1)

    fig, ax = plt.subplots(figsize=(DOUBLE_COL_WIDTH, SINGLE_COL_WIDTH))
    colors_by_name = {LULC_NAMES[v]: LULC_COLORS[v] for v in LULC_NAMES}
    for i, year in enumerate(years):
        ax.bar(x + i * width, data[year].fillna(0), width,
               color=[colors_by_name.get(name, '#999999') for name in data.index],
               alpha=0.5 + 0.5 * (i + 1) / len(years),
               edgecolor='black', linewidth=0.3, label=str(year))
    ax.set_xticks(x + width * (len(years) - 1) / 2)
    ax.set_xticklabels(list(data.index))
    ax.set_ylabel('Area (km²)')
    ax.set_title(title)
    ax.legend(title='Year')

    path = save_figure(fig, output_path)
    plt.close(fig)
    return path
