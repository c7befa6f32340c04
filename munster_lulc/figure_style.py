"""
Shared matplotlib style for the pipeline charts.
Provides: rcParams, size constants, class colours, save helper.
"""

import os

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from gee_config import LULC_CLASSES


# ============================================================
# SIZE CONSTANTS
# ============================================================

SINGLE_COL_WIDTH = 3.54  # 90 mm
DOUBLE_COL_WIDTH = 7.48  # 190 mm

DPI_SAVE = 300
DPI_DISPLAY = 100

# ============================================================
# LULC PALETTE (same colours as the map palette)
# ============================================================

LULC_COLORS = {value: info['color'] for value, info in LULC_CLASSES.items()}
LULC_NAMES = {value: info['name'] for value, info in LULC_CLASSES.items()}


def setup_style():
    """Configure matplotlib rcParams for the report charts."""
    plt.rcParams.update({
        'font.family': 'sans-serif',
        'font.size': 8,
        'axes.labelsize': 9,
        'axes.titlesize': 10,
        'xtick.labelsize': 8,
        'ytick.labelsize': 8,
        'legend.fontsize': 7,

        'axes.spines.top': False,
        'axes.spines.right': False,
        'axes.linewidth': 0.6,
        'axes.grid': True,
        'grid.linewidth': 0.3,
        'grid.alpha': 0.5,

        'lines.linewidth': 1,
        'lines.markersize': 4,

        'figure.dpi': DPI_DISPLAY,
        'savefig.dpi': DPI_SAVE,
        'savefig.bbox': 'tight',
        'savefig.pad_inches': 0.05,
    })
    return plt


def save_figure(fig, filepath, also_pdf=False):
    """Save figure as PNG (and optionally PDF next to it)."""
    base, _ = os.path.splitext(filepath)
    os.makedirs(os.path.dirname(os.path.abspath(base)), exist_ok=True)

    fig.savefig(base + '.png', dpi=DPI_SAVE)
    print(f"  [OK] {base}.png")

    if also_pdf:
        fig.savefig(base + '.pdf')
        print(f"  [OK] {base}.pdf")
    return base + '.png'
