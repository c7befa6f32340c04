"""
Helper functions for the Muenster LULC pipeline.
Includes: run log, JSON outputs, safe getInfo, visualization.
"""

import os
import json
from datetime import datetime

from gee_config import LULC_CLASSES, RGB_VIS, INDEX_VIS

_LOG_PATH = None


# ============================================================
# RUN LOG
# ============================================================

def set_log_file(path):
    """Send every subsequent log() line to `path` as well as stdout."""
    global _LOG_PATH
    if path:
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    _LOG_PATH = path


def log(msg):
    ts = datetime.now().strftime('%H:%M:%S')
    line = f"[{ts}] {msg}"
    print(line, flush=True)
    if _LOG_PATH:
        with open(_LOG_PATH, 'a') as f:
            f.write(line + '\n')


def banner(title, char='='):
    log(char * 60)
    log(title)
    log(char * 60)


def save_json(data, output_dir, filename):
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, filename)
    with open(path, 'w') as f:
        json.dump(data, f, indent=2, default=str)
    log(f"  >> Saved: {filename}")
    return path


def safe_getinfo(ee_obj, label=""):
    """getInfo() for report-only values: log and return None on failure."""
    try:
        return ee_obj.getInfo()
    except Exception as e:
        log(f"  WARNING ({label}): {e}")
        return None


# ============================================================
# VISUALIZATION
# ============================================================

def get_lulc_vis_params():
    """Visualization parameters for the classified maps."""
    values = sorted(LULC_CLASSES)
    return {
        'min': values[0],
        'max': values[-1],
        'palette': [LULC_CLASSES[v]['color'] for v in values],
    }


def get_rgb_vis_params():
    return dict(RGB_VIS)


def get_index_vis_params(index_name):
    return dict(INDEX_VIS[index_name])


def thumbnail_url(image, vis_params, region, dimensions=1024):
    """Rendered PNG of `image` clipped to `region`, for quick inspection."""
    params = dict(vis_params)
    params.update({
        'region': region,
        'dimensions': dimensions,
        'format': 'png',
    })
    return image.clip(region).getThumbURL(params)


# ============================================================
# GENERAL
# ============================================================

def feature_collection_to_records(fc_info):
    """Flatten a getInfo() FeatureCollection dict into a list of property dicts."""
    if not fc_info:
        return []
    return [dict(feature.get('properties') or {}) for feature in fc_info.get('features', [])]


def class_name(value):
    return LULC_CLASSES.get(value, {}).get('name', f'Class {value}')

