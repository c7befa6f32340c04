import ee
import os
from dotenv import load_dotenv

from munster_lulc.errors import EarthEngineInitError

load_dotenv()

GEE_PROJECT_ID = os.getenv('GEE_PROJECT_ID')

PROJECT_DIR = os.path.dirname(os.path.abspath(__file__))
OUTPUT_DIR = os.getenv('LULC_OUTPUT_DIR', os.path.join(PROJECT_DIR, 'outputs'))


def initialize_earth_engine(project=None):
    """Initialize Earth Engine with the project from .env (or the one given)."""
    project = project or GEE_PROJECT_ID
    try:
        ee.Initialize(project=project)
    except Exception as e:
        raise EarthEngineInitError(f"Earth Engine initialization failed ({project}): {e}") from e
    print(f"GEE initialized: {project}")
    return project


# ============================================================
# STUDY AREA: Muenster (GAUL level 2)
# ============================================================

# Name fields are matched exactly against the GAUL attribute table
STUDY_AREA = {
    'ADM0_NAME': 'Germany',
    'ADM1_NAME': 'Nordrhein-Westfalen',
    'ADM2_NAME': 'Muenster',
}

# ============================================================
# ANALYSIS PERIODS
# ============================================================

# 'end' is exclusive
PERIODS = {
    'y2016': {
        'label': 'Muenster 2016',
        'map_year': 2016,
        'start': '2016-01-01',
        'end': '2017-01-01',
    },
    'y2023': {
        'label': 'Muenster 2023',
        'map_year': 2023,
        'start': '2023-01-01',
        'end': '2024-01-01',
    },
}

# Yearly NDVI/NDBI series, both ends inclusive
TIME_SERIES_YEARS = (2016, 2023)

# ============================================================
# GEE COLLECTIONS
# ============================================================

COLLECTIONS = {
    'sentinel2': 'COPERNICUS/S2_HARMONIZED',
    'gaul_level2': 'FAO/GAUL_SIMPLIFIED_500m/2015/level2',
}

CLOUD_PROPERTY = 'CLOUDY_PIXEL_PERCENTAGE'
CLOUD_THRESHOLD = 30

# Bands kept after filtering (regex, all spectral bands)
BAND_PATTERN = 'B.*'

# ============================================================
# LULC CLASSES (4 classes)
# ============================================================

CLASS_PROPERTY = 'landcover'
CLASSIFICATION_BAND = 'classification'

LULC_CLASSES = {
    0: {'name': 'Urban', 'color': '#ef101f'},
    1: {'name': 'Agriculture', 'color': '#38c740'},
    2: {'name': 'Water', 'color': '#4416e9'},
    3: {'name': 'Vegetation', 'color': '#1b7a1d'},
}

# ============================================================
# RANDOM FOREST / SAMPLING
# ============================================================

RF_PARAMS = {
    'numberOfTrees': 50,
}

# The validation subset starts at 0.3, so points with random in [0.3, 0.7)
# are in both subsets. Set 'validation_from' to 0.7 for a disjoint split.
SPLIT_PARAMS = {
    'column': 'random',
    'seed': 0,
    'train_below': 0.7,
    'validation_from': 0.3,
}

SAMPLING_PARAMS = {
    'scale': 10,
    'tileScale': 16,
}

# ============================================================
# REDUCTIONS AND EXPORTS
# ============================================================

REDUCTION_PARAMS = {
    'scale': 10,
    'bestEffort': True,
    'maxPixels': 1e10,
}

# Fallback for yearly means when the reducer returns no value
MEAN_FALLBACK = 0

EXPORT_PARAMS = {
    'folder': 'earthengine',
    'scale': 10,
    'maxPixels': 1e10,
    'description': 'Classified{year}_Image_Export',
    'fileNamePrefix': 'classified{year}',
}

# Direct downloads go through getDownloadURL, which has a size limit
DOWNLOAD_SCALE = 100
DOWNLOAD_CRS = 'EPSG:4326'
# Fill value for masked pixels in downloaded class maps (0 is a class)
DOWNLOAD_NODATA = 255

# ============================================================
# SPECTRAL INDICES
# ============================================================

# name -> (first band, second band) for (first - second) / (first + second)
INDEX_BANDS = {
    'NDVI': ('B8', 'B4'),
    'NDBI': ('B11', 'B8'),
}

# ============================================================
# VISUALIZATION
# ============================================================

RGB_VIS = {
    'min': 0.0,
    'max': 3000,
    'bands': ['B4', 'B3', 'B2'],
}

INDEX_VIS = {
    'NDVI': {'min': 0, 'max': 1,
             'palette': ['#d73027', '#fdae61', '#fee08b', '#d9ef8b', '#045504', '#011301']},
    'NDBI': {'min': -1, 'max': 1,
             'palette': ['#d73027', '#fdae61', '#fee08b', '#d9ef8b', '#045504']},
}

CHART_OPTIONS = {
    'NDVI': {'title': 'NDVI Time Series for Muenster', 'color': '#1a9850', 'ylim': (0, 1)},
    'NDBI': {'title': 'NDBI Time Series for Muenster', 'color': '#fdae61', 'ylim': (-1, 1)},
}


def print_config_summary():
    print("Configuration loaded")
    print(f"  Study area: {STUDY_AREA['ADM2_NAME']}, {STUDY_AREA['ADM1_NAME']}")
    print(f"  Periods: {', '.join(str(p['map_year']) for p in PERIODS.values())}")
    print(f"  LULC classes: {len(LULC_CLASSES)}")
    print(f"  Output dir: {OUTPUT_DIR}")
