"""
Study area from the FAO GAUL administrative boundaries.
"""

import ee

from gee_config import COLLECTIONS, STUDY_AREA
from munster_lulc.errors import RegionLookupError
from munster_lulc.utils import log

# Most specific level first, as in the GAUL hierarchy lookups
NAME_FIELDS = ('ADM2_NAME', 'ADM1_NAME', 'ADM0_NAME')


def filter_admin_units(admin, names):
    """Apply one exact-match filter per name field present in `names`."""
    for field in NAME_FIELDS:
        if field in names:
            admin = admin.filter(ee.Filter.eq(field, names[field]))
    return admin


def get_study_area(names=None, collection_id=None):
    """
    Resolve the region polygon for the given GAUL names.

    Args:
        names: dict with ADM0_NAME / ADM1_NAME / ADM2_NAME values
            (defaults to STUDY_AREA)
        collection_id: GAUL level 2 asset (defaults to COLLECTIONS['gaul_level2'])

    Returns:
        ee.Geometry of the single matching feature

    Raises:
        RegionLookupError: when zero or several features match
    """
    names = names or STUDY_AREA
    admin2 = ee.FeatureCollection(collection_id or COLLECTIONS['gaul_level2'])
    matches = filter_admin_units(admin2, names)

    n_matches = matches.size().getInfo()
    if n_matches != 1:
        raise RegionLookupError(names, n_matches)

    log(f"  Region resolved: {names.get('ADM2_NAME')} ({names.get('ADM0_NAME')})")
    return matches.geometry()
