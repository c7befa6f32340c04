"""
Exception hierarchy for the Muenster LULC pipeline.

    LulcError
    ├── EarthEngineInitError   ee.Initialize failed
    ├── RegionLookupError      region filters matched 0 or >1 features
    ├── TrainingDataError      malformed training points
    └── ExportError            export / download problems
"""


class LulcError(Exception):
    """Base exception for the pipeline."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def __repr__(self):
        return f"{self.__class__.__name__}({self.message!r})"


class EarthEngineInitError(LulcError):
    pass


class RegionLookupError(LulcError):
    """Raised when the administrative filters do not match exactly one feature.

    Args:
        filters: dict of field -> value used for the lookup.
        n_matches: number of features that matched.
    """

    def __init__(self, filters, n_matches):
        names = ', '.join(f"{k}={v!r}" for k, v in filters.items())
        super().__init__(f"Expected exactly one region for {names}, found {n_matches}")
        self.filters = dict(filters)
        self.n_matches = n_matches


class TrainingDataError(LulcError):
    pass


class ExportError(LulcError):
    pass
