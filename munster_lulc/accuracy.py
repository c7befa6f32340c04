"""
Accuracy assessment of the classified maps.

The classified raster is sampled at the validation points and the
(reference, predicted) pairs go into an Earth Engine error matrix. The
matrix is fetched once and all metrics are computed locally from it.
"""

from dataclasses import dataclass

import ee
import numpy as np

from gee_config import CLASS_PROPERTY, CLASSIFICATION_BAND, SAMPLING_PARAMS
from munster_lulc.training import sample_regions
from munster_lulc.utils import class_name


def sample_validation_points(classified, validation, class_property=CLASS_PROPERTY,
                             scale=None, tile_scale=None):
    """Predicted class at each validation point, with its reference label."""
    return sample_regions(
        classified, validation, [class_property],
        scale=scale or SAMPLING_PARAMS['scale'],
        tile_scale=tile_scale or SAMPLING_PARAMS['tileScale'],
    )


def build_error_matrix(samples, actual=CLASS_PROPERTY, predicted=CLASSIFICATION_BAND):
    """Rows are reference labels, columns are predicted labels."""
    return samples.errorMatrix(actual, predicted)


def assess_classification_accuracy(classified, validation, class_property=CLASS_PROPERTY,
                                   predicted=CLASSIFICATION_BAND):
    """
    Sample the classified map at the validation points and build the matrix.

    Returns:
        ee.ConfusionMatrix
    """
    samples = sample_validation_points(classified, validation, class_property)
    return build_error_matrix(samples, class_property, predicted)


def fetch_confusion_matrix(error_matrix):
    """Evaluate an ee.ConfusionMatrix into a local ConfusionMatrix."""
    info = ee.Dictionary({
        'matrix': error_matrix.array(),
        'order': error_matrix.order(),
    }).getInfo()
    return ConfusionMatrix(info['matrix'], info['order'])


# ============================================================
# LOCAL METRICS
# ============================================================

@dataclass
class ConfusionMatrix:
    """
    Label x label count table (rows: reference, columns: predicted).

    Args:
        matrix: square nested list / array of counts
        order: class value for each row/column
    """

    matrix: list
    order: list

    def __post_init__(self):
        self.matrix = np.asarray(self.matrix, dtype=np.float64)
        self.order = [int(v) for v in self.order]
        if self.matrix.ndim != 2 or self.matrix.shape[0] != self.matrix.shape[1]:
            raise ValueError(f"Confusion matrix must be square, got shape {self.matrix.shape}")
        if len(self.order) != self.matrix.shape[0]:
            raise ValueError("order length does not match the matrix size")

    @classmethod
    def from_labels(cls, actual, predicted, order=None):
        """
        Cross-tabulate reference and predicted labels.

        Without `order`, rows/columns run 0..max label like Earth Engine's
        errorMatrix.
        """
        actual = [int(v) for v in actual]
        predicted = [int(v) for v in predicted]
        if len(actual) != len(predicted):
            raise ValueError("actual and predicted must have the same length")
        if order is None:
            top = max(actual + predicted) if actual else -1
            order = list(range(top + 1))
        index = {value: i for i, value in enumerate(order)}
        matrix = np.zeros((len(order), len(order)))
        for a, p in zip(actual, predicted):
            matrix[index[a], index[p]] += 1
        return cls(matrix, order)

    @property
    def total(self):
        return float(self.matrix.sum())

    @property
    def overall_accuracy(self):
        """trace / total (NaN for an empty matrix)."""
        if self.total == 0:
            return float('nan')
        return float(np.trace(self.matrix) / self.total)

    @property
    def kappa(self):
        if self.total == 0:
            return float('nan')
        po = self.overall_accuracy
        pe = float((self.matrix.sum(axis=0) * self.matrix.sum(axis=1)).sum() / self.total ** 2)
        if pe == 1:
            return float('nan')
        return (po - pe) / (1 - pe)

    def producers_accuracy(self):
        """Per class: correct / reference count (row-wise)."""
        rows = self.matrix.sum(axis=1)
        diag = np.diag(self.matrix)
        return {v: (float(diag[i] / rows[i]) if rows[i] else 0.0)
                for i, v in enumerate(self.order)}

    def users_accuracy(self):
        """Per class: correct / predicted count (column-wise)."""
        cols = self.matrix.sum(axis=0)
        diag = np.diag(self.matrix)
        return {v: (float(diag[i] / cols[i]) if cols[i] else 0.0)
                for i, v in enumerate(self.order)}

    def class_metrics(self):
        producers = self.producers_accuracy()
        users = self.users_accuracy()
        metrics = {}
        for value in self.order:
            pa, ua = producers[value], users[value]
            f1 = 2 * (pa * ua) / (pa + ua) if pa + ua > 0 else 0
            metrics[value] = {
                'name': class_name(value),
                'producers_accuracy': round(pa, 4),
                'users_accuracy': round(ua, 4),
                'f1_score': round(f1, 4),
            }
        return metrics

    def to_dict(self):
        return {
            'overall_accuracy': round(self.overall_accuracy, 4),
            'kappa': round(self.kappa, 4),
            'n_samples': int(self.total),
            'confusion_matrix': self.matrix.astype(int).tolist(),
            'class_order': self.order,
            'class_metrics': self.class_metrics(),
        }


def compute_detailed_metrics(error_matrix):
    """OA, kappa and per-class metrics of an ee.ConfusionMatrix."""
    return fetch_confusion_matrix(error_matrix).to_dict()


def error_matrix_feature(error_matrix, year):
    """One-row table with the matrix and its accuracy, for CSV export."""
    return ee.FeatureCollection([ee.Feature(None, {
        'year': year,
        'matrix': error_matrix.array(),
        'accuracy': error_matrix.accuracy(),
        'kappa': error_matrix.kappa(),
    })])
