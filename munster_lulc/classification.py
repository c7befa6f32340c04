"""
Random Forest classification in Earth Engine.
"""

import ee

from gee_config import RF_PARAMS, CLASS_PROPERTY, CLASSIFICATION_BAND


def train_random_forest(training_data, input_properties, class_property=CLASS_PROPERTY,
                        params=None):
    """
    Train a smileRandomForest classifier.

    Args:
        training_data: ee.FeatureCollection with band values and labels
        input_properties: band names (list or ee.List) used as features
        class_property: label column
        params: smileRandomForest keyword arguments (defaults to RF_PARAMS)

    Returns:
        trained ee.Classifier
    """
    params = params or RF_PARAMS
    return ee.Classifier.smileRandomForest(**params).train(
        features=training_data,
        classProperty=class_property,
        inputProperties=input_properties,
    )


def classify_image(composite, classifier, output_name=CLASSIFICATION_BAND):
    """One predicted class per pixel of the composite."""
    return composite.classify(classifier, output_name)


def get_feature_importance(classifier):
    """Variable importance of the trained forest (ee.Dictionary)."""
    return ee.Dictionary(classifier.explain().get('importance'))


def top_features(importance, n=5):
    """Highest-importance features from a fetched importance dict."""
    if not importance:
        return []
    return sorted(importance.items(), key=lambda x: x[1], reverse=True)[:n]
