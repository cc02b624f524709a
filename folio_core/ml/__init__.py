"""ML module exports."""

from folio_core.ml.base import NotFittedError
from folio_core.ml.evaluation import (
    accuracy_score,
    classification_report,
    confusion_matrix,
    train_test_split,
)
from folio_core.ml.forest import RandomForestClassifier
from folio_core.ml.kmeans import KMeans, inertia_curve
from folio_core.ml.tree import DecisionTreeClassifier

__all__ = [
    "NotFittedError",
    "accuracy_score",
    "classification_report",
    "confusion_matrix",
    "train_test_split",
    "RandomForestClassifier",
    "KMeans",
    "inertia_curve",
    "DecisionTreeClassifier",
]
