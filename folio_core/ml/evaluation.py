"""
Model evaluation helpers for the ML tutorials.
"""

from typing import Optional, Tuple

import numpy as np
import pandas as pd

from folio_core.ml.base import check_random_state


def _take(data, idx: np.ndarray):
    if isinstance(data, (pd.DataFrame, pd.Series)):
        return data.iloc[idx]
    return np.asarray(data)[idx]


def train_test_split(
    X,
    y,
    test_size: float = 0.25,
    random_state=None,
    stratify: bool = False,
) -> Tuple:
    """
    Shuffle and split features and labels.

    Args:
        X: Features (array-like or DataFrame)
        y: Labels (array-like or Series)
        test_size: Fraction of rows in the test set, in (0, 1)
        random_state: Seed
        stratify: Keep class proportions in both sets

    Returns:
        Tuple of (X_train, X_test, y_train, y_test); pandas inputs stay pandas
    """
    if not 0 < test_size < 1:
        raise ValueError(f"test_size must be in (0, 1), got {test_size}")

    n_samples = len(X)
    if len(y) != n_samples:
        raise ValueError(f"X has {n_samples} samples but y has {len(y)}")

    rng = check_random_state(random_state)

    if stratify:
        labels = np.asarray(y)
        test_idx = []
        for cls in np.unique(labels):
            cls_idx = np.flatnonzero(labels == cls)
            rng.shuffle(cls_idx)
            n_test = int(round(len(cls_idx) * test_size))
            test_idx.extend(cls_idx[:n_test])
        test_idx = np.array(sorted(test_idx), dtype=int)
        train_idx = np.setdiff1d(np.arange(n_samples), test_idx)
        rng.shuffle(train_idx)
        rng.shuffle(test_idx)
    else:
        perm = rng.permutation(n_samples)
        n_test = max(1, int(round(n_samples * test_size)))
        test_idx, train_idx = perm[:n_test], perm[n_test:]

    if len(train_idx) == 0 or len(test_idx) == 0:
        raise ValueError(
            f"test_size={test_size} leaves an empty split for {n_samples} samples"
        )

    return _take(X, train_idx), _take(X, test_idx), _take(y, train_idx), _take(y, test_idx)


def accuracy_score(y_true, y_pred) -> float:
    y_true, y_pred = np.asarray(y_true), np.asarray(y_pred)
    if len(y_true) != len(y_pred):
        raise ValueError(f"Length mismatch: {len(y_true)} vs {len(y_pred)}")
    if len(y_true) == 0:
        return 0.0
    return float((y_true == y_pred).mean())


def confusion_matrix(y_true, y_pred, labels: Optional[list] = None) -> pd.DataFrame:
    """
    Confusion matrix with true labels as rows and predictions as columns.
    """
    y_true, y_pred = np.asarray(y_true), np.asarray(y_pred)
    if labels is None:
        labels = list(np.unique(np.concatenate([y_true, y_pred])))

    position = {label: i for i, label in enumerate(labels)}
    matrix = np.zeros((len(labels), len(labels)), dtype=int)
    for t, p in zip(y_true, y_pred):
        if t in position and p in position:
            matrix[position[t], position[p]] += 1

    return pd.DataFrame(
        matrix,
        index=pd.Index(labels, name="actual"),
        columns=pd.Index(labels, name="predicted"),
    )


def classification_report(y_true, y_pred) -> pd.DataFrame:
    """
    Per-class precision, recall, F1 and support.
    """
    cm = confusion_matrix(y_true, y_pred)
    tp = np.diag(cm.to_numpy()).astype(float)
    predicted = cm.sum(axis=0).to_numpy().astype(float)
    actual = cm.sum(axis=1).to_numpy().astype(float)

    with np.errstate(divide="ignore", invalid="ignore"):
        precision = np.where(predicted > 0, tp / predicted, 0.0)
        recall = np.where(actual > 0, tp / actual, 0.0)
        f1 = np.where(precision + recall > 0, 2 * precision * recall / (precision + recall), 0.0)

    return pd.DataFrame({
        "precision": precision,
        "recall": recall,
        "f1": f1,
        "support": actual.astype(int),
    }, index=cm.index.rename("class"))
