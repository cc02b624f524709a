"""Tests for model evaluation helpers."""

import pytest
import pandas as pd
import numpy as np

from folio_core.ml import (
    accuracy_score,
    classification_report,
    confusion_matrix,
    train_test_split,
)


class TestTrainTestSplit:
    """Tests for train_test_split."""

    def test_sizes_and_disjoint(self):
        X = np.arange(40).reshape(20, 2)
        y = np.arange(20)
        X_train, X_test, y_train, y_test = train_test_split(X, y, test_size=0.25, random_state=0)

        assert len(X_train) == 15 and len(X_test) == 5
        assert set(y_train).isdisjoint(y_test)
        # Rows stay aligned with their labels
        np.testing.assert_array_equal(X_test[:, 0] // 2, y_test)

    def test_pandas_types_kept(self):
        X = pd.DataFrame({"a": range(10)}, index=list("abcdefghij"))
        y = pd.Series(range(10), index=X.index)
        X_train, X_test, y_train, y_test = train_test_split(X, y, test_size=0.3, random_state=1)

        assert isinstance(X_train, pd.DataFrame)
        assert isinstance(y_test, pd.Series)
        assert X_test.index.equals(y_test.index)

    def test_stratify_keeps_proportions(self):
        y = np.array([0] * 80 + [1] * 20)
        X = np.zeros((100, 1))
        _, _, _, y_test = train_test_split(X, y, test_size=0.25, random_state=0, stratify=True)
        assert (y_test == 1).sum() == 5
        assert (y_test == 0).sum() == 20

    def test_reproducible(self):
        X = np.arange(30)
        a = train_test_split(X, X, random_state=3)
        b = train_test_split(X, X, random_state=3)
        np.testing.assert_array_equal(a[1], b[1])

    @pytest.mark.parametrize("test_size", [0, 1, 1.5])
    def test_invalid_test_size(self, test_size):
        with pytest.raises(ValueError, match=r"test_size must be in \(0, 1\)"):
            train_test_split(np.zeros(10), np.zeros(10), test_size=test_size)

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="X has 10 samples but y has 9"):
            train_test_split(np.zeros(10), np.zeros(9))

    def test_empty_split(self):
        with pytest.raises(ValueError, match="leaves an empty split"):
            train_test_split(np.zeros(1), np.zeros(1), test_size=0.5)


class TestScores:
    """Accuracy, confusion matrix and classification report."""

    def test_accuracy(self):
        assert accuracy_score([1, 0, 1, 1], [1, 1, 1, 0]) == 0.5

    def test_accuracy_length_mismatch(self):
        with pytest.raises(ValueError, match="Length mismatch"):
            accuracy_score([1, 0], [1])

    def test_confusion_matrix(self):
        cm = confusion_matrix(["a", "b", "a", "a"], ["a", "a", "b", "a"])
        assert cm.index.name == "actual"
        assert cm.columns.name == "predicted"
        assert cm.loc["a", "a"] == 2
        assert cm.loc["a", "b"] == 1
        assert cm.loc["b", "a"] == 1
        assert cm.loc["b", "b"] == 0

    def test_confusion_matrix_explicit_labels(self):
        cm = confusion_matrix([0, 1], [0, 1], labels=[1, 0, 2])
        assert list(cm.index) == [1, 0, 2]
        assert cm.to_numpy().sum() == 2

    def test_classification_report(self):
        report = classification_report([1, 1, 0, 0], [1, 0, 0, 0])

        assert list(report.columns) == ["precision", "recall", "f1", "support"]
        assert report.index.name == "class"
        assert report.loc[1, "precision"] == pytest.approx(1.0)
        assert report.loc[1, "recall"] == pytest.approx(0.5)
        assert report.loc[1, "f1"] == pytest.approx(2 / 3)
        assert report.loc[0, "precision"] == pytest.approx(2 / 3)
        assert report["support"].tolist() == [2, 2]

    def test_report_class_never_predicted(self):
        report = classification_report([0, 1], [0, 0])
        assert report.loc[1, "precision"] == 0.0
        assert report.loc[1, "f1"] == 0.0
