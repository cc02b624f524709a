"""Tests for the decision tree and random forest classifiers."""

import pytest
import pandas as pd
import numpy as np

from folio_core.ml import (
    DecisionTreeClassifier,
    NotFittedError,
    RandomForestClassifier,
    accuracy_score,
)
from folio_core.ml.tree import entropy, gini


@pytest.fixture
def xor_like():
    """Label is 1 when x0 > 5, otherwise depends on x1; x2 is noise."""
    rng = np.random.default_rng(3)
    X = rng.uniform(0, 10, size=(200, 3))
    y = np.where(X[:, 0] > 5, "up", np.where(X[:, 1] > 5, "up", "down"))
    return X, y


class TestImpurity:
    """Impurity functions."""

    def test_gini(self):
        assert gini(np.array([5.0, 5.0])) == pytest.approx(0.5)
        assert gini(np.array([10.0, 0.0])) == 0.0
        assert gini(np.array([0.0, 0.0])) == 0.0

    def test_entropy(self):
        assert entropy(np.array([5.0, 5.0])) == pytest.approx(1.0)
        assert entropy(np.array([4.0, 0.0])) == 0.0


class TestDecisionTree:
    """Tests for DecisionTreeClassifier."""

    @pytest.mark.parametrize("kwargs, message", [
        ({"criterion": "mse"}, "criterion must be one of"),
        ({"max_depth": 0}, "max_depth must be None or int >= 1"),
        ({"min_samples_split": 1}, "min_samples_split must be int >= 2"),
        ({"min_samples_leaf": 0}, "min_samples_leaf must be int >= 1"),
    ])
    def test_invalid_params(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            DecisionTreeClassifier(**kwargs)

    def test_single_split(self):
        X = np.array([[1.0], [2.0], [3.0], [10.0], [11.0], [12.0]])
        y = np.array([0, 0, 0, 1, 1, 1])
        tree = DecisionTreeClassifier().fit(X, y)

        assert tree.get_depth() == 1
        assert tree.get_n_leaves() == 2
        assert tree.tree_.threshold == pytest.approx(6.5)
        assert tree.predict([[0.0], [20.0]]).tolist() == [0, 1]

    @pytest.mark.parametrize("criterion", ["gini", "entropy"])
    def test_fits_training_data(self, xor_like, criterion):
        X, y = xor_like
        tree = DecisionTreeClassifier(criterion=criterion).fit(X, y)
        assert accuracy_score(y, tree.predict(X)) == 1.0

    def test_max_depth_limits_growth(self, xor_like):
        X, y = xor_like
        tree = DecisionTreeClassifier(max_depth=1).fit(X, y)
        assert tree.get_depth() == 1
        assert tree.get_n_leaves() == 2

    def test_min_samples_leaf(self, xor_like):
        X, y = xor_like
        tree = DecisionTreeClassifier(min_samples_leaf=20).fit(X, y)

        def smallest_leaf(node):
            if node.is_leaf:
                return node.n_samples
            return min(smallest_leaf(node.left), smallest_leaf(node.right))

        assert smallest_leaf(tree.tree_) >= 20

    def test_feature_importances(self, xor_like):
        X, y = xor_like
        tree = DecisionTreeClassifier(max_depth=3).fit(X, y)
        importances = tree.feature_importances_
        assert importances.sum() == pytest.approx(1.0)
        assert importances[2] < importances[0]

    def test_predict_proba_rows_sum_to_one(self, xor_like):
        X, y = xor_like
        proba = DecisionTreeClassifier(max_depth=2).fit(X, y).predict_proba(X)
        assert proba.shape == (200, 2)
        np.testing.assert_allclose(proba.sum(axis=1), 1.0)

    def test_pure_node_is_a_leaf(self):
        tree = DecisionTreeClassifier().fit([[1.0], [2.0]], ["a", "a"])
        assert tree.get_n_leaves() == 1
        assert tree.predict([[5.0]]).tolist() == ["a"]

    def test_export_text_uses_column_names(self):
        df = pd.DataFrame({"ltv": [0.5, 0.6, 0.9, 0.95]})
        tree = DecisionTreeClassifier().fit(df, ["ok", "ok", "default", "default"])
        text = tree.export_text()
        assert text.splitlines() == [
            "|--- ltv <= 0.75",
            "|   |--- class: ok",
            "|--- ltv >  0.75",
            "|   |--- class: default",
        ]

    def test_not_fitted(self):
        with pytest.raises(NotFittedError, match="DecisionTreeClassifier is not fitted yet"):
            DecisionTreeClassifier().predict([[1.0]])

    def test_wrong_feature_count(self, xor_like):
        X, y = xor_like
        tree = DecisionTreeClassifier(max_depth=1).fit(X, y)
        with pytest.raises(ValueError, match="X has 2 features"):
            tree.predict(np.zeros((1, 2)))

    def test_label_length_mismatch(self):
        with pytest.raises(ValueError, match="X has 3 samples but y has 2"):
            DecisionTreeClassifier().fit(np.zeros((3, 1)), [0, 1])


class TestRandomForest:
    """Tests for RandomForestClassifier."""

    def test_invalid_n_estimators(self):
        with pytest.raises(ValueError, match="n_estimators must be int >= 1"):
            RandomForestClassifier(n_estimators=0)

    def test_oob_requires_bootstrap(self):
        with pytest.raises(ValueError, match="oob_score requires bootstrap=True"):
            RandomForestClassifier(oob_score=True, bootstrap=False)

    def test_tree_params_validated_up_front(self):
        with pytest.raises(ValueError, match="criterion must be one of"):
            RandomForestClassifier(criterion="mse")

    def test_fit_predict(self, xor_like):
        X, y = xor_like
        rf = RandomForestClassifier(n_estimators=25, random_state=0).fit(X[:150], y[:150])

        assert len(rf.estimators_) == 25
        assert set(rf.classes_) == {"down", "up"}
        assert accuracy_score(y[150:], rf.predict(X[150:])) >= 0.85

    def test_oob_score(self, xor_like):
        X, y = xor_like
        rf = RandomForestClassifier(n_estimators=30, oob_score=True, random_state=0).fit(X, y)
        assert 0.8 <= rf.oob_score_ <= 1.0

    def test_feature_importances(self, xor_like):
        X, y = xor_like
        rf = RandomForestClassifier(n_estimators=30, random_state=0).fit(X, y)
        assert rf.feature_importances_.sum() == pytest.approx(1.0)
        assert rf.feature_importances_[2] < rf.feature_importances_[0]

    def test_reproducible(self, xor_like):
        X, y = xor_like
        a = RandomForestClassifier(n_estimators=10, random_state=7).fit(X, y)
        b = RandomForestClassifier(n_estimators=10, random_state=7).fit(X, y)
        np.testing.assert_allclose(a.predict_proba(X), b.predict_proba(X))

    def test_without_bootstrap_trees_fit_all_rows(self, xor_like):
        X, y = xor_like
        rf = RandomForestClassifier(
            n_estimators=3, bootstrap=False, max_features=None, random_state=0
        ).fit(X, y)
        assert accuracy_score(y, rf.predict(X)) == 1.0

    def test_not_fitted(self):
        with pytest.raises(NotFittedError, match="RandomForestClassifier is not fitted yet"):
            RandomForestClassifier().predict([[1.0]])

    def test_not_fitted_proba(self):
        with pytest.raises(NotFittedError):
            RandomForestClassifier().predict_proba([[1.0]])
