"""
Random forest classifier built from DecisionTreeClassifier.

Each tree is grown on a bootstrap sample and tries only a random subset of
features at every split. Predictions average the trees' class
probabilities.
"""

import logging
from typing import List, Optional

import numpy as np

from folio_core.ml.base import NotFittedError, check_array, check_random_state, check_target
from folio_core.ml.tree import DecisionTreeClassifier

logger = logging.getLogger(__name__)


class RandomForestClassifier:
    """
    Bagged ensemble of decision trees.

    Parameters:
        n_estimators: Number of trees (default: 100)
        criterion: "gini" or "entropy" (default: "gini")
        max_depth: Maximum depth of each tree (default: None)
        min_samples_split: Passed to each tree (default: 2)
        min_samples_leaf: Passed to each tree (default: 1)
        max_features: Features tried per split (default: "sqrt")
        bootstrap: Sample rows with replacement for each tree (default: True)
        oob_score: Estimate accuracy on out-of-bag rows (default: False)
        random_state: Seed for bootstrap and feature sampling

    Attributes (after fit):
        estimators_: Fitted trees
        classes_: Sorted unique class labels
        feature_importances_: Mean of the trees' importances
        oob_score_: Out-of-bag accuracy (when oob_score=True)

    Example:
        >>> rf = RandomForestClassifier(n_estimators=50, random_state=0).fit(X_train, y_train)
        >>> accuracy_score(y_test, rf.predict(X_test))
    """

    def __init__(
        self,
        n_estimators: int = 100,
        criterion: str = "gini",
        max_depth: Optional[int] = None,
        min_samples_split: int = 2,
        min_samples_leaf: int = 1,
        max_features="sqrt",
        bootstrap: bool = True,
        oob_score: bool = False,
        random_state=None,
    ):
        if not isinstance(n_estimators, int) or n_estimators < 1:
            raise ValueError(f"n_estimators must be int >= 1, got {n_estimators}")
        if oob_score and not bootstrap:
            raise ValueError("oob_score requires bootstrap=True")

        self.n_estimators = n_estimators
        self.criterion = criterion
        self.max_depth = max_depth
        self.min_samples_split = min_samples_split
        self.min_samples_leaf = min_samples_leaf
        self.max_features = max_features
        self.bootstrap = bootstrap
        self.oob_score = oob_score
        self.random_state = random_state

        # Validates the tree parameters up front
        self._make_tree(None)

    def _make_tree(self, rng) -> DecisionTreeClassifier:
        return DecisionTreeClassifier(
            criterion=self.criterion,
            max_depth=self.max_depth,
            min_samples_split=self.min_samples_split,
            min_samples_leaf=self.min_samples_leaf,
            max_features=self.max_features,
            random_state=rng,
        )

    def fit(self, X, y) -> "RandomForestClassifier":
        X, self.feature_names_in_ = check_array(X)
        y = check_target(y, X.shape[0])
        self.classes_, y_encoded = np.unique(y, return_inverse=True)
        self.n_features_in_ = X.shape[1]

        n_samples = X.shape[0]
        n_classes = len(self.classes_)
        rng = check_random_state(self.random_state)

        self.estimators_: List[DecisionTreeClassifier] = []
        oob_votes = np.zeros((n_samples, n_classes))

        for _ in range(self.n_estimators):
            tree = self._make_tree(rng)
            if self.bootstrap:
                indices = rng.integers(0, n_samples, size=n_samples)
            else:
                indices = np.arange(n_samples)

            tree._fit_encoded(X, y_encoded, n_classes, sample_indices=indices)
            tree.classes_ = self.classes_
            tree.feature_names_in_ = self.feature_names_in_
            self.estimators_.append(tree)

            if self.oob_score:
                oob_mask = np.ones(n_samples, dtype=bool)
                oob_mask[indices] = False
                if oob_mask.any():
                    oob_votes[oob_mask] += tree.predict_proba(X[oob_mask])

        importances = np.mean([t.feature_importances_ for t in self.estimators_], axis=0)
        total = importances.sum()
        self.feature_importances_ = importances / total if total > 0 else importances

        if self.oob_score:
            covered = oob_votes.sum(axis=1) > 0
            if not covered.all():
                logger.warning(
                    f"{int((~covered).sum())} samples were never out of bag; "
                    f"oob_score_ uses the remaining {int(covered.sum())}"
                )
            if covered.any():
                oob_pred = oob_votes[covered].argmax(axis=1)
                self.oob_score_ = float((oob_pred == y_encoded[covered]).mean())
            else:
                self.oob_score_ = float("nan")

        logger.info(f"Fitted random forest with {self.n_estimators} trees on {n_samples} samples")
        return self

    def _check_fitted(self) -> None:
        if not hasattr(self, "estimators_"):
            raise NotFittedError("RandomForestClassifier is not fitted yet; call fit() first")

    def predict_proba(self, X) -> np.ndarray:
        """Average of the trees' class probabilities."""
        self._check_fitted()
        X, _ = check_array(X)
        return np.mean([tree.predict_proba(X) for tree in self.estimators_], axis=0)

    def predict(self, X) -> np.ndarray:
        proba = self.predict_proba(X)
        return self.classes_[proba.argmax(axis=1)]
