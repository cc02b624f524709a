"""
Decision tree classifier for the tree-based models tutorial.

The tree is grown greedily: at each node every candidate feature is tried
at the midpoints between its sorted unique values, and the split with the
largest impurity decrease wins. Growth stops at max_depth, when a node is
pure, or when a split would leave a child smaller than min_samples_leaf.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from folio_core.ml.base import (
    NotFittedError,
    check_array,
    check_random_state,
    check_target,
    resolve_max_features,
)
from folio_core.utils.constants import SPLIT_CRITERIA

logger = logging.getLogger(__name__)


def gini(counts: np.ndarray) -> float:
    """Gini impurity of a class-count vector: 1 - sum(p_k^2)."""
    total = counts.sum()
    if total == 0:
        return 0.0
    p = counts / total
    return float(1.0 - (p ** 2).sum())


def entropy(counts: np.ndarray) -> float:
    """Shannon entropy (bits) of a class-count vector."""
    total = counts.sum()
    if total == 0:
        return 0.0
    p = counts[counts > 0] / total
    return float(-(p * np.log2(p)).sum())


_IMPURITY = {"gini": gini, "entropy": entropy}


@dataclass
class Node:
    """
    A tree node. Leaves have feature None.

    value holds the class counts of the training samples that reached it.
    """

    value: np.ndarray
    impurity: float
    n_samples: int
    feature: Optional[int] = None
    threshold: Optional[float] = None
    left: Optional["Node"] = None
    right: Optional["Node"] = None

    @property
    def is_leaf(self) -> bool:
        return self.feature is None


class DecisionTreeClassifier:
    """
    CART-style binary decision tree classifier.

    Parameters:
        criterion: "gini" or "entropy" (default: "gini")
        max_depth: Maximum depth, None for unlimited (default: None)
        min_samples_split: Minimum samples to attempt a split (default: 2)
        min_samples_leaf: Minimum samples in each child (default: 1)
        max_features: Features tried per split: None, "sqrt", "log2", int
            or float fraction (default: None, all features)
        random_state: Seed for feature subsampling

    Attributes (after fit):
        classes_: Sorted unique class labels
        n_features_in_: Number of features seen in fit
        feature_importances_: Normalized total impurity decrease per feature
        tree_: Root Node
    """

    def __init__(
        self,
        criterion: str = "gini",
        max_depth: Optional[int] = None,
        min_samples_split: int = 2,
        min_samples_leaf: int = 1,
        max_features=None,
        random_state=None,
    ):
        if criterion not in SPLIT_CRITERIA:
            raise ValueError(f"criterion must be one of {list(SPLIT_CRITERIA)}, got {criterion}")
        if max_depth is not None and (not isinstance(max_depth, int) or max_depth < 1):
            raise ValueError(f"max_depth must be None or int >= 1, got {max_depth}")
        if not isinstance(min_samples_split, int) or min_samples_split < 2:
            raise ValueError(f"min_samples_split must be int >= 2, got {min_samples_split}")
        if not isinstance(min_samples_leaf, int) or min_samples_leaf < 1:
            raise ValueError(f"min_samples_leaf must be int >= 1, got {min_samples_leaf}")

        self.criterion = criterion
        self.max_depth = max_depth
        self.min_samples_split = min_samples_split
        self.min_samples_leaf = min_samples_leaf
        self.max_features = max_features
        self.random_state = random_state

    # ------------------------------------------------------------------
    # Fitting
    # ------------------------------------------------------------------

    def fit(self, X, y, sample_indices: Optional[np.ndarray] = None) -> "DecisionTreeClassifier":
        """
        Grow the tree.

        Args:
            X: Features, shape (n_samples, n_features)
            y: Class labels
            sample_indices: Optional row indices to train on (used by the
                random forest for bootstrap samples)
        """
        X, self.feature_names_in_ = check_array(X)
        y = check_target(y, X.shape[0])

        self.classes_, y_encoded = np.unique(y, return_inverse=True)
        return self._fit_encoded(X, y_encoded, len(self.classes_), sample_indices)

    def _fit_encoded(
        self,
        X: np.ndarray,
        y_encoded: np.ndarray,
        n_classes: int,
        sample_indices: Optional[np.ndarray] = None,
    ) -> "DecisionTreeClassifier":
        if sample_indices is not None:
            X = X[sample_indices]
            y_encoded = y_encoded[sample_indices]

        self.n_features_in_ = X.shape[1]
        self._n_classes = n_classes
        self._impurity_fn = _IMPURITY[self.criterion]
        self._rng = check_random_state(self.random_state)
        self._n_split_features = resolve_max_features(self.max_features, self.n_features_in_)
        self._importances = np.zeros(self.n_features_in_)

        self.tree_ = self._grow(X, y_encoded, depth=0)

        total = self._importances.sum()
        self.feature_importances_ = self._importances / total if total > 0 else self._importances
        return self

    def _counts(self, y: np.ndarray) -> np.ndarray:
        return np.bincount(y, minlength=self._n_classes).astype(float)

    def _grow(self, X: np.ndarray, y: np.ndarray, depth: int) -> Node:
        counts = self._counts(y)
        node = Node(value=counts, impurity=self._impurity_fn(counts), n_samples=len(y))

        if (
            node.impurity == 0.0
            or len(y) < self.min_samples_split
            or (self.max_depth is not None and depth >= self.max_depth)
        ):
            return node

        split = self._best_split(X, y, node.impurity)
        if split is None:
            return node

        feature, threshold, gain = split
        left_mask = X[:, feature] <= threshold

        self._importances[feature] += gain * len(y)
        node.feature = feature
        node.threshold = threshold
        node.left = self._grow(X[left_mask], y[left_mask], depth + 1)
        node.right = self._grow(X[~left_mask], y[~left_mask], depth + 1)
        return node

    def _best_split(self, X: np.ndarray, y: np.ndarray, parent_impurity: float):
        n_samples = len(y)
        features = np.arange(self.n_features_in_)
        if self._n_split_features < self.n_features_in_:
            features = self._rng.choice(features, size=self._n_split_features, replace=False)

        best_gain = 0.0
        best = None
        min_leaf = self.min_samples_leaf

        for feature in features:
            order = np.argsort(X[:, feature], kind="mergesort")
            values = X[order, feature]
            labels = y[order]

            # One-hot labels, cumulative counts give left-child counts at every cut
            one_hot = np.zeros((n_samples, self._n_classes))
            one_hot[np.arange(n_samples), labels] = 1.0
            left_counts = np.cumsum(one_hot, axis=0)
            total_counts = left_counts[-1]

            for i in range(min_leaf - 1, n_samples - min_leaf):
                if values[i] == values[i + 1]:
                    continue
                n_left = i + 1
                n_right = n_samples - n_left
                left = left_counts[i]
                right = total_counts - left
                child_impurity = (
                    n_left * self._impurity_fn(left) + n_right * self._impurity_fn(right)
                ) / n_samples
                gain = parent_impurity - child_impurity
                if gain > best_gain + 1e-12:
                    best_gain = gain
                    best = (int(feature), float((values[i] + values[i + 1]) / 2), gain)

        return best

    # ------------------------------------------------------------------
    # Prediction
    # ------------------------------------------------------------------

    def _check_fitted(self) -> None:
        if not hasattr(self, "tree_"):
            raise NotFittedError("DecisionTreeClassifier is not fitted yet; call fit() first")

    def _leaf(self, x: np.ndarray) -> Node:
        node = self.tree_
        while not node.is_leaf:
            node = node.left if x[node.feature] <= node.threshold else node.right
        return node

    def _check_features(self, X) -> np.ndarray:
        self._check_fitted()
        X, _ = check_array(X)
        if X.shape[1] != self.n_features_in_:
            raise ValueError(
                f"X has {X.shape[1]} features, model was fitted with {self.n_features_in_}"
            )
        return X

    def predict_proba(self, X) -> np.ndarray:
        """Class probabilities: class frequencies in each sample's leaf."""
        X = self._check_features(X)
        proba = np.array([self._leaf(x).value for x in X])
        return proba / proba.sum(axis=1, keepdims=True)

    def predict(self, X) -> np.ndarray:
        proba = self.predict_proba(X)
        return self.classes_[proba.argmax(axis=1)]

    def get_depth(self) -> int:
        self._check_fitted()

        def depth(node: Node) -> int:
            if node.is_leaf:
                return 0
            return 1 + max(depth(node.left), depth(node.right))

        return depth(self.tree_)

    def get_n_leaves(self) -> int:
        self._check_fitted()

        def leaves(node: Node) -> int:
            return 1 if node.is_leaf else leaves(node.left) + leaves(node.right)

        return leaves(self.tree_)

    def export_text(self, feature_names: Optional[List[str]] = None, decimals: int = 2) -> str:
        """
        Render the tree as indented if/else rules.

        Example:
            |--- petal_length <= 2.45
            |   |--- class: setosa
            |--- petal_length >  2.45
            |   |--- class: versicolor
        """
        self._check_fitted()
        names = feature_names or self.feature_names_in_ or [
            f"feature_{i}" for i in range(self.n_features_in_)
        ]
        lines: List[str] = []

        def walk(node: Node, indent: int) -> None:
            prefix = "|   " * indent + "|--- "
            if node.is_leaf:
                label = self.classes_[int(node.value.argmax())]
                lines.append(f"{prefix}class: {label}")
                return
            name = names[node.feature]
            threshold = round(node.threshold, decimals)
            lines.append(f"{prefix}{name} <= {threshold}")
            walk(node.left, indent + 1)
            lines.append(f"{prefix}{name} >  {threshold}")
            walk(node.right, indent + 1)

        walk(self.tree_, 0)
        return "\n".join(lines)
