"""
K-means clustering, written out step by step for the clustering tutorial.

Lloyd's algorithm: assign each point to its nearest centroid, move each
centroid to the mean of its points, repeat until centroids stop moving.
"""

import logging
from typing import Dict, Iterable

import numpy as np

from folio_core.ml.base import NotFittedError, check_array, check_random_state

logger = logging.getLogger(__name__)


def _squared_distances(X: np.ndarray, centers: np.ndarray) -> np.ndarray:
    # (n_samples, n_clusters)
    return ((X[:, None, :] - centers[None, :, :]) ** 2).sum(axis=2)


class KMeans:
    """
    K-means clustering.

    Parameters:
        n_clusters: Number of clusters (default: 8)
        init: "k-means++" (spread-out seeding) or "random" (default: "k-means++")
        n_init: Independent restarts; the lowest-inertia run wins (default: 10)
        max_iter: Iteration cap per run (default: 300)
        tol: Stop when total centroid movement (squared) is below tol (default: 1e-4)
        random_state: Seed for reproducibility

    Attributes (after fit):
        cluster_centers_: Array of shape (n_clusters, n_features)
        labels_: Cluster index of each training sample
        inertia_: Sum of squared distances to the nearest centroid
        n_iter_: Iterations used by the winning run

    Example:
        >>> km = KMeans(n_clusters=3, random_state=0).fit(X)
        >>> km.predict(X_new)
    """

    def __init__(
        self,
        n_clusters: int = 8,
        init: str = "k-means++",
        n_init: int = 10,
        max_iter: int = 300,
        tol: float = 1e-4,
        random_state=None,
    ):
        if isinstance(n_clusters, bool) or not isinstance(n_clusters, (int, np.integer)) or n_clusters < 1:
            raise ValueError(f"n_clusters must be int >= 1, got {n_clusters}")
        if init not in ("k-means++", "random"):
            raise ValueError(f"init must be 'k-means++' or 'random', got {init}")
        if not isinstance(n_init, int) or n_init < 1:
            raise ValueError(f"n_init must be int >= 1, got {n_init}")
        if not isinstance(max_iter, int) or max_iter < 1:
            raise ValueError(f"max_iter must be int >= 1, got {max_iter}")
        if tol < 0:
            raise ValueError(f"tol must be >= 0, got {tol}")

        self.n_clusters = int(n_clusters)
        self.init = init
        self.n_init = n_init
        self.max_iter = max_iter
        self.tol = tol
        self.random_state = random_state

    def _init_centers(self, X: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        n_samples = X.shape[0]
        if self.init == "random":
            idx = rng.choice(n_samples, size=self.n_clusters, replace=False)
            return X[idx].copy()

        centers = np.empty((self.n_clusters, X.shape[1]))
        centers[0] = X[rng.integers(n_samples)]
        closest = _squared_distances(X, centers[:1]).ravel()
        for k in range(1, self.n_clusters):
            total = closest.sum()
            if total == 0:
                # Every point already sits on a center
                idx = rng.integers(n_samples)
            else:
                idx = rng.choice(n_samples, p=closest / total)
            centers[k] = X[idx]
            closest = np.minimum(closest, _squared_distances(X, centers[k:k + 1]).ravel())
        return centers

    def _single_run(self, X: np.ndarray, rng: np.random.Generator):
        centers = self._init_centers(X, rng)
        n_iter = 0

        for n_iter in range(1, self.max_iter + 1):
            distances = _squared_distances(X, centers)
            labels = distances.argmin(axis=1)

            new_centers = centers.copy()
            for k in range(self.n_clusters):
                members = X[labels == k]
                if len(members) > 0:
                    new_centers[k] = members.mean(axis=0)
                else:
                    # Re-seed an empty cluster with the worst-served point
                    farthest = distances.min(axis=1).argmax()
                    new_centers[k] = X[farthest]
                    logger.debug(f"Re-seeded empty cluster {k}")

            shift = ((new_centers - centers) ** 2).sum()
            centers = new_centers
            if shift <= self.tol:
                break

        distances = _squared_distances(X, centers)
        labels = distances.argmin(axis=1)
        inertia = float(distances[np.arange(len(X)), labels].sum())
        return centers, labels, inertia, n_iter

    def fit(self, X, y=None) -> "KMeans":
        """
        Compute clusters.

        Raises:
            ValueError: If n_clusters exceeds the number of samples
        """
        X, self.feature_names_in_ = check_array(X)
        if self.n_clusters > X.shape[0]:
            raise ValueError(
                f"n_clusters ({self.n_clusters}) cannot exceed n_samples ({X.shape[0]})"
            )

        rng = check_random_state(self.random_state)
        best = None
        for _ in range(self.n_init):
            run = self._single_run(X, rng)
            if best is None or run[2] < best[2]:
                best = run

        self.cluster_centers_, self.labels_, self.inertia_, self.n_iter_ = best
        logger.info(
            f"KMeans(k={self.n_clusters}) converged in {self.n_iter_} iterations, "
            f"inertia={self.inertia_:.4f}"
        )
        return self

    def _check_fitted(self) -> None:
        if not hasattr(self, "cluster_centers_"):
            raise NotFittedError("KMeans instance is not fitted yet; call fit() first")

    def predict(self, X) -> np.ndarray:
        """Index of the nearest centroid for each sample."""
        self._check_fitted()
        X, _ = check_array(X)
        if X.shape[1] != self.cluster_centers_.shape[1]:
            raise ValueError(
                f"X has {X.shape[1]} features, model was fitted with "
                f"{self.cluster_centers_.shape[1]}"
            )
        return _squared_distances(X, self.cluster_centers_).argmin(axis=1)

    def fit_predict(self, X, y=None) -> np.ndarray:
        return self.fit(X).labels_

    def transform(self, X) -> np.ndarray:
        """Euclidean distance from each sample to each centroid."""
        self._check_fitted()
        X, _ = check_array(X)
        return np.sqrt(_squared_distances(X, self.cluster_centers_))


def inertia_curve(X, k_values: Iterable[int], random_state=None, **kwargs) -> Dict[int, float]:
    """
    Inertia for each k, for the elbow chart.

    Returns:
        Dict mapping k to inertia
    """
    return {
        int(k): KMeans(n_clusters=int(k), random_state=random_state, **kwargs).fit(X).inertia_
        for k in k_values
    }
