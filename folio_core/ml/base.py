"""
Shared helpers for the textbook ML estimators.
"""

from typing import List, Optional, Tuple

import numpy as np
import pandas as pd


class NotFittedError(RuntimeError):
    """Raised when predict() or a fitted attribute is used before fit()."""


def check_array(X, name: str = "X") -> Tuple[np.ndarray, Optional[List[str]]]:
    """
    Convert a feature matrix to a 2-D float array.

    Args:
        X: Array-like or DataFrame of shape (n_samples, n_features)
        name: Argument name used in error messages

    Returns:
        Tuple of (array, feature names or None)

    Raises:
        ValueError: If X is not 2-D, is empty, or contains NaN/inf
    """
    feature_names = None
    if isinstance(X, pd.DataFrame):
        feature_names = [str(c) for c in X.columns]
        X = X.to_numpy(dtype=float)
    else:
        X = np.asarray(X, dtype=float)

    if X.ndim == 1:
        X = X.reshape(-1, 1)
    if X.ndim != 2:
        raise ValueError(f"{name} must be 2-D, got {X.ndim} dimensions")
    if X.shape[0] == 0:
        raise ValueError(f"{name} has no samples")
    if not np.isfinite(X).all():
        raise ValueError(f"{name} contains NaN or infinite values")

    return X, feature_names


def check_target(y, n_samples: int) -> np.ndarray:
    """Convert labels to a 1-D array of length n_samples."""
    y = np.asarray(y.to_numpy() if isinstance(y, (pd.Series, pd.DataFrame)) else y)
    if y.ndim != 1:
        y = y.ravel()
    if len(y) != n_samples:
        raise ValueError(f"X has {n_samples} samples but y has {len(y)}")
    return y


def check_random_state(random_state) -> np.random.Generator:
    """Turn None, an int seed or a Generator into a numpy Generator."""
    if isinstance(random_state, np.random.Generator):
        return random_state
    return np.random.default_rng(random_state)


def resolve_max_features(max_features, n_features: int) -> int:
    """
    Number of features considered per split.

    Accepts None (all), "sqrt", "log2", an int, or a float fraction.
    """
    if max_features is None:
        return n_features
    if max_features == "sqrt":
        return max(1, int(np.sqrt(n_features)))
    if max_features == "log2":
        return max(1, int(np.log2(n_features))) if n_features > 1 else 1
    if isinstance(max_features, bool):
        raise ValueError(f"Invalid max_features: {max_features}")
    if isinstance(max_features, (int, np.integer)):
        if max_features < 1:
            raise ValueError(f"max_features must be >= 1, got {max_features}")
        return min(int(max_features), n_features)
    if isinstance(max_features, float):
        if not 0 < max_features <= 1:
            raise ValueError(f"max_features fraction must be in (0, 1], got {max_features}")
        return max(1, int(max_features * n_features))
    raise ValueError(f"Invalid max_features: {max_features}")
