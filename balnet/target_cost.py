from __future__ import annotations

import numpy as np


def calculate_label_counts(labels) -> np.ndarray:
    """Dense per-class counts indexed by label value.

    Length is max(labels)+1; labels that never occur in between get an
    explicit 0. Empty input gives an empty array.
    """
    arr = np.asarray(labels, dtype=np.int64).reshape(-1)
    if arr.size == 0:
        return np.zeros(0, dtype=np.int64)
    if int(arr.min()) < 0:
        raise ValueError(f"labels must be non-negative, got {int(arr.min())}")
    return np.bincount(arr).astype(np.int64)


def get_sample_weight_for_balanced_target_cost(class_count: int, total_samples: int, class_sample_count: int) -> float:
    """Balanced weight N/(C*n_c): weight*count is the same for every class."""
    if int(class_count) < 1:
        raise ValueError(f"class_count must be >= 1, got {class_count}")
    if int(class_sample_count) <= 0:
        raise ValueError(f"zero-count class: cannot weight a class with {class_sample_count} samples")
    return float(total_samples) / (int(class_count) * int(class_sample_count))


def balanced_class_weights(counts) -> np.ndarray:
    # empty classes get 0.0; they never appear as a label
    counts = np.asarray(counts, dtype=np.int64)
    total = int(counts.sum()) if counts.size else 0
    c = int(counts.size)
    return np.array([
        get_sample_weight_for_balanced_target_cost(c, total, int(n)) if n > 0 else 0.0
        for n in counts
    ], dtype=np.float64)


def create_balanced_target_cost(labels, w: float = 1.0) -> np.ndarray:
    """Per-sample cost vectors blending uniform (w=0) and balanced (w=1) cost.

    Returns an (N, C) float array, C = len(calculate_label_counts(labels)).
    Row i is constant: (1-w)*1.0 + w*N/(C*count[labels[i]]). Values of w
    outside [0, 1] extrapolate linearly.
    """
    y = np.asarray(labels, dtype=np.int64).reshape(-1)
    counts = calculate_label_counts(y)
    n = int(y.size)
    c = int(counts.size)
    target_cost = np.empty((n, c), dtype=np.float64)
    w = float(w)
    # one weight per class present in y; gaps are never queried
    class_w = {int(lab): get_sample_weight_for_balanced_target_cost(c, n, int(counts[lab])) for lab in np.unique(y)}
    for i, lab in enumerate(y):
        target_cost[i, :] = (1.0 - w) * 1.0 + w * class_w[int(lab)]
    return target_cost
