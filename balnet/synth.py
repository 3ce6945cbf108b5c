"""Synthetic unbalanced datasets for exercising balanced target cost.

Two scenarios:
- 1dim: input in ~ B(p); label ~ B(p1) if in else B(p0). The majority
  class is 1 for both inputs, so a uniform-cost net learns "always 1"
  while balanced cost recovers label == in.
- xor: label ~ B(p); in0 ~ B(0.5); in1 = in0 xor label, flipped with
  probability `noise`. Balanced cost recovers label == in0 xor in1.

Test sets are balanced between classes and labelled by the true rule.
"""
from __future__ import annotations

import numpy as np


def _rng(rng=None):
    if rng is None or isinstance(rng, (int, np.integer)):
        return np.random.default_rng(rng)
    return rng


def bernoulli(p: float, rng=None) -> bool:
    return bool(_rng(rng).random() < float(p))


def make_unbalanced_1dim(n: int, p: float = 0.9, p0: float = 0.6, p1: float = 0.9, rng=None):
    rng = _rng(rng)
    data, labels = [], []
    for _ in range(int(n)):
        x = bernoulli(p, rng)
        lab = bernoulli(p1, rng) if x else bernoulli(p0, rng)
        data.append([x * 1.0])
        labels.append(1 if lab else 0)
    return np.asarray(data, dtype=np.float32).reshape(-1, 1), np.asarray(labels, dtype=np.int64)


def make_unbalanced_xor(n: int, p: float = 0.9, noise: float = 0.25, rng=None):
    rng = _rng(rng)
    data, labels = [], []
    for _ in range(int(n)):
        lab = bernoulli(p, rng)
        in0 = bernoulli(0.5, rng)
        in1 = in0 ^ lab
        if bernoulli(noise, rng):
            in1 = not in1
        data.append([in0 * 1.0, in1 * 1.0])
        labels.append(1 if lab else 0)
    return np.asarray(data, dtype=np.float32).reshape(-1, 2), np.asarray(labels, dtype=np.int64)


def make_balanced_1dim_test(n: int, rng=None):
    rng = _rng(rng)
    x = (rng.random(int(n)) < 0.5).astype(np.float32)
    return x.reshape(-1, 1), x.astype(np.int64)


def make_balanced_xor_test(n: int, rng=None):
    rng = _rng(rng)
    x = (rng.random((int(n), 2)) < 0.5)
    y = np.logical_xor(x[:, 0], x[:, 1]).astype(np.int64)
    return x.astype(np.float32), y


SCENARIOS = {
    "1dim": (make_unbalanced_1dim, make_balanced_1dim_test, 1),
    "xor": (make_unbalanced_xor, make_balanced_xor_test, 2),
}
