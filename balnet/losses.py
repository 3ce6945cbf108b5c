"""MSE loss with optional per-sample target cost.

The gradient of the per-sample loss w.r.t. the network output is
cost * (y - t), so a cost vector scales backprop element-wise. No cost
(None) is the uniform case and matches plain MSE exactly.
"""
from __future__ import annotations

from typing import Optional


def mse(y, t):
    return 0.5 * ((y - t) ** 2).sum(dim=1).mean()


def weighted_mse(y, t, cost: Optional[object] = None):
    if cost is None:
        return mse(y, t)
    if tuple(cost.shape) != tuple(y.shape):
        raise ValueError(f"target cost shape {tuple(cost.shape)} does not match output shape {tuple(y.shape)}")
    return 0.5 * (cost * (y - t) ** 2).sum(dim=1).mean()


class WeightedMSELoss:
    """Callable loss object: loss_fn(y, t, cost=None)."""

    def __call__(self, y, t, cost=None):
        return weighted_mse(y, t, cost)
