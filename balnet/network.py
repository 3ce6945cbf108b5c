from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from balnet.losses import WeightedMSELoss
from balnet.trainer import nop

# tanh output targets: one-hot mapped onto [TARGET_MIN, TARGET_MAX]
TARGET_MIN = -0.8
TARGET_MAX = 0.8


def _build_mlp(sizes: Sequence[int]):
    import torch.nn as nn
    if len(sizes) < 2:
        raise ValueError(f"need at least input and output size, got {list(sizes)}")
    layers = []
    for fan_in, fan_out in zip(sizes[:-1], sizes[1:]):
        layers += [nn.Linear(int(fan_in), int(fan_out)), nn.Tanh()]
    return nn.Sequential(*layers)


class Network:
    """Fully connected tanh network trained with Adagrad on (cost-weighted) MSE.

    Only what the balanced-cost training needs: predict, predict_label and
    train. `train` delegates to `balnet.trainer.train_network`.
    """

    def __init__(self, sizes: Sequence[int], lr: float = 0.01, device: str = "cpu", seed: Optional[int] = None):
        import torch
        if seed is not None:
            torch.manual_seed(int(seed))
        self.sizes = [int(s) for s in sizes]
        self.lr = float(lr)
        self.device = device
        self.model = _build_mlp(self.sizes).to(device)
        self.opt = self._make_optimizer()
        self.loss_fn = WeightedMSELoss()

    @classmethod
    def fully_connected(cls, sizes: Sequence[int], **kw):
        return cls(sizes, **kw)

    @property
    def in_dim(self) -> int:
        return self.sizes[0]

    @property
    def out_dim(self) -> int:
        return self.sizes[-1]

    def _make_optimizer(self):
        import torch
        return torch.optim.Adagrad(self.model.parameters(), lr=self.lr)

    def reset_weights(self):
        for m in self.model.modules():
            if hasattr(m, "reset_parameters"):
                m.reset_parameters()
        self.opt = self._make_optimizer()

    def encode_labels(self, labels):
        """One-hot targets in tanh range, shape (N, out_dim)."""
        import torch
        y = torch.as_tensor(np.asarray(labels, dtype=np.int64).reshape(-1))
        if y.numel() and (int(y.min()) < 0 or int(y.max()) >= self.out_dim):
            raise ValueError(f"labels must be in [0, {self.out_dim - 1}] for a {self.out_dim}-unit output")
        t = torch.full((y.numel(), self.out_dim), TARGET_MIN, dtype=torch.float32)
        if y.numel():
            t[torch.arange(y.numel()), y] = TARGET_MAX
        return t

    def forward(self, xb):
        return self.model(xb)

    def predict(self, x) -> np.ndarray:
        import torch
        xt = torch.as_tensor(np.asarray(x, dtype=np.float32)).to(self.device)
        single = xt.dim() == 1
        if single:
            xt = xt.unsqueeze(0)
        self.model.eval()
        with torch.no_grad():
            out = self.model(xt).cpu().numpy()
        return out[0] if single else out

    def predict_label(self, x) -> int:
        return int(np.argmax(self.predict(x)))

    def train(self, data, labels, batch_size: int = 1, epochs: int = 1, on_batch=nop, on_epoch=nop,
              reset_weights: bool = False, workers: int = 0, target_cost=None, **kw):
        from balnet.trainer import train_network
        return train_network(self, data, labels, batch_size=batch_size, epochs=epochs, on_batch=on_batch,
                             on_epoch=on_epoch, reset_weights=reset_weights, workers=workers,
                             target_cost=target_cost, **kw)

    def fit(self, *a, **kw):
        return self.train(*a, **kw)
