from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from balnet.ports import Console
from balnet.telemetry import Telemetry


@dataclass
class TrainResult:
    epoch_losses: list[float] = field(default_factory=list)
    seen: int = 0

    @property
    def final_loss(self) -> float | None:
        return self.epoch_losses[-1] if self.epoch_losses else None


def nop():
    pass


def _device_from_arg(arg: str):
    import torch
    if arg == "auto":
        return "cuda" if torch.cuda.is_available() else "cpu"
    if str(arg).startswith("cuda") and not torch.cuda.is_available():
        raise RuntimeError("CUDA requested but not available. Install GPU PyTorch or use --device cpu.")
    return arg


def _init_progress(args):
    if bool(getattr(args, 'rich_progress', False)):
        from rich.progress import Progress, BarColumn, TimeElapsedColumn, TimeRemainingColumn
        return Progress("[progress.description]{task.description}", BarColumn(), "{task.completed}/{task.total}", "{task.percentage:>3.0f}%", TimeElapsedColumn(), TimeRemainingColumn())
    return None


def _check_inputs(net, data, labels, target_cost):
    # fail before any step; never truncate or pad
    n = len(labels)
    if len(data) != n:
        raise ValueError(f"data/labels length mismatch: {len(data)} vs {n}")
    X = np.asarray(data, dtype=np.float32)
    if n and (X.ndim != 2 or X.shape[1] != net.in_dim):
        raise ValueError(f"expected inputs of shape (N, {net.in_dim}), got {X.shape}")
    C = None
    if target_cost is not None:
        C = np.asarray(target_cost, dtype=np.float32)
        rows = C.shape[0] if C.ndim else 0
        if rows != n or (n and C.ndim != 2):
            raise ValueError(f"target_cost must have one row per label: {rows} rows vs {n} labels")
        if n and C.shape[1] != net.out_dim:
            raise ValueError(f"target_cost width {C.shape[1]} does not match network output size {net.out_dim}")
    return X, C


def _make_loader(X, T, C, batch_size: int, workers: int, seed: Optional[int]):
    import torch
    from torch.utils.data import DataLoader, TensorDataset
    tensors = [torch.from_numpy(X), T]
    if C is not None:
        tensors.append(torch.from_numpy(C))
    g = None
    if seed is not None:
        g = torch.Generator(); g.manual_seed(int(seed))
    return DataLoader(TensorDataset(*tensors), batch_size=max(1, int(batch_size)), shuffle=True,
                      generator=g, num_workers=int(workers or 0))


def _train_epoch(net, dl, device, on_batch):
    net.model.train()
    loss_sum, seen = 0.0, 0
    for batch in dl:
        xb, tb = batch[0].to(device), batch[1].to(device)
        # None branch: uniform cost, plain MSE
        cb = batch[2].to(device) if len(batch) > 2 else None
        net.opt.zero_grad(set_to_none=True)
        loss = net.loss_fn(net.forward(xb), tb, cb)
        loss.backward(); net.opt.step()
        loss_sum += float(loss.item()) * xb.size(0); seen += xb.size(0)
        on_batch()
    return loss_sum / max(1, seen), seen


def train_network(net, data, labels, batch_size: int = 1, epochs: int = 1, on_batch=nop, on_epoch=nop,
                  reset_weights: bool = False, workers: int = 0, target_cost=None, seed: Optional[int] = None,
                  cons: Optional[Console] = None, telemetry: Optional[Telemetry] = None, prog=None,
                  name: str = "train") -> TrainResult:
    """Mini-batch training with an optional per-sample target cost.

    target_cost, when given, is an (N, out_dim) array parallel to `labels`;
    each sample's loss terms are scaled by its row. None means uniform cost.
    The array is copied into a tensor once and never written.
    """
    X, C = _check_inputs(net, data, labels, target_cost)
    res = TrainResult()
    if len(labels) == 0:
        return res
    if reset_weights:
        net.reset_weights()
    T = net.encode_labels(labels)
    dl = _make_loader(X, T, C, batch_size, workers, seed)
    device = getattr(net, 'device', 'cpu')
    cost_kind = "uniform" if C is None else "weighted"
    if cons is not None:
        cons.print(f"[dim]{name}: samples={len(labels)} batches={len(dl)} epochs={epochs} cost={cost_kind}[/]")
    task = prog.add_task(name, total=int(epochs)) if prog is not None else None
    for ep in range(1, int(epochs) + 1):
        ep_loss, seen = _train_epoch(net, dl, device, on_batch)
        res.epoch_losses.append(ep_loss); res.seen += seen
        if telemetry is not None:
            telemetry.metric(f"{name}_loss", ep_loss, step=ep)
        if cons is not None and prog is None:
            step_print = max(1, int(epochs) // 5)
            if ep % step_print == 0 or ep == int(epochs):
                cons.print(f"[dim]  {name} epoch {ep}/{epochs} loss={ep_loss:.4f}[/]")
        if task is not None:
            prog.update(task, advance=1)
        on_epoch()
    if task is not None:
        prog.remove_task(task)
    return res
