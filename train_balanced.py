#!/usr/bin/env python3
import argparse

import numpy as np

from balnet.network import Network
from balnet.ports import Classifier
from balnet.synth import SCENARIOS
from balnet.target_cost import calculate_label_counts, balanced_class_weights, create_balanced_target_cost


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Train uniform-cost vs balanced-cost networks on unbalanced synthetic data")
    p.add_argument("--scenario", choices=sorted(SCENARIOS), default="1dim", help="1dim: noisy identity; xor: noisy xor")
    p.add_argument("--samples", type=int, default=1000, help="training samples")
    p.add_argument("--test-samples", dest="test_samples", type=int, default=1000, help="balanced test samples")
    p.add_argument("--epochs", type=int, default=100)
    p.add_argument("--batch-size", type=int, default=10)
    p.add_argument("--lr", type=float, default=0.01, help="Adagrad learning rate")
    p.add_argument("--hidden", type=int, default=10, help="hidden layer width")
    p.add_argument("--balance-w", dest="balance_w", type=float, default=1.0, help="blend factor: 0 uniform cost, 1 fully balanced")
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--device", choices=["auto","cpu","cuda"], default="cpu")
    p.add_argument("--workers", type=int, default=0, help="dataloader workers")
    p.add_argument("--rich-progress", action="store_true", help="show rich progress bars for epochs")
    # MLflow logging
    p.add_argument("--mlflow", action="store_true", help="Log run to MLflow (requires mlflow installed)")
    p.add_argument("--mlflow-uri", type=str, default=None, help="MLflow tracking URI (defaults to env if unset)")
    p.add_argument("--mlflow-exp", type=str, default="balnet", help="MLflow experiment name")
    p.add_argument("--mlflow-run-name", type=str, default=None, help="Optional MLflow run name")
    return p.parse_args(argv)


def _print_class_table(cons, labels, w: float):
    from rich.table import Table
    counts = calculate_label_counts(labels)
    weights = balanced_class_weights(counts)
    t = Table(title=f"Classes (w={w:g})")
    t.add_column("label"); t.add_column("count"); t.add_column("balanced_w"); t.add_column("cost")
    for lab, (n, bw) in enumerate(zip(counts, weights)):
        cost = (1.0 - w) + w * bw if n > 0 else 0.0
        t.add_row(str(lab), str(int(n)), f"{bw:.4f}", f"{cost:.4f}")
    cons.print(t)


def _count_errors(net: Classifier, X, y):
    return int(sum(1 for x, t in zip(X, y) if net.predict_label(x) != int(t)))


def train(args, cons=None):
    from rich.console import Console
    from balnet.config import make_config
    from balnet.telemetry import Telemetry, setup_mlflow
    from balnet.trainer import _device_from_arg, _init_progress, train_network

    cfg = make_config(args)
    args.cfg = cfg
    cons = cons or Console()
    make_train, make_test, in_dim = SCENARIOS[cfg.scenario]
    device = _device_from_arg(cfg.device)
    if not (0.0 <= cfg.balance_w <= 1.0):
        cons.print(f"[yellow]--balance-w={cfg.balance_w} is outside [0, 1]; extrapolating cost linearly[/]")

    rng = np.random.default_rng(cfg.seed)
    X, y = make_train(cfg.samples, rng=rng)
    Xte, yte = make_test(cfg.test_samples, rng=rng)
    cons.print(f"[dim]Scenario: {cfg.scenario}  Train: {len(y)}  Test: {len(yte)}  label1={int(y.sum())}[/]")
    _print_class_table(cons, y, cfg.balance_w)

    target_cost = create_balanced_target_cost(y, cfg.balance_w)
    sizes = [in_dim, cfg.hidden, 2]
    net_uniform = Network.fully_connected(sizes, lr=cfg.lr, device=device, seed=cfg.seed)
    net_balanced = Network.fully_connected(sizes, lr=cfg.lr, device=device, seed=cfg.seed)

    mlflow = setup_mlflow(cfg)
    telemetry = Telemetry(cons, mlflow=mlflow)
    telemetry.params({"scenario": cfg.scenario, "samples": cfg.samples, "epochs": cfg.epochs,
                      "batch_size": cfg.batch_size, "lr": cfg.lr, "balance_w": cfg.balance_w, "seed": cfg.seed})
    prog = _init_progress(cfg)
    kw = dict(batch_size=cfg.batch_size, epochs=cfg.epochs, workers=cfg.workers, seed=cfg.seed,
              cons=cons, telemetry=telemetry, prog=prog)
    try:
        if prog:
            with prog:
                r_u = train_network(net_uniform, X, y, target_cost=None, name="uniform", **kw)
                r_b = train_network(net_balanced, X, y, target_cost=target_cost, name="balanced", **kw)
        else:
            r_u = train_network(net_uniform, X, y, target_cost=None, name="uniform", **kw)
            r_b = train_network(net_balanced, X, y, target_cost=target_cost, name="balanced", **kw)

        err_u = _count_errors(net_uniform, Xte, yte)
        err_b = _count_errors(net_balanced, Xte, yte)
        telemetry.metric("test_errors_uniform", err_u)
        telemetry.metric("test_errors_balanced", err_b)
    finally:
        telemetry.close()

    from rich.table import Table
    rt = Table(title="Test errors (balanced test set)")
    rt.add_column("cost"); rt.add_column("final_loss"); rt.add_column("errors"); rt.add_column("error_rate")
    for name, r, e in (("uniform", r_u, err_u), ("balanced", r_b, err_b)):
        rt.add_row(name, f"{r.final_loss:.4f}" if r.final_loss is not None else "-", str(e), f"{e / max(1, len(yte)):.3f}")
    cons.print(rt)
    return {"uniform": err_u, "balanced": err_b}


def main():
    args = parse_args()
    train(args)


if __name__ == "__main__":
    main()
