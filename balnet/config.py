from __future__ import annotations

from dataclasses import dataclass
import os


@dataclass
class Config:
    # Data
    scenario: str = "1dim"
    samples: int = 1000
    test_samples: int = 1000
    seed: int = 0
    # Training
    epochs: int = 100
    batch_size: int = 10
    lr: float = 0.01
    hidden: int = 10
    balance_w: float = 1.0
    device: str = "cpu"
    workers: int = 0
    # Telemetry
    rich_progress: bool = False
    # MLflow
    mlflow: bool = False
    mlflow_uri: str | None = None
    mlflow_exp: str = "balnet"
    mlflow_run_name: str | None = None


def make_config(args) -> Config:
    # Environment overlays (explicit, minimal)
    seed = int(os.getenv('BALNET_SEED', getattr(args, 'seed', 0) or 0))
    device = os.getenv('BALNET_DEVICE', str(getattr(args, 'device', 'cpu')))
    return Config(
        scenario=str(getattr(args, 'scenario', '1dim')),
        samples=int(getattr(args, 'samples', 1000) or 1000),
        test_samples=int(getattr(args, 'test_samples', 1000) or 1000),
        seed=seed,
        epochs=int(getattr(args, 'epochs', 100) or 0),
        batch_size=int(getattr(args, 'batch_size', 10) or 1),
        lr=float(getattr(args, 'lr', 0.01) or 0.01),
        hidden=int(getattr(args, 'hidden', 10) or 10),
        balance_w=float(getattr(args, 'balance_w', 1.0)),
        device=device,
        workers=int(getattr(args, 'workers', 0) or 0),
        rich_progress=bool(getattr(args, 'rich_progress', False)),
        mlflow=bool(getattr(args, 'mlflow', False)),
        mlflow_uri=getattr(args, 'mlflow_uri', None),
        mlflow_exp=str(getattr(args, 'mlflow_exp', 'balnet')),
        mlflow_run_name=getattr(args, 'mlflow_run_name', None),
    )
