from __future__ import annotations

from typing import Any, Optional

from balnet.ports import MetricSink


class Telemetry:
    def __init__(self, console: Any, mlflow: Optional[MetricSink] = None):
        self.cons = console
        self.mlflow = mlflow

    # Scalars ---------------------------------------------------------------
    def metric(self, name: str, value: float, step: Optional[int] = None):
        if self.mlflow is not None:
            try:
                self.mlflow.log_metric(name, float(value), step=step)
            except Exception:
                pass

    def params(self, params: dict):
        if self.mlflow is None:
            return
        try:
            self.mlflow.log_params(dict(params))
        except Exception:
            pass

    def close(self):
        if self.mlflow is None:
            return
        try:
            self.mlflow.end_run()
        except Exception:
            pass


def setup_mlflow(args):
    import os as _os
    mlflow = None
    if bool(getattr(args, 'mlflow', False)) and _os.getenv('BALNET_MLFLOW_DISABLE', '') != '1':
        try:
            import mlflow as _mlf
        except Exception as e:
            raise RuntimeError("--mlflow set but mlflow is not installed") from e
        if getattr(args, 'mlflow_uri', None):
            _mlf.set_tracking_uri(args.mlflow_uri)
        _mlf.set_experiment(getattr(args, 'mlflow_exp', 'balnet'))
        run_name = getattr(args, 'mlflow_run_name', None) or f"balanced|{getattr(args, 'scenario', '1dim')}"
        _mlf.start_run(run_name=run_name)
        mlflow = _mlf
    return mlflow
