"""
Experiment tracking helpers (optional MLflow backend).

MLflow is only imported when tracking is requested, so it stays an optional
dependency (``pip install .[tracking]``).
"""
from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional


@contextmanager
def maybe_mlflow_run(enabled: bool, run_name: str, log_dir: Optional[Path] = None) -> Iterator[None]:
    if not enabled:
        yield None
        return
    try:
        import mlflow  # type: ignore

        if log_dir is not None:
            mlflow.set_tracking_uri((log_dir.resolve() / "mlruns").as_uri())
        run = mlflow.start_run(run_name=run_name)
    except Exception:
        # Soft-fail: enumerate without tracking
        yield None
        return
    with run:
        yield None


def log_params(params: Dict[str, object]) -> None:
    try:
        import mlflow  # type: ignore

        if mlflow.active_run() is None:
            return
        mlflow.log_params(params)
    except Exception:
        pass


def log_metrics(metrics: Dict[str, float], step: Optional[int] = None) -> None:
    try:
        import mlflow  # type: ignore

        if mlflow.active_run() is None:
            return
        mlflow.log_metrics(metrics, step=step)
    except Exception:
        pass


def log_artifact(path: Path, artifact_path: Optional[str] = None) -> None:
    try:
        import mlflow  # type: ignore

        if mlflow.active_run() is None:
            return
        mlflow.log_artifact(str(path), artifact_path=artifact_path)
    except Exception:
        pass
