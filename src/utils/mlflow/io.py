"""MLflow I/O utilities for experiment tracking and fetching runs.

This module provides helpers for:
- Setting up MLflow tracking (local or Databricks).
- Orchestrating MLflow runs (context manager for parent/nested runs).
- Logging parameters, metrics, and artifacts.
- Retrieving sweep runs from MLflow.

Messages go to the module logger rather than stdout, since the CLI may be
streaming CSV there.
"""

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import mlflow
import pandas as pd

log = logging.getLogger(__name__)

PROJECT_PREFIX = "/Shared/Quadrature-Scaling"


def setup_mlflow_tracking(mode: str = "local"):
    """
    Configures MLflow tracking.

    Parameters
    ----------
    mode : str
        "databricks" or "local". Local mode stores runs in ``mlflow.db``
        under the current working directory.
    """
    if mode == "databricks":
        try:
            mlflow.login(backend="databricks", interactive=False)
            mlflow.set_tracking_uri("databricks")
            log.info("Connected to Databricks MLflow tracking.")
        except Exception as e:
            raise RuntimeError(
                "MLflow Databricks setup failed. Ensure credentials are configured."
            ) from e
    elif mode == "local":
        # Current MLflow releases refuse the plain ./mlruns file store
        db_uri = f"sqlite:///{Path.cwd() / 'mlflow.db'}"
        mlflow.set_tracking_uri(db_uri)
        log.info(f"Using local SQLite MLflow tracking backend: {db_uri}")
    else:
        log.warning(
            f"Unknown MLflow mode '{mode}'. Using existing URI: {mlflow.get_tracking_uri()}"
        )


def get_mlflow_client() -> mlflow.tracking.MlflowClient:
    """Get an MLflow tracking client."""
    return mlflow.tracking.MlflowClient()


def _full_experiment_name(experiment_name: str, project_prefix: str) -> str:
    if mlflow.get_tracking_uri() == "databricks" and not experiment_name.startswith("/"):
        return f"{project_prefix}/{experiment_name}"
    return experiment_name


@contextmanager
def start_mlflow_run_context(
    experiment_name: str,
    parent_run_name: str,
    child_run_name: str,
    project_prefix: str = PROJECT_PREFIX,
):
    """
    Context manager to start a nested MLflow run.

    Child runs with the same parent name are grouped under one parent run,
    reused across invocations.
    """
    experiment_name = _full_experiment_name(experiment_name, project_prefix)
    mlflow.set_experiment(experiment_name)
    log.info(f"Using MLflow experiment: {experiment_name}")

    client = get_mlflow_client()
    exp = mlflow.get_experiment_by_name(experiment_name)

    parent_runs = client.search_runs(
        experiment_ids=[exp.experiment_id],
        filter_string=f"tags.mlflow.runName = '{parent_run_name}' AND tags.is_parent = 'true'",
        max_results=1,
    )
    parent_run_id = parent_runs[0].info.run_id if parent_runs else None

    with mlflow.start_run(
        run_id=parent_run_id, run_name=parent_run_name, tags={"is_parent": "true"}
    ):
        with mlflow.start_run(run_name=child_run_name, nested=True) as child_mlflow_run:
            # Tag run with environment (HPC vs local) for easy filtering
            env = (
                "hpc"
                if os.environ.get("LSB_JOBID") or os.environ.get("SLURM_JOB_ID")
                else "local"
            )
            mlflow.set_tag("environment", env)
            log.info(
                f"Started MLflow run '{child_mlflow_run.info.run_name}' "
                f"({child_mlflow_run.info.run_id}) [{env}]"
            )
            yield child_mlflow_run


def log_parameters(params: dict):
    """Log a dictionary of parameters to the active MLflow run, filtering out None values."""
    mlflow.log_params({k: v for k, v in params.items() if v is not None})


def log_metrics_dict(metrics: dict, step: Optional[int] = None):
    """Log a dictionary of metrics to the active MLflow run, filtering out None values."""
    filtered_metrics = {k: v for k, v in metrics.items() if v is not None}
    mlflow.log_metrics(filtered_metrics, step=step)


def log_artifact_file(filepath: Path):
    """Log a file as an artifact to the active MLflow run."""
    filepath = Path(filepath)
    if filepath.exists():
        mlflow.log_artifact(str(filepath))
        log.info(f"Logged artifact: {filepath.name}")
    else:
        log.warning(f"Artifact file not found at {filepath}")


def load_runs(
    experiment: str,
    exclude_parent_runs: bool = True,
    project_prefix: str = PROJECT_PREFIX,
) -> pd.DataFrame:
    """Load sweep runs from all MLflow experiments matching the name.

    Parameters
    ----------
    experiment : str
        Experiment name (will be prefixed for Databricks)
    exclude_parent_runs : bool
        Exclude parent runs (keep only child/nested runs)
    project_prefix : str
        Databricks workspace prefix for experiment names
    """
    full_experiment_name = _full_experiment_name(experiment, project_prefix)

    # There can be several experiments with the same name
    client = get_mlflow_client()
    all_experiments = client.search_experiments(
        filter_string=f"name = '{full_experiment_name}'"
    )
    if not all_experiments:
        return pd.DataFrame()

    df = mlflow.search_runs(
        experiment_ids=[exp.experiment_id for exp in all_experiments],
        order_by=["start_time DESC"],
    )

    # Filter out parent runs in pandas (MLflow filter doesn't handle None well)
    if exclude_parent_runs and "tags.is_parent" in df.columns:
        df = df[df["tags.is_parent"] != "true"]

    return df
