"""Utility modules for experiment tracking.

Submodules:
- mlflow: MLflow run orchestration, logging and run fetching

Import examples:
    from utils import mlflow       # MLflow utilities
    from utils.mlflow.io import start_mlflow_run_context
"""

import warnings

# Suppress MLflow FutureWarning about filesystem backend deprecation
warnings.filterwarnings("ignore", category=FutureWarning, module="mlflow")

from . import mlflow  # noqa: E402

__all__ = ["mlflow"]
