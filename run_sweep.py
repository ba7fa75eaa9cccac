"""
Config-driven sweep runner.

Usage:
    uv run python run_sweep.py
    uv run python run_sweep.py max_workers=16 kernel=numba mlflow.mode=local
    uv run python run_sweep.py total_samples=1000000,10000000 --multirun
"""

import logging
import sys
from pathlib import Path

import hydra
from hydra.core.hydra_config import HydraConfig
from omegaconf import DictConfig

from Quadrature import (
    CsvSink,
    DataFrameSink,
    IntegrationRequest,
    InvalidRequestError,
    MetricsRecorder,
    MlflowSink,
    SweepController,
)

log = logging.getLogger(__name__)


def _create_request(cfg: DictConfig) -> IntegrationRequest:
    """Create a validated request from config."""
    return IntegrationRequest(
        lower_bound=cfg.lower_bound,
        upper_bound=cfg.upper_bound,
        total_samples=cfg.total_samples,
        max_workers=cfg.max_workers,
        profile=cfg.get("profile", False),
    )


def _run(cfg: DictConfig, request: IntegrationRequest, sinks: list) -> DataFrameSink:
    frame_sink = DataFrameSink()
    controller = SweepController(
        request,
        kernel=cfg.get("kernel", "numpy"),
        seed=cfg.get("seed"),
        recorder=MetricsRecorder(*sinks, frame_sink),
    )
    controller.run()
    return frame_sink


def _log_results(cfg: DictConfig, request: IntegrationRequest, output: Path):
    """Run the sweep inside an MLflow run and attach the CSV as artifact."""
    from utils.mlflow.io import (
        log_artifact_file,
        log_parameters,
        setup_mlflow_tracking,
        start_mlflow_run_context,
    )

    setup_mlflow_tracking(mode=cfg.mlflow.mode)
    kernel = cfg.get("kernel", "numpy")
    run_name = f"{kernel}_n{request.total_samples}_p{request.max_workers}"

    with start_mlflow_run_context(
        experiment_name=cfg.get("experiment_name") or "default",
        parent_run_name=f"a{request.lower_bound}_b{request.upper_bound}",
        child_run_name=run_name,
    ):
        log_parameters({**request.to_mlflow(), "kernel": kernel, "seed": cfg.get("seed")})
        with open(output, "w", newline="") as f:
            frame_sink = _run(cfg, request, [CsvSink(f), MlflowSink()])
        log_artifact_file(output)
    return frame_sink


@hydra.main(config_path="Experiments/hydra-conf", config_name="config", version_base=None)
def main(cfg: DictConfig) -> None:
    """Entry point - one sweep per (multi)run."""
    try:
        request = _create_request(cfg)
    except InvalidRequestError as e:
        log.error(f"Invalid configuration: {e}")
        sys.exit(1)

    output = Path(HydraConfig.get().runtime.output_dir) / cfg.get("output", "scaling.csv")
    log.info(
        f"a={request.lower_bound}, b={request.upper_bound}, n={request.total_samples}, "
        f"max_workers={request.max_workers}, profile={request.profile}"
    )

    if cfg.mlflow.mode == "off":
        with open(output, "w", newline="") as f:
            frame_sink = _run(cfg, request, [CsvSink(f)])
    else:
        frame_sink = _log_results(cfg, request, output)

    df = frame_sink.frame
    best = df.loc[df["speedup"].idxmax()]
    log.info(
        f"Done: {len(df)} rounds, best speedup {best['speedup']:.2f} at "
        f"{int(best['num_threads'])} threads, saved to {output}"
    )


if __name__ == "__main__":
    main()
