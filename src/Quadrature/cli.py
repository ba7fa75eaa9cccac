"""Command-line entry point.

Usage:
    integrate a b n n_threads [profile]
    integrate 1 10 1000000 8 profile --kernel numba --output scaling.csv
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from .datastructures import IntegrationRequest
from .errors import ComputationError, InvalidRequestError
from .recorder import CsvSink, MetricsRecorder, MlflowSink
from .sweep import SweepController

log = logging.getLogger(__name__)

PROFILE_FLAG = "profile"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="integrate",
        description="Monte Carlo integration of sin(x)/x over [a, b] using worker threads",
    )
    parser.add_argument("lower", type=int, help="Lower limit a (nonzero)")
    parser.add_argument("upper", type=int, help="Upper limit b (nonzero, greater than a)")
    parser.add_argument("samples", type=int, help="Total number of samples")
    parser.add_argument("threads", type=int, help="Number of worker threads")
    parser.add_argument(
        "mode", nargs="?", default=None,
        help=f"Pass '{PROFILE_FLAG}' to time every thread count from 1 to n_threads",
    )
    parser.add_argument("--kernel", choices=["numpy", "numba"], default="numpy",
                        help="Integrand kernel (default: numpy)")
    parser.add_argument("--seed", type=int, default=None, help="Root random seed")
    parser.add_argument("--output", type=Path, default=None,
                        help="Write CSV to this file instead of stdout")
    parser.add_argument("--mlflow", choices=["off", "local", "databricks"], default="off",
                        help="Also log params and metrics to MLflow (default: off)")
    parser.add_argument("--experiment-name", type=str, default="Quadrature-Scaling",
                        help="MLflow experiment name")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every round")
    return parser


def request_from_args(args: argparse.Namespace) -> IntegrationRequest:
    """Build a validated request from parsed arguments."""
    if args.mode not in (None, PROFILE_FLAG):
        raise InvalidRequestError(
            f"Wrong format: unrecognized flag '{args.mode}' (expected '{PROFILE_FLAG}')"
        )
    return IntegrationRequest(
        lower_bound=args.lower,
        upper_bound=args.upper,
        total_samples=args.samples,
        max_workers=args.threads,
        profile=args.mode == PROFILE_FLAG,
    )


def parse_request(argv: Optional[List[str]] = None) -> Tuple[IntegrationRequest, argparse.Namespace]:
    """Parse and validate arguments. Invalid input exits via argparse (status 2)."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        request = request_from_args(args)
    except InvalidRequestError as e:
        parser.error(str(e))
    return request, args


def _run(request: IntegrationRequest, args: argparse.Namespace, stream) -> None:
    sinks = [CsvSink(stream)]
    if args.mlflow == "off":
        SweepController(request, kernel=args.kernel, seed=args.seed,
                        recorder=MetricsRecorder(*sinks)).run()
        return

    from utils.mlflow.io import log_parameters, setup_mlflow_tracking, start_mlflow_run_context

    setup_mlflow_tracking(mode=args.mlflow)
    run_name = f"{args.kernel}_n{request.total_samples}_p{request.max_workers}"
    with start_mlflow_run_context(
        experiment_name=args.experiment_name,
        parent_run_name=f"a{request.lower_bound}_b{request.upper_bound}",
        child_run_name=run_name,
    ):
        log_parameters({**request.to_mlflow(), "kernel": args.kernel, "seed": args.seed})
        sinks.append(MlflowSink())
        SweepController(request, kernel=args.kernel, seed=args.seed,
                        recorder=MetricsRecorder(*sinks)).run()


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``integrate`` console script."""
    request, args = parse_request(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
    )

    try:
        if args.output is None:
            _run(request, args, sys.stdout)
        else:
            with open(args.output, "w", newline="") as f:
                _run(request, args, f)
            log.info(f"Results saved to: {args.output}")
    except ComputationError as e:
        log.error(f"Sweep aborted: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
