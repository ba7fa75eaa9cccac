"""
Thread Scaling Data
===================

Profile sweep (1..max threads) of the sin(x)/x Monte Carlo integral for
both kernels. The NumPy kernel holds the GIL for part of each batch, the
Numba kernel releases it, so the two curves separate as threads are added.

Usage:
    uv run python Experiments/scaling/compute_scaling.py
    uv run python Experiments/scaling/compute_scaling.py --samples 10000000 --max-threads 16
"""

import argparse
import logging
import os

import pandas as pd

from Quadrature import (
    DataFrameSink,
    IntegrationRequest,
    MetricsRecorder,
    SweepController,
    get_project_root,
)

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

parser = argparse.ArgumentParser(description="Thread scaling sweep for both kernels")
parser.add_argument("--samples", type=int, default=4_000_000, help="Total samples per round")
parser.add_argument("--max-threads", type=int, default=os.cpu_count() or 4)
parser.add_argument("--repeats", type=int, default=3, help="Sweeps per kernel")
parser.add_argument("--seed", type=int, default=2024)
args = parser.parse_args()

request = IntegrationRequest(1, 10, args.samples, args.max_threads, profile=True)

# %%
# Run sweeps
# ----------

frames = []
for kernel in ["numpy", "numba"]:
    for repeat in range(args.repeats):
        sink = DataFrameSink()
        SweepController(
            request, kernel=kernel, seed=args.seed + repeat, recorder=MetricsRecorder(sink)
        ).run()
        df = sink.frame
        df["kernel"] = kernel
        df["repeat"] = repeat
        frames.append(df)

# %%
# Save Results
# ------------

data_dir = get_project_root() / "data" / "scaling"
data_dir.mkdir(parents=True, exist_ok=True)
output_path = data_dir / "thread_scaling.parquet"

df = pd.concat(frames, ignore_index=True)
df.to_parquet(output_path, index=False)

print(df.groupby(["kernel", "num_threads"])[["time", "speedup", "efficiency"]].median())
print(f"\nSaved to: {output_path}")
