"""
Thread Scaling Plots
====================

Speedup and parallel efficiency (speedup / threads) versus thread count,
from the output of compute_scaling.py.
"""

# %%
# Setup
# -----

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from Quadrature import get_project_root

sns.set_theme(style="whitegrid")

project_root = get_project_root()
data_path = project_root / "data" / "scaling" / "thread_scaling.parquet"
fig_dir = project_root / "figures" / "scaling"
fig_dir.mkdir(parents=True, exist_ok=True)

df = pd.read_parquet(data_path)
max_threads = int(df["num_threads"].max())

# %%
# Speedup and Efficiency
# ----------------------

fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(14, 5))

sns.lineplot(data=df, x="num_threads", y="speedup", hue="kernel", marker="o", ax=ax1)
ax1.plot([1, max_threads], [1, max_threads], "k--", alpha=0.3, label="Ideal")
ax1.set_xlabel("Number of Threads")
ax1.set_ylabel("Speedup (vs 1 thread)")
ax1.set_title("Thread Scaling")
ax1.legend()

sns.lineplot(data=df, x="num_threads", y="efficiency", hue="kernel", marker="o", ax=ax2)
ax2.axhline(y=1, color="k", linestyle="--", alpha=0.3)
ax2.set_xlabel("Number of Threads")
ax2.set_ylabel("Parallel Efficiency")
ax2.set_title("Parallel Efficiency")

plt.tight_layout()
fig.savefig(fig_dir / "thread_scaling.pdf", bbox_inches="tight")
print(f"Saved to: {fig_dir / 'thread_scaling.pdf'}")
