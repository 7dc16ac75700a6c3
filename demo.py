"""
Linear Probe Map Demo -- Insert timing against dict, scaling with table size,
and capacity growth under bulk insertion.

Generates:
- viz/*.png -- Individual visualization files
"""

import sys
import time
from pathlib import Path

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))
from linear_probe_map import LinearProbeMap

SEED = 42
N_KEYS = 10000
N_RUNS = 3
SIZES = [500, 1000, 2000, 5000, 10000]

VIZ_DIR = Path(__file__).parent / "viz"
VIZ_DIR.mkdir(exist_ok=True)

COLORS = {
    "blue": "#3498db",
    "red": "#e74c3c",
    "green": "#27ae60",
    "dark": "#2c3e50",
}


def time_probe_map(n):
    table = LinearProbeMap()
    start = time.perf_counter()
    for i in range(n):
        table.insert(str(i), i * i)
    return time.perf_counter() - start


def time_dict(n):
    table = {}
    start = time.perf_counter()
    for i in range(n):
        table[str(i)] = i * i
    return time.perf_counter() - start


# ---------------------------------------------------------------------------
# Example 1: Bulk insert timing
# ---------------------------------------------------------------------------
def example_1_bulk_insert():
    """Insert N_KEYS string keys into both tables and compare wall time."""
    print("=" * 60)
    print(f"Example 1: Bulk Insert of {N_KEYS:,} Keys")
    print("=" * 60)

    probe_runs = np.array([time_probe_map(N_KEYS) for _ in range(N_RUNS)])
    dict_runs = np.array([time_dict(N_KEYS) for _ in range(N_RUNS)])

    print(f"MY HASHMAP: {np.median(probe_runs)}secs")
    print("__________")
    print(f"STD HASHMAP: {np.median(dict_runs)}secs")
    print(f"\n  Slowdown vs dict: {np.median(probe_runs) / np.median(dict_runs):.1f}x")

    fig, ax = plt.subplots(figsize=(8, 6))
    x = np.arange(N_RUNS)
    ax.bar(x - 0.15, probe_runs * 1e3, 0.3, label="LinearProbeMap",
           color=COLORS["blue"], edgecolor="white")
    ax.bar(x + 0.15, dict_runs * 1e3, 0.3, label="dict",
           color=COLORS["green"], edgecolor="white")
    ax.set_xticks(x)
    ax.set_xticklabels([f"Run {i + 1}" for i in range(N_RUNS)])
    ax.set_ylabel("Elapsed (ms)")
    ax.set_title(f"Inserting {N_KEYS:,} String Keys", fontsize=10, fontweight="bold")
    ax.legend()
    ax.grid(True, alpha=0.3, axis="y")
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "01_bulk_insert.png", dpi=150)
    plt.close(fig)

    return fig


# ---------------------------------------------------------------------------
# Example 2: Scaling with key count
# ---------------------------------------------------------------------------
def example_2_scaling():
    """Per-key insert cost as the number of keys grows."""
    print("\n" + "=" * 60)
    print("Example 2: Insert Cost vs Key Count")
    print("=" * 60)

    probe_per_key = []
    dict_per_key = []
    for n in SIZES:
        t_probe = np.median([time_probe_map(n) for _ in range(N_RUNS)])
        t_dict = np.median([time_dict(n) for _ in range(N_RUNS)])
        probe_per_key.append(t_probe / n * 1e6)
        dict_per_key.append(t_dict / n * 1e6)
        print(f"  n={n:>6,}: probe map {probe_per_key[-1]:.3f} us/key, "
              f"dict {dict_per_key[-1]:.3f} us/key")

    fig, ax = plt.subplots(figsize=(8, 6))
    ax.plot(SIZES, probe_per_key, "o-", color=COLORS["blue"], linewidth=2, label="LinearProbeMap")
    ax.plot(SIZES, dict_per_key, "s-", color=COLORS["green"], linewidth=2, label="dict")
    ax.set_xscale("log")
    ax.set_xlabel("Keys inserted")
    ax.set_ylabel("Microseconds per insert")
    ax.set_title("Insert Cost per Key", fontsize=10, fontweight="bold")
    ax.legend()
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "02_scaling.png", dpi=150)
    plt.close(fig)

    return fig


# ---------------------------------------------------------------------------
# Example 3: Capacity growth
# ---------------------------------------------------------------------------
def example_3_growth():
    """Capacity only doubles, and only once the table is saturated."""
    print("\n" + "=" * 60)
    print("Example 3: Capacity Growth")
    print("=" * 60)

    rng = np.random.default_rng(SEED)
    keys = rng.permutation(2000)

    table = LinearProbeMap()
    capacities = []
    loads = []
    for i, key in enumerate(keys, start=1):
        before = table.capacity
        table.insert(int(key), i)
        capacities.append(table.capacity)
        loads.append(i / table.capacity)
        if table.capacity != before:
            print(f"  after {i:>5,} inserts: {before:>5,} -> {table.capacity:>5,} slots "
                  f"(load before growth {(i - 1) / before:.2f})")

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    axes[0].step(np.arange(1, len(keys) + 1), capacities, where="post", color=COLORS["dark"])
    axes[0].set_xlabel("Inserts")
    axes[0].set_ylabel("Capacity")
    axes[0].set_title("Capacity Doubles on a Full Probe Cycle", fontsize=10, fontweight="bold")
    axes[0].grid(True, alpha=0.3)

    axes[1].plot(np.arange(1, len(keys) + 1), loads, color=COLORS["red"])
    axes[1].axhline(1.0, color="black", linewidth=0.5, linestyle="--")
    axes[1].set_xlabel("Inserts")
    axes[1].set_ylabel("Load factor")
    axes[1].set_title("Load Factor Reaches 1.0 Before Growth", fontsize=10, fontweight="bold")
    axes[1].grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "03_growth.png", dpi=150)
    plt.close(fig)

    return fig


def main():
    print("\n" + "#" * 60)
    print("#" + " " * 19 + "LINEAR PROBE MAP DEMO" + " " * 18 + "#")
    print("#" * 60)
    print(f"\nRandom seed: {SEED}")
    print(f"Output directory: {VIZ_DIR}")

    example_1_bulk_insert()
    example_2_scaling()
    example_3_growth()

    print("\n" + "=" * 60)
    print("DEMO COMPLETE")
    print("=" * 60)
    print(f"\nGenerated files:")
    for f in sorted(VIZ_DIR.glob("*.png")):
        print(f"  - {f.relative_to(VIZ_DIR.parent)}")


if __name__ == "__main__":
    main()
