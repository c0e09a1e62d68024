from __future__ import annotations
import itertools, statistics, os
from typing import Dict, Any, List, Optional
import csv
from .tsp import TSPInstance
from .ant_system import AntSystem


def run_repeated_trials(instance: TSPInstance, n_iterations: int, n_runs: int = 10, base_seed: int = 42,
                        **system_kwargs):
    """Run independent seeded AntSystem searches; returns summary stats and per-run details."""
    lengths = []
    times = []
    best_tours = []
    for r in range(n_runs):
        system = AntSystem(instance, seed=base_seed + r, **system_kwargs)
        res = system.run(n_iterations)
        lengths.append(res.best_length)
        times.append(res.elapsed_sec)
        best_tours.append(res.best_tour)
    stats = {
        "mean_length": statistics.mean(lengths),
        "std_length": statistics.stdev(lengths) if len(lengths) > 1 else 0.0,
        "min_length": min(lengths),
        "max_length": max(lengths),
        "median_length": statistics.median(lengths),
        "mean_time": statistics.mean(times),
        "n_runs": n_runs,
    }
    optimum = instance.optimal_tour_length()
    if optimum:
        stats["gap_to_optimum"] = (stats["min_length"] - optimum) / optimum
    return stats, list(zip(lengths, times, best_tours))


def run_parameter_sweep(instance: TSPInstance, param_grid: Dict[str, List[Any]], n_iterations: int,
                        n_runs: int = 5, base_seed: int = 100, csv_path: Optional[str] = None,
                        **system_kwargs):
    """Repeated trials for every combination in ``param_grid`` (keys are AntSystem keyword arguments)."""
    keys = sorted(param_grid.keys())
    rows = []
    for values in itertools.product(*[param_grid[k] for k in keys]):
        combo = dict(zip(keys, values))
        stats, _ = run_repeated_trials(instance, n_iterations, n_runs=n_runs, base_seed=base_seed,
                                       **{**system_kwargs, **combo})
        row = {**combo, **stats}
        rows.append(row)
        if csv_path is not None:
            write_header = not os.path.exists(csv_path)
            with open(csv_path, "a", newline="") as f:
                w = csv.DictWriter(f, fieldnames=row.keys())
                if write_header:
                    w.writeheader()
                w.writerow(row)
    return rows
