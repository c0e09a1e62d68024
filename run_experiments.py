# run_experiments.py
import os, json, argparse, csv, logging
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from antsim import TSPInstance, AntSystem, PheromoneModel
from antsim.experiments import run_repeated_trials, run_parameter_sweep
from antsim.stats import CSV_HEADER

OUTDIR = os.path.dirname(os.path.abspath(__file__))
SELECTOR_NAMES = ["greedy", "random", "roulette"]


def ensure(path: str) -> str:
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    return path


def system_kwargs(args, selector):
    return dict(alpha=args.alpha, beta=args.beta, rho=args.rho, selector=selector,
                pheromone_model=PheromoneModel(args.pheromone))


def plot_scatter(details_by_selector, save_path):
    plt.figure()
    names = list(details_by_selector.keys())
    for i, name in enumerate(names, start=1):
        lengths = [L for (L, t, tour) in details_by_selector[name]]
        x = np.random.normal(loc=i, scale=0.03, size=len(lengths))
        plt.plot(x, lengths, "o")
    plt.xticks(range(1, len(names) + 1), names)
    plt.ylabel("Best tour length")
    plt.title("Best lengths across runs")
    ensure(save_path)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()


def plot_convergence(system, n_iterations, save_path):
    res = system.run(n_iterations)
    stats = pd.DataFrame([s.csv_row() for s in res.iteration_stats], columns=CSV_HEADER)
    plt.figure()
    plt.plot(stats["Best Tour"], label="iteration best")
    plt.plot(stats["Avg Tour"], label="iteration average")
    plt.plot(res.history_best_lengths, label="best so far")
    optimum = system.problem.optimal_tour_length()
    if optimum is not None:
        plt.axhline(optimum, linestyle="--", label="optimum")
    plt.xlabel("Iteration")
    plt.ylabel("Tour length")
    plt.title("Ant System convergence")
    plt.legend()
    ensure(save_path)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()
    return res


def write_iteration_stats(res, csv_path):
    with open(ensure(csv_path), "w", newline="") as f:
        w = csv.writer(f)
        w.writerow(CSV_HEADER)
        for item in res.iteration_stats:
            w.writerow(item.csv_row())


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--n", type=int, default=50)
    ap.add_argument("--square", type=float, default=100.0)
    ap.add_argument("--runs", type=int, default=5)
    ap.add_argument("--iters", type=int, default=100)
    ap.add_argument("--alpha", type=int, default=1)
    ap.add_argument("--beta", type=int, default=2)
    ap.add_argument("--rho", type=float, default=0.5)
    ap.add_argument("--pheromone", choices=[m.value for m in PheromoneModel], default="standard")
    ap.add_argument("--sweep", action="store_true", help="also run an alpha/beta/rho grid with roulette selection")
    ap.add_argument("--outdir", default=OUTDIR)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    inst = TSPInstance.random_euclidean(n=args.n, seed=123, square_size=args.square, name=f"demo{args.n}")

    # repeated trials per selection strategy
    records = []
    details_by_selector = {}
    for name in SELECTOR_NAMES:
        stats, details = run_repeated_trials(inst, args.iters, n_runs=args.runs, **system_kwargs(args, name))
        print(name, json.dumps(stats, indent=2))
        records.append({"selector": name, **stats})
        details_by_selector[name] = details

    df_summary = pd.DataFrame.from_records(records)
    df_summary.to_csv(ensure(os.path.join(args.outdir, "results_summary.csv")), index=False)
    plot_scatter(details_by_selector, os.path.join(args.outdir, "results_distribution.png"))

    system = AntSystem(inst, seed=7, **system_kwargs(args, "roulette"))
    res = plot_convergence(system, args.iters, os.path.join(args.outdir, "convergence.png"))
    write_iteration_stats(res, os.path.join(args.outdir, "iteration_stats.csv"))
    print(f"Best tour length: {res.best_length:.2f} after {len(res.history_best_lengths)} iterations")

    if args.sweep:
        grid = {"alpha": [1, 2], "beta": [2, 3, 5], "rho": [0.1, 0.5]}
        rows = run_parameter_sweep(inst, grid, args.iters, n_runs=3, base_seed=500,
                                   csv_path=os.path.join(args.outdir, "as_grid.csv"))
        print("Grid search evaluated:", len(rows))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
