import os, argparse
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import imageio

from antsim import TSPInstance, AntSystem, PheromoneModel


def draw_frame(coords, tour, length, pheromone, iteration, frame_path):
    """Plot the iteration's best tour over the pheromone trails (edge alpha ~ density)."""
    plt.figure(figsize=(5, 5))
    n = len(coords)
    top = pheromone.max()
    if top > 0:
        for i in range(n):
            for j in range(i + 1, n):
                w = pheromone[i, j] / top
                if w > 0.05:
                    plt.plot([coords[i][0], coords[j][0]], [coords[i][1], coords[j][1]],
                             "-", color="tab:orange", alpha=float(w), linewidth=0.8)
    xs = [coords[i][0] for i in tour]
    ys = [coords[i][1] for i in tour]
    plt.plot([c[0] for c in coords], [c[1] for c in coords], "o")
    plt.plot(xs, ys, "-", color="tab:blue")
    plt.title(f"Ant System iteration best\niter={iteration+1}  length={length:.2f}")
    plt.axis("equal")
    plt.tight_layout()
    plt.savefig(frame_path, dpi=120, bbox_inches="tight")
    plt.close()


def visualize(inst, system, n_iterations, outdir, step=5):
    os.makedirs(outdir, exist_ok=True)
    frames = []
    for it in range(n_iterations):
        best = system.execute()
        if it % step:
            continue
        pheromone = system.pheromone_snapshot()
        if pheromone.ndim == 3:
            pheromone = pheromone.mean(axis=0)
        frame_path = os.path.join(outdir, f"as_frame_{it:03d}.png")
        draw_frame(inst.coords, best.tour, best.tour_length, pheromone, it, frame_path)
        frames.append(frame_path)

    gif_path = os.path.join(outdir, "as_convergence.gif")
    with imageio.get_writer(gif_path, mode="I", duration=0.6) as writer:
        for fp in frames:
            writer.append_data(imageio.v2.imread(fp))

    print("Saved:", gif_path)
    return gif_path


def main(argv=None):
    p = argparse.ArgumentParser()
    p.add_argument("--n", type=int, default=30, help="number of cities")
    p.add_argument("--iters", type=int, default=60)
    p.add_argument("--square", type=float, default=100.0)
    p.add_argument("--seed", type=int, default=321)
    p.add_argument("--selector", choices=["greedy", "random", "roulette"], default="roulette")
    p.add_argument("--pheromone", choices=[m.value for m in PheromoneModel], default="standard")
    p.add_argument("--outdir", default="viz")
    p.add_argument("--step", type=int, default=5, help="frame every k iterations")
    args = p.parse_args(argv)

    inst = TSPInstance.random_euclidean(n=args.n, seed=args.seed, square_size=args.square, name=f"viz{args.n}")
    system = AntSystem(inst, selector=args.selector, pheromone_model=PheromoneModel(args.pheromone), seed=args.seed)
    visualize(inst, system, args.iters, args.outdir, step=args.step)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
