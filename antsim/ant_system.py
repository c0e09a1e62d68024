from __future__ import annotations
import logging
import math
import random
import time
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .agent import Agent
from .parameters import Parameters
from .problem_data import PheromoneModel, ProblemData
from .selectors import make_selector
from .stats import IterationStats, StatsAggregator

logger = logging.getLogger(__name__)


@dataclass(order=True)
class BestTour:
    tour_length: float
    tour: List[int] = field(compare=False)


@dataclass
class ACOResult:
    best_tour: List[int]
    best_length: float
    history_best_lengths: List[float]
    iteration_bests: List[BestTour]
    iteration_stats: List[IterationStats]
    params: Parameters
    elapsed_sec: float


class AntSystem:
    """Classic Ant System (AS): one ant per node, every ant deposits after each iteration.

    ``problem`` is anything with ``n_cities()`` and ``distance(i, j)``, such as
    a ``TSPInstance``. All randomness (tau0 bootstrap, start nodes, node
    selection) comes from ``rng``, so a seeded source replays a run exactly.
    """

    def __init__(self, problem, alpha: int = 1, beta: int = 2, rho: float = 0.5, *,
                 selector: str = "roulette",
                 pheromone_model: PheromoneModel = PheromoneModel.STANDARD,
                 rng: Optional[random.Random] = None, seed: Optional[int] = None):
        if problem is None:
            raise ValueError("AntSystem requires a problem instance.")
        self.problem = problem
        self.rng = rng if rng is not None else random.Random(seed)
        n = problem.n_cities()
        self.params = Parameters.from_problem(n, problem.distance, self.rng, alpha=alpha, beta=beta, rho=rho)
        self.data = ProblemData(n, problem.distance, self.params.tau0, self.params, pheromone_model)
        self.selector = make_selector(selector, self.data, self.rng)
        self.agents = [Agent(i, self.data, self.selector) for i in range(n)]

        self.best_tours: List[BestTour] = []
        self.best_tour: Optional[BestTour] = None
        self._stats = StatsAggregator()
        self._iteration = 0
        logger.debug("AntSystem ready: n=%d tau0=%.6g selector=%s model=%s",
                     n, self.params.tau0, selector, self.data.model.value)

    @property
    def iteration_stats(self) -> List[IterationStats]:
        return self._stats.iteration_stats

    @property
    def iteration(self) -> int:
        return self._iteration

    def reset(self):
        """Forget all results and restart the search from tau0, keeping the problem data."""
        self.best_tours.clear()
        self.best_tour = None
        self.data.reset_pheromone()
        self._stats.clear()
        self._iteration = 0
        logger.info("AntSystem reset to tau0=%.6g", self.data.tau0)

    def execute(self) -> BestTour:
        """Run one iteration: initialise ants, construct tours, update pheromone."""
        self._stats.start_iteration(self._iteration)
        self._initialise_agents()
        self._construct_solutions()
        self.data.update_pheromone_trails(self.agents)
        stats = self._stats.stop_iteration(a.tour_length for a in self.agents)

        best_agent = min(self.agents)
        best = BestTour(tour_length=best_agent.tour_length, tour=best_agent.tour)
        self.best_tours.append(best)
        if self.best_tour is None or best < self.best_tour:
            self.best_tour = best
        logger.debug("iteration %d: best=%.3f avg=%.3f (%.1f ms)", self._iteration,
                     stats.best_tour_length, stats.average_tour_length, stats.elapsed_ms)
        self._iteration += 1
        return best

    def run(self, n_iterations: int, time_limit: Optional[float] = None) -> ACOResult:
        """Run up to ``n_iterations``; with ``time_limit`` (seconds) no new iteration starts after it passes."""
        start = time.time()
        history: List[float] = []
        first = len(self.best_tours)
        for _ in range(n_iterations):
            if time_limit is not None and time.time() - start >= time_limit:
                logger.info("time limit reached after %d iterations", len(history))
                break
            self.execute()
            history.append(self.best_tour.tour_length)

        elapsed = time.time() - start
        best = self.best_tour
        return ACOResult(best_tour=list(best.tour) if best else [],
                         best_length=best.tour_length if best else math.inf,
                         history_best_lengths=history,
                         iteration_bests=self.best_tours[first:],
                         iteration_stats=list(self.iteration_stats),
                         params=self.params, elapsed_sec=elapsed)

    def pheromone_snapshot(self) -> np.ndarray:
        return self.data.pheromone_matrix()

    def _initialise_agents(self):
        n = self.data.n
        for agent in self.agents:
            agent.initialise(self.rng.randrange(n))

    def _construct_solutions(self):
        # every ant takes n steps; lock-step keeps the rng sequence reproducible
        for _ in range(self.data.n):
            for agent in self.agents:
                agent.step()
            for agent in self.agents:
                self.data.local_update(agent)
