from __future__ import annotations
import enum
import logging
import sys
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from .parameters import Parameters

logger = logging.getLogger(__name__)

# distance from a node to itself; larger than any real edge so it never wins a selection
SELF_DISTANCE = sys.float_info.max

DistanceSource = Union[Callable[[int, int], float], Sequence[Sequence[float]]]


class PheromoneModel(enum.Enum):
    """How pheromone is stored on an edge.

    STANDARD keeps one density per edge. SMART keeps one density per edge and
    construction step, and lets ants reinforce the edge they just walked
    before the global update (see ``ProblemData.local_update``).
    """
    STANDARD = "standard"
    SMART = "smart"


class ProblemData:
    """Static distance data plus the mutable pheromone and choice-info state.

    Distances, heuristic values and nearest neighbour lists are built once.
    Pheromone and choice info change only through ``evaporate_pheromone``,
    ``deposit_pheromone``, ``update_choice_info``, ``reset_pheromone`` and
    (smart model only) ``local_update``. Choice info is stale after a
    pheromone change until ``update_choice_info`` is called.
    """

    def __init__(self, n: int, distance: Optional[DistanceSource], tau0: float,
                 parameters: Optional[Parameters] = None,
                 model: PheromoneModel = PheromoneModel.STANDARD):
        if distance is None:
            raise ValueError("A distance supplier is required.")
        if tau0 is None or tau0 <= 0.0:
            raise ValueError("The initial pheromone density must be larger than zero.")
        if n < 2:
            raise ValueError(f"At least two nodes are required, got {n}.")
        self.n = n
        self.tau0 = float(tau0)
        self.params = parameters if parameters is not None else Parameters(tau0=self.tau0)
        self.model = PheromoneModel(model)

        dist_fn = distance if callable(distance) else (lambda i, j: distance[i][j])
        D = np.empty((n, n), dtype=np.float64)
        for i in range(n):
            for j in range(n):
                D[i, j] = dist_fn(i, j) if i != j else SELF_DISTANCE
        if not np.array_equal(D, D.T):
            i, j = (int(k) for k in np.argwhere(D != D.T)[0])
            raise ValueError(f"Distance supplier is not symmetric at ({i}, {j}).")
        D.flags.writeable = False
        self._distances = D

        self._beta = None
        self._refresh_heuristic()

        self._nearest: List[Tuple[int, ...]] = []
        for i in range(n):
            order = np.argsort(D[i], kind="stable")
            self._nearest.append(tuple(int(j) for j in order if j != i))

        shape = (n, n) if self.model is PheromoneModel.STANDARD else (n, n, n)
        self._pheromone = np.full(shape, self.tau0, dtype=np.float64)
        self._choice = np.empty(shape, dtype=np.float64)
        self.update_choice_info()
        logger.debug("Built %s problem data for %d nodes (tau0=%.6g)", self.model.value, n, self.tau0)

    # ---- read accessors ----------------------------------------------------
    def _check(self, *nodes: int):
        for node in nodes:
            if not 0 <= node < self.n:
                raise IndexError(f"Node index {node} outside [0, {self.n}).")

    def _layer(self, step: int) -> int:
        if self.model is PheromoneModel.STANDARD:
            return 0
        if not 0 <= step < self.n:
            raise IndexError(f"Step {step} outside [0, {self.n}).")
        return step

    def distance(self, i: int, j: int) -> float:
        self._check(i, j)
        return float(self._distances[i, j])

    def heuristic(self, i: int, j: int) -> float:
        self._check(i, j)
        return float(self._heuristic[i, j])

    def nearest_neighbours(self, i: int) -> Tuple[int, ...]:
        self._check(i)
        return self._nearest[i]

    def pheromone(self, i: int, j: int, step: int = 0) -> float:
        self._check(i, j)
        if self.model is PheromoneModel.STANDARD:
            return float(self._pheromone[i, j])
        return float(self._pheromone[self._layer(step), i, j])

    def choice_info(self, i: int, j: int, step: int = 0) -> float:
        self._check(i, j)
        if self.model is PheromoneModel.STANDARD:
            return float(self._choice[i, j])
        return float(self._choice[self._layer(step), i, j])

    def choice_info_for(self, agent) -> np.ndarray:
        """The n x n choice-info view the agent's next decision is based on."""
        if self.model is PheromoneModel.STANDARD:
            return self._choice
        return self._choice[min(agent.step_count, self.n - 1)]

    def pheromone_matrix(self) -> np.ndarray:
        return self._pheromone.copy()

    def choice_info_matrix(self) -> np.ndarray:
        return self._choice.copy()

    # ---- pheromone update protocol -----------------------------------------
    def evaporate_pheromone(self):
        self.params.validate()
        self._pheromone *= (1.0 - self.params.rho)

    def deposit_pheromone(self, tour: Iterable[int], amount: float):
        nodes = list(tour)
        self._check(*nodes)
        p = self._pheromone
        for a, b in zip(nodes, nodes[1:]):
            p[..., a, b] += amount
            p[..., b, a] = p[..., a, b]

    def _refresh_heuristic(self):
        # beta may be changed between iterations; the heuristic follows on the next refresh
        if self._beta == self.params.beta:
            return
        with np.errstate(divide="ignore", under="ignore"):
            eta = np.power(1.0 / self._distances, self.params.beta)
        eta.flags.writeable = False
        self._heuristic = eta
        self._beta = self.params.beta

    def update_choice_info(self):
        self.params.validate()
        self._refresh_heuristic()
        np.multiply(np.power(self._pheromone, self.params.alpha), self._heuristic, out=self._choice)

    def reset_pheromone(self, tau0: Optional[float] = None):
        if tau0 is not None:
            if tau0 <= 0.0:
                raise ValueError("The initial pheromone density must be larger than zero.")
            self.tau0 = float(tau0)
        self._pheromone.fill(self.tau0)
        self.update_choice_info()

    def update_pheromone_trails(self, agents: Iterable):
        """Global update: evaporate, every agent deposits 1/L on its tour, refresh choice info."""
        self.evaporate_pheromone()
        for agent in agents:
            L = agent.tour_length
            self.deposit_pheromone(agent.tour, 1.0 / L if L > 0 else 0.0)
        self.update_choice_info()

    # ---- smart model -------------------------------------------------------
    def local_update(self, agent):
        """Reinforce the edge the agent just walked, in the layer of that step.

        Adds 1 / (tour length before the edge + edge weight) to the density.
        No-op for the standard model.
        """
        if self.model is PheromoneModel.STANDARD or len(agent.tour) < 2:
            return
        a, b = agent.tour[-2], agent.tour[-1]
        step = agent.step_count - 1
        weight = self.distance(a, b)
        self.touch(a, b, step, agent.tour_length - weight)

    def touch(self, i: int, j: int, step: int, tour_length: float):
        if self.model is PheromoneModel.STANDARD:
            return
        self._check(i, j)
        layer = self._layer(step)
        amount = 1.0 / (tour_length + self.distance(i, j))
        p = self._pheromone[layer]
        p[i, j] += amount
        p[j, i] = p[i, j]
        c = p[i, j] ** self.params.alpha * self._heuristic[i, j]
        self._choice[layer, i, j] = c
        self._choice[layer, j, i] = c
