from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Optional

from .tsp import DistanceFn, nearest_neighbour_tour


@dataclass
class Parameters:
    alpha: int = 1              # pheromone influence
    beta: int = 2               # heuristic influence
    rho: float = 0.5            # evaporation rate
    tau0: float = 1.0           # initial pheromone density
    nn_tour_length: Optional[float] = None  # length of the bootstrap tour tau0 came from

    def __post_init__(self):
        self.validate()

    def validate(self):
        for name in ("alpha", "beta"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be an integer >= 0, got {value!r}.")
        if not 0.0 < self.rho < 1.0:
            raise ValueError(f"rho must lie in (0, 1), got {self.rho!r}.")
        if self.tau0 <= 0.0:
            raise ValueError("The initial pheromone density must be larger than zero.")

    @staticmethod
    def from_problem(n: int, distance: DistanceFn, rng: random.Random,
                     alpha: int = 1, beta: int = 2, rho: float = 0.5) -> "Parameters":
        """Derive tau0 = m / L_nn with one ant per node (m = n)."""
        if distance is None:
            raise ValueError("A distance function is required.")
        _, length = nearest_neighbour_tour(n, distance, rng)
        if length <= 0.0:
            raise ValueError("Nearest neighbour tour length must be positive.")
        return Parameters(alpha=alpha, beta=beta, rho=rho, tau0=n / length, nn_tour_length=length)
