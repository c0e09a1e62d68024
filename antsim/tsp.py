from __future__ import annotations
import math
import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

DistanceFn = Callable[[int, int], float]


@dataclass
class TSPInstance:
    """Symmetric TSP problem source: coordinates or an explicit distance matrix."""
    coords: Optional[List[Tuple[float, float]]] = None
    matrix: Optional[List[List[float]]] = None
    name: str = "euclidean_tsp"
    optimal_tour: Optional[List[int]] = None

    def __post_init__(self):
        if (self.coords is None) == (self.matrix is None):
            raise ValueError("TSPInstance needs exactly one of coords or matrix.")
        if self.matrix is not None:
            n = len(self.matrix)
            if any(len(row) != n for row in self.matrix):
                raise ValueError("Distance matrix must be square.")
            for i in range(n):
                for j in range(i + 1, n):
                    if self.matrix[i][j] != self.matrix[j][i]:
                        raise ValueError(f"Distance matrix is not symmetric at ({i}, {j}).")

    @staticmethod
    def random_euclidean(n: int, seed: Optional[int] = None, square_size: float = 100.0, name: str = "random_euclidean"):
        rng = random.Random(seed)
        coords = [(rng.uniform(0, square_size), rng.uniform(0, square_size)) for _ in range(n)]
        return TSPInstance(coords=coords, name=name)

    @staticmethod
    def from_matrix(matrix: Sequence[Sequence[float]], optimal_tour: Optional[Sequence[int]] = None,
                    name: str = "matrix_tsp"):
        rows = [[float(x) for x in row] for row in matrix]
        tour = list(optimal_tour) if optimal_tour is not None else None
        return TSPInstance(matrix=rows, name=name, optimal_tour=tour)

    def n_cities(self) -> int:
        if self.coords is not None:
            return len(self.coords)
        return len(self.matrix)

    def distance(self, i: int, j: int) -> float:
        if self.matrix is not None:
            return self.matrix[i][j]
        (x1, y1), (x2, y2) = self.coords[i], self.coords[j]
        return math.hypot(x1 - x2, y1 - y2)

    def distance_matrix(self) -> List[List[float]]:
        n = self.n_cities()
        D = [[0.0]*n for _ in range(n)]
        for i in range(n):
            for j in range(i+1, n):
                d = self.distance(i, j)
                D[i][j] = D[j][i] = d
        return D

    def tour_length(self, tour: Sequence[int]) -> float:
        """Length of a tour; a closed tour (first == last) is not closed twice."""
        if len(tour) < 2:
            return 0.0
        nodes = list(tour)
        if nodes[0] != nodes[-1]:
            nodes.append(nodes[0])
        return sum(self.distance(i, j) for i, j in zip(nodes, nodes[1:]))

    def optimal_tour_length(self) -> Optional[float]:
        if self.optimal_tour is None:
            return None
        return self.tour_length(self.optimal_tour)


def nearest_neighbour_tour(n: int, distance: DistanceFn, rng: random.Random) -> Tuple[List[int], float]:
    """Greedy tour from a random start: always travel to the closest unvisited node.

    Returns the closed tour and its length.
    """
    if n < 1:
        raise ValueError("Need at least one node for a nearest neighbour tour.")
    current = rng.randrange(n)
    tour = [current]
    unvisited = set(range(n))
    unvisited.remove(current)
    length = 0.0
    while unvisited:
        # ties resolve to the lowest index
        nxt = min(unvisited, key=lambda j: (distance(current, j), j))
        length += distance(current, nxt)
        tour.append(nxt)
        unvisited.remove(nxt)
        current = nxt
    length += distance(current, tour[0])
    tour.append(tour[0])
    return tour, length
