from __future__ import annotations
import random
from abc import ABC, abstractmethod
from itertools import accumulate

from .problem_data import ProblemData


class NodeSelector(ABC):
    """Picks the next node for an agent that still has unvisited candidates."""

    @abstractmethod
    def select_next(self, agent) -> int:
        ...


class NearestNeighbourSelector(NodeSelector):
    """Greedy: the closest node not yet visited."""
    def __init__(self, problem_data: ProblemData):
        self.data = problem_data

    def select_next(self, agent) -> int:
        for j in self.data.nearest_neighbours(agent.current_node):
            if not agent.visited[j]:
                return j
        raise ValueError("No unvisited candidate left to select.")


class RandomSelector(NodeSelector):
    """Uniform choice among the unvisited candidates."""
    def __init__(self, rng: random.Random):
        self.rng = rng

    def select_next(self, agent) -> int:
        candidates = agent.candidates()
        return candidates[self.rng.randrange(len(candidates))]


class RouletteWheelSelector(NodeSelector):
    """Random proportional rule: P(j) ~ choice_info(current, j) over unvisited j.

    Candidates are walked in nearest neighbour order, accumulating weights
    until the running sum reaches u * S for a uniform draw u in [0, 1).
    """
    def __init__(self, problem_data: ProblemData, rng: random.Random):
        self.data = problem_data
        self.rng = rng

    def select_next(self, agent) -> int:
        candidates = agent.candidates()
        row = self.data.choice_info_for(agent)[agent.current_node]
        cumulative = list(accumulate(float(row[j]) for j in candidates))
        total = cumulative[-1]
        threshold = self.rng.random() * total
        if total == 0.0 or threshold == 0.0:
            return candidates[0]
        for j, acc in zip(candidates, cumulative):
            if acc >= threshold:
                return j
        # rounding can leave acc a hair below the threshold
        return candidates[-1]


SELECTORS = ("greedy", "random", "roulette")


def make_selector(name: str, problem_data: ProblemData, rng: random.Random) -> NodeSelector:
    if name.lower() == "greedy":
        return NearestNeighbourSelector(problem_data)
    if name.lower() == "random":
        return RandomSelector(rng)
    if name.lower() == "roulette":
        return RouletteWheelSelector(problem_data, rng)
    raise ValueError(f"Unknown selector {name}")
