from __future__ import annotations
import statistics
import time
from dataclasses import astuple, dataclass
from typing import Iterable, List, Optional

from .exceptions import InvalidStateError

CSV_HEADER = ("Iteration", "Time Elapsed (ms)", "Avg Tour", "Best Tour")


@dataclass(frozen=True, order=True)
class IterationStats:
    iteration: int
    elapsed_ms: float
    average_tour_length: float
    best_tour_length: float

    def csv_row(self) -> tuple:
        return astuple(self)


class StatsAggregator:
    """Times iterations and summarises the tour lengths they produced."""

    def __init__(self):
        self.iteration_stats: List[IterationStats] = []
        self._iteration = 0
        self._started: Optional[float] = None

    def start_iteration(self, iteration: int):
        self._iteration = iteration
        # start last so that setup does not count towards the iteration
        self._started = time.perf_counter()

    def stop_iteration(self, tour_lengths: Iterable[float]) -> IterationStats:
        stopped = time.perf_counter()
        if tour_lengths is None:
            raise TypeError("tour_lengths can't be None")
        lengths = list(tour_lengths)
        if not lengths:
            raise ValueError("tour_lengths can't be empty")
        if self._started is None:
            raise InvalidStateError("Cannot call stop_iteration without calling start_iteration first")

        item = IterationStats(iteration=self._iteration,
                              elapsed_ms=(stopped - self._started) * 1000.0,
                              average_tour_length=statistics.mean(lengths),
                              best_tour_length=min(lengths))
        self._started = None
        self.iteration_stats.append(item)
        return item

    def clear(self):
        self.iteration_stats.clear()
        self._started = None
