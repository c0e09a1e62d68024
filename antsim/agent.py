from __future__ import annotations
import enum
from typing import List

from .exceptions import InvalidStateError
from .problem_data import ProblemData
from .selectors import NodeSelector


class AgentState(enum.Enum):
    IDLE = "idle"
    CONSTRUCTING = "constructing"
    COMPLETE = "complete"


class Agent:
    """One ant: builds a closed tour one node per ``step`` call.

    After ``initialise(s)`` the agent needs exactly n steps; the last one
    always returns to ``s``, so a complete tour has n + 1 entries.
    Agents order by tour length.
    """

    def __init__(self, agent_id: int, problem_data: ProblemData, selector: NodeSelector):
        self.id = agent_id
        self.data = problem_data
        self.selector = selector
        self.state = AgentState.IDLE
        self.start_node = -1
        self.current_node = -1
        self.step_count = 0
        self.tour_length = 0.0
        self.visited: List[bool] = [False] * problem_data.n
        self._tour: List[int] = []

    @property
    def tour(self) -> List[int]:
        return list(self._tour)

    def initialise(self, start_node: int):
        if not 0 <= start_node < self.data.n:
            raise IndexError(f"Start node {start_node} outside [0, {self.data.n}).")
        for i in range(len(self.visited)):
            self.visited[i] = False
        self.visited[start_node] = True
        self.start_node = start_node
        self.current_node = start_node
        self.step_count = 0
        self.tour_length = 0.0
        self._tour = [start_node]
        self.state = AgentState.CONSTRUCTING

    def candidates(self) -> List[int]:
        """Unvisited nodes in nearest neighbour order from the current node."""
        return [j for j in self.data.nearest_neighbours(self.current_node) if not self.visited[j]]

    def step(self) -> int:
        if self.state is not AgentState.CONSTRUCTING:
            raise InvalidStateError(f"Agent {self.id} cannot step while {self.state.value}.")
        if self.candidates():
            nxt = self.selector.select_next(self)
        else:
            nxt = self.start_node
        self.tour_length += self.data.distance(self.current_node, nxt)
        self.current_node = nxt
        self._tour.append(nxt)
        self.visited[nxt] = True
        self.step_count += 1
        if self.step_count == self.data.n:
            self.state = AgentState.COMPLETE
        return nxt

    def __lt__(self, other: "Agent") -> bool:
        return self.tour_length < other.tour_length

    def __repr__(self):
        return f"Agent(id={self.id}, state={self.state.value}, tour_length={self.tour_length:.2f})"
