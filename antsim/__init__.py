from .tsp import TSPInstance, nearest_neighbour_tour
from .parameters import Parameters
from .problem_data import ProblemData, PheromoneModel
from .selectors import NodeSelector, NearestNeighbourSelector, RandomSelector, RouletteWheelSelector, make_selector
from .agent import Agent, AgentState
from .ant_system import AntSystem, ACOResult, BestTour
from .stats import IterationStats, StatsAggregator
from .exceptions import AntSimError, InvalidStateError
from .experiments import run_parameter_sweep, run_repeated_trials
