"""Tests for the agent tour-construction state machine."""
import random

import pytest

from antsim import (Agent, AgentState, InvalidStateError, NearestNeighbourSelector, ProblemData,
                    RouletteWheelSelector, nearest_neighbour_tour)

from doubles import StubRandom
from helpers import line_instance, ten_node_instance


def _greedy_agent(inst):
    n = inst.n_cities()
    data = ProblemData(n, inst.distance, 1.0)
    return Agent(0, data, NearestNeighbourSelector(data)), data


def test_new_agent_is_idle():
    agent, _ = _greedy_agent(line_instance())
    assert agent.state is AgentState.IDLE
    assert agent.tour == []


def test_initialise_sets_single_node_tour():
    agent, data = _greedy_agent(ten_node_instance())
    agent.initialise(4)
    assert agent.state is AgentState.CONSTRUCTING
    assert agent.tour == [4]
    assert agent.tour_length == 0
    assert [i for i, v in enumerate(agent.visited) if v] == [4]
    assert agent.current_node == 4
    assert agent.start_node == 4


def test_initialise_clears_previous_tour():
    agent, data = _greedy_agent(ten_node_instance())
    agent.initialise(1)
    for _ in range(data.n):
        agent.step()
    agent.initialise(7)
    assert agent.tour == [7]
    assert agent.tour_length == 0
    assert sum(agent.visited) == 1
    assert agent.step_count == 0


def test_initialise_out_of_range_start():
    agent, _ = _greedy_agent(line_instance())
    with pytest.raises(IndexError):
        agent.initialise(5)


def test_n_steps_close_the_tour():
    inst = ten_node_instance()
    data = ProblemData(10, inst.distance, 1.0)
    agent = Agent(0, data, RouletteWheelSelector(data, random.Random(11)))
    agent.initialise(6)
    for _ in range(10):
        agent.step()
    tour = agent.tour
    assert agent.state is AgentState.COMPLETE
    assert len(tour) == 11
    assert tour[0] == tour[-1] == 6
    assert sorted(tour[:-1]) == list(range(10))
    assert agent.tour_length == pytest.approx(inst.tour_length(tour))


def test_last_step_returns_to_start():
    agent, data = _greedy_agent(line_instance(4))
    agent.initialise(0)
    for _ in range(3):
        agent.step()
    assert agent.candidates() == []
    assert agent.step() == 0
    assert agent.state is AgentState.COMPLETE


def test_greedy_agent_reproduces_nearest_neighbour_tour():
    inst = ten_node_instance()
    agent, data = _greedy_agent(inst)
    expected_tour, expected_length = nearest_neighbour_tour(10, inst.distance, StubRandom(ints=[3]))
    agent.initialise(3)
    for _ in range(10):
        agent.step()
    assert agent.tour == expected_tour
    assert agent.tour_length == pytest.approx(expected_length)


def test_candidates_follow_neighbour_order():
    agent, data = _greedy_agent(line_instance(5))
    agent.initialise(2)
    assert agent.candidates() == list(data.nearest_neighbours(2))
    agent.step()
    assert 1 not in agent.candidates()


def test_step_before_initialise_raises():
    agent, _ = _greedy_agent(line_instance())
    with pytest.raises(InvalidStateError):
        agent.step()


def test_step_after_complete_raises():
    agent, data = _greedy_agent(line_instance(3))
    agent.initialise(0)
    for _ in range(3):
        agent.step()
    with pytest.raises(InvalidStateError):
        agent.step()


def test_agents_order_by_tour_length():
    inst = ten_node_instance()
    data = ProblemData(10, inst.distance, 1.0)
    selector = NearestNeighbourSelector(data)
    agents = [Agent(i, data, selector) for i in range(10)]
    for i, agent in enumerate(agents):
        agent.initialise(i)
        for _ in range(10):
            agent.step()
    ranked = sorted(agents)
    lengths = [a.tour_length for a in ranked]
    assert lengths == sorted(lengths)
    assert min(agents).tour_length == lengths[0]
