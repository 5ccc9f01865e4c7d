import numpy as np

from ntuple2048.action import Action
from ntuple2048.agents import TDAgent
from ntuple2048.board import Board, ILLEGAL
from ntuple2048.config import UP, RIGHT, DOWN, LEFT
from ntuple2048.ntuple import NTupleNetwork
from ntuple2048.policy import GreedyPolicy


class ScriptedBoard:
    """Board stand-in whose slides return preset rewards and afterstates."""

    def __init__(self, cells, outcomes):
        self.cells = np.array(cells)
        self.outcomes = outcomes  # direction -> (reward, cells after)

    def copy(self):
        return ScriptedBoard(self.cells.copy(), self.outcomes)

    def slide(self, op):
        if op not in self.outcomes:
            return ILLEGAL
        reward, after = self.outcomes[op]
        self.cells = np.array(after)
        return reward


def cells(rank):
    return [rank] * 16


def test_single_legal_move_is_chosen_regardless_of_value():
    net = NTupleNetwork()
    # make the only legal afterstate look terrible
    net.tables[:, net.features(np.array(cells(3)))] = -1000.0
    board = ScriptedBoard(cells(1), {DOWN: (8, cells(3))})
    decision = GreedyPolicy(net).decide(board)
    assert decision.action == Action.slide(DOWN)
    assert decision.reward == 8
    assert decision.value == 8 - 8000.0
    assert decision.afterstate.cells.tolist() == cells(3)


def test_value_outweighs_reward():
    net = NTupleNetwork()
    net.tables[:, net.features(np.array(cells(5)))] = 10.0
    board = ScriptedBoard(cells(1), {UP: (16, cells(4)), LEFT: (0, cells(5))})
    assert GreedyPolicy(net).select_action(board) == Action.slide(LEFT)


def test_ties_keep_first_direction():
    net = NTupleNetwork()
    board = ScriptedBoard(cells(1), {RIGHT: (4, cells(2)), LEFT: (4, cells(2)), DOWN: (4, cells(2))})
    assert GreedyPolicy(net).select_action(board) == Action.slide(RIGHT)
    board = ScriptedBoard(cells(1), {DOWN: (0, cells(2)), UP: (0, cells(2))})
    assert GreedyPolicy(net).select_action(board) == Action.slide(UP)


def test_no_legal_move_returns_none_and_records_nothing():
    agent = TDAgent("alpha=0.1")
    agent.open_episode()
    board = ScriptedBoard(cells(1), {})
    action = agent.take_action(board)
    assert action == Action.none()
    assert not action
    assert len(agent.trajectory) == 0


def test_input_board_is_not_mutated():
    board = Board([
        1, 1, 0, 2,
        0, 3, 0, 0,
        2, 0, 0, 1,
        0, 0, 4, 4,
    ])
    before = board.copy()
    agent = TDAgent()
    agent.open_episode()
    action = agent.take_action(board)
    assert action
    assert board == before
    assert len(agent.trajectory) == 1
    step = agent.trajectory[0]
    expected = board.copy()
    assert action.apply(expected) == step.reward
    assert step.afterstate == expected
    assert step.afterstate is not board


def test_real_board_prefers_merge_with_zero_weights():
    # left and right both merge the pair; right comes first in the order
    board = Board([1, 1, 0, 0] + [0] * 12)
    decision = GreedyPolicy(NTupleNetwork()).decide(board)
    assert decision.action == Action.slide(RIGHT)
    assert decision.reward == 4
    assert decision.afterstate[3] == 2
