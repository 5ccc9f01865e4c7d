from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from .action import Action
from .board import Board, ILLEGAL
from .config import DIRECTIONS
from .ntuple import NTupleNetwork


@dataclass
class Decision:
	action: Action
	afterstate: Optional[Board] = None
	reward: int = 0
	value: float = float("-inf")  # reward + estimated afterstate value


class GreedyPolicy:
	"""One-step afterstate lookahead over the four slides."""

	def __init__(self, network: NTupleNetwork):
		self.network = network

	def decide(self, board: Board) -> Decision:
		best = Decision(Action.none())
		for op in DIRECTIONS:
			after = board.copy()
			reward = after.slide(op)
			if reward == ILLEGAL:
				continue
			value = reward + self.network.evaluate(after)
			# strict: the earlier direction keeps ties
			if value > best.value:
				best = Decision(Action.slide(op), after, reward, value)
		return best

	def select_action(self, board: Board) -> Action:
		return self.decide(board).action
