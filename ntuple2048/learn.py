from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List
from .board import Board
from .ntuple import NTupleNetwork


@dataclass
class Step:
	afterstate: Board
	reward: int  # reward of the move that produced this afterstate


class Trajectory:
	"""Afterstates and rewards of the current episode, in play order."""

	def __init__(self):
		self.steps: List[Step] = []

	def record(self, afterstate: Board, reward: int):
		self.steps.append(Step(afterstate, reward))

	def clear(self):
		self.steps.clear()

	def __len__(self) -> int:
		return len(self.steps)

	def __iter__(self) -> Iterator[Step]:
		return iter(self.steps)

	def __getitem__(self, i: int) -> Step:
		return self.steps[i]


class TDLearner:
	"""Backward TD(0) over a finished episode.

	The last afterstate is pulled toward 0. Every earlier afterstate s[t] is
	pulled toward r[t+1] + V(s[t+1]), where V reads the live tables, so the
	updates made later in the episode are already visible.
	"""

	def __init__(self, network: NTupleNetwork, alpha: float = 0.0):
		self.network = network
		self.alpha = alpha

	def learn(self, trajectory: Trajectory) -> float:
		"""Update the network; returns the mean absolute TD error."""
		if len(trajectory) == 0 or self.alpha == 0:
			return 0.0
		net = self.network
		total = abs(net.adjust(trajectory[-1].afterstate, 0.0, self.alpha))
		for t in range(len(trajectory) - 2, -1, -1):
			succ = trajectory[t + 1]
			target = succ.reward + net.evaluate(succ.afterstate)
			total += abs(net.adjust(trajectory[t].afterstate, target, self.alpha))
		return total / len(trajectory)
