from __future__ import annotations
import numpy as np
from typing import Protocol, Union
from .action import Action
from .board import Board, ILLEGAL
from .config import AgentConfig, NUM_CELLS, POPUP_ODDS, UP, RIGHT, DOWN, LEFT
from .learn import TDLearner, Trajectory
from .ntuple import NTupleNetwork
from .policy import GreedyPolicy


class Agent(Protocol):
	name: str
	role: str

	def open_episode(self, flag: str = "") -> None: ...

	def close_episode(self, flag: str = "") -> None: ...

	def take_action(self, board: Board) -> Action: ...


def _config(args: Union[AgentConfig, str], **defaults) -> AgentConfig:
	if isinstance(args, AgentConfig):
		return args
	return AgentConfig.parse(args, **defaults)


class TDAgent:
	"""Learning player: greedy afterstate policy over an n-tuple network.

	``take_action`` records the chosen afterstate and reward; ``close_episode``
	learns from them. The record is cleared by the next ``open_episode``.

	The tables always start at zero, so ``init`` is implied; ``load=`` then
	replaces them from a file. ``save=`` is written only by ``close()`` or on
	leaving a ``with`` block without an error, never when the agent is
	garbage collected.
	"""

	def __init__(self, args: Union[AgentConfig, str] = ""):
		self.config = _config(args, name="weight_agent", role="player")
		self.network = NTupleNetwork()
		if self.config.load:
			self.network.load(self.config.load)
		self.policy = GreedyPolicy(self.network)
		self.learner = TDLearner(self.network, self.config.alpha)
		self.trajectory = Trajectory()
		self.last_error = 0.0

	@property
	def name(self) -> str:
		return self.config.name

	@property
	def role(self) -> str:
		return self.config.role

	@property
	def alpha(self) -> float:
		return self.learner.alpha

	def open_episode(self, flag: str = ""):
		self.trajectory.clear()

	def close_episode(self, flag: str = ""):
		self.last_error = self.learner.learn(self.trajectory)

	def take_action(self, board: Board) -> Action:
		decision = self.policy.decide(board)
		if decision.afterstate is not None:
			self.trajectory.record(decision.afterstate, decision.reward)
		return decision.action

	def close(self):
		if self.config.save:
			self.network.save(self.config.save)

	def __enter__(self) -> 'TDAgent':
		return self

	def __exit__(self, exc_type, exc, tb):
		# keep the previous weight file if the session failed
		if exc_type is None:
			self.close()


class HeuristicPlayer:
	"""Greedy on immediate reward, weighted to favour up and right."""
	ORDER = (UP, LEFT, RIGHT, DOWN)
	BONUS = {UP: 6, RIGHT: 7}

	def __init__(self, args: Union[AgentConfig, str] = ""):
		self.config = _config(args, name="dummy", role="player")

	@property
	def name(self) -> str:
		return self.config.name

	@property
	def role(self) -> str:
		return self.config.role

	def open_episode(self, flag: str = ""):
		pass

	def close_episode(self, flag: str = ""):
		pass

	def take_action(self, board: Board) -> Action:
		best, move = -1, -1
		for op in self.ORDER:
			reward = board.copy().slide(op)
			if reward == ILLEGAL:
				continue
			reward *= self.BONUS.get(op, 3)
			if reward > best:
				best, move = reward, op
		return Action.slide(move) if move != -1 else Action.none()


class RandomEnvironment:
	"""Puts a rank-1 tile (90%) or rank-2 tile (10%) on a random empty cell."""

	def __init__(self, args: Union[AgentConfig, str] = ""):
		self.config = _config(args, name="random", role="environment")
		self.rng = np.random.default_rng(self.config.seed)
		self.space = np.arange(NUM_CELLS)

	@property
	def name(self) -> str:
		return self.config.name

	@property
	def role(self) -> str:
		return self.config.role

	def open_episode(self, flag: str = ""):
		pass

	def close_episode(self, flag: str = ""):
		pass

	def take_action(self, board: Board) -> Action:
		self.rng.shuffle(self.space)
		for pos in self.space:
			if board[int(pos)] != 0:
				continue
			tile = 1 if self.rng.integers(POPUP_ODDS) else 2
			return Action.place(int(pos), tile)
		return Action.none()
