from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from .agents import Agent
from .board import Board, ILLEGAL


@dataclass
class EpisodeResult:
	score: int
	steps: int  # moves made by the player
	max_rank: int
	board: Board

	@property
	def max_tile(self) -> int:
		return self.board.tile_value(self.max_rank)


def play_episode(player: Agent, environment: Agent, board: Optional[Board] = None) -> EpisodeResult:
	"""Play until the agent to move has no legal action.

	The environment places the first two tiles, then player and environment
	alternate. Both agents are opened before the first move and closed after
	the last, so a learning player updates once per episode.
	"""
	board = Board() if board is None else board
	player.open_episode()
	environment.open_episode()
	score, moves, turn = 0, 0, 0
	while True:
		who = environment if turn < 2 or turn % 2 == 1 else player
		action = who.take_action(board)
		reward = action.apply(board)
		if reward == ILLEGAL:
			break
		if who is player:
			score += reward
			moves += 1
		turn += 1
	player.close_episode()
	environment.close_episode()
	return EpisodeResult(score=score, steps=moves, max_rank=board.max_rank(), board=board)
