from __future__ import annotations
from dataclasses import dataclass
from .board import Board, ILLEGAL
from .config import DIR_NAMES

# action kinds
NONE, SLIDE, PLACE = 0, 1, 2

@dataclass(frozen=True)
class Action:
	kind: int = NONE
	direction: int = -1  # only for SLIDE
	position: int = -1  # only for PLACE
	tile: int = 0

	@staticmethod
	def none() -> 'Action':
		return Action()

	@staticmethod
	def slide(direction: int) -> 'Action':
		return Action(kind=SLIDE, direction=direction)

	@staticmethod
	def place(position: int, tile: int) -> 'Action':
		return Action(kind=PLACE, position=position, tile=tile)

	def __bool__(self) -> bool:
		return self.kind != NONE

	def apply(self, board: Board) -> int:
		"""Apply to ``board`` in place; returns the reward or ILLEGAL."""
		if self.kind == SLIDE:
			return board.slide(self.direction)
		if self.kind == PLACE:
			return board.place(self.position, self.tile)
		return ILLEGAL

	def __str__(self) -> str:
		if self.kind == SLIDE:
			name = DIR_NAMES[self.direction] if 0 <= self.direction < len(DIR_NAMES) else "?"
			return f"slide {name}"
		if self.kind == PLACE:
			return f"place {self.tile} at {self.position}"
		return "none"
