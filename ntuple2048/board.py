from __future__ import annotations
import numpy as np
from typing import List, Tuple
from .config import BOARD_SIZE, NUM_CELLS, DIRECTIONS, RANK_BASE

# reward returned by a move that leaves the board unchanged
ILLEGAL = -1

FIBONACCI = [0, 1, 2]
while len(FIBONACCI) < RANK_BASE:
	FIBONACCI.append(FIBONACCI[-1] + FIBONACCI[-2])


class Board:
	"""4x4 grid of tile ranks stored row-major; rank 0 is an empty cell.

	Ranks are logarithmic: in 2048 rank r shows the tile 2**r.
	"""
	variant = "2048"

	def __init__(self, cells=None):
		if cells is None:
			self.cells = np.zeros(NUM_CELLS, dtype=np.int32)
		else:
			self.cells = np.array(cells, dtype=np.int32).reshape(NUM_CELLS)

	def copy(self) -> 'Board':
		return type(self)(self.cells)

	def __getitem__(self, i: int) -> int:
		return int(self.cells[i])

	def __setitem__(self, i: int, rank: int):
		assert 0 <= rank < RANK_BASE, f"rank out of range: {rank}"
		self.cells[i] = rank

	def __eq__(self, other) -> bool:
		return type(other) is type(self) and np.array_equal(self.cells, other.cells)

	def __repr__(self) -> str:
		return f"{type(self).__name__}({self.cells.tolist()})"

	def __str__(self) -> str:
		width = max(len(str(self.tile_value(r))) for r in self.cells.tolist())
		rows = []
		for r in range(BOARD_SIZE):
			row = self.cells[r * BOARD_SIZE:(r + 1) * BOARD_SIZE]
			rows.append(" ".join(str(self.tile_value(int(t))).rjust(width) for t in row))
		return "\n".join(rows)

	def empty_cells(self) -> List[int]:
		return [int(i) for i in np.flatnonzero(self.cells == 0)]

	def max_rank(self) -> int:
		return int(self.cells.max())

	@classmethod
	def tile_value(cls, rank: int) -> int:
		return (1 << rank) if rank else 0

	@classmethod
	def merge(cls, a: int, b: int) -> int:
		# rank of the merged tile, 0 if the pair does not merge
		return a + 1 if a == b else 0

	def _slide_row(self, row) -> Tuple[List[int], int]:
		buf = [int(t) for t in row if t]
		out, score = [], 0
		i = 0
		while i < len(buf):
			if i + 1 < len(buf):
				merged = self.merge(buf[i], buf[i + 1])
				if merged:
					out.append(merged)
					score += self.tile_value(merged)
					i += 2
					continue
			out.append(buf[i])
			i += 1
		return out + [0] * (BOARD_SIZE - len(out)), score

	def slide(self, direction: int) -> int:
		"""Slide toward ``direction`` (0 up, 1 right, 2 down, 3 left).

		Returns the merge reward, or ILLEGAL with the board untouched.
		"""
		if direction not in DIRECTIONS:
			return ILLEGAL
		# rotate so that the target edge is on the left
		k = (direction + 1) % 4
		grid = np.rot90(self.cells.reshape(BOARD_SIZE, BOARD_SIZE), k=k).copy()
		reward = 0
		for r in range(BOARD_SIZE):
			row, score = self._slide_row(grid[r])
			grid[r] = row
			reward += score
		moved = np.rot90(grid, k=-k).flatten()
		if np.array_equal(moved, self.cells):
			return ILLEGAL
		self.cells = moved
		return reward

	def place(self, position: int, tile: int) -> int:
		if not 0 <= position < NUM_CELLS or self.cells[position] != 0:
			return ILLEGAL
		if not 0 < tile < RANK_BASE:
			return ILLEGAL
		self.cells[position] = tile
		return 0


class FibonacciBoard(Board):
	"""2584 variant: rank r shows FIBONACCI[r]; consecutive ranks (or two 1s) merge."""
	variant = "2584"

	@classmethod
	def tile_value(cls, rank: int) -> int:
		return FIBONACCI[rank]

	@classmethod
	def merge(cls, a: int, b: int) -> int:
		if (a == 1 and b == 1) or abs(a - b) == 1:
			return max(a, b) + 1
		return 0


BOARDS = {Board.variant: Board, FibonacciBoard.variant: FibonacciBoard}


def make_board(variant: str = "2048") -> Board:
	if variant not in BOARDS:
		raise ValueError(f"unknown game variant {variant!r}, expected one of {sorted(BOARDS)}")
	return BOARDS[variant]()
