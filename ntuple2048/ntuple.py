from __future__ import annotations
import numpy as np
from typing import Sequence
from .config import TUPLES, RANK_BASE

# weight file layout: uint32 table count, then every table as raw float32
COUNT_DTYPE = np.dtype("<u4")
WEIGHT_DTYPE = np.dtype("<f4")


class WeightFileError(ValueError):
	pass


class NTupleNetwork:
	"""Weight store and afterstate evaluator.

	One dense table per tuple. A tuple's feature index is the base-25 number
	formed by the ranks of its cells, first cell most significant, so every
	table holds 25**len(tuple) weights.
	"""

	def __init__(self, tuples: Sequence[Sequence[int]] = TUPLES, base: int = RANK_BASE):
		self.tuples = np.asarray(tuples, dtype=np.int64)
		assert self.tuples.ndim == 2, "all tuples must have the same length"
		self.base = base
		length = self.tuples.shape[1]
		self.powers = base ** np.arange(length - 1, -1, -1, dtype=np.int64)
		self.table_size = base ** length
		self._rows = np.arange(len(self.tuples))
		self.tables = np.zeros((len(self.tuples), self.table_size), dtype=np.float32)

	def __len__(self) -> int:
		return len(self.tuples)

	def features(self, board) -> np.ndarray:
		cells = np.asarray(getattr(board, "cells", board), dtype=np.int64)
		return cells[self.tuples] @ self.powers

	def evaluate(self, board) -> float:
		return float(self.tables[self._rows, self.features(board)].sum(dtype=np.float64))

	def adjust(self, board, target: float, alpha: float) -> float:
		"""Move the value of ``board`` toward ``target``; returns the error.

		The whole-board error scaled by ``alpha`` is added unchanged to each
		tuple's weight.
		"""
		idx = self.features(board)
		error = target - float(self.tables[self._rows, idx].sum(dtype=np.float64))
		self.tables[self._rows, idx] += np.float32(alpha * error)
		return error

	def save(self, path: str):
		with open(path, "wb") as f:
			np.array([len(self.tables)], dtype=COUNT_DTYPE).tofile(f)
			self.tables.astype(WEIGHT_DTYPE, copy=False).tofile(f)

	def load(self, path: str):
		"""Replace the tables with the contents of ``path``.

		The file is fully read and checked first; on any error the current
		tables stay as they were.
		"""
		with open(path, "rb") as f:
			header = np.fromfile(f, dtype=COUNT_DTYPE, count=1)
			payload = np.fromfile(f, dtype=WEIGHT_DTYPE)
		if header.size != 1:
			raise WeightFileError(f"{path}: missing table count")
		count = int(header[0])
		if count != len(self.tuples):
			raise WeightFileError(f"{path}: {count} tables, expected {len(self.tuples)}")
		if payload.size != count * self.table_size:
			raise WeightFileError(
				f"{path}: {payload.size} weights, expected {count} x {self.table_size}")
		self.tables = payload.reshape(count, self.table_size).astype(np.float32)
