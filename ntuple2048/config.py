from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Optional

BOARD_SIZE = 4
NUM_CELLS = BOARD_SIZE * BOARD_SIZE

# slide directions, same codes as the board move table
UP, RIGHT, DOWN, LEFT = 0, 1, 2, 3
DIRECTIONS = (UP, RIGHT, DOWN, LEFT)
DIR_NAMES = ("up", "right", "down", "left")

# n-tuple network: each tuple covers 4 cells, ranks 0..24
RANK_BASE = 25
TUPLE_LENGTH = 4
TABLE_SIZE = RANK_BASE ** TUPLE_LENGTH
TUPLES = (
	(0, 1, 2, 3),
	(4, 5, 6, 7),
	(8, 9, 10, 11),
	(12, 13, 14, 15),
	(0, 4, 8, 12),
	(1, 5, 9, 13),
	(2, 6, 10, 14),
	(3, 7, 11, 15),
)

# environment: rank-1 tile 90%, rank-2 tile 10%
POPUP_ODDS = 10


@dataclass
class AgentConfig:
	name: str = "unknown"
	role: str = "unknown"
	init: bool = False
	load: Optional[str] = None
	save: Optional[str] = None
	alpha: float = 0.0
	seed: Optional[int] = None

	@classmethod
	def parse(cls, args: str = "", **defaults) -> 'AgentConfig':
		"""Build a config from ``key=value`` tokens, e.g. ``"load=w.bin alpha=0.0025"``.

		Tokens override ``defaults``. A token without ``=`` is a flag.
		"""
		known = {f.name for f in fields(cls)}
		values = dict(defaults)
		for token in args.split():
			key, sep, value = token.partition("=")
			values[key] = value if sep else None
		cfg = cls()
		for key, value in values.items():
			if key not in known:
				raise ValueError(f"unknown agent option: {key!r}")
			if key == "init":
				cfg.init = value is None or str(value).lower() not in ("0", "false", "no")
			elif key == "alpha":
				try:
					cfg.alpha = float(value)
				except (TypeError, ValueError):
					raise ValueError(f"alpha must be a number, got {value!r}") from None
			elif key == "seed":
				try:
					cfg.seed = int(value)
				except (TypeError, ValueError):
					raise ValueError(f"seed must be an integer, got {value!r}") from None
			else:
				if value is None:
					raise ValueError(f"option {key!r} needs a value")
				setattr(cfg, key, str(value))
		return cfg
