from __future__ import annotations
import argparse
import os
from typing import Callable, Optional

import numpy as np
from tqdm import trange

from .agents import Agent, RandomEnvironment, TDAgent
from .board import make_board
from .config import AgentConfig
from .episode import play_episode


class AverageMeter:
	def __init__(self):
		self.sum = 0.0
		self.n = 0

	def update(self, v, k=1):
		self.sum += float(v) * k
		self.n += k

	@property
	def avg(self):
		return self.sum / max(1, self.n)


def train(
	player: Agent,
	environment: Agent,
	total: int,
	block: int = 1000,
	variant: str = "2048",
	logger: Optional[Callable[[str], None]] = None,
	progress: bool = True,
):
	"""Play ``total`` episodes; log one summary line every ``block`` episodes.

	Returns the scores of all episodes.
	"""
	log = logger if logger is not None else print
	scores = np.zeros(total, dtype=np.int64)
	m_score = AverageMeter(); m_err = AverageMeter()
	best_score, best_rank = 0, 0
	tile_value = make_board(variant).tile_value
	for ep in trange(total, desc="episodes", disable=not progress):
		result = play_episode(player, environment, board=make_board(variant))
		scores[ep] = result.score
		m_score.update(result.score)
		m_err.update(getattr(player, "last_error", 0.0))
		best_score = max(best_score, result.score)
		best_rank = max(best_rank, result.max_rank)
		if (block and (ep + 1) % block == 0) or ep + 1 == total:
			log(f"{ep + 1}\tavg = {m_score.avg:.1f}\tmax = {best_score}"
				f"\ttile = {tile_value(best_rank)}\terror = {m_err.avg:.4f}")
			m_score = AverageMeter(); m_err = AverageMeter()
			best_score, best_rank = 0, 0
	return scores


def make_environment(evil: str = "", seed: Optional[int] = None) -> RandomEnvironment:
	# seed is the environment default unless evil names one
	defaults = {} if seed is None else {"seed": seed}
	return RandomEnvironment(AgentConfig.parse(evil, name="random", role="environment", **defaults))


def main(argv=None):
	ap = argparse.ArgumentParser(description="n-tuple TD learning for 2048-like games")
	ap.add_argument("--total", type=int, default=1000, help="episodes to play (0: only create/save weights)")
	ap.add_argument("--block", type=int, default=1000, help="episodes per summary line")
	ap.add_argument("--play", type=str, default="", help='player options, e.g. "load=w.bin save=w.bin alpha=0.0025"')
	ap.add_argument("--evil", type=str, default="", help='environment options, e.g. "seed=7"')
	ap.add_argument("--variant", type=str, default="2048", choices=["2048", "2584"])
	ap.add_argument("--seed", type=int, default=None)
	ap.add_argument("--log", type=str, default=None, help="append the summary lines to this file")
	ap.add_argument("--no-progress", action="store_true")
	args = ap.parse_args(argv)

	log_f = None
	if args.log is not None:
		log_dir = os.path.dirname(args.log)
		if log_dir:
			os.makedirs(log_dir, exist_ok=True)
		log_f = open(args.log, "a", encoding="utf-8")
	def logger(msg: str):
		print(msg)
		if log_f:
			log_f.write(msg + "\n"); log_f.flush()

	try:
		with TDAgent(args.play) as player:
			environment = make_environment(args.evil, args.seed)
			logger(f"player={player.name} alpha={player.alpha} environment={environment.name} variant={args.variant}")
			if args.total > 0:
				train(player, environment, total=args.total, block=args.block, variant=args.variant,
					logger=logger, progress=not args.no_progress)
		if player.config.save:
			logger(f"saved weights -> {player.config.save}")
	finally:
		if log_f:
			log_f.close()


if __name__ == "__main__":
	main()
