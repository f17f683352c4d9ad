from __future__ import annotations

import argparse
import os
import sys
import time
from collections import Counter
from typing import Dict, List, Optional, Sequence

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from game import SEATS, GameSession, make_rng  # type: ignore


def simulate(games: int, seed: int = 0, max_steps: int = 100000) -> Dict[str, object]:
    """Plays `games` all-computer games from consecutive seeds and tallies the winners."""
    wins: Counter = Counter()
    steps: List[int] = []
    for i in range(games):
        session = GameSession(computer_seats=SEATS, rng=make_rng(seed + i))
        state = session.play_to_end(max_steps=max_steps)
        wins[state.winner] += 1
        steps.append(session.steps)
    return {
        "games": games,
        "wins": {seat: int(wins.get(seat, 0)) for seat in SEATS},
        "avg_steps": (sum(steps) / len(steps)) if steps else None,
        "max_steps": max(steps) if steps else None,
    }


def main(argv: Optional[Sequence[str]] = None) -> None:
    ap = argparse.ArgumentParser(description='Run computer-only Ludo games and report win counts')
    ap.add_argument('--games', type=int, default=100)
    ap.add_argument('--seed', type=int, default=0, help='Seed of the first game; later games use seed+i')
    ap.add_argument('--max-steps', type=int, default=100000)
    args = ap.parse_args(argv)

    t0 = time.time()
    res = simulate(args.games, seed=args.seed, max_steps=args.max_steps)
    dt = time.time() - t0
    print(f"games={res['games']} elapsed={dt:.2f}s")
    for seat, n in res['wins'].items():  # type: ignore[union-attr]
        share = (n / args.games) if args.games else 0.0
        print(f"  {seat:<6} wins={n:<5} share={share:.1%}")
    print(f"avg_steps={res['avg_steps']} max_steps={res['max_steps']}")


if __name__ == '__main__':
    main()
