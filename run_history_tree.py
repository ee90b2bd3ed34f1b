#!/usr/bin/env python3
"""Build a history tree and show counterfactual reach per information set.

Usage:
    python3 run_history_tree.py                          # Kuhn, responder 0, uniform opponent
    python3 run_history_tree.py --game leduc_poker       # Tree size only for large games
    python3 run_history_tree.py --policy first_action --responder 1
    python3 run_history_tree.py --policy optimal --alpha 0.2
"""

from __future__ import annotations

import argparse
import logging
import sys
import time

from games import GAMES, load_game
from history_tree import HistoryTree, StateType, get_all_infosets, infoset_beliefs
from kuhn.policies import optimal_policy
from policy import FirstActionPolicy, UniformRandomPolicy


def print_separator(title=""):
    print(f"\n{'='*60}")
    if title:
        print(f"  {title}")
        print(f"{'='*60}")


def make_policy(name: str, alpha: float):
    if name == "uniform":
        return UniformRandomPolicy()
    if name == "first_action":
        return FirstActionPolicy()
    return optimal_policy(alpha)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--game", default="kuhn_poker", choices=sorted(GAMES))
    parser.add_argument("--responder", type=int, default=0)
    parser.add_argument("--policy", default="uniform", choices=["uniform", "first_action", "optimal"])
    parser.add_argument("--alpha", type=float, default=0.0, help="Kuhn optimal policy parameter")
    parser.add_argument("--max-infosets", type=int, default=40, help="Information sets to print")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.policy == "optimal" and args.game != "kuhn_poker":
        parser.error("--policy optimal is only defined for kuhn_poker")

    game = load_game(args.game)
    print_separator(f"{args.game}: history tree for responder {args.responder}")
    t0 = time.time()
    tree = HistoryTree(game.new_initial_state(), args.responder)
    elapsed = time.time() - t0

    print(f"Built in {elapsed:.2f}s")
    print(f"  Histories: {tree.num_histories()}")
    for node_type in StateType:
        print(f"  {node_type.value:<10} {tree.count(node_type):>10}")

    policy = make_policy(args.policy, args.alpha)
    infosets = get_all_infosets(game.new_initial_state(), args.responder, policy, tree)
    beliefs = infoset_beliefs(infosets)

    print_separator(f"Counterfactual reach vs {args.policy} opponent")
    print(f"  Information sets: {len(infosets)}")
    print(f"  {'Infoset':<20} {'History':<24} {'Reach':>10} {'Belief':>8}")
    print(f"  {'-'*64}")
    for key in list(infosets)[:args.max_infosets]:
        for (node, reach), belief in zip(infosets[key], beliefs[key].tolist()):
            print(f"  {key!r:<20} {node.history:<24} {reach:>10.6f} {belief:>8.4f}")
    if len(infosets) > args.max_infosets:
        print(f"  ... {len(infosets) - args.max_infosets} more")
    return 0


if __name__ == "__main__":
    sys.exit(main())
