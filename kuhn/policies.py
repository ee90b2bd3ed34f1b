"""Closed-form Kuhn Poker policies.

The Nash equilibria of Kuhn Poker form a one-parameter family: player 0
bets a Jack with probability alpha in [0, 1/3], bets a King with 3*alpha,
and calls a bet with a Queen with probability alpha + 1/3. Player 1's
equilibrium strategy is unique.
"""

from __future__ import annotations

from kuhn.game import BET, PASS
from policy import TabularPolicy


def optimal_policy(alpha: float = 0.0) -> TabularPolicy:
    """Equilibrium policy for both players, keyed by information state."""
    if not 0.0 <= alpha <= 1.0 / 3.0:
        raise ValueError(f"alpha must be in [0, 1/3], got {alpha}")
    three_alpha = 3 * alpha
    return TabularPolicy({
        # Player 0
        "0": {PASS: 1 - alpha, BET: alpha},
        "0pb": {PASS: 1.0, BET: 0.0},
        "1": {PASS: 1.0, BET: 0.0},
        "1pb": {PASS: 2.0 / 3.0 - alpha, BET: 1.0 / 3.0 + alpha},
        "2": {PASS: 1 - three_alpha, BET: three_alpha},
        "2pb": {PASS: 0.0, BET: 1.0},
        # Player 1
        "0p": {PASS: 2.0 / 3.0, BET: 1.0 / 3.0},
        "0b": {PASS: 1.0, BET: 0.0},
        "1p": {PASS: 1.0, BET: 0.0},
        "1b": {PASS: 2.0 / 3.0, BET: 1.0 / 3.0},
        "2p": {PASS: 0.0, BET: 1.0},
        "2b": {PASS: 0.0, BET: 1.0},
    })
