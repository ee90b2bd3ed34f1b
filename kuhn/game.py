"""Kuhn Poker game definition.

Kuhn Poker is a simplified poker game with 3 cards (J, Q, K) and 2 players.
Each player antes 1 chip, receives one card, then can pass/bet in a single round.

Action encoding (integers, so history strings read "0, 2, 0, 1"):
  chance: the card dealt (0 = J, 1 = Q, 2 = K), player 0 first
  0 = pass (check/fold)
  1 = bet (bet/call)

Terminal betting sequences: pp, bp, bb, pbp, pbb
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from game_interface import CHANCE_PLAYER, Game, history_string

NUM_CARDS = 3
CARD_RANKS = list(range(NUM_CARDS))
RANK_NAMES = {0: "J", 1: "Q", 2: "K"}

PASS = 0
BET = 1
ACTION_CHARS = {PASS: "p", BET: "b"}
TERMINAL_BETTING = {"pp", "bp", "bb", "pbp", "pbb"}


@dataclass(frozen=True)
class KuhnState:
    """A state in Kuhn Poker.

    actions: every action from the root, deals included.
    """
    actions: Tuple[int, ...] = ()

    @property
    def cards(self) -> Tuple[int, ...]:
        return self.actions[:2]

    @property
    def betting(self) -> str:
        return "".join(ACTION_CHARS[a] for a in self.actions[2:])

    def is_chance_node(self) -> bool:
        return len(self.actions) < 2

    def is_terminal(self) -> bool:
        return self.betting in TERMINAL_BETTING

    def current_player(self) -> Optional[int]:
        """Return current player (0 or 1), -1 for chance, None for terminal."""
        if self.is_chance_node():
            return CHANCE_PLAYER
        if self.is_terminal():
            return None
        return len(self.actions[2:]) % 2

    def legal_actions(self) -> List[int]:
        if self.is_chance_node():
            return [card for card in CARD_RANKS if card not in self.actions]
        if self.is_terminal():
            return []
        return [PASS, BET]

    def chance_outcomes(self) -> List[Tuple[int, float]]:
        """Deal the next card uniformly from those remaining."""
        if not self.is_chance_node():
            return []
        remaining = self.legal_actions()
        prob = 1.0 / len(remaining)
        return [(card, prob) for card in remaining]

    def child(self, action: int) -> "KuhnState":
        if action not in self.legal_actions():
            raise ValueError(f"Illegal action {action} at history '{self.history_string()}'")
        return KuhnState(actions=self.actions + (action,))

    def information_state_string(self, player: Optional[int] = None) -> str:
        """Information set key: private card + public betting."""
        if player is None:
            player = self.current_player()
        if player is None or player < 0:
            raise ValueError(f"No information state for player {player}")
        if len(self.cards) <= player:
            return ""
        return f"{self.cards[player]}{self.betting}"

    def history(self) -> List[int]:
        return list(self.actions)

    def history_string(self) -> str:
        return history_string(self.actions)

    def returns(self) -> List[float]:
        """Utility for each player; zeros before the game ends."""
        if not self.is_terminal():
            return [0.0, 0.0]
        h = self.betting
        if h == "bp":
            winner, contrib = 0, (2, 1)
        elif h == "pbp":
            winner, contrib = 1, (1, 2)
        elif h == "pp":
            contrib = (1, 1)
            winner = 0 if self.cards[0] > self.cards[1] else 1
        else:
            contrib = (2, 2)
            winner = 0 if self.cards[0] > self.cards[1] else 1

        pot = sum(contrib)
        return [
            float(pot - contrib[p]) if p == winner else float(-contrib[p])
            for p in range(2)
        ]

    def __str__(self) -> str:
        cards = " ".join(RANK_NAMES[c] for c in self.cards)
        return f"{cards} {self.betting}".strip()


class KuhnPoker:
    """Kuhn Poker game engine."""

    NUM_PLAYERS = 2
    NUM_CARDS = NUM_CARDS

    def new_initial_state(self) -> KuhnState:
        return KuhnState()


assert isinstance(KuhnPoker(), Game), "KuhnPoker must implement the Game protocol"
