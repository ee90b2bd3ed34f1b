"""Leduc Poker game definition.

Leduc Poker uses a 6-card deck with 3 ranks (J, Q, K) and 2 suits per rank.
Players each ante 1 chip, receive one private card, then play two betting rounds:
- Round 1 (preflop): bet size = 1
- Round 2 (after a public board card is revealed): bet size = 2
Each round allows up to 2 raises.

Hand ranking at showdown:
- Pair with board card beats any non-pair
- Among non-pairs (or both pairs), higher rank wins
- Equal ranks = tie (split pot)

Action encoding:
  chance: card index 0..5 (rank = card // 2), player 0's card first,
          then player 1's, then the board card after round 1
  0 = fold, 1 = check/call, 2 = bet/raise
Fold is only legal when facing a bet.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from game_interface import CHANCE_PLAYER, Game, history_string

NUM_RANKS = 3
NUM_SUITS = 2
RANKS = [0, 1, 2]
RANK_TO_STR = {0: "J", 1: "Q", 2: "K"}
DECK = list(range(NUM_RANKS * NUM_SUITS))
MAX_BETS_PER_ROUND = 2

FOLD = 0
CALL = 1
RAISE = 2
ACTION_CHARS = {FOLD: "f", CALL: "c", RAISE: "b"}


def card_rank(card: int) -> int:
    return card // NUM_SUITS


@dataclass(frozen=True)
class LeducState:
    actions: Tuple[int, ...] = ()
    cards: Tuple[int, ...] = ()
    board: Optional[int] = None
    betting: str = ""
    round_index: int = 0
    round_actions: str = ""
    round_contrib: Tuple[int, int] = (0, 0)
    contrib: Tuple[int, int] = (1, 1)
    player: Optional[int] = CHANCE_PLAYER
    terminal_winner: Optional[int] = None

    def is_terminal(self) -> bool:
        return self.player is None

    def is_chance_node(self) -> bool:
        return self.player == CHANCE_PLAYER

    def current_player(self) -> Optional[int]:
        return self.player

    def chance_outcomes(self) -> List[Tuple[int, float]]:
        if not self.is_chance_node():
            return []
        remaining = [card for card in DECK if card not in self.cards]
        prob = 1.0 / len(remaining)
        return [(card, prob) for card in remaining]

    def legal_actions(self) -> List[int]:
        if self.is_terminal():
            return []
        if self.is_chance_node():
            return [card for card, _ in self.chance_outcomes()]
        bet_size = 1 if self.round_index == 0 else 2
        max_contrib = max(self.round_contrib)
        to_call = max_contrib - self.round_contrib[self.player]
        round_raises = max_contrib // bet_size

        if to_call > 0:
            actions = [FOLD, CALL]
            if round_raises < MAX_BETS_PER_ROUND:
                actions.append(RAISE)
            return actions
        return [CALL, RAISE]

    def child(self, action: int) -> "LeducState":
        if action not in self.legal_actions():
            raise ValueError(f"Illegal action {action} at history '{self.history_string()}'")
        actions = self.actions + (action,)

        if self.is_chance_node():
            if len(self.cards) < 2:
                cards = self.cards + (action,)
                return replace(
                    self,
                    actions=actions,
                    cards=cards,
                    player=0 if len(cards) == 2 else CHANCE_PLAYER,
                )
            return replace(
                self,
                actions=actions,
                board=action,
                round_index=1,
                round_actions="",
                round_contrib=(0, 0),
                player=0,
            )

        player = self.player
        bet_size = 1 if self.round_index == 0 else 2
        max_contrib = max(self.round_contrib)
        to_call = max_contrib - self.round_contrib[player]
        round_contrib = list(self.round_contrib)
        contrib = list(self.contrib)
        betting = self.betting + ACTION_CHARS[action]
        round_actions = self.round_actions + ACTION_CHARS[action]

        if action == FOLD:
            return replace(
                self,
                actions=actions,
                betting=betting,
                round_actions=round_actions,
                player=None,
                terminal_winner=1 - player,
            )

        if action == CALL and to_call == 0:
            if self.round_actions.endswith("c"):
                return self._end_round(actions, betting, round_actions, round_contrib, contrib)
            return replace(
                self,
                actions=actions,
                betting=betting,
                round_actions=round_actions,
                player=1 - player,
            )

        if action == CALL:
            round_contrib[player] += to_call
            contrib[player] += to_call
            return self._end_round(actions, betting, round_actions, round_contrib, contrib)

        increment = to_call + bet_size
        round_contrib[player] += increment
        contrib[player] += increment
        return replace(
            self,
            actions=actions,
            betting=betting,
            round_actions=round_actions,
            round_contrib=tuple(round_contrib),
            contrib=tuple(contrib),
            player=1 - player,
        )

    def _end_round(self, actions, betting, round_actions, round_contrib, contrib) -> "LeducState":
        if self.round_index == 0:
            return replace(
                self,
                actions=actions,
                betting=betting + "|",
                round_actions="",
                round_contrib=(0, 0),
                contrib=tuple(contrib),
                player=CHANCE_PLAYER,
            )
        return replace(
            self,
            actions=actions,
            betting=betting,
            round_actions=round_actions,
            round_contrib=tuple(round_contrib),
            contrib=tuple(contrib),
            player=None,
        )

    def information_state_string(self, player: Optional[int] = None) -> str:
        if player is None:
            player = self.player
        if player is None or player < 0:
            raise ValueError(f"No information state for player {player}")
        if len(self.cards) <= player:
            return ""
        board_str = RANK_TO_STR[card_rank(self.board)] if self.board is not None else "-"
        return f"{RANK_TO_STR[card_rank(self.cards[player])]}{board_str}|{self.betting}"

    def history(self) -> List[int]:
        return list(self.actions)

    def history_string(self) -> str:
        return history_string(self.actions)

    def returns(self) -> List[float]:
        if not self.is_terminal():
            return [0.0, 0.0]
        pot = sum(self.contrib)
        winner = self.terminal_winner
        if winner is None:
            winner = self._showdown_winner()
        if winner is None:
            return [float(pot / 2.0 - c) for c in self.contrib]
        return [
            float(pot - self.contrib[p]) if p == winner else float(-self.contrib[p])
            for p in range(2)
        ]

    def _showdown_winner(self) -> Optional[int]:
        board_rank = card_rank(self.board)
        p0_rank = card_rank(self.cards[0])
        p1_rank = card_rank(self.cards[1])

        p0_pair = p0_rank == board_rank
        p1_pair = p1_rank == board_rank

        if p0_pair and not p1_pair:
            return 0
        if p1_pair and not p0_pair:
            return 1
        if p0_rank > p1_rank:
            return 0
        if p1_rank > p0_rank:
            return 1
        return None


class LeducPoker:
    NUM_PLAYERS = 2

    def new_initial_state(self) -> LeducState:
        return LeducState()


# Verify LeducPoker satisfies the Game protocol at import time
assert isinstance(LeducPoker(), Game), "LeducPoker must implement the Game protocol"
