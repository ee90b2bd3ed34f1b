"""Liar's Dice game definition.

Each player rolls their dice in secret. Players then take turns bidding on
the total number of dice (across all players) showing a given face. Every
bid must be strictly higher than the previous one. Instead of bidding, a
player may call "liar" on the previous bid, which ends the game:
- if the bid holds (enough dice show the face), the caller loses
- otherwise the bidder loses

Action encoding:
  chance: the face rolled, 1..num_sides, player 0's dice first
  bid b in [0, total_dice * num_sides): quantity = b // num_sides + 1,
                                         face = b % num_sides + 1
  LIAR = total_dice * num_sides
Bids are ordered by quantity, then face, so "strictly higher" is simply a
larger action id. Liar is not legal as the opening move.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from game_interface import CHANCE_PLAYER, Game, history_string


@dataclass(frozen=True)
class LiarsDiceConfig:
    num_players: int = 2
    dice_per_player: int = 1
    num_sides: int = 6
    # Face that counts towards every bid; None disables wilds
    wild_face: Optional[int] = None

    @property
    def total_dice(self) -> int:
        return self.num_players * self.dice_per_player

    @property
    def num_bids(self) -> int:
        return self.total_dice * self.num_sides

    @property
    def liar_action(self) -> int:
        return self.num_bids


def bid_quantity_face(bid: int, num_sides: int) -> Tuple[int, int]:
    return bid // num_sides + 1, bid % num_sides + 1


@dataclass(frozen=True)
class LiarsDiceState:
    config: LiarsDiceConfig = field(default_factory=LiarsDiceConfig)
    actions: Tuple[int, ...] = ()

    @property
    def num_rolls(self) -> int:
        return min(len(self.actions), self.config.total_dice)

    @property
    def bids(self) -> Tuple[int, ...]:
        return self.actions[self.config.total_dice:]

    def dice(self, player: int) -> Tuple[int, ...]:
        start = player * self.config.dice_per_player
        return self.actions[start:min(start + self.config.dice_per_player, self.num_rolls)]

    def is_chance_node(self) -> bool:
        return len(self.actions) < self.config.total_dice

    def is_terminal(self) -> bool:
        bids = self.bids
        return bool(bids) and bids[-1] == self.config.liar_action

    def current_player(self) -> Optional[int]:
        if self.is_chance_node():
            return CHANCE_PLAYER
        if self.is_terminal():
            return None
        return len(self.bids) % self.config.num_players

    def chance_outcomes(self) -> List[Tuple[int, float]]:
        if not self.is_chance_node():
            return []
        prob = 1.0 / self.config.num_sides
        return [(face, prob) for face in range(1, self.config.num_sides + 1)]

    def legal_actions(self) -> List[int]:
        if self.is_chance_node():
            return list(range(1, self.config.num_sides + 1))
        if self.is_terminal():
            return []
        bids = self.bids
        if not bids:
            return list(range(self.config.num_bids))
        return list(range(bids[-1] + 1, self.config.num_bids)) + [self.config.liar_action]

    def child(self, action: int) -> "LiarsDiceState":
        if action not in self.legal_actions():
            raise ValueError(f"Illegal action {action} at history '{self.history_string()}'")
        return LiarsDiceState(config=self.config, actions=self.actions + (action,))

    def _bid_str(self, bid: int) -> str:
        if bid == self.config.liar_action:
            return "Liar"
        quantity, face = bid_quantity_face(bid, self.config.num_sides)
        return f"{quantity}-{face}"

    def information_state_string(self, player: Optional[int] = None) -> str:
        """Own dice, then the public bid sequence: "35 1-2 2-6"."""
        if player is None:
            player = self.current_player()
        if player is None or player < 0:
            raise ValueError(f"No information state for player {player}")
        parts = ["".join(str(d) for d in self.dice(player))]
        parts.extend(self._bid_str(b) for b in self.bids)
        return " ".join(parts)

    def history(self) -> List[int]:
        return list(self.actions)

    def history_string(self) -> str:
        return history_string(self.actions)

    def returns(self) -> List[float]:
        """+1 to the winner of the challenge, -1 to the loser, 0 to the rest."""
        n = self.config.num_players
        if not self.is_terminal():
            return [0.0] * n
        bids = self.bids
        caller = (len(bids) - 1) % n
        bidder = (len(bids) - 2) % n
        quantity, face = bid_quantity_face(bids[-2], self.config.num_sides)
        rolled = self.actions[:self.config.total_dice]
        count = sum(1 for d in rolled if d == face or d == self.config.wild_face)
        loser = caller if count >= quantity else bidder
        winner = bidder if loser == caller else caller
        utilities = [0.0] * n
        utilities[winner] = 1.0
        utilities[loser] = -1.0
        return utilities


class LiarsDice:
    def __init__(self, config: Optional[LiarsDiceConfig] = None) -> None:
        self.config = config or LiarsDiceConfig()
        self.NUM_PLAYERS = self.config.num_players

    def new_initial_state(self) -> LiarsDiceState:
        return LiarsDiceState(config=self.config)


assert isinstance(LiarsDice(), Game), "LiarsDice must implement the Game protocol"
