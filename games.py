"""Registry of the bundled reference games, by name."""

from __future__ import annotations

from typing import Callable, Dict

from game_interface import Game
from kuhn.game import KuhnPoker
from leduc.game import LeducPoker
from liars_dice.game import LiarsDice, LiarsDiceConfig


def _liars_dice(**params) -> LiarsDice:
    return LiarsDice(LiarsDiceConfig(**params))


GAMES: Dict[str, Callable[..., Game]] = {
    "kuhn_poker": lambda: KuhnPoker(),
    "leduc_poker": lambda: LeducPoker(),
    "liars_dice": _liars_dice,
}


def load_game(name: str, **params) -> Game:
    """Instantiate a game by registry name. Only liars_dice takes parameters."""
    factory = GAMES.get(name)
    if factory is None:
        raise ValueError(f"Unknown game '{name}'. Available: {', '.join(sorted(GAMES))}")
    return factory(**params)
