"""Abstract game interface for history-tree construction.

Defines the protocol that any game state must implement to be expanded
into a HistoryTree and indexed by the counterfactual info-set indexer.
This allows the same tree code to work with Kuhn Poker, Leduc Poker,
Liar's Dice, or any other imperfect-information game.

The interface uses Python's Protocol (structural subtyping) so games
don't need to explicitly inherit — they just need to implement the
required methods.

Unlike a solver-facing interface where the game object answers every
query, here the *state* carries the capability set: the tree stores one
state snapshot per node and asks it about itself.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple, runtime_checkable


# Type alias — games define their own action type (ints for every bundled game)
Action = Any

# current_player() value at chance nodes
CHANCE_PLAYER = -1


def history_string(actions: Sequence[Action]) -> str:
    """Canonical serialization of an action sequence: "0, 1, 0, 1"."""
    return ", ".join(str(a) for a in actions)


@runtime_checkable
class State(Protocol):
    """Interface for one state of an imperfect-information game.

    States are treated as immutable values: child() returns a new state
    and never mutates the receiver.
    """

    def is_terminal(self) -> bool:
        """Return True if the state is terminal (game over)."""
        ...

    def is_chance_node(self) -> bool:
        """Return True if the next action is drawn by chance."""
        ...

    def current_player(self) -> Optional[int]:
        """Return the current player to act.

        Returns:
            0, 1, ... for player turns
            CHANCE_PLAYER (-1) for chance nodes
            None for terminal states
        """
        ...

    def legal_actions(self) -> List[Action]:
        """Return the ordered list of legal actions at this state.

        At chance nodes these are the chance outcomes' actions.
        """
        ...

    def chance_outcomes(self) -> List[Tuple[Action, float]]:
        """Return (action, probability) pairs for chance nodes.

        Only meaningful when is_chance_node() is True.
        Probabilities must sum to 1.
        """
        ...

    def child(self, action: Action) -> "State":
        """Return the state after taking a legal action."""
        ...

    def information_state_string(self, player: Optional[int] = None) -> str:
        """Return a string key identifying the information set.

        With no player argument, the key is computed for the player to act.
        Two states have the same key for a player iff that player cannot
        distinguish between them.
        """
        ...

    def history(self) -> List[Action]:
        """Return every action taken from the initial state, chance included."""
        ...

    def history_string(self) -> str:
        """Return history() serialized with history_string()."""
        ...

    def returns(self) -> List[float]:
        """Return each player's utility. All zeros before the game ends."""
        ...


@runtime_checkable
class Game(Protocol):
    """Interface for a game: a factory of initial states."""

    NUM_PLAYERS: int

    def new_initial_state(self) -> State:
        """Return the initial game state (before any actions)."""
        ...


def as_action_map(pairs: Sequence[Tuple[Action, float]]) -> Dict[Action, float]:
    """Collapse (action, probability) pairs into an ordered dict."""
    return {action: prob for action, prob in pairs}
