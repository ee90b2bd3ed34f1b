"""Policies: action-probability distributions for the player to act.

A policy is anything that answers "what are the action probabilities at
this state?". The history-tree indexer only depends on that contract and
on PolicyError as the failure signal, so a policy may be a lookup table,
a closed-form rule, or a thin wrapper around an implementation that lives
somewhere else entirely (CallablePolicy).

Strategy tables use the same shape as solver output profiles:
    {info_state: {action: probability}}
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from game_interface import Action, Game, State, as_action_map

logger = logging.getLogger(__name__)

StrategyProfile = Dict[str, Dict[Action, float]]
ActionsAndProbs = List[Tuple[Action, float]]


class PolicyError(Exception):
    """Raised when a policy cannot answer for a state or information state."""


class Policy:
    """Base class for policies.

    Subclasses implement action_probabilities(); the list-returning
    accessors are derived from it.
    """

    def action_probabilities(self, state: State, player: Optional[int] = None) -> Dict[Action, float]:
        """Return {action: probability} for `player` (default: the player to act).

        Every subclass must override this.
        """
        raise NotImplementedError

    def get_state_policy(self, state: State, player: Optional[int] = None) -> ActionsAndProbs:
        """Return the distribution as ordered (action, probability) pairs."""
        return list(self.action_probabilities(state, player).items())

    def get_info_state_policy(self, info_state: str) -> ActionsAndProbs:
        """Return the distribution for a bare information-state string."""
        raise PolicyError(
            f"{type(self).__name__} cannot answer for information state '{info_state}' without a state"
        )

    def get_state_policy_as_parallel_vectors(
        self, state_or_info_state: Union[State, str], player: Optional[int] = None
    ) -> Tuple[List[Action], List[float]]:
        """Return (actions, probabilities) as two aligned lists.

        Accepts either a state or a bare information-state string.
        """
        if isinstance(state_or_info_state, str):
            pairs = self.get_info_state_policy(state_or_info_state)
        else:
            pairs = self.get_state_policy(state_or_info_state, player)
        return [a for a, _ in pairs], [p for _, p in pairs]


class TabularPolicy(Policy):
    """Policy backed by an {info_state: {action: prob}} table.

    The table is keyed by the acting player's information-state string.
    Looking up a key that is not in the table raises PolicyError.
    action_probabilities() also takes the information-state string itself.
    """

    def __init__(self, table: Optional[Mapping[str, Union[Mapping[Action, float], ActionsAndProbs]]] = None) -> None:
        self.table: StrategyProfile = {}
        for key, probs in (table or {}).items():
            self.table[key] = dict(probs) if isinstance(probs, Mapping) else as_action_map(probs)

    def action_probabilities(self, state: Union[State, str], player: Optional[int] = None) -> Dict[Action, float]:
        key = state if isinstance(state, str) else state.information_state_string(player)
        probs = self.table.get(key)
        if probs is None:
            raise PolicyError(f"No policy entry for information state '{key}'")
        return dict(probs)

    def get_info_state_policy(self, info_state: str) -> ActionsAndProbs:
        probs = self.table.get(info_state)
        if probs is None:
            raise PolicyError(f"No policy entry for information state '{info_state}'")
        return list(probs.items())

    def to_profile(self) -> StrategyProfile:
        return {key: dict(probs) for key, probs in self.table.items()}

    def serialize(self, double_precision: int = -1, delimiter: str = "<~>") -> str:
        """One line per information state: `info_state<delimiter>a:p,a:p,...`.

        double_precision=-1 writes probabilities with full float precision,
        otherwise with that many decimal places. The delimiter must not occur
        in any information-state key.
        """
        if not delimiter:
            raise ValueError("Delimiter must be non-empty")
        lines = []
        for key, probs in self.table.items():
            if delimiter in key:
                raise ValueError(f"Delimiter '{delimiter}' occurs in information state '{key}'")
            if double_precision < 0:
                body = ",".join(f"{a}:{p!r}" for a, p in probs.items())
            else:
                body = ",".join(f"{a}:{p:.{double_precision}f}" for a, p in probs.items())
            lines.append(f"{key}{delimiter}{body}")
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self.table)

    def __contains__(self, info_state: str) -> bool:
        return info_state in self.table

    def __iter__(self) -> Iterator[str]:
        return iter(self.table)


class UniformRandomPolicy(Policy):
    """Every legal action with equal probability."""

    def action_probabilities(self, state: State, player: Optional[int] = None) -> Dict[Action, float]:
        actions = state.legal_actions()
        if not actions:
            raise PolicyError(f"No legal actions at history '{state.history_string()}'")
        prob = 1.0 / len(actions)
        return {a: prob for a in actions}


class FirstActionPolicy(Policy):
    """Always the first listed legal action (e.g. always pass/fold)."""

    def action_probabilities(self, state: State, player: Optional[int] = None) -> Dict[Action, float]:
        actions = state.legal_actions()
        if not actions:
            raise PolicyError(f"No legal actions at history '{state.history_string()}'")
        return {a: (1.0 if idx == 0 else 0.0) for idx, a in enumerate(actions)}


class CallablePolicy(Policy):
    """Adapts any callable state -> distribution to the Policy contract.

    The callable may return a mapping or a sequence of (action, prob) pairs,
    or None to signal that it cannot answer. It may also raise PolicyError
    itself. Nothing else about its implementation is assumed.
    """

    def __init__(self, fn: Callable[[State], Union[Mapping[Action, float], Sequence[Tuple[Action, float]], None]]) -> None:
        self.fn = fn

    def action_probabilities(self, state: State, player: Optional[int] = None) -> Dict[Action, float]:
        result = self.fn(state)
        if result is None:
            raise PolicyError(f"Policy returned no distribution at history '{state.history_string()}'")
        if isinstance(result, Mapping):
            return dict(result)
        return as_action_map(result)


def all_information_states(game: Game) -> Dict[str, List[Action]]:
    """Every decision information state of the game with its legal actions.

    Keys are computed for the acting player, in depth-first order.
    """
    infostates: Dict[str, List[Action]] = {}
    stack = [game.new_initial_state()]
    while stack:
        state = stack.pop()
        if state.is_terminal():
            continue
        actions = state.legal_actions()
        if not state.is_chance_node():
            infostates.setdefault(state.information_state_string(), actions)
        for a in reversed(actions):
            stack.append(state.child(a))
    return infostates


def tabular_policy_from_rule(game: Game, rule: Callable[[List[Action]], Dict[Action, float]]) -> TabularPolicy:
    """Build a TabularPolicy by applying `rule` to every infostate's legal actions."""
    table = {key: rule(actions) for key, actions in all_information_states(game).items()}
    logger.debug("Built tabular policy with %d information states", len(table))
    return TabularPolicy(table)


def uniform_policy(game: Game) -> TabularPolicy:
    """Tabular uniform-random policy over every information state."""
    return tabular_policy_from_rule(
        game, lambda actions: {a: 1.0 / len(actions) for a in actions}
    )


def first_action_policy(game: Game) -> TabularPolicy:
    """Tabular policy that always picks the first legal action."""
    return tabular_policy_from_rule(
        game, lambda actions: {a: (1.0 if idx == 0 else 0.0) for idx, a in enumerate(actions)}
    )
