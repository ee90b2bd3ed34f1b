"""One node of a history tree.

A node owns a snapshot of the game state reached by its history, its
classification (decision / chance / terminal), and the information-state
key used to group it with indistinguishable histories.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from game_interface import Action, State
from history_tree.errors import TreeConstructionError

# Sentinels: distinct from each other and from any real information state
CHANCE_INFO_STATE = "Chance Node"
TERMINAL_INFO_STATE = "Terminal node"


class StateType(Enum):
    DECISION = "decision"
    CHANCE = "chance"
    TERMINAL = "terminal"


class HistoryNode:
    """A state in the history tree, classified from `responder`'s point of view.

    info_state is:
      - TERMINAL_INFO_STATE at terminal nodes
      - CHANCE_INFO_STATE at chance nodes
      - the responder's information state where the responder acts
      - the acting player's information state elsewhere. This is an opaque
        identifier only; it is never used to group histories.
    """

    def __init__(self, responder: int, state: State) -> None:
        self.state = state
        self.history: str = state.history_string()
        self.children: Dict[Action, HistoryNode] = {}

        if state.is_terminal():
            self.type = StateType.TERMINAL
            self.info_state = TERMINAL_INFO_STATE
            self.child_actions: List[Action] = []
            return

        if state.is_chance_node():
            self.type = StateType.CHANCE
            self.info_state = CHANCE_INFO_STATE
        elif state.current_player() == responder:
            self.type = StateType.DECISION
            self.info_state = state.information_state_string(responder)
        else:
            self.type = StateType.DECISION
            self.info_state = state.information_state_string()

        self.child_actions = list(state.legal_actions())
        if not self.child_actions:
            raise TreeConstructionError(
                f"Non-terminal {self.type.value} node '{self.history}' reports no legal actions"
            )
        if len(set(self.child_actions)) != len(self.child_actions):
            raise TreeConstructionError(
                f"Duplicate legal actions {self.child_actions} at '{self.history}'"
            )

    def add_child(self, action: Action, child: "HistoryNode") -> None:
        if action in self.children:
            raise TreeConstructionError(f"Child for action {action} already exists at '{self.history}'")
        self.children[action] = child

    def get_child(self, action: Action) -> Optional["HistoryNode"]:
        return self.children.get(action)

    def num_children(self) -> int:
        return len(self.children)

    @property
    def player(self) -> Optional[int]:
        return self.state.current_player()

    def __repr__(self) -> str:
        return f"HistoryNode(history={self.history!r}, type={self.type.value}, info_state={self.info_state!r})"
