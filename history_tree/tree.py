"""History tree: every reachable history of a game, materialized in memory.

The tree is built once, fully, for a (initial state, responder) pair and
is immutable afterwards. Construction uses an explicit stack in pre-order
(parent before children, children in legal-action order), so it gives the
same node order as the natural recursive expansion without growing the
Python call stack with game depth.

Memory is O(number of reachable histories): there is no sampling or
pruning. Games with hundreds of thousands of histories (Liar's Dice) are
fine; unbounded games are not supported.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, Optional, Tuple

from game_interface import State
from history_tree.config import HistoryTreeConfig
from history_tree.errors import TreeConstructionError
from history_tree.node import HistoryNode, StateType

logger = logging.getLogger(__name__)


class HistoryTree:
    """All histories reachable from `state`, keyed by history string.

    Usage:
        tree = HistoryTree(game.new_initial_state(), responder=0)
        node = tree.get_by_history("0, 1, 0")
        for history in tree.histories():
            ...
    """

    def __init__(
        self,
        state: State,
        responder: int,
        config: Optional[HistoryTreeConfig] = None,
    ) -> None:
        self.responder = responder
        self.config = config or HistoryTreeConfig()
        self._nodes: Dict[str, HistoryNode] = {}
        self.root: Optional[HistoryNode] = self._build(state)

    def _add(self, node: HistoryNode) -> None:
        if node.history in self._nodes:
            raise TreeConstructionError(f"Duplicate history '{node.history}'")
        max_histories = self.config.max_histories
        if max_histories is not None and len(self._nodes) >= max_histories:
            raise TreeConstructionError(f"History tree exceeds max_histories={max_histories}")
        self._nodes[node.history] = node
        if len(self._nodes) % self.config.log_every == 0:
            logger.info("History tree: %d nodes built", len(self._nodes))

    @staticmethod
    def _successor(node: HistoryNode, action) -> State:
        try:
            child_state = node.state.child(action)
        except Exception as exc:
            raise TreeConstructionError(
                f"Action {action} at '{node.history}' produced no successor: {exc}"
            ) from exc
        if child_state is None:
            raise TreeConstructionError(f"Action {action} at '{node.history}' produced no successor")
        return child_state

    def _build(self, state: State) -> HistoryNode:
        root = None
        # (parent, action, state) still to be turned into nodes
        stack = [(None, None, state)]
        while stack:
            parent, action, node_state = stack.pop()
            node = HistoryNode(self.responder, node_state)
            if parent is None:
                root = node
            else:
                parent.add_child(action, node)
            self._add(node)

            # Reversed so children are expanded in legal-action order
            for child_action in reversed(node.child_actions):
                stack.append((node, child_action, self._successor(node, child_action)))

        logger.debug(
            "Built history tree for responder %d: %d histories", self.responder, len(self._nodes)
        )
        return root

    def num_histories(self) -> int:
        return len(self._nodes)

    def histories(self) -> Tuple[str, ...]:
        """Snapshot of every history key, in construction order."""
        return tuple(self._nodes)

    def get_by_history(self, history: str) -> Optional[HistoryNode]:
        """Node for an exact history string, or None if absent."""
        return self._nodes.get(history)

    def count(self, node_type: StateType) -> int:
        return sum(1 for node in self._nodes.values() if node.type == node_type)

    def release(self) -> None:
        """Detach every node from its children, depth first, without recursion."""
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            stack.extend(node.children.values())
            node.children = {}
        self._nodes.clear()
        self.root = None

    def __enter__(self) -> "HistoryTree":
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, history: str) -> bool:
        return history in self._nodes

    def __iter__(self) -> Iterator[HistoryNode]:
        return iter(self._nodes.values())
