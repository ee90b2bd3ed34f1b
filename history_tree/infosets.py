"""Counterfactual reach probabilities grouped by information set.

For a tree built for responder R and a policy for every other player, the
counterfactual reach probability of a node is defined recursively:
  - At the root, the reach probability is 1.
  - At a chance node, multiply by the probability of the chance outcome.
  - At R's decision nodes, multiply by 1: R is assumed to always choose
    the actions leading to the node.
  - At another player's decision node, multiply by the probability the
    policy assigns to the action taken.

get_all_infosets() groups every node where R acts by R's information
state, together with that probability. This is the input a best-response
computation needs.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from game_interface import State
from history_tree.errors import ResponderMismatchError, TreeConstructionError
from history_tree.node import HistoryNode, StateType
from history_tree.tree import HistoryTree
from policy import Policy

logger = logging.getLogger(__name__)

InfoSets = Dict[str, List[Tuple[HistoryNode, float]]]


def get_all_infosets(
    state: State,
    responder: int,
    policy: Policy,
    tree: HistoryTree,
) -> InfoSets:
    """Map each of `responder`'s information states to (node, reach) pairs.

    Entries appear in pre-order traversal order. Policy distributions are
    used as given: actions the policy omits get probability 0 and nothing
    is renormalized. A PolicyError raised by `policy` aborts the traversal
    and propagates.
    """
    if responder != tree.responder:
        raise ResponderMismatchError(
            f"Tree was built for responder {tree.responder}, not {responder}"
        )
    if tree.root is None or state.history_string() != tree.root.history:
        raise ResponderMismatchError(
            f"State '{state.history_string()}' is not the root of this tree"
        )

    infosets: InfoSets = {}
    stack: List[Tuple[HistoryNode, float]] = [(tree.root, 1.0)]
    while stack:
        node, reach = stack.pop()
        if node.type == StateType.TERMINAL:
            continue

        if node.type == StateType.DECISION and node.player == responder:
            infosets.setdefault(node.info_state, []).append((node, reach))
            children = [(node.children[a], reach) for a in node.child_actions]
        else:
            if node.type == StateType.CHANCE:
                probs = dict(node.state.chance_outcomes())
                for action in probs:
                    if action not in node.children:
                        raise TreeConstructionError(
                            f"Chance outcome {action} at '{node.history}' has no child node"
                        )
            else:
                probs = policy.action_probabilities(node.state)
            children = [
                (node.children[a], reach * probs.get(a, 0.0)) for a in node.child_actions
            ]

        stack.extend(reversed(children))

    logger.debug(
        "Indexed %d information sets for responder %d", len(infosets), responder
    )
    return infosets
