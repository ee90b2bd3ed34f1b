"""Tests for history-tree construction.

Validates:
- Exact history counts for Kuhn, Leduc and Liar's Dice
- Node classification and information-state assignment
- Child actions follow legal actions, in order
- Lookup, enumeration, idempotent rebuilds, release
- Construction errors on malformed games
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import pytest

from games import load_game
from history_tree import (
    CHANCE_INFO_STATE,
    TERMINAL_INFO_STATE,
    HistoryNode,
    HistoryTree,
    HistoryTreeConfig,
    StateType,
    TreeConstructionError,
)
from kuhn.game import BET, PASS, KuhnPoker, KuhnState

NUM_HISTORIES = {
    "kuhn_poker": 58,
    "leduc_poker": 9457,
}


def check_tree(tree, responder):
    """Every structural invariant a built tree must satisfy."""
    histories = list(tree.histories())
    assert len(histories) == len(set(histories)) == tree.num_histories()

    for history in histories:
        node = tree.get_by_history(history)
        assert node is not None
        assert node.state is not None
        assert node.history == history
        assert node.state.history_string() == node.history

        if node.type != StateType.TERMINAL:
            assert node.child_actions == node.state.legal_actions()
            assert node.num_children() == len(node.state.legal_actions())
            for action in node.child_actions:
                assert node.get_child(action).history == node.state.child(action).history_string()
        else:
            assert node.num_children() == 0

        if node.type == StateType.TERMINAL:
            assert node.state.is_terminal()
            assert node.info_state == TERMINAL_INFO_STATE
        elif node.type == StateType.CHANCE:
            assert node.state.is_chance_node()
            assert node.info_state == CHANCE_INFO_STATE
        elif node.state.current_player() == responder:
            assert node.info_state == node.state.information_state_string(responder)
        else:
            assert node.info_state == node.state.information_state_string()

        if node.type == StateType.DECISION:
            assert node.info_state not in (CHANCE_INFO_STATE, TERMINAL_INFO_STATE)


def reachable(tree):
    """Histories found by walking children from the root."""
    seen = []
    stack = [tree.root]
    while stack:
        node = stack.pop()
        seen.append(node.history)
        stack.extend(node.children.values())
    return seen


class TestGameTree:
    @pytest.mark.parametrize("game_name", ["kuhn_poker", "leduc_poker"])
    @pytest.mark.parametrize("responder", [0, 1])
    def test_num_histories(self, game_name, responder):
        game = load_game(game_name)
        tree = HistoryTree(game.new_initial_state(), responder)
        assert tree.num_histories() == NUM_HISTORIES[game_name]
        assert len(tree) == NUM_HISTORIES[game_name]
        assert tree.root is not None
        check_tree(tree, responder)

    @pytest.mark.slow
    def test_liars_dice_num_histories(self):
        game = load_game("liars_dice")
        tree = HistoryTree(game.new_initial_state(), 0)
        assert tree.num_histories() == 294883
        assert tree.count(StateType.CHANCE) == 7
        assert tree.count(StateType.TERMINAL) == 36 * 4095

    def test_kuhn_node_types(self):
        tree = HistoryTree(KuhnPoker().new_initial_state(), 0)
        assert tree.count(StateType.CHANCE) == 4
        assert tree.count(StateType.DECISION) == 24
        assert tree.count(StateType.TERMINAL) == 30

    def test_leduc_node_types(self):
        tree = HistoryTree(load_game("leduc_poker").new_initial_state(), 1)
        assert tree.count(StateType.CHANCE) == 1 + 6 + 30 * 5
        assert tree.count(StateType.DECISION) == 30 * (6 + 5 * 4 * 6)
        assert tree.count(StateType.TERMINAL) == 30 * (4 + 5 * 4 * 9)

    def test_traversal_complete(self):
        tree = HistoryTree(KuhnPoker().new_initial_state(), 1)
        walked = reachable(tree)
        assert len(walked) == len(set(walked))
        assert set(walked) == set(tree.histories())

    def test_construction_order_is_preorder(self):
        tree = HistoryTree(KuhnPoker().new_initial_state(), 0)
        histories = list(tree.histories())
        assert histories[:5] == ["", "0", "0, 1", "0, 1, 0", "0, 1, 0, 0"]
        assert [node.history for node in tree][:3] == ["", "0", "0, 1"]

    def test_idempotent(self):
        game = load_game("kuhn_poker")
        a = HistoryTree(game.new_initial_state(), 0)
        b = HistoryTree(game.new_initial_state(), 0)
        assert a.num_histories() == b.num_histories()
        assert list(a.histories()) == list(b.histories())
        for history in a.histories():
            na, nb = a.get_by_history(history), b.get_by_history(history)
            assert (na.type, na.info_state, na.child_actions) == (nb.type, nb.info_state, nb.child_actions)

    def test_histories_view_restartable(self):
        tree = HistoryTree(KuhnPoker().new_initial_state(), 0)
        view = tree.histories()
        assert list(view) == list(view)


class TestLookup:
    def setup_method(self):
        self.tree = HistoryTree(KuhnPoker().new_initial_state(), 0)

    def test_get_by_history(self):
        node = self.tree.get_by_history("0, 1, 0, 1")
        assert node.type == StateType.DECISION
        assert node.player == 0
        assert node.info_state == "0pb"
        assert "0, 1, 0, 1" in self.tree

    def test_miss_returns_none(self):
        assert self.tree.get_by_history("0, 0") is None
        assert self.tree.get_by_history("0,1") is None
        assert "9" not in self.tree

    def test_child_navigation(self):
        root = self.tree.root
        assert root.type == StateType.CHANCE
        assert root.child_actions == [0, 1, 2]
        node = root.get_child(2).get_child(0)
        assert node.history == "2, 0"
        assert node.get_child(PASS).get_child(BET) is self.tree.get_by_history("2, 0, 0, 1")
        assert node.get_child(7) is None

    def test_opponent_node_info_state(self):
        node = self.tree.get_by_history("1, 2, 0")
        assert node.player == 1
        assert node.info_state == "2p"


class TestHistoryNode:
    def test_standalone_node(self):
        state = KuhnPoker().new_initial_state().child(0).child(1)
        node = HistoryNode(1, state)
        assert node.type == StateType.DECISION
        assert node.info_state == "0"
        assert node.child_actions == [PASS, BET]
        assert node.num_children() == 0

    def test_terminal_node(self):
        state = KuhnState(actions=(0, 1, PASS, PASS))
        node = HistoryNode(0, state)
        assert node.type == StateType.TERMINAL
        assert node.info_state == TERMINAL_INFO_STATE
        assert node.child_actions == []

    def test_sentinels_distinct(self):
        assert CHANCE_INFO_STATE != TERMINAL_INFO_STATE


class TestRelease:
    def test_release(self):
        tree = HistoryTree(KuhnPoker().new_initial_state(), 0)
        root = tree.root
        tree.release()
        assert tree.num_histories() == 0
        assert tree.root is None
        assert root.num_children() == 0
        assert tree.get_by_history("") is None

    def test_histories_snapshot_survives_release(self):
        tree = HistoryTree(KuhnPoker().new_initial_state(), 0)
        histories = tree.histories()
        tree.release()
        assert len(histories) == 58
        assert histories[0] == ""
        assert "0, 1, 0, 1" in histories
        assert tree.histories() == ()

    def test_context_manager(self):
        with HistoryTree(KuhnPoker().new_initial_state(), 0) as tree:
            assert tree.num_histories() == 58
        assert tree.num_histories() == 0


@dataclass(frozen=True)
class BrokenState:
    """Two-move game whose states can be made to misbehave."""
    actions: Tuple[int, ...] = ()
    defect: Optional[str] = None

    def is_terminal(self):
        return len(self.actions) == 2

    def is_chance_node(self):
        return False

    def current_player(self):
        return None if self.is_terminal() else len(self.actions) % 2

    def legal_actions(self):
        if self.is_terminal():
            return []
        if self.defect == "no_actions" and self.actions:
            return []
        if self.defect == "duplicate_actions":
            return [0, 0]
        return [0, 1]

    def chance_outcomes(self):
        return []

    def child(self, action):
        if self.defect == "no_child" and self.actions:
            return None
        if self.defect == "raises" and self.actions:
            raise RuntimeError("engine failure")
        if self.defect == "same_history":
            return BrokenState(actions=self.actions + (0,), defect=self.defect)
        return BrokenState(actions=self.actions + (action,), defect=self.defect)

    def information_state_string(self, player=None):
        return "x"

    def history(self):
        return list(self.actions)

    def history_string(self):
        return ", ".join(str(a) for a in self.actions)

    def returns(self):
        return [0.0, 0.0]


class TestConstructionErrors:
    @pytest.mark.parametrize("defect", ["no_actions", "duplicate_actions", "no_child", "raises", "same_history"])
    def test_defects_are_fatal(self, defect):
        with pytest.raises(TreeConstructionError):
            HistoryTree(BrokenState(defect=defect), 0)

    def test_well_formed(self):
        tree = HistoryTree(BrokenState(), 0)
        assert tree.num_histories() == 7

    def test_max_histories(self):
        with pytest.raises(TreeConstructionError, match="max_histories"):
            HistoryTree(KuhnPoker().new_initial_state(), 0, HistoryTreeConfig(max_histories=10))
        tree = HistoryTree(KuhnPoker().new_initial_state(), 0, HistoryTreeConfig(max_histories=58))
        assert tree.num_histories() == 58

    def test_invalid_config(self):
        with pytest.raises(ValueError):
            HistoryTreeConfig(max_histories=0)
        with pytest.raises(ValueError):
            HistoryTreeConfig(log_every=0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
