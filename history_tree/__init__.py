from history_tree.config import HistoryTreeConfig
from history_tree.errors import HistoryTreeError, ResponderMismatchError, TreeConstructionError
from history_tree.node import CHANCE_INFO_STATE, TERMINAL_INFO_STATE, HistoryNode, StateType
from history_tree.tree import HistoryTree
from history_tree.infosets import InfoSets, get_all_infosets
from history_tree.beliefs import infoset_beliefs, infoset_reach_totals, reach_tensor
