"""Belief tensors over the histories of each information set.

Within one of the responder's information sets, the responder cannot tell
the underlying histories apart. Normalizing their counterfactual reach
probabilities gives the responder's belief over which history is real:

    belief[i] = reach[i] / sum_j reach[j]

These tensors are what a best response weighs continuation values with.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

import torch

from history_tree.infosets import InfoSets
from history_tree.node import HistoryNode


def reach_tensor(entries: List[Tuple[HistoryNode, float]], device: str = "cpu") -> torch.Tensor:
    """Counterfactual reach per entry, in entry order. Shape: [len(entries)]."""
    return torch.tensor(
        [reach for _, reach in entries], dtype=torch.float64, device=torch.device(device)
    )


def infoset_reach_totals(infosets: InfoSets) -> Dict[str, float]:
    """Total counterfactual reach of each information set."""
    return {key: float(reach_tensor(entries).sum().item()) for key, entries in infosets.items()}


def infoset_beliefs(infosets: InfoSets, device: str = "cpu") -> Dict[str, torch.Tensor]:
    """Normalized reach per information set.

    Information sets the opponents never reach (total reach 0) keep an
    all-zero tensor rather than being divided by zero.
    """
    beliefs: Dict[str, torch.Tensor] = {}
    for key, entries in infosets.items():
        reach = reach_tensor(entries, device=device)
        total = reach.sum()
        beliefs[key] = reach / total if total > 0 else reach
    return beliefs
