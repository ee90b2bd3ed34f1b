"""Errors raised while building or indexing a history tree."""


class HistoryTreeError(Exception):
    """Base class for history-tree errors."""


class TreeConstructionError(HistoryTreeError):
    """A game state violated an invariant the tree relies on.

    The game implementation is assumed well-formed, so this points at a
    defect in the game, not a condition to recover from. No partial tree
    is ever returned.
    """


class ResponderMismatchError(HistoryTreeError, ValueError):
    """Indexing was requested with a tree built for another responder or root."""
