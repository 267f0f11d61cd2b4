"""
Error taxonomy for graph insertion.

Every error here is raised during validation, before the graph is mutated,
so a caller catching `GraphError` always observes an unchanged graph.
"""

from __future__ import annotations

from typing import Tuple


class GraphError(Exception):
    """Base exception for rejected insertions."""


class DuplicatedIdError(GraphError):
    """Raised when a transaction with the same id was already admitted."""

    def __init__(self, tx_id: int):
        self.tx_id = tx_id
        super().__init__(f"duplicated id=`{tx_id}`")


class ParentNotSpecifiedError(GraphError):
    """Raised when a non-root transaction declares no parents."""

    def __init__(self, tx_id: int):
        self.tx_id = tx_id
        super().__init__(f"not specified parent for id=`{tx_id}`")


class ParentNotFoundError(GraphError):
    """Raised when at least one declared parent is not in the graph."""

    def __init__(self, tx_id: int, missing: Tuple[int, ...]):
        self.tx_id = tx_id
        self.missing = missing
        super().__init__(
            f"unknown parent(s) {', '.join(str(m) for m in missing)} for id=`{tx_id}`"
        )
