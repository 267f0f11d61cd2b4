"""
Value types for the transaction DAG.

This module defines the data carried by every node of the graph:
- TransactionMetrics: Per-transaction depth and in-reference counter
- Transaction: An immutable, append-only node referencing two parents
- GraphSummary: Graph-wide derived values maintained on insertion
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

ROOT_ID = 1
"""Id reserved for the single root transaction."""


@dataclass
class TransactionMetrics:
    """
    Metrics derived for a transaction when it is admitted.

    Attributes:
        depth: Shortest distance to the root, computed from the parents
        in_reference: Number of admitted transactions naming this one as a parent
    """

    depth: int = 0
    """0 for the root, otherwise min(depth(left), depth(right)) + 1."""

    in_reference: int = 0
    """Only increases; a double-parent child counts twice."""


@dataclass
class Transaction:
    """
    A node of the transaction DAG.

    Non-root transactions always reference exactly two parents, which may be
    the same id. Metrics start as placeholders and are filled in by
    `Graph.add`; they must not be trusted before admission.

    Attributes:
        id: Unique non-negative identifier, 1 is the root
        timestamp: Caller supplied, neither unique nor ordered
        parents: (left, right) parent ids, or None for the root
        metrics: Depth and in-reference counter
    """

    id: int
    """Unique identifier of this transaction."""

    timestamp: int
    """Caller-supplied timestamp."""

    parents: Optional[Tuple[int, int]] = None
    """Left and right parent ids; None only for the root."""

    metrics: TransactionMetrics = field(default_factory=TransactionMetrics)
    """Derived metrics, overwritten on admission."""

    @classmethod
    def new(cls, tx_id: int, left_parent: int, right_parent: int, timestamp: int) -> "Transaction":
        """
        Build a non-root transaction with zeroed metrics.

        Raises:
            ValueError: If any field is negative
        """
        for name, value in (
            ("id", tx_id),
            ("left_parent", left_parent),
            ("right_parent", right_parent),
            ("timestamp", timestamp),
        ):
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        return cls(
            id=tx_id,
            timestamp=timestamp,
            parents=(left_parent, right_parent),
            metrics=TransactionMetrics(),
        )

    @property
    def is_root(self) -> bool:
        return self.id == ROOT_ID and self.parents is None


def root_transaction() -> Transaction:
    """Return a fresh root: id 1, no parents, timestamp 0, zeroed metrics."""
    return Transaction(id=ROOT_ID, timestamp=0, parents=None, metrics=TransactionMetrics())


@dataclass
class GraphSummary:
    """
    Graph-wide metrics, owned by a `Graph` and only updated by its insertion path.

    None means no comparison has happened yet.
    """

    last_transaction: Optional[int] = None
    """Id of the transaction with the largest timestamp; first writer wins ties."""

    most_in_reference_transaction: Optional[int] = None
    """Id of the transaction with the largest in-reference count; first to reach it wins ties."""

    def as_tuple(self) -> Tuple[Optional[int], Optional[int]]:
        return (self.last_transaction, self.most_in_reference_transaction)
