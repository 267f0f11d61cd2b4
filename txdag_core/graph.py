"""
Graph store and insertion algorithm for the transaction DAG.

This module defines:
- Graph: Container mapping transaction ids to transactions, with the root
  pre-inserted and graph-wide summary metrics updated on every insertion
- create / add / build: Functional entry points over `Graph`

Insertion is all-or-nothing: every check runs before any metric is touched.
"""

from __future__ import annotations

import copy
import logging
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

import networkx as nx

from .domain import ROOT_ID, GraphSummary, Transaction, TransactionMetrics, root_transaction
from .errors import DuplicatedIdError, ParentNotFoundError, ParentNotSpecifiedError

logger = logging.getLogger(__name__)

Triple = Tuple[int, int, int]
"""(left_parent, right_parent, timestamp) row used by the batch constructor."""


class Graph:
    """
    Append-only store of transactions forming a DAG rooted at id 1.

    The Graph owns the transactions and the `GraphSummary`. Only `add` mutates
    either of them: it increments the parents' in-reference counters, derives
    the candidate's depth, refreshes the summary and finally commits the
    candidate.

    Attributes:
        capacity_hint: Expected number of non-root transactions (advisory only)
        nodes: Dictionary mapping ids to Transaction objects, in admission order
        metrics: Graph-wide summary metrics
    """

    def __init__(self, capacity_hint: int = 0):
        """
        Initialize a graph holding only the root transaction.

        Args:
            capacity_hint: Expected number of children; the store still grows past it

        Raises:
            ValueError: If capacity_hint is negative
        """
        if capacity_hint < 0:
            raise ValueError(f"capacity_hint must be non-negative, got {capacity_hint}")
        self.capacity_hint: int = capacity_hint
        self.nodes: Dict[int, Transaction] = {ROOT_ID: root_transaction()}
        self.metrics: GraphSummary = GraphSummary()

    @classmethod
    def with_capacity(cls, capacity_hint: int) -> "Graph":
        return cls(capacity_hint)

    @classmethod
    def from_triples(cls, triples: Sequence[Triple]) -> "Graph":
        """
        Build a graph from ordered (left_parent, right_parent, timestamp) triples.

        The first triple becomes id 2, the second id 3, and so on. The first
        rejected triple aborts the whole build; no partial graph escapes.

        Args:
            triples: Parent/timestamp rows in admission order

        Returns:
            Graph: The fully built graph

        Raises:
            GraphError: On the first invalid triple
        """
        candidates = [
            Transaction.new(index + 2, left, right, timestamp)
            for index, (left, right, timestamp) in enumerate(triples)
        ]
        graph = cls(len(candidates))
        logger.debug("Building graph from %d triples", len(candidates))
        for candidate in candidates:
            graph.add(candidate)
        return graph

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def size(self) -> int:
        return len(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def contains(self, tx_id: int) -> bool:
        return tx_id in self.nodes

    def __contains__(self, tx_id: object) -> bool:
        return tx_id in self.nodes

    def get(self, tx_id: int) -> Optional[Transaction]:
        return self.nodes.get(tx_id)

    def __iter__(self) -> Iterator[Transaction]:
        """Iterate transactions in admission order, root first."""
        return iter(self.nodes.values())

    def summary(self) -> Tuple[Optional[int], Optional[int]]:
        """Return (last_transaction, most_in_reference_transaction); None when unset."""
        return self.metrics.as_tuple()

    # ------------------------------------------------------------------
    # Insertion
    # ------------------------------------------------------------------

    def add(self, candidate: Transaction) -> None:
        """
        Admit a new transaction into the graph.

        Checks, in order: the id is new, parents are declared, both parents
        exist. Only then are the parents' metrics, the candidate's depth and
        the summary updated, and the candidate committed. The candidate's
        depth is written back onto the object passed in; the graph keeps its
        own copy.

        Args:
            candidate: Transaction built with `Transaction.new`

        Raises:
            DuplicatedIdError: If the id was already admitted
            ParentNotSpecifiedError: If the candidate has no parents
            ParentNotFoundError: If either parent id is unknown
        """
        if self.contains(candidate.id):
            raise DuplicatedIdError(candidate.id)

        if candidate.parents is None:
            raise ParentNotSpecifiedError(candidate.id)

        left_id, right_id = candidate.parents
        missing = tuple(dict.fromkeys(p for p in (left_id, right_id) if not self.contains(p)))
        if missing:
            raise ParentNotFoundError(candidate.id, missing)

        self._update_metrics(candidate)
        self._commit(candidate)

    def _reference_parent(self, parent_id: int) -> Tuple[int, TransactionMetrics]:
        parent = self.nodes.get(parent_id)
        assert parent is not None, f"parent {parent_id} vanished after validation"
        parent.metrics.in_reference += 1
        return parent.id, copy.copy(parent.metrics)

    def _update_metrics(self, candidate: Transaction) -> None:
        left_id, right_id = candidate.parents

        # Same parent twice: the right snapshot carries both increments.
        left_snapshot = self._reference_parent(left_id)
        right_snapshot = self._reference_parent(right_id)

        candidate.metrics.depth = min(left_snapshot[1].depth, right_snapshot[1].depth) + 1

        self._update_last_transaction(candidate)
        self._update_most_in_reference_transaction(left_snapshot)
        self._update_most_in_reference_transaction(right_snapshot)

    def _update_last_transaction(self, candidate: Transaction) -> None:
        recorded_id = self.metrics.last_transaction
        if recorded_id is None:
            self.metrics.last_transaction = candidate.id
            return
        recorded = self.nodes.get(recorded_id)
        assert recorded is not None, f"last transaction {recorded_id} does not exist"
        if recorded.timestamp < candidate.timestamp:
            self.metrics.last_transaction = candidate.id

    def _update_most_in_reference_transaction(
        self, snapshot: Tuple[int, TransactionMetrics]
    ) -> None:
        snapshot_id, snapshot_metrics = snapshot
        recorded_id = self.metrics.most_in_reference_transaction
        if recorded_id is None:
            self.metrics.most_in_reference_transaction = snapshot_id
            return
        recorded = self.nodes.get(recorded_id)
        assert recorded is not None, f"most referenced transaction {recorded_id} does not exist"
        if recorded.metrics.in_reference < snapshot_metrics.in_reference:
            self.metrics.most_in_reference_transaction = snapshot_id

    def _commit(self, transaction: Transaction) -> None:
        self.nodes[transaction.id] = copy.deepcopy(transaction)
        logger.debug(
            "Admitted id=%d parents=%s depth=%d",
            transaction.id,
            transaction.parents,
            transaction.metrics.depth,
        )

    # ------------------------------------------------------------------
    # Auditing
    # ------------------------------------------------------------------

    def validate_invariants(self) -> Dict[str, List[str]]:
        """
        Recompute every derived metric from scratch and compare with the stored values.

        Transactions are replayed in admission order, so the check also covers
        the tie-breaking rules of the summary metrics.

        Returns:
            Dictionary of issues by category; empty when the graph is consistent
        """
        issues: Dict[str, List[str]] = {
            "root_issues": [],
            "parent_issues": [],
            "depth_issues": [],
            "in_reference_issues": [],
            "summary_issues": [],
        }

        root = self.nodes.get(ROOT_ID)
        if root is None:
            issues["root_issues"].append("Root transaction 1 is missing")
        elif root.parents is not None or root.metrics.depth != 0:
            issues["root_issues"].append(
                f"Root transaction has parents={root.parents} depth={root.metrics.depth}"
            )

        admitted: set = set()
        counts: Dict[int, int] = {tx_id: 0 for tx_id in self.nodes}
        expected_last: Optional[int] = None
        expected_most: Optional[int] = None

        for tx in self.nodes.values():
            if tx.id == ROOT_ID:
                admitted.add(tx.id)
                continue
            if tx.parents is None:
                issues["parent_issues"].append(f"Transaction {tx.id} has no parents")
                admitted.add(tx.id)
                continue

            left_id, right_id = tx.parents
            unknown = [p for p in (left_id, right_id) if p not in admitted]
            if unknown:
                issues["parent_issues"].append(
                    f"Transaction {tx.id} references parents {unknown} not admitted before it"
                )
                admitted.add(tx.id)
                continue

            expected_depth = min(self.nodes[left_id].metrics.depth, self.nodes[right_id].metrics.depth) + 1
            if tx.metrics.depth != expected_depth:
                issues["depth_issues"].append(
                    f"Transaction {tx.id} depth {tx.metrics.depth} != expected {expected_depth}"
                )

            if expected_last is None or self.nodes[expected_last].timestamp < tx.timestamp:
                expected_last = tx.id

            for parent_id in (left_id, right_id):
                counts[parent_id] += 1
                if expected_most is None or counts[expected_most] < counts[parent_id]:
                    expected_most = parent_id

            admitted.add(tx.id)

        for tx_id, count in counts.items():
            stored = self.nodes[tx_id].metrics.in_reference
            if stored != count:
                issues["in_reference_issues"].append(
                    f"Transaction {tx_id} in_reference {stored} != expected {count}"
                )

        if self.metrics.last_transaction != expected_last:
            issues["summary_issues"].append(
                f"last_transaction {self.metrics.last_transaction} != expected {expected_last}"
            )
        if self.metrics.most_in_reference_transaction != expected_most:
            issues["summary_issues"].append(
                f"most_in_reference_transaction {self.metrics.most_in_reference_transaction} "
                f"!= expected {expected_most}"
            )

        return {k: v for k, v in issues.items() if v}

    def is_valid(self) -> bool:
        return not self.validate_invariants()

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_networkx(self) -> "nx.DiGraph":
        """
        Convert the graph to a NetworkX DiGraph.

        Edges point from child to parent. A transaction naming the same parent
        twice yields a single edge with `multiplicity=2`.

        Returns:
            NetworkX DiGraph with timestamp/depth/in_reference node attributes
        """
        G = nx.DiGraph()
        for tx in self.nodes.values():
            G.add_node(
                tx.id,
                timestamp=tx.timestamp,
                depth=tx.metrics.depth,
                in_reference=tx.metrics.in_reference,
            )
        for tx in self.nodes.values():
            if tx.parents is None:
                continue
            for parent_id in tx.parents:
                if G.has_edge(tx.id, parent_id):
                    G.edges[tx.id, parent_id]["multiplicity"] += 1
                else:
                    G.add_edge(tx.id, parent_id, multiplicity=1)
        return G

    def export_graphml(self, filepath: str) -> None:
        """
        Export the graph to GraphML for external graph tools.

        Args:
            filepath: Path where to save the GraphML file
        """
        nx.write_graphml(self.to_networkx(), filepath)


def create(capacity_hint: int = 0) -> Graph:
    """Create a graph containing only the root."""
    return Graph(capacity_hint)


def add(graph: Graph, candidate: Transaction) -> None:
    """Admit `candidate` into `graph`; see `Graph.add`."""
    graph.add(candidate)


def build(ordered_triples: Iterable[Triple]) -> Graph:
    """Build a graph from (left_parent, right_parent, timestamp) triples; see `Graph.from_triples`."""
    return Graph.from_triples(list(ordered_triples))
