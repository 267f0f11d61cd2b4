"""
Human-readable rendering of transactions, metrics and graphs.

Rendering never touches graph state; it only reads what `Graph.add` derived.
"""

from __future__ import annotations

from typing import Optional

from .domain import GraphSummary, Transaction, TransactionMetrics
from .graph import Graph


def format_metrics(metrics: TransactionMetrics) -> str:
    return f"(depth={metrics.depth},in_reference={metrics.in_reference})"


def format_transaction(tx: Transaction) -> str:
    """Render one transaction, e.g. `- id=2(left=1 right=1) info=(t=5, metrics=(depth=1,in_reference=0))`."""
    if tx.parents is not None:
        left, right = tx.parents
        head = f"- id={tx.id}(left={left} right={right})"
    else:
        head = f"- id={tx.id}()"
    return f"{head} info=(t={tx.timestamp}, metrics={format_metrics(tx.metrics)})"


def _id_or_dash(tx_id: Optional[int]) -> str:
    return "-" if tx_id is None else str(tx_id)


def format_summary(summary: GraphSummary) -> str:
    return (
        f"last_transaction={_id_or_dash(summary.last_transaction)} "
        f"most_in_reference_transaction={_id_or_dash(summary.most_in_reference_transaction)}"
    )


def format_graph(graph: Graph) -> str:
    """Render every transaction sorted by id, one per line, followed by the summary line."""
    lines = [format_transaction(graph.nodes[tx_id]) for tx_id in sorted(graph.nodes)]
    lines.append(format_summary(graph.metrics))
    return "\n".join(lines)
