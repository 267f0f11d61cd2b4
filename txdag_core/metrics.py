"""
Statistics over a built transaction graph.

This module provides:
- Depth histogram and depth/in-reference averages
- `get_graph_statistics`, a JSON-friendly bundle used by the CLI

All values are read from the metrics `Graph.add` already derived; nothing is
recomputed from the parent links here (see `Graph.validate_invariants` for that).
"""

from __future__ import annotations
from typing import Any, Dict

import numpy as np

from .graph import Graph


def depth_histogram(graph: Graph) -> np.ndarray:
    """Return an array whose element `d` is the number of transactions at depth `d`."""
    depths = np.fromiter((tx.metrics.depth for tx in graph), dtype=np.int64, count=len(graph))
    return np.bincount(depths)


def max_depth(graph: Graph) -> int:
    return int(depth_histogram(graph).size - 1)


def average_depth(graph: Graph) -> float:
    """Mean depth over all transactions, root included."""
    depths = np.fromiter((tx.metrics.depth for tx in graph), dtype=np.float64, count=len(graph))
    return float(depths.mean())


def average_transactions_per_depth(graph: Graph) -> float:
    """
    Mean number of transactions per depth level, the root level excluded.

    Returns 0.0 for a graph holding only the root.
    """
    levels = depth_histogram(graph)[1:]
    if levels.size == 0:
        return 0.0
    return float(levels.mean())


def average_in_reference(graph: Graph) -> float:
    """Mean in-reference count over all transactions, root included."""
    refs = np.fromiter((tx.metrics.in_reference for tx in graph), dtype=np.float64, count=len(graph))
    return float(refs.mean())


def get_graph_statistics(graph: Graph) -> Dict[str, Any]:
    """
    Collect size, depth and reference statistics plus the summary metrics.

    Returns:
        Dictionary of plain Python values, safe to pass to `json.dumps`
    """
    last_tx, most_referenced = graph.summary()
    return {
        "size": graph.size(),
        "capacity_hint": graph.capacity_hint,
        "max_depth": max_depth(graph),
        "average_depth": average_depth(graph),
        "average_transactions_per_depth": average_transactions_per_depth(graph),
        "average_in_reference": average_in_reference(graph),
        "depth_histogram": [int(n) for n in depth_histogram(graph)],
        "summary": {
            "last_transaction": last_tx,
            "most_in_reference_transaction": most_referenced,
        },
    }
