"""
txdag Core Package.

This package maintains an append-only DAG of transactions in which every
non-root transaction references two earlier ones, including:

- Value types (Transaction, TransactionMetrics, GraphSummary)
- The graph store and its insertion algorithm (Graph, create, add, build)
- Loaders for the text and YAML input formats
- Rendering and statistics helpers
"""

__version__ = "0.1.0"

from .domain import ROOT_ID, GraphSummary, Transaction, TransactionMetrics, root_transaction
from .errors import DuplicatedIdError, GraphError, ParentNotFoundError, ParentNotSpecifiedError
from .graph import Graph, add, build, create
from .compiler import compile_from_dict, compile_from_file, compile_from_yaml
from .parser import ParseError, parse_file, parse_text
from .metrics import get_graph_statistics
from .render import format_graph

__all__ = [
    "ROOT_ID",
    "GraphSummary",
    "Transaction",
    "TransactionMetrics",
    "root_transaction",
    "GraphError",
    "DuplicatedIdError",
    "ParentNotFoundError",
    "ParentNotSpecifiedError",
    "Graph",
    "create",
    "add",
    "build",
    "compile_from_dict",
    "compile_from_yaml",
    "compile_from_file",
    "ParseError",
    "parse_text",
    "parse_file",
    "get_graph_statistics",
    "format_graph",
]
