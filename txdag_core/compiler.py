"""
YAML compiler for transaction graphs.

This module compiles a YAML description of an ordered transaction list into a
`Graph` by way of `build`, so every entry goes through the regular insertion
checks.

YAML schema (minimal):

transactions:
  - {left: 1, right: 1, timestamp: 5}   # becomes id 2
  - [1, 2, 3]                           # becomes id 3

Notes:
- Entries may be mappings with `left`, `right`, `timestamp` keys or
  three-element sequences in that order.
- Ids are not written in the document; they follow list order starting at 2.
"""

from __future__ import annotations

from typing import Any, Dict, List

import yaml

from .graph import Graph, Triple, build
from .parser import ParseError

_KEYS = ("left", "right", "timestamp")


def _entry_to_triple(index: int, entry: Any) -> Triple:
    if isinstance(entry, dict):
        absent = [k for k in _KEYS if k not in entry]
        if absent:
            raise ParseError(f"transaction #{index} is missing keys {absent}")
        values = [entry[k] for k in _KEYS]
    elif isinstance(entry, (list, tuple)):
        if len(entry) != 3:
            raise ParseError(f"transaction #{index} must have 3 values, got {len(entry)}")
        values = list(entry)
    else:
        raise ParseError(f"transaction #{index} has unsupported type {type(entry).__name__}")

    for key, value in zip(_KEYS, values):
        # bool is an int subclass; reject it explicitly
        if not isinstance(value, int) or isinstance(value, bool):
            raise ParseError(f"transaction #{index} field {key!r} is not an integer: {value!r}")
        if value < 0:
            raise ParseError(f"transaction #{index} field {key!r} must be non-negative, got {value}")
    return (values[0], values[1], values[2])


def triples_from_dict(spec: Dict[str, Any]) -> List[Triple]:
    """Extract ordered triples from a YAML-parsed dictionary."""
    if not isinstance(spec, dict):
        raise ParseError(f"document must be a mapping, got {type(spec).__name__}")
    entries = spec.get("transactions")
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise ParseError("`transactions` must be a list")
    return [_entry_to_triple(i, entry) for i, entry in enumerate(entries)]


def compile_from_dict(spec: Dict[str, Any]) -> Graph:
    """
    Compile a YAML-parsed dictionary into a `Graph`.

    Args:
        spec: Parsed YAML dictionary

    Returns:
        Graph: The built transaction graph

    Raises:
        ParseError: If an entry is malformed
        GraphError: If an entry is rejected by the graph
    """
    return build(triples_from_dict(spec))


def compile_from_yaml(yaml_text: str) -> Graph:
    """Compile from YAML text into a `Graph`."""
    try:
        data = yaml.safe_load(yaml_text)
    except yaml.YAMLError as e:
        raise ParseError(f"invalid YAML: {e}") from e
    if data is None:
        data = {}
    return compile_from_dict(data)


def compile_from_file(path: str) -> Graph:
    """Compile from a YAML file path into a `Graph`."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            txt = f.read()
    except UnicodeDecodeError as e:
        raise ParseError(f"{path} is not valid UTF-8: {e.reason} at byte {e.start}") from e
    return compile_from_yaml(txt)
