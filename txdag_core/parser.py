"""
Text parser for transaction lists.

The input is line oriented:

    3
    1 1 5
    1 2 3
    2 3 9

The first line is the number of transactions; every following line holds the
left parent, right parent and timestamp of one transaction. Row `k` (1-based)
becomes transaction id `k + 1`. Parsing only converts text into triples; all
graph validation happens in `Graph.add`.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .config import LoadConfig
from .domain import Transaction

Triple = Tuple[int, int, int]


class ParseError(ValueError):
    """Raised when input text cannot be converted into transaction triples."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        prefix = f"line {line}: " if line is not None else ""
        super().__init__(f"{prefix}{message}")


def _parse_int(token: str, name: str, line: Optional[int]) -> int:
    # Plain ASCII digits only: no sign, no underscores
    if not (token.isascii() and token.isdigit()):
        raise ParseError(f"{name} is not a non-negative integer: {token!r}", line)
    return int(token)


def parse_triple(fields: Sequence[str], line: Optional[int] = None) -> Triple:
    """Convert three string fields into a (left_parent, right_parent, timestamp) triple."""
    if len(fields) != 3:
        raise ParseError(f"expected 3 fields, got {len(fields)}", line)
    return (
        _parse_int(fields[0], "left_parent", line),
        _parse_int(fields[1], "right_parent", line),
        _parse_int(fields[2], "timestamp", line),
    )


def parse_fields(fields: Sequence[str], tx_id: int) -> Transaction:
    """Convert three string fields into a non-root `Transaction` with the given id."""
    left, right, timestamp = parse_triple(fields)
    return Transaction.new(tx_id, left, right, timestamp)


def parse_text(text: str, config: Optional[LoadConfig] = None) -> List[Triple]:
    """
    Parse the line-oriented format into ordered triples.

    Args:
        text: Input document
        config: Loader options, defaults to `LoadConfig()`

    Returns:
        List of (left_parent, right_parent, timestamp) in input order

    Raises:
        ParseError: On malformed lines or a header/row count mismatch
    """
    cfg = config or LoadConfig()
    rows: List[Tuple[int, List[str]]] = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        stripped = raw.strip()
        if not stripped:
            continue
        if cfg.comment_prefix and stripped.startswith(cfg.comment_prefix):
            continue
        rows.append((lineno, stripped.split()))

    expected: Optional[int] = None
    if cfg.expect_header:
        if not rows:
            raise ParseError("missing transaction count header")
        header_line, header = rows.pop(0)
        if len(header) != 1:
            raise ParseError(f"header must hold a single count, got {len(header)} fields", header_line)
        expected = _parse_int(header[0], "transaction count", header_line)

    triples = [parse_triple(fields, lineno) for lineno, fields in rows]

    if expected is not None and cfg.strict_count and expected != len(triples):
        raise ParseError(f"header announces {expected} transactions, found {len(triples)}")

    return triples


def parse_file(path: str, config: Optional[LoadConfig] = None) -> List[Triple]:
    """Parse a text file path into ordered triples."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            txt = f.read()
    except UnicodeDecodeError as e:
        raise ParseError(f"{path} is not valid UTF-8: {e.reason} at byte {e.start}") from e
    return parse_text(txt, config)
