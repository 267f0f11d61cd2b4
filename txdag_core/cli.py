"""
txdag CLI

Usage modes:
- Default run: load transactions, build the graph, print the summary as JSON
- Print: render every transaction and the summary as text
- Stats: depth/in-reference statistics
- Validate: audit derived metrics against a from-scratch recomputation
- Export: write GraphML for external tools
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List

from . import __version__
from .compiler import compile_from_file
from .config import LoadConfig
from .enums import InputFormat
from .errors import GraphError
from .graph import Graph, build
from .metrics import get_graph_statistics
from .parser import ParseError, parse_file
from .render import format_graph

logger = logging.getLogger(__name__)


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="txdag",
        description="Build a transaction DAG and report its metrics",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # Utilities / meta
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase verbosity (-v, -vv)")

    # Primary input
    p.add_argument("input", nargs="?", help="Path to a transaction list (text or YAML)")
    p.add_argument(
        "--format",
        choices=[f.name.lower() for f in InputFormat],
        default=InputFormat.AUTO.name.lower(),
        help="Input format",
    )

    # Loader config overrides
    p.add_argument("--no-header", action="store_true", help="Text input has no leading count line")
    p.add_argument("--lenient-count", action="store_true", help="Accept a header count that disagrees with the rows")
    p.add_argument("--comment-prefix", type=str, default=None, help="Prefix marking comment lines in text input")

    # Output / analysis
    p.add_argument("--print-graph", action="store_true", help="Render every transaction as text")
    p.add_argument("--stats", action="store_true", help="Print depth and reference statistics")
    p.add_argument("--validate", action="store_true", help="Audit derived metrics; exit 1 on mismatch")
    p.add_argument("--export-graphml", type=str, default="", help="Export the graph to GraphML at given path")
    p.add_argument("--out", type=str, default="", help="Optional output JSON file path")

    return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> LoadConfig:
    cfg = LoadConfig()
    if args.no_header:
        cfg.expect_header = False
    if args.lenient_count:
        cfg.strict_count = False
    if args.comment_prefix is not None:
        cfg.comment_prefix = args.comment_prefix
    return cfg


def setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def load_graph(path: str, fmt: InputFormat, cfg: LoadConfig) -> Graph:
    """Load `path` in the given format and build the graph."""
    if fmt is InputFormat.AUTO:
        fmt = InputFormat.from_path(path)
    logger.info("Loading %s input from %s", fmt.name, path)
    if fmt is InputFormat.YAML:
        return compile_from_file(path)
    return build(parse_file(path, cfg))


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.version:
        print(__version__)
        return 0

    if not args.input:
        print("error: missing input path", file=sys.stderr)
        return 2

    cfg = build_config(args)
    fmt = InputFormat[args.format.upper()]

    try:
        g = load_graph(args.input, fmt, cfg)
    except (OSError, ParseError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except GraphError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    logger.info("Built graph with %d transactions", g.size())

    if args.export_graphml:
        logger.info("Exporting GraphML to %s", args.export_graphml)
        try:
            g.export_graphml(args.export_graphml)
        except OSError as e:
            print(f"error: {e}", file=sys.stderr)
            return 2

    if args.print_graph:
        print(format_graph(g))

    last_tx, most_referenced = g.summary()
    report: Dict[str, Any] = {
        "size": g.size(),
        "last_transaction": last_tx,
        "most_in_reference_transaction": most_referenced,
    }
    if args.stats:
        report["stats"] = get_graph_statistics(g)

    exit_code = 0
    if args.validate:
        issues = g.validate_invariants()
        report["validation"] = issues
        if issues:
            logger.warning("Invariant audit found %d issue categories", len(issues))
            exit_code = 1

    if args.out:
        try:
            with open(args.out, "w", encoding="utf-8") as f:
                json.dump(report, f, indent=2)
        except OSError as e:
            print(f"error: {e}", file=sys.stderr)
            return 2
    else:
        print(json.dumps(report, indent=2))

    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
