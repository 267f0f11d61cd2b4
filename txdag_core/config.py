"""
Configuration objects for loading transaction lists.

Exposes the knobs of the text loader so the command-line interface and
callers can relax the input format without editing parser logic.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class LoadConfig:
    """
    Configuration for `parse_text` / `parse_file`.

    Defaults match the line-oriented format: a count header followed by one
    `left right timestamp` row per transaction.
    """

    # Lines starting with this prefix (after stripping) are skipped
    comment_prefix: str = "#"

    # First data line holds the number of transactions that follow
    expect_header: bool = True

    # Reject input whose header count disagrees with the number of rows.
    # Only meaningful when expect_header is set.
    strict_count: bool = True
