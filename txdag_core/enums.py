"""
Enumerations shared by the txdag loaders and command-line interface.
"""

from enum import Enum, auto


class InputFormat(Enum):
    """
    Formats a transaction list can be read from.

    - AUTO: Pick TEXT or YAML from the file extension
    - TEXT: Line-oriented format, a count header followed by `left right timestamp` rows
    - YAML: Mapping with a `transactions` list
    """

    AUTO = auto()
    """Guess the format from the file extension."""

    TEXT = auto()
    """Whitespace separated integer triples, one transaction per line."""

    YAML = auto()
    """YAML document compiled through `compile_from_yaml`."""

    @classmethod
    def from_path(cls, path: str) -> "InputFormat":
        """Resolve AUTO for a concrete path: `.yaml`/`.yml` are YAML, anything else is TEXT."""
        lowered = path.lower()
        if lowered.endswith((".yaml", ".yml")):
            return cls.YAML
        return cls.TEXT
