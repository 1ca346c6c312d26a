"""
Pictographic sequences the gateway delivers reliably.

Entries are exact sequences: ``"\\u2665"`` (black heart suit) is allowed but
``"\\u2665\\ufe0f"`` (the same symbol forced to emoji presentation) is not.
"""

import logging
from pathlib import Path
from typing import FrozenSet, Union

logger = logging.getLogger(__name__)

DEFAULT_ALLOW_LIST: FrozenSet[str] = frozenset({
    "©",  # copyright sign
    "®",  # registered sign
    "™",  # trade mark sign
    "‼",  # double exclamation mark
    "⁉",  # exclamation question mark
    "↔",  # left right arrow
    "↕",  # up down arrow
    "↖",  # north west arrow
    "↗",  # north east arrow
    "↘",  # south east arrow
    "↙",  # south west arrow
    "☺",  # white smiling face
    "♠",  # black spade suit
    "♣",  # black club suit
    "♥",  # black heart suit
    "♦",  # black diamond suit
})


def load_allow_list(path: Union[str, Path]) -> FrozenSet[str]:
    """
    Load an allow-list file.

    One sequence per line, surrounding whitespace stripped. Blank lines and
    lines starting with ``#`` are ignored.

    Args:
        path: Path to a UTF-8 text file

    Returns:
        FrozenSet[str]: The allowed sequences
    """
    path = Path(path)
    entries = set()

    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            entry = line.strip()
            if entry and not entry.startswith("#"):
                entries.add(entry)

    logger.info(f"Loaded {len(entries)} allow-list entries from {path}")
    return frozenset(entries)
