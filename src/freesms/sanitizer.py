"""
Masking of pictographic symbols the gateway cannot carry.

Unsupported symbols are replaced one by one with a placeholder so the rest
of the message still goes out.
"""

import logging
from typing import AbstractSet, Tuple

import regex

logger = logging.getLogger(__name__)

# One pictographic code point, then an optional variation selector and an
# optional combining keycap.
SYMBOL_PATTERN = regex.compile(
    r"[\p{Emoji_Presentation}\p{Extended_Pictographic}][\uFE0E\uFE0F]?\u20E3?"
)


class MessageSanitizer:
    """Replaces pictographic sequences that are not on the allow-list."""

    def __init__(self, allow_list: AbstractSet[str], placeholder: str = "[]"):
        """
        Initialize the sanitizer.

        Args:
            allow_list: Exact sequences passed through unchanged
            placeholder: Replacement for every other matched sequence

        Raises:
            ValueError: If the placeholder contains a pictographic symbol
        """
        self.allow_list = frozenset(allow_list)
        self.placeholder = placeholder

        if SYMBOL_PATTERN.search(placeholder):
            raise ValueError(f"placeholder {placeholder!r} contains a pictographic symbol")

    def sanitize_with_count(self, text: str) -> Tuple[str, int]:
        """
        Sanitize text and report how many sequences were replaced.

        Args:
            text: Raw message text

        Returns:
            Tuple[str, int]: Sanitized text and number of replacements
        """
        replaced = 0

        def _replace(match):
            nonlocal replaced
            sequence = match.group()
            if sequence in self.allow_list:
                return sequence
            replaced += 1
            return self.placeholder

        sanitized = SYMBOL_PATTERN.sub(_replace, text)
        if replaced:
            logger.debug(f"Replaced {replaced} unsupported symbol(s)")
        return sanitized, replaced

    def sanitize(self, text: str) -> str:
        return self.sanitize_with_count(text)[0]
