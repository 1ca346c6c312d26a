"""Fixed-offset splitting of outgoing text into gateway-sized chunks."""

from typing import List


def chunk_string(text: str, length: int) -> List[str]:
    """
    Split text into consecutive slices of ``length`` characters.

    Only the last chunk may be shorter. Slicing ignores word and grapheme
    boundaries, so a multi-code-point symbol can straddle two chunks.

    Args:
        text: Sanitized message text
        length: Maximum chunk size, must be positive

    Returns:
        List[str]: Chunks whose concatenation equals ``text``
    """
    if length <= 0:
        raise ValueError(f"chunk length must be positive, got {length}")

    return [text[i:i + length] for i in range(0, len(text), length)]
