"""Output formatting helpers."""

from __future__ import annotations

from enigma.core.constants import GROUP_SIZE

__all__ = ["group_symbols"]


def group_symbols(text: str, size: int = GROUP_SIZE) -> str:
    """Split TEXT into space-separated groups of SIZE symbols.

    The last group may be shorter.

    Example:
    -------
        >>> group_symbols("QVPQSOKOILPUBKJZPISFXDW")
        'QVPQS OKOIL PUBKJ ZPISF XDW'
    """
    if size < 1:
        raise ValueError(f"Group size must be positive, got {size}")
    return " ".join(text[i : i + size] for i in range(0, len(text), size))
