"""Enigma Alphabet

An ordered set of unique symbols defining the index space of a machine.
The K-th symbol has index K (numbering from 0).

Features:
- Symbol to index lookup in constant time
- Index to symbol lookup with modular wrap (negative indices wrap forward)
- Frozen dataclass, safe to share between machines
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from enigma.core.constants import DEFAULT_ALPHABET, RESERVED_SYMBOLS
from enigma.core.errors import AlphabetError, DuplicateSymbol, UnknownSymbol

__all__ = ["Alphabet"]


@dataclass(frozen=True, slots=True)
class Alphabet:
    """Alphabet of encodable symbols.

    Examples
    --------
        >>> alpha = Alphabet("ABCDEFG")
        >>> alpha.size
        7
        >>> alpha.to_index("E")
        4
        >>> alpha.to_symbol(3)
        'D'
        >>> alpha.to_symbol(-1)
        'G'
    """

    symbols: str = DEFAULT_ALPHABET
    _index: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate symbols and build the reverse lookup table.

        Raises
        ------
            AlphabetError: If the alphabet is empty or uses reserved characters.
            DuplicateSymbol: If a symbol appears twice.
        """
        if not self.symbols:
            raise AlphabetError("Alphabet must contain at least one symbol")

        index: dict[str, int] = {}
        for i, symbol in enumerate(self.symbols):
            if symbol.isspace() or symbol in RESERVED_SYMBOLS:
                raise AlphabetError(f"Symbol {symbol!r} cannot be used in an alphabet")
            if symbol in index:
                raise DuplicateSymbol(symbol)
            index[symbol] = i

        object.__setattr__(self, "_index", index)

    @property
    def size(self) -> int:
        """Number of symbols in the alphabet."""
        return len(self.symbols)

    def contains(self, symbol: str) -> bool:
        """Return True if SYMBOL is in this alphabet."""
        return symbol in self._index

    def to_index(self, symbol: str) -> int:
        """Return the index of SYMBOL.

        Args:
        ----
            symbol: A single symbol of this alphabet.

        Returns:
        -------
            Index in the range [0, size).

        Raises:
        ------
            UnknownSymbol: If the symbol is not in the alphabet.
        """
        try:
            return self._index[symbol]
        except (KeyError, TypeError):
            raise UnknownSymbol(symbol, self.symbols) from None

    def to_symbol(self, index: int) -> str:
        """Return the symbol at INDEX, reduced modulo the alphabet size."""
        return self.symbols[index % self.size]

    def wrap(self, index: int) -> int:
        """Reduce INDEX into the range [0, size)."""
        return index % self.size

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._index

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[str]:
        return iter(self.symbols)

    def __str__(self) -> str:
        return self.symbols
