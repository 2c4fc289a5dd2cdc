"""Enigma Permutations

A permutation of the indices of an :class:`~enigma.core.alphabet.Alphabet`,
given in cycle notation::

    (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)

Within a cycle each symbol maps to the next and the last wraps to the
first. Symbols that appear in no cycle map to themselves. Whitespace is
ignored.

Forward and inverse tables are built once as numpy integer arrays, so
``permute`` and ``invert`` are constant-time lookups.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
import numpy.typing as npt

from enigma.core.alphabet import Alphabet
from enigma.core.constants import CYCLE_CLOSE, CYCLE_OPEN
from enigma.core.errors import MalformedCycle

__all__ = [
    "Permutation",
    "parse_cycles",
]


def parse_cycles(notation: str) -> list[str]:
    """Split cycle notation into its groups.

    Args:
    ----
        notation: Cycle notation such as ``"(AB) (CDE)"``.

    Returns:
    -------
        List of cycle strings without brackets, e.g. ``["AB", "CDE"]``.
        Empty groups ``()`` are dropped.

    Raises:
    ------
        MalformedCycle: On nested or unbalanced brackets, symbols outside
            brackets, or a symbol repeated anywhere in the notation.
    """
    cycles: list[str] = []
    current: Optional[list[str]] = None
    seen: set[str] = set()

    for pos, ch in enumerate(notation):
        if ch.isspace():
            continue
        if ch == CYCLE_OPEN:
            if current is not None:
                raise MalformedCycle(f"Nested '(' at position {pos} in {notation!r}")
            current = []
        elif ch == CYCLE_CLOSE:
            if current is None:
                raise MalformedCycle(f"Unbalanced ')' at position {pos} in {notation!r}")
            if current:
                cycles.append("".join(current))
            current = None
        elif current is None:
            raise MalformedCycle(f"Symbol {ch!r} outside a cycle in {notation!r}")
        else:
            if ch in current:
                raise MalformedCycle(f"Symbol {ch!r} repeated within cycle in {notation!r}")
            if ch in seen:
                raise MalformedCycle(f"Symbol {ch!r} appears in more than one cycle in {notation!r}")
            current.append(ch)
            seen.add(ch)

    if current is not None:
        raise MalformedCycle(f"Unclosed '(' in {notation!r}")

    return cycles


class Permutation:
    """Permutation of an alphabet's indices built from cycle notation.

    Example:
    -------
        perm = Permutation("(BCDEFGA) (HJIK) (YX)", Alphabet())
        perm.permute(0)      # 1, A -> B
        perm.invert(1)       # 0
        perm.permute(-1)     # 25, Z is unmapped
        perm.permute_symbol("H")  # 'J'
    """

    __slots__ = ("_alphabet", "_cycles", "_forward", "_inverse")

    def __init__(self, cycles: str, alphabet: Alphabet) -> None:
        self._alphabet = alphabet
        self._cycles = tuple(parse_cycles(cycles))

        size = alphabet.size
        forward: npt.NDArray[np.int64] = np.arange(size, dtype=np.int64)
        for cycle in self._cycles:
            indices = [alphabet.to_index(symbol) for symbol in cycle]
            forward[indices] = np.roll(indices, -1)

        self._forward = forward
        self._inverse = np.argsort(forward)
        self._forward.setflags(write=False)
        self._inverse.setflags(write=False)

    @classmethod
    def identity(cls, alphabet: Alphabet) -> Permutation:
        """Return the permutation mapping every symbol to itself."""
        return cls("", alphabet)

    @property
    def alphabet(self) -> Alphabet:
        """Alphabet this permutation acts on."""
        return self._alphabet

    @property
    def size(self) -> int:
        """Size of the permuted alphabet (not the number of cycled symbols)."""
        return self._alphabet.size

    @property
    def cycles(self) -> tuple[str, ...]:
        """Non-empty cycles as given, without brackets."""
        return self._cycles

    def wrap(self, index: int) -> int:
        """Reduce INDEX modulo the alphabet size."""
        return index % self.size

    def permute(self, index: int) -> int:
        """Apply the permutation to INDEX modulo the alphabet size."""
        return int(self._forward[index % self.size])

    def invert(self, index: int) -> int:
        """Apply the inverse permutation to INDEX modulo the alphabet size."""
        return int(self._inverse[index % self.size])

    def permute_symbol(self, symbol: str) -> str:
        """Apply the permutation to a symbol of the alphabet."""
        return self._alphabet.to_symbol(self.permute(self._alphabet.to_index(symbol)))

    def invert_symbol(self, symbol: str) -> str:
        """Apply the inverse permutation to a symbol of the alphabet."""
        return self._alphabet.to_symbol(self.invert(self._alphabet.to_index(symbol)))

    @property
    def is_derangement(self) -> bool:
        """True if no index maps to itself."""
        return not bool(np.any(self._forward == np.arange(self.size)))

    @property
    def is_involution(self) -> bool:
        """True if the permutation is its own inverse (only 1- and 2-cycles)."""
        return bool(np.array_equal(self._forward, self._inverse))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Permutation):
            return NotImplemented
        return self._alphabet == other._alphabet and bool(
            np.array_equal(self._forward, other._forward)
        )

    def __hash__(self) -> int:
        return hash((self._alphabet, self._forward.tobytes()))

    def __str__(self) -> str:
        return " ".join(f"{CYCLE_OPEN}{cycle}{CYCLE_CLOSE}" for cycle in self._cycles)

    def __repr__(self) -> str:
        return f"Permutation({str(self)!r}, alphabet={self._alphabet.symbols!r})"
