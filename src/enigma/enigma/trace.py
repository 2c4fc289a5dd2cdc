"""Per-symbol trace of a machine's signal path.

A trace sink is any callable taking a :class:`TraceEvent`. Pass one to
:meth:`enigma.machine.Machine.convert` to observe rotor positions and the
intermediate indices of every converted symbol; leave it out and the
machine does no tracing work at all.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional, TextIO

from enigma.core.alphabet import Alphabet

__all__ = ["TraceEvent", "TraceSink", "TracePrinter"]


@dataclass(frozen=True)
class TraceEvent:
    """
    Snapshot of one conversion.

    The rotors step before the signal enters, so ``positions`` are the
    settings the signal actually passes through: the window after this
    symbol's step, not before it. The classic verbose output prints the
    same thing.

    Attributes:
        positions: Window symbols of slots 1..n-1 after stepping.
        input: Index entering the plugboard.
        after_plugboard: Index after the first plugboard pass.
        after_rotors: Index after the forward and backward rotor passes.
        output: Index leaving the plugboard.
    """

    positions: str
    input: int
    after_plugboard: int
    after_rotors: int
    output: int


TraceSink = Callable[[TraceEvent], None]


class TracePrinter:
    """Trace sink writing one line per symbol, e.g. ``[AXLF] F -> F -> H -> Q``."""

    def __init__(self, alphabet: Alphabet, stream: Optional[TextIO] = None) -> None:
        self.alphabet = alphabet
        self.stream = stream if stream is not None else sys.stderr

    def format(self, event: TraceEvent) -> str:
        symbols = " -> ".join(
            self.alphabet.to_symbol(i)
            for i in (event.input, event.after_plugboard, event.after_rotors, event.output)
        )
        return f"[{event.positions}] {symbols}"

    def __call__(self, event: TraceEvent) -> None:
        print(self.format(event), file=self.stream)
