"""
Enigma Rotors

A rotor is a named wheel wired with a :class:`Permutation` and turned to
a rotational offset (its *setting*). The three physical variants differ
only in a discriminant and, for moving rotors, a set of notch symbols:

    Kind        rotates  reflecting  notches   slots
    REFLECTOR   no       yes         none      0 only
    FIXED       no       no          none      1..n-1
    MOVING      yes      no          >= 1      1..n-1

Rotors in a catalog are templates. A machine installs :meth:`Rotor.copy`
of each so that turning one slot never turns a catalog entry or another
machine's rotor.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Union

from enigma.core.alphabet import Alphabet
from enigma.core.errors import ConfigurationMismatch, UnknownSymbol
from enigma.core.permutation import Permutation

__all__ = [
    "RotorKind",
    "Rotor",
]


class RotorKind(IntEnum):
    """Rotor variant discriminant."""

    REFLECTOR = 0  # Fixed end of the stack, turns the signal around
    FIXED = 1  # Never rotates (e.g. the thin Beta/Gamma wheels)
    MOVING = 2  # Driven by a pawl, carries notches


@dataclass(eq=False)
class Rotor:
    """A rotor of one of the three kinds.

    Prefer the :meth:`reflector`, :meth:`fixed` and :meth:`moving`
    constructors; the dataclass constructor validates the same rules.

    Attributes:
        name: Catalog name, e.g. ``"III"``.
        permutation: Wiring at setting 0.
        kind: Rotor variant.
        notches: Symbols at which a moving rotor engages the pawl to its left.
    """

    name: str
    permutation: Permutation
    kind: RotorKind = RotorKind.FIXED
    notches: str = ""
    _setting: int = field(default=0, repr=False)

    def __post_init__(self) -> None:
        """Reject rotor states that cannot exist physically."""
        self.kind = RotorKind(self.kind)
        alphabet = self.permutation.alphabet

        if self.kind is RotorKind.MOVING:
            if not self.notches:
                raise ConfigurationMismatch(f"Moving rotor {self.name} needs at least one notch")
            for symbol in self.notches:
                if symbol not in alphabet:
                    raise UnknownSymbol(symbol, alphabet.symbols)
            if len(set(self.notches)) != len(self.notches):
                raise ConfigurationMismatch(f"Rotor {self.name} repeats a notch in {self.notches!r}")
        elif self.notches:
            raise ConfigurationMismatch(
                f"{self.kind.name.capitalize()} rotor {self.name} cannot have notches"
            )

        self.set_position(self._setting)

    # Variant constructors

    @classmethod
    def reflector(cls, name: str, permutation: Permutation) -> Rotor:
        """Create a reflector."""
        return cls(name, permutation, RotorKind.REFLECTOR)

    @classmethod
    def fixed(cls, name: str, permutation: Permutation) -> Rotor:
        """Create a non-rotating rotor."""
        return cls(name, permutation, RotorKind.FIXED)

    @classmethod
    def moving(cls, name: str, permutation: Permutation, notches: str) -> Rotor:
        """Create a rotating rotor with the given notch symbols."""
        return cls(name, permutation, RotorKind.MOVING, notches)

    def copy(self) -> Rotor:
        """Return an independent rotor with the same wiring at setting 0."""
        return Rotor(self.name, self.permutation, self.kind, self.notches)

    # Capabilities

    @property
    def alphabet(self) -> Alphabet:
        return self.permutation.alphabet

    @property
    def size(self) -> int:
        return self.permutation.size

    @property
    def rotates(self) -> bool:
        """True for rotors that a pawl can advance."""
        return self.kind is RotorKind.MOVING

    @property
    def reflecting(self) -> bool:
        """True for the reflector."""
        return self.kind is RotorKind.REFLECTOR

    # Position

    @property
    def setting(self) -> int:
        """Current rotational offset in the range [0, size)."""
        return self._setting

    @property
    def position(self) -> str:
        """Symbol showing in the rotor window."""
        return self.alphabet.to_symbol(self._setting)

    def set_position(self, position: Union[int, str]) -> None:
        """Turn the rotor to an index or a symbol of its alphabet.

        Raises:
            UnknownSymbol: If the symbol is not in the alphabet or the
                index is outside [0, size).
        """
        if isinstance(position, str):
            self._setting = self.alphabet.to_index(position)
        elif 0 <= position < self.size:
            self._setting = int(position)
        else:
            raise UnknownSymbol(position, self.alphabet.symbols)

    @property
    def at_notch(self) -> bool:
        """True if a moving rotor shows one of its notch symbols."""
        return self.rotates and self.position in self.notches

    def advance(self) -> None:
        """Turn a moving rotor by one position.

        Raises:
            ConfigurationMismatch: If the rotor does not rotate.
        """
        if not self.rotates:
            raise ConfigurationMismatch(f"{self.kind.name.capitalize()} rotor {self.name} cannot advance")
        self._setting = (self._setting + 1) % self.size

    # Signal path

    def convert_forward(self, index: int) -> int:
        """Pass INDEX through the wiring from the right-hand contacts."""
        return self.permutation.wrap(self.permutation.permute(index + self._setting) - self._setting)

    def convert_backward(self, index: int) -> int:
        """Pass INDEX through the wiring from the left-hand contacts."""
        return self.permutation.wrap(self.permutation.invert(index + self._setting) - self._setting)

    def __str__(self) -> str:
        return f"{self.name}@{self.position}"
