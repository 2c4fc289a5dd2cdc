"""Enigma Machine

Composes a plugboard, a stack of rotors and a reflector into the full
signal path::

    key -> plugboard -> rotor n-1 -> ... -> rotor 1 -> reflector
                                                          |
    lamp <- plugboard <- rotor n-1 <- ... <- rotor 1 <----+

Slot 0 holds the reflector and slot ``num_rotors - 1`` the fast rotor.
Only the rightmost ``num_pawls`` slots carry a pawl. Fixed and moving
rotors may go in any slot but 0, but a rotor only ever turns when it is
moving and sits in a pawl slot.

Before every symbol the rotors step. The fast rotor always advances. A
pawl sitting on a notched rotor pushes both that rotor and its left
neighbour, which gives the historical double step: a middle rotor
showing its notch turns together with the rotor to its left.

A machine is mutable and must not be shared between threads; the rotor
catalog it was built from is never modified and may be shared.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import Optional, Union, overload

from enigma.core.alphabet import Alphabet
from enigma.core.errors import ConfigurationMismatch, UnknownSymbol
from enigma.core.permutation import Permutation
from enigma.core.rotor import Rotor
from enigma.trace import TraceEvent, TraceSink

__all__ = ["Machine"]

logger = logging.getLogger(__name__)


class Machine:
    """A configurable rotor machine.

    Example:
    -------
        machine = Machine(alphabet, 5, 3, catalog)
        machine.insert_rotors(["B", "Beta", "III", "IV", "I"])
        machine.set_rotors("AXLE")
        machine.set_plugboard(Permutation("(HQ) (EX) (IP) (TR) (BY)", alphabet))
        machine.convert("FROM HIS SHOULDER HIAWATHA")
        # 'QVPQ SOK OILPUBKJ ZPISFXDW'
    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        num_pawls: int,
        catalog: Union[Mapping[str, Rotor], Iterable[Rotor]],
    ) -> None:
        """Create a machine with empty slots.

        Args:
        ----
            alphabet: Alphabet shared by every rotor and the plugboard.
            num_rotors: Number of rotor slots, including the reflector.
            num_pawls: Number of pawls (rightmost slots that can step).
            catalog: Available rotors, by name or as an iterable of rotors.

        Raises:
        ------
            ConfigurationMismatch: If ``0 < num_pawls < num_rotors`` does not
                hold, a catalog name is repeated or a rotor uses a different
                alphabet.
        """
        if not 0 < num_pawls < num_rotors:
            raise ConfigurationMismatch(
                f"Need 0 < pawls < rotors, got {num_pawls} pawls and {num_rotors} rotors"
            )

        if isinstance(catalog, Mapping):
            rotors = dict(catalog)
        else:
            rotors = {}
            for rotor in catalog:
                if rotor.name in rotors:
                    raise ConfigurationMismatch(f"Rotor name {rotor.name!r} is defined twice")
                rotors[rotor.name] = rotor

        for name, rotor in rotors.items():
            if rotor.alphabet != alphabet:
                raise ConfigurationMismatch(f"Rotor {name!r} uses a different alphabet")

        self._alphabet = alphabet
        self._num_rotors = num_rotors
        self._num_pawls = num_pawls
        self._catalog: Mapping[str, Rotor] = MappingProxyType(rotors)
        self._rotors: list[Rotor] = []
        self._plugboard = Permutation.identity(alphabet)

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def num_rotors(self) -> int:
        """Number of rotor slots, reflector included."""
        return self._num_rotors

    @property
    def num_pawls(self) -> int:
        """Number of pawls, and so of moving rotors."""
        return self._num_pawls

    @property
    def catalog(self) -> Mapping[str, Rotor]:
        """Read-only view of the available rotors."""
        return self._catalog

    @property
    def plugboard(self) -> Permutation:
        return self._plugboard

    def get_rotor(self, slot: int) -> Rotor:
        """Return the rotor in SLOT (0 is the reflector).

        The returned rotor belongs to the machine; turning it changes the
        machine's state.
        """
        if not self._rotors:
            raise ConfigurationMismatch("No rotors inserted")
        if not 0 <= slot < self._num_rotors:
            raise ConfigurationMismatch(f"Slot must be 0-{self._num_rotors - 1}, got {slot}")
        return self._rotors[slot]

    def settings(self) -> str:
        """Window symbols of slots 1..n-1, left to right."""
        return "".join(rotor.position for rotor in self._rotors[1:])

    # Setup

    def insert_rotors(self, names: Sequence[str]) -> None:
        """Fill the slots with fresh copies of the named catalog rotors.

        NAMES[0] names the reflector. All rotors start at setting 0.

        Raises
        ------
            ConfigurationMismatch: If a name is unknown or repeated, the count
                differs from ``num_rotors``, slot 0 is not a reflector or a
                reflector is named for another slot.
        """
        if len(names) != self._num_rotors:
            raise ConfigurationMismatch(f"Machine needs {self._num_rotors} rotors, got {len(names)}")
        if len(set(names)) != len(names):
            raise ConfigurationMismatch(f"Rotor names must be distinct, got {' '.join(names)}")

        rotors: list[Rotor] = []
        for slot, name in enumerate(names):
            try:
                template = self._catalog[name]
            except KeyError:
                raise ConfigurationMismatch(f"Unknown rotor {name!r}") from None

            if slot == 0:
                if not template.reflecting:
                    raise ConfigurationMismatch(f"Rotor {name} in slot 0 is not a reflector")
            elif template.reflecting:
                raise ConfigurationMismatch(f"Reflector {name} can only go in slot 0, not {slot}")
            rotors.append(template.copy())

        self._rotors = rotors
        logger.debug("Inserted rotors %s", " ".join(names))

    def set_rotors(self, setting: str) -> None:
        """Turn slots 1..n-1 to the symbols of SETTING, left to right.

        Raises:
        ------
            ConfigurationMismatch: If no rotors are inserted or SETTING does
                not have ``num_rotors - 1`` symbols.
            UnknownSymbol: If a symbol is not in the alphabet.
        """
        if not self._rotors:
            raise ConfigurationMismatch("Insert rotors before setting them")
        if len(setting) != self._num_rotors - 1:
            raise ConfigurationMismatch(
                f"Setting must be {self._num_rotors - 1} symbols, got {len(setting)}"
            )
        for symbol in setting:
            if symbol not in self._alphabet:
                raise UnknownSymbol(symbol, self._alphabet.symbols)

        for rotor, symbol in zip(self._rotors[1:], setting):
            rotor.set_position(symbol)
        logger.debug("Rotors set to %s", setting)

    def set_plugboard(self, plugboard: Permutation) -> None:
        """Install PLUGBOARD, applied on the way in and again on the way out.

        Settings lines only ever describe swapped pairs, but any permutation
        of the machine alphabet is accepted here.

        Raises:
            ConfigurationMismatch: If the permutation uses another alphabet.
        """
        if plugboard.alphabet != self._alphabet:
            raise ConfigurationMismatch("Plugboard uses a different alphabet")
        self._plugboard = plugboard
        logger.debug("Plugboard set to %s", str(plugboard) or "identity")

    # Operation

    @overload
    def convert(self, value: int, trace: Optional[TraceSink] = None) -> int: ...

    @overload
    def convert(self, value: str, trace: Optional[TraceSink] = None) -> str: ...

    def convert(self, value: Union[int, str], trace: Optional[TraceSink] = None) -> Union[int, str]:
        """Convert an index, or a whole message when given a string."""
        if isinstance(value, str):
            return self.convert_message(value, trace)
        return self.convert_index(value, trace)

    def convert_index(self, index: int, trace: Optional[TraceSink] = None) -> int:
        """Step the rotors, then pass INDEX through the machine.

        Args:
        ----
            index: Alphabet index of the key pressed.
            trace: Optional sink receiving a :class:`TraceEvent`.

        Returns:
        -------
            Alphabet index of the lamp lit.
        """
        if not self._rotors:
            raise ConfigurationMismatch("Insert rotors before converting")

        self._advance_rotors()

        entered = self._alphabet.wrap(index)
        after_plugboard = self._plugboard.permute(entered)
        after_rotors = self._apply_rotors(after_plugboard)
        result = self._plugboard.permute(after_rotors)

        if trace is not None:
            trace(TraceEvent(self.settings(), entered, after_plugboard, after_rotors, result))
        return result

    def convert_message(self, text: str, trace: Optional[TraceSink] = None) -> str:
        """Convert every symbol of TEXT, copying whitespace through unchanged.

        Raises:
            UnknownSymbol: On a non-whitespace character outside the alphabet.
                Rotors have stepped for every symbol before it.
        """
        result: list[str] = []
        for ch in text:
            if ch.isspace():
                result.append(ch)
                continue
            index = self._alphabet.to_index(ch)
            result.append(self._alphabet.to_symbol(self.convert_index(index, trace)))
        return "".join(result)

    def _advance_rotors(self) -> None:
        """Step the rotors once, right to left, on their pre-step notch state.

        Only the pawl slots are visited. A pawl only pushes a left neighbour
        that is itself moving and under a pawl.
        """
        rotors = self._rotors
        first_pawl = self._num_rotors - self._num_pawls
        fast = rotors[-1]

        carry = fast.at_notch
        if fast.rotates:
            fast.advance()

        for slot in range(self._num_rotors - 2, first_pawl - 1, -1):
            rotor = rotors[slot]
            engaged = rotor.at_notch and slot - 1 >= first_pawl and rotors[slot - 1].rotates
            if (carry or engaged) and rotor.rotates:
                rotor.advance()
            carry = engaged

    def _apply_rotors(self, index: int) -> int:
        for rotor in reversed(self._rotors):
            index = rotor.convert_forward(index)
        for rotor in self._rotors[1:]:
            index = rotor.convert_backward(index)
        return index

    def __repr__(self) -> str:
        names = " ".join(rotor.name for rotor in self._rotors) or "empty"
        return (
            f"Machine(rotors={self._num_rotors}, pawls={self._num_pawls}, "
            f"slots=[{names}], settings={self.settings()!r})"
        )
