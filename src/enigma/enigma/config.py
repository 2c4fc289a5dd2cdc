"""
Machine Configuration Files

A configuration file describes the alphabet, the slot and pawl counts and
the catalog of available rotors::

    ABCDEFGHIJKLMNOPQRSTUVWXYZ
    5 3
    I MQ      (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
    Beta N    (ALBEVFCYODJWUGNMQTZSKPR) (HIX)
    B R       (AE) (BN) (CK) (DQ) (FU) (GY) (HW) (IJ) (LO) (MP)
              (RX) (SZ) (TV)

Each rotor descriptor is a name, a type token (``M`` moving with its notch
symbols appended, ``N`` fixed, ``R`` reflector) and the cycles of its
wiring, which may continue over several lines. Reflector cycles must all
be pairs, as must the plugboard cycles of a settings line.

A settings line in a message file selects rotors, their starting
positions and the plugboard::

    * B Beta III IV I AXLE (HQ) (EX) (IP) (TR) (BY)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Optional, Union

from enigma.core.alphabet import Alphabet
from enigma.core.constants import (
    CYCLE_CLOSE,
    CYCLE_OPEN,
    DEFAULT_CONFIG,
    SETTINGS_MARKER,
    TYPE_FIXED,
    TYPE_MOVING,
    TYPE_REFLECTOR,
)
from enigma.core.errors import ConfigFileError, EnigmaError
from enigma.core.permutation import Permutation, parse_cycles
from enigma.core.rotor import Rotor, RotorKind
from enigma.machine import Machine

__all__ = [
    "MachineConfig",
    "Settings",
    "load_config",
    "load_config_file",
    "default_config",
    "parse_settings",
    "apply_settings",
]

logger = logging.getLogger(__name__)

_Token = tuple[str, int]


@dataclass(frozen=True)
class MachineConfig:
    """
    Parsed configuration file.

    Attributes:
        alphabet: Machine alphabet.
        num_rotors: Number of rotor slots.
        num_pawls: Number of pawls.
        catalog: Read-only mapping of rotor name to rotor template.
    """

    alphabet: Alphabet
    num_rotors: int
    num_pawls: int
    catalog: Mapping[str, Rotor] = field(default_factory=dict)

    def build_machine(self) -> Machine:
        """Return a new machine with empty slots using this catalog."""
        return Machine(self.alphabet, self.num_rotors, self.num_pawls, self.catalog)


@dataclass(frozen=True)
class Settings:
    """
    Parsed settings line.

    Attributes:
        rotors: Rotor names, reflector first.
        positions: Starting symbols of slots 1..n-1.
        plugboard: Plugboard cycles in cycle notation (may be empty).
        line: Line number of the settings line, if read from a file.
    """

    rotors: tuple[str, ...]
    positions: str
    plugboard: str = ""
    line: Optional[int] = None


def _tokenize(text: str) -> list[_Token]:
    return [
        (token, lineno)
        for lineno, line in enumerate(text.splitlines(), start=1)
        for token in line.split()
    ]


def _read_rotor(tokens: list[_Token], pos: int, alphabet: Alphabet) -> tuple[Rotor, int]:
    """Parse one rotor descriptor starting at POS; return it and the next position."""
    name, lineno = tokens[pos]
    if CYCLE_OPEN in name or CYCLE_CLOSE in name:
        raise ConfigFileError(f"Rotor name {name!r} cannot contain brackets", lineno)

    pos += 1
    if pos >= len(tokens):
        raise ConfigFileError(f"Rotor {name} has no type", lineno)
    type_token, lineno = tokens[pos]
    kind, notches = type_token[0], type_token[1:]

    pos += 1
    cycles: list[str] = []
    while pos < len(tokens) and tokens[pos][0].startswith(CYCLE_OPEN):
        cycles.append(tokens[pos][0])
        pos += 1
    if not cycles:
        raise ConfigFileError(f"Rotor {name} has no wiring cycles", lineno)

    try:
        permutation = Permutation(" ".join(cycles), alphabet)
        if kind == TYPE_MOVING:
            rotor = Rotor.moving(name, permutation, notches)
        elif kind == TYPE_FIXED:
            rotor = Rotor(name, permutation, RotorKind.FIXED, notches)
        elif kind == TYPE_REFLECTOR:
            for cycle in permutation.cycles:
                if len(cycle) != 2:
                    raise ConfigFileError(f"Reflector {name} cycles must be pairs, got ({cycle})", lineno)
            rotor = Rotor(name, permutation, RotorKind.REFLECTOR, notches)
        else:
            raise ConfigFileError(
                f"Rotor {name} type must be {TYPE_MOVING}, {TYPE_FIXED} or {TYPE_REFLECTOR}, got {kind!r}",
                lineno,
            )
    except ConfigFileError:
        raise
    except EnigmaError as exc:
        raise ConfigFileError(str(exc), lineno) from exc

    return rotor, pos


def load_config(text: str) -> MachineConfig:
    """Parse the contents of a configuration file.

    Args:
    ----
        text: Configuration file contents.

    Returns:
    -------
        Parsed configuration.

    Raises:
    ------
        ConfigFileError: If the text is truncated or malformed.
    """
    tokens = _tokenize(text)
    if len(tokens) < 3:
        raise ConfigFileError("Configuration truncated: need alphabet, rotor and pawl counts")

    symbols, lineno = tokens[0]
    try:
        alphabet = Alphabet(symbols)
    except EnigmaError as exc:
        raise ConfigFileError(str(exc), lineno) from exc

    try:
        num_rotors = int(tokens[1][0])
        num_pawls = int(tokens[2][0])
    except ValueError:
        raise ConfigFileError(
            f"Expected rotor and pawl counts, got {tokens[1][0]!r} {tokens[2][0]!r}", tokens[1][1]
        ) from None
    if not 0 < num_pawls < num_rotors:
        raise ConfigFileError(
            f"Need 0 < pawls < rotors, got {num_pawls} pawls and {num_rotors} rotors", tokens[1][1]
        )

    catalog: dict[str, Rotor] = {}
    pos = 3
    while pos < len(tokens):
        lineno = tokens[pos][1]
        rotor, pos = _read_rotor(tokens, pos, alphabet)
        if rotor.name in catalog:
            raise ConfigFileError(f"Rotor name {rotor.name!r} is defined twice", lineno)
        catalog[rotor.name] = rotor

    if not catalog:
        raise ConfigFileError("Configuration defines no rotors")

    logger.debug(
        "Loaded %d rotors over a %d-symbol alphabet (%d slots, %d pawls)",
        len(catalog),
        alphabet.size,
        num_rotors,
        num_pawls,
    )
    return MachineConfig(alphabet, num_rotors, num_pawls, MappingProxyType(catalog))


def load_config_file(path: Union[str, Path]) -> MachineConfig:
    """Read and parse a configuration file."""
    logger.debug("Reading configuration from %s", path)
    return load_config(Path(path).read_text())


def default_config() -> MachineConfig:
    """Return the historical naval rotor set (rotors I-VIII, Beta, Gamma, B, C)."""
    return load_config(DEFAULT_CONFIG)


def parse_settings(line: str, num_rotors: int, lineno: Optional[int] = None) -> Settings:
    """Parse a settings line such as ``* B Beta III IV I AXLE (HQ) (EX)``.

    Args:
    ----
        line: Settings line, starting with ``*``.
        num_rotors: Number of rotor slots of the machine.
        lineno: Line number for error messages.

    Raises:
    ------
        ConfigFileError: If the line is malformed.
    """
    stripped = line.strip()
    if not stripped.startswith(SETTINGS_MARKER):
        raise ConfigFileError(f"Settings line must start with {SETTINGS_MARKER!r}", lineno)

    fields = stripped[len(SETTINGS_MARKER) :].split()
    if len(fields) < num_rotors + 1:
        raise ConfigFileError(
            f"Settings need {num_rotors} rotor names and a position string, got {len(fields)} fields",
            lineno,
        )

    rotors = tuple(fields[:num_rotors])
    positions = fields[num_rotors]
    plugboard = " ".join(fields[num_rotors + 1 :])

    try:
        pairs = parse_cycles(plugboard)
    except EnigmaError as exc:
        raise ConfigFileError(str(exc), lineno) from exc
    for pair in pairs:
        if len(pair) != 2:
            raise ConfigFileError(f"Plugboard cycles must be pairs, got ({pair})", lineno)

    return Settings(rotors, positions, plugboard, lineno)


def apply_settings(machine: Machine, settings: Settings) -> None:
    """Insert, position and plug MACHINE according to SETTINGS.

    Raises:
        ConfigFileError: If the settings do not fit the machine.
    """
    try:
        machine.insert_rotors(settings.rotors)
        machine.set_rotors(settings.positions)
        machine.set_plugboard(Permutation(settings.plugboard, machine.alphabet))
    except ConfigFileError:
        raise
    except EnigmaError as exc:
        raise ConfigFileError(str(exc), settings.line) from exc
