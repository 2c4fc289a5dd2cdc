"""Enigma Core Components

This module contains the building blocks of the cipher engine:
- Alphabet of encodable symbols
- Permutations in cycle notation
- Rotors (reflector, fixed, moving)
- Error types and constants
"""

from enigma.core.alphabet import Alphabet
from enigma.core.constants import (
    DEFAULT_ALPHABET,
    DEFAULT_CONFIG,
    DEFAULT_NUM_PAWLS,
    DEFAULT_NUM_ROTORS,
    GROUP_SIZE,
)
from enigma.core.errors import (
    AlphabetError,
    ConfigFileError,
    ConfigurationMismatch,
    DuplicateSymbol,
    EnigmaError,
    MalformedCycle,
    UnknownSymbol,
)
from enigma.core.permutation import Permutation, parse_cycles
from enigma.core.rotor import Rotor, RotorKind

__all__ = [
    # Alphabet
    "Alphabet",
    # Permutation
    "Permutation",
    "parse_cycles",
    # Rotors
    "Rotor",
    "RotorKind",
    # Errors
    "EnigmaError",
    "AlphabetError",
    "DuplicateSymbol",
    "UnknownSymbol",
    "MalformedCycle",
    "ConfigurationMismatch",
    "ConfigFileError",
    # Constants
    "DEFAULT_ALPHABET",
    "DEFAULT_CONFIG",
    "DEFAULT_NUM_ROTORS",
    "DEFAULT_NUM_PAWLS",
    "GROUP_SIZE",
]
