"""Enigma Error Types

Every failure raised by the machine is an :class:`EnigmaError`. The base
class derives from :class:`ValueError`, so code that already guards
configuration input with ``except ValueError`` keeps working.

Hierarchy::

    EnigmaError (ValueError)
    ├── AlphabetError
    │   └── DuplicateSymbol
    ├── UnknownSymbol
    ├── MalformedCycle
    └── ConfigurationMismatch
        └── ConfigFileError
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "EnigmaError",
    "AlphabetError",
    "DuplicateSymbol",
    "UnknownSymbol",
    "MalformedCycle",
    "ConfigurationMismatch",
    "ConfigFileError",
]


class EnigmaError(ValueError):
    """Base class for all machine, alphabet and configuration errors."""


class AlphabetError(EnigmaError):
    """An alphabet could not be built from the given symbols."""


class DuplicateSymbol(AlphabetError):
    """A symbol appears more than once in an alphabet."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"Duplicate symbol {symbol!r} in alphabet")
        self.symbol = symbol


class UnknownSymbol(EnigmaError):
    """A symbol or index lies outside the alphabet."""

    def __init__(self, symbol: object, alphabet: Optional[str] = None) -> None:
        if alphabet is None:
            message = f"Symbol {symbol!r} is not in the alphabet"
        else:
            message = f"Symbol {symbol!r} is not in alphabet {alphabet!r}"
        super().__init__(message)
        self.symbol = symbol


class MalformedCycle(EnigmaError):
    """Cycle notation is unbalanced or repeats a symbol."""


class ConfigurationMismatch(EnigmaError):
    """Rotors, pawls, settings or plugboard do not fit the machine."""


class ConfigFileError(ConfigurationMismatch):
    """A configuration file or settings line could not be parsed.

    Attributes:
        line: 1-based line number of the offending input, if known.
    """

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line
