"""Pytest configuration and fixtures for the enigma tests.

This module provides shared machines and rotor sets for the test suite.
"""

import pytest

from enigma.config import MachineConfig, default_config
from enigma.core.alphabet import Alphabet
from enigma.core.permutation import Permutation
from enigma.core.rotor import Rotor
from enigma.machine import Machine
from reference import HIAWATHA_PLUGBOARD, HIAWATHA_ROTORS, HIAWATHA_SETTING


@pytest.fixture
def upper() -> Alphabet:
    """The 26-letter upper-case alphabet."""
    return Alphabet()


@pytest.fixture
def naval() -> MachineConfig:
    """The built-in naval rotor set (5 slots, 3 pawls)."""
    return default_config()


@pytest.fixture
def hiawatha(naval: MachineConfig) -> Machine:
    """A naval machine set up for the reference message."""
    machine = naval.build_machine()
    machine.insert_rotors(HIAWATHA_ROTORS)
    machine.set_rotors(HIAWATHA_SETTING)
    machine.set_plugboard(Permutation(HIAWATHA_PLUGBOARD, naval.alphabet))
    return machine


@pytest.fixture
def stepping_catalog(upper: Alphabet) -> list[Rotor]:
    """Identity-wired rotors with the historical I/II/III notches.

    With identity wiring the rotor positions are the only observable state,
    which keeps stepping tests independent of the signal path.
    """
    identity = Permutation.identity(upper)
    return [
        Rotor.reflector("B", Permutation("(AY) (BR) (CU) (DH) (EQ) (FS) (GL) (IP) (JX) (KN) (MO) (TZ) (VW)", upper)),
        Rotor.fixed("Beta", identity),
        Rotor.moving("L", identity, "Q"),
        Rotor.moving("M", identity, "E"),
        Rotor.moving("F", identity, "V"),
    ]
