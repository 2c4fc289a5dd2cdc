from enigma.config import MachineConfig, default_config, load_config, load_config_file
from enigma.core import Alphabet, EnigmaError, Permutation, Rotor, RotorKind
from enigma.machine import Machine
from enigma.trace import TraceEvent, TracePrinter

__all__ = [
    'Alphabet',
    'Permutation',
    'Rotor',
    'RotorKind',
    'Machine',
    'MachineConfig',
    'EnigmaError',
    'TraceEvent',
    'TracePrinter',
    'load_config',
    'load_config_file',
    'default_config',
]
