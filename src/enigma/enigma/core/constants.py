"""
Enigma Machine Constants

Contains the default alphabet, configuration grammar markers, output
formatting sizes and the historical rotor set.
"""

from __future__ import annotations

import string

__all__ = [
    # Alphabet
    "DEFAULT_ALPHABET",
    "RESERVED_SYMBOLS",
    # Configuration grammar
    "SETTINGS_MARKER",
    "CYCLE_OPEN",
    "CYCLE_CLOSE",
    "TYPE_MOVING",
    "TYPE_FIXED",
    "TYPE_REFLECTOR",
    # Output
    "GROUP_SIZE",
    # Historical machine
    "DEFAULT_NUM_ROTORS",
    "DEFAULT_NUM_PAWLS",
    "DEFAULT_CONFIG",
]

# ============================================================================
# Alphabet
# ============================================================================

# Upper-case Latin letters, the alphabet of every historical machine
DEFAULT_ALPHABET: str = string.ascii_uppercase

# Characters with meaning in the configuration grammar
RESERVED_SYMBOLS: frozenset[str] = frozenset("()*")

# ============================================================================
# Configuration Grammar
# ============================================================================

# Leading character of a settings line in a message file
SETTINGS_MARKER: str = "*"

# Cycle notation brackets
CYCLE_OPEN: str = "("
CYCLE_CLOSE: str = ")"

# Rotor type codes (first character of the TYPE[NOTCHES] token)
TYPE_MOVING: str = "M"
TYPE_FIXED: str = "N"
TYPE_REFLECTOR: str = "R"

# ============================================================================
# Output
# ============================================================================

# Converted messages are printed in groups of this many symbols
GROUP_SIZE: int = 5

# ============================================================================
# Historical Rotor Set (M3/M4)
# ============================================================================

DEFAULT_NUM_ROTORS: int = 5
DEFAULT_NUM_PAWLS: int = 3

# Wiring of the naval rotors I-VIII, the thin fourth-slot rotors Beta and
# Gamma and the thin reflectors B and C, in cycle notation.
DEFAULT_CONFIG: str = f"""\
{DEFAULT_ALPHABET}
{DEFAULT_NUM_ROTORS} {DEFAULT_NUM_PAWLS}
I MQ      (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
II ME     (FIXVYOMW) (CDKLHUP) (ESZ) (BJ) (GR) (NT) (A) (Q)
III MV    (ABDHPEJT) (CFLVMZOYQIRWUKXSG) (N)
IV MJ     (AEPLIYWCOXMRFZBSTGJQNH) (DV) (KU)
V MZ      (AVOLDRWFIUQ)(BZKSMNHYC) (EGTJPX)
VI MZM    (AJQDVLEOZWIYTS) (CGMNHFUX) (BPRK)
VII MZM   (ANOUPFRIMBZTLWKSVEGCJYDHXQ)
VIII MZM  (AFLSETWUNDHOZVICQ) (BKJ) (GXY) (MPR)
Beta N    (ALBEVFCYODJWUGNMQTZSKPR) (HIX)
Gamma N   (AFNIRLBSQWVXGUZDKMTPCOYJHE)
B R       (AE) (BN) (CK) (DQ) (FU) (GY) (HW) (IJ) (LO) (MP)
          (RX) (SZ) (TV)
C R       (AR) (BD) (CO) (EJ) (FN) (GT) (HK) (IV) (LM) (PW)
          (QZ) (SX) (UY)
"""
