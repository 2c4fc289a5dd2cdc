"""Message file processing.

A message file interleaves settings lines and message lines::

    * B Beta III IV I AXLE (HQ) (EX) (IP) (TR) (BY)
    FROM HIS SHOULDER HIAWATHA
    TOOK THE CAMERA OF ROSEWOOD

Each settings line reconfigures the machine; every following line until
the next settings line is converted with whitespace removed and emitted
in groups of five symbols.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Optional

from enigma.config import MachineConfig, apply_settings, parse_settings
from enigma.core.constants import SETTINGS_MARKER
from enigma.core.errors import ConfigFileError
from enigma.formatting import group_symbols
from enigma.trace import TraceSink

__all__ = ["process_messages"]

logger = logging.getLogger(__name__)


def process_messages(
    config: MachineConfig,
    lines: Iterable[str],
    trace: Optional[TraceSink] = None,
) -> Iterator[str]:
    """Convert the messages in LINES, yielding one output line per message line.

    Args:
    ----
        config: Machine configuration providing the rotor catalog.
        lines: Message file lines (trailing newlines are ignored).
        trace: Optional trace sink passed to the machine.

    Yields:
    ------
        Converted lines in five-symbol groups; blank input lines yield ``""``.
        Settings lines yield nothing.

    Raises:
    ------
        ConfigFileError: On a malformed settings line or a message before
            the first settings line.
        UnknownSymbol: On a message symbol outside the alphabet.
    """
    machine = config.build_machine()
    configured = False

    for lineno, line in enumerate(lines, start=1):
        stripped = line.strip()
        if stripped.startswith(SETTINGS_MARKER):
            settings = parse_settings(stripped, config.num_rotors, lineno)
            apply_settings(machine, settings)
            configured = True
            logger.debug("Line %d: machine now %r", lineno, machine)
        elif not stripped:
            yield ""
        elif not configured:
            raise ConfigFileError("Message precedes the first settings line", lineno)
        else:
            text = "".join(stripped.split())
            yield group_symbols(machine.convert_message(text, trace))
