"""ANSI escape sequences for coloured terminal output."""

from __future__ import annotations

import enum
import os


class TerminalColor(enum.Enum):
    BLACK = 30
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    MAGENTA = 35
    CYAN = 36
    WHITE = 37
    NO_CHANGE = 0


def enable_virtual_terminal_processing() -> bool:
    """Return True if the terminal is known to understand escape sequences."""
    return os.name == "posix"


def terminal_set(color: TerminalColor, bold: bool) -> str:
    """Return the sequence that switches to ``color`` and optionally bold."""
    if not enable_virtual_terminal_processing():
        return ""
    if color is TerminalColor.NO_CHANGE and not bold:
        return ""

    codes = []
    if color is not TerminalColor.NO_CHANGE:
        codes.append(str(color.value))
    if bold:
        codes.append("1")
    return "\033[" + ";".join(codes) + "m"


def terminal_set_bold() -> str:
    """Return the sequence that switches on bold text."""
    return "\033[1m"


def terminal_reset() -> str:
    """Return the sequence that resets all attributes."""
    return "\033[0m"