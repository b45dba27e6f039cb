import os
from unittest import mock

import pytest

from orbc.terminal import (
    TerminalColor,
    enable_virtual_terminal_processing,
    terminal_reset,
    terminal_set,
    terminal_set_bold,
)


def test_bold_sequence():
    assert terminal_set_bold() == "\033[1m"


def test_reset_sequence():
    assert terminal_reset() == "\033[0m"


def test_enabled_on_posix():
    with mock.patch.object(os, "name", "posix"):
        assert enable_virtual_terminal_processing() is True


def test_disabled_elsewhere():
    with mock.patch.object(os, "name", "nt"):
        assert enable_virtual_terminal_processing() is False
        assert terminal_set(TerminalColor.RED, True) == ""


def test_color_without_bold():
    with mock.patch.object(os, "name", "posix"):
        assert terminal_set(TerminalColor.RED, False) == "\033[31m"


def test_color_with_bold():
    with mock.patch.object(os, "name", "posix"):
        assert terminal_set(TerminalColor.WHITE, True) == "\033[37;1m"


def test_no_change_with_bold_equals_bold_sequence():
    with mock.patch.object(os, "name", "posix"):
        assert terminal_set(TerminalColor.NO_CHANGE, True) == terminal_set_bold()


def test_no_change_without_bold_is_empty():
    with mock.patch.object(os, "name", "posix"):
        assert terminal_set(TerminalColor.NO_CHANGE, False) == ""


@pytest.mark.parametrize("color", [c for c in TerminalColor if c is not TerminalColor.NO_CHANGE])
def test_every_color_is_distinct_escape(color):
    with mock.patch.object(os, "name", "posix"):
        seq = terminal_set(color, False)
    assert seq.startswith("\033[") and seq.endswith("m")
    assert seq[2:-1] == str(color.value)