"""Tokens and small value kinds used by the parser and evaluator."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Hashable


class TokenType(enum.Enum):
    NUM = enum.auto()
    FNUM = enum.auto()
    CHAR = enum.auto()
    BVAL = enum.auto()
    STRING = enum.auto()
    NULL = enum.auto()
    SEMICOLON = enum.auto()
    COLON = enum.auto()
    DOUBLE_COLON = enum.auto()
    BACKSLASH = enum.auto()
    COMMA = enum.auto()
    BRACE_L_REG = enum.auto()
    BRACE_R_REG = enum.auto()
    BRACE_L_CUR = enum.auto()
    BRACE_R_CUR = enum.auto()
    ID = enum.auto()
    END = enum.auto()
    UNKNOWN = enum.auto()


@dataclass(frozen=True)
class Token:
    """A lexical token.

    ``value`` holds the number, character, boolean, name id or string id the
    token carries, depending on its type; None for punctuation.
    """

    type: TokenType
    value: Any = None


@dataclass(frozen=True)
class SpecialVal:
    id: Hashable


@dataclass(frozen=True)
class UndecidedCallableVal:
    """A callable referred to by name before its overload is chosen."""

    is_func: bool
    name: Hashable


class EvaluatorJump(Exception):
    """Raised to unwind evaluation to a block exit, loop or return."""

    def __init__(
        self,
        block_name: Hashable | None = None,
        is_loop: bool = False,
        is_ret: bool = False,
    ) -> None:
        super().__init__(block_name)
        self.block_name = block_name
        self.is_loop = is_loop
        self.is_ret = is_ret