"""Identifiers of variables, functions and macros in the symbol table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable


@dataclass(frozen=True)
class VarId:
    """Locates a variable by its callable nesting, block and position in it.

    ``callable`` is None for variables that live in the global block chain.
    """

    callable: int | None
    block: int
    index: int


@dataclass(frozen=True)
class FuncId:
    """Locates a function among the overloads that share its name."""

    name: Hashable
    index: int


@dataclass(frozen=True)
class MacroId:
    """Locates a macro among the overloads that share its name."""

    name: Hashable
    index: int