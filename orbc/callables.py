"""Values describing functions and macros known to the symbol table."""

from __future__ import annotations

import copy
import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Hashable

from .types import Callable, TypeId

if TYPE_CHECKING:
    from .type_table import TypeTable

EscapeScore = int


@dataclass
class BaseCallableValue:
    """Common part of functions and macros.

    ``type`` and ``type_sig`` are set together through :meth:`set_type`.
    """

    name: Hashable = None
    code_loc: Any = None
    arg_names: list[Hashable] = field(default_factory=list)
    type: TypeId | None = field(default=None, init=False)
    type_sig: TypeId | None = field(default=None, init=False)

    def arg_count(self) -> int:
        return len(self.arg_names)

    def set_type(self, type_id: TypeId, type_table: TypeTable) -> None:
        """Set the callable type and derive its signature type."""
        self.type = type_id
        self.type_sig = type_table.add_callable_sig(self.callable(type_table))

    @staticmethod
    def _extract(type_id: TypeId | None, type_table: TypeTable) -> Callable:
        if type_id is None:
            raise ValueError("callable has no type set")
        call = type_table.extract_callable(type_id)
        if call is None:
            raise ValueError(f"type {type_id!r} is not callable")
        return copy.deepcopy(call)

    def callable(self, type_table: TypeTable) -> Callable:
        """Return a copy of the callable type."""
        return self._extract(self.type, type_table)

    def callable_sig(self, type_table: TypeTable) -> Callable:
        """Return a copy of the callable signature type."""
        return self._extract(self.type_sig, type_table)


@dataclass
class FuncValue(BaseCallableValue):
    no_name_mangle: bool = False
    defined: bool = False
    is_eval: bool = False
    llvm_func: Any = None
    eval_func: Any = None

    def is_llvm(self) -> bool:
        """Return True if the function has been compiled."""
        return self.llvm_func is not None

    def ret_type(self, type_table: TypeTable) -> TypeId | None:
        return self.callable(type_table).ret_type


class PreHandling(enum.Enum):
    """How a macro argument is treated before the macro is invoked."""

    REGULAR = "regular"
    PREPROC = "preproc"
    PLUS_ESC = "plus_esc"

    def escape_score(self) -> EscapeScore:
        if self is PreHandling.PREPROC:
            return 0
        if self is PreHandling.PLUS_ESC:
            return 2
        return 1


@dataclass
class MacroValue(BaseCallableValue):
    arg_pre_handling: list[PreHandling] = field(default_factory=list)
    body: Any = None