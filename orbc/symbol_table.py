"""Scopes, variables, functions and macros known while compiling."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Hashable, Union

from .callables import FuncValue, MacroValue
from .symbol_ids import FuncId, MacroId, VarId
from .types import TypeId

if TYPE_CHECKING:
    from .reserved import Reserved
    from .type_table import TypeTable

DropVal = Union[VarId, Any]


@dataclass
class Block:
    """A (possibly named) block; compiled blocks carry their exit, loop and phi."""

    name: Hashable | None = None
    type: TypeId | None = None
    block_exit: Any = None
    block_loop: Any = None
    phi: Any = None

    def is_eval(self) -> bool:
        """Return True if the block belongs to compile-time evaluation."""
        return self.block_exit is None and self.block_loop is None and self.phi is None


@dataclass
class VarEntry:
    name: Hashable
    var: Any = None
    skip_drop: bool = False


@dataclass(frozen=True)
class InvokeSite:
    name: Hashable
    arg_count: int


@dataclass
class CalleeValueInfo:
    """What the symbol table remembers about the callable being processed."""

    is_func: bool
    is_llvm: bool = False
    is_eval: bool = False
    ret_type: TypeId | None = None

    @classmethod
    def from_func(cls, func: FuncValue, type_table: TypeTable) -> CalleeValueInfo:
        call = func.callable(type_table)
        return cls(
            is_func=True,
            is_llvm=func.is_llvm(),
            is_eval=func.is_eval,
            ret_type=call.ret_type,
        )

    @classmethod
    def from_macro(cls, macro: MacroValue) -> CalleeValueInfo:
        return cls(is_func=False, is_eval=True)


@dataclass(frozen=True)
class NestLevel:
    """Depth of callable nesting and of blocks within the innermost chain."""

    callable: int
    local: int


class RegisterKind(enum.Enum):
    OTHER_CALLABLE_TYPE_SAME_NAME = "other_callable_type_same_name"
    NO_NAME_MANGLE_COLLISION = "no_name_mangle_collision"
    VARIADIC_COLLISION = "variadic_collision"
    COLLISION = "collision"


class RegistrationError(Exception):
    """Raised when a function or macro clashes with one already registered."""

    def __init__(self, kind: RegisterKind, code_loc_other: Any) -> None:
        super().__init__(kind.value)
        self.kind = kind
        self.code_loc_other = code_loc_other


@dataclass
class _BlockInternal:
    block: Block = field(default_factory=Block)
    vars: list[VarEntry] = field(default_factory=list)
    tmps: list[Any] = field(default_factory=list)


class SymbolTable:
    """Tracks nested blocks and callables, and the names defined in them.

    The global block chain always holds the root block. Each callable being
    processed opens a chain of its own; from inside one, only its own blocks
    and the global root block are visible.
    """

    def __init__(self) -> None:
        self._funcs: dict[Hashable, list[FuncValue]] = {}
        self._macros: dict[Hashable, list[MacroValue]] = {}
        self._global_chain: list[_BlockInternal] = [_BlockInternal()]
        self._local_chains: list[tuple[CalleeValueInfo, list[_BlockInternal]]] = []
        self._data_attrs: dict[TypeId, Any] = {}
        self._drop_funcs: dict[TypeId, Any] = {}

    # ----- blocks -----

    def _current_chain(self) -> list[_BlockInternal]:
        return self._local_chains[-1][1] if self._local_chains else self._global_chain

    def _current_callable_index(self) -> int | None:
        return len(self._local_chains) - 1 if self._local_chains else None

    def new_block(self, block: Block) -> None:
        """Open a block inside the current chain."""
        self._current_chain().append(_BlockInternal(block=block))

    def new_callable(self, callee: CalleeValueInfo) -> None:
        """Start processing a callable, with one fresh block of its own."""
        self._local_chains.append((callee, [_BlockInternal()]))

    def end_block(self) -> None:
        """Close the innermost block, and its callable if that was the last one."""
        if self._local_chains:
            chain = self._local_chains[-1][1]
            chain.pop()
            if not chain:
                self._local_chains.pop()
        else:
            if len(self._global_chain) == 1:
                raise RuntimeError("cannot close the global root block")
            self._global_chain.pop()

    def _last_block_internal(self) -> _BlockInternal:
        return self._current_chain()[-1]

    # ----- variables -----

    def add_var(self, var: VarEntry, for_global: bool = False) -> VarId:
        """Add a variable to the innermost block, or to the global root block."""
        if for_global:
            root = self._global_chain[0]
            root.vars.append(var)
            return VarId(None, 0, len(root.vars) - 1)

        block = self._last_block_internal()
        block.vars.append(var)
        return VarId(
            self._current_callable_index(),
            len(self._current_chain()) - 1,
            len(block.vars) - 1,
        )

    def _block_at(self, callable_index: int | None, block: int) -> _BlockInternal:
        if callable_index is None:
            return self._global_chain[block]
        return self._local_chains[callable_index][1][block]

    def get_var(self, var_id: VarId) -> VarEntry:
        return self._block_at(var_id.callable, var_id.block).vars[var_id.index]

    def is_var_name(self, name: Hashable) -> bool:
        return self.get_var_id(name) is not None

    @staticmethod
    def _find_in_block(block: _BlockInternal, name: Hashable) -> int | None:
        for index in reversed(range(len(block.vars))):
            if block.vars[index].name == name:
                return index
        return None

    def get_var_id(self, name: Hashable) -> VarId | None:
        """Return the innermost visible variable called ``name``, or None."""
        chain = self._current_chain()
        callable_index = self._current_callable_index()
        for block_index in reversed(range(len(chain))):
            index = self._find_in_block(chain[block_index], name)
            if index is not None:
                return VarId(callable_index, block_index, index)

        if callable_index is not None:
            index = self._find_in_block(self._global_chain[0], name)
            if index is not None:
                return VarId(None, 0, index)
        return None

    # ----- functions -----

    def register_func(self, val: FuncValue) -> FuncId:
        """Register a function declaration or definition.

        A declaration matching an existing one reuses its id; a definition
        replaces an earlier declaration. Raises RegistrationError on clashes.
        """
        if self.is_macro_name(val.name):
            raise RegistrationError(
                RegisterKind.OTHER_CALLABLE_TYPE_SAME_NAME,
                self._macros[val.name][0].code_loc,
            )

        overloads = self._funcs.setdefault(val.name, [])

        # functions without name mangling cannot be overloaded
        for other in overloads:
            if (val.no_name_mangle or other.no_name_mangle) and other.type_sig != val.type_sig:
                raise RegistrationError(RegisterKind.NO_NAME_MANGLE_COLLISION, other.code_loc)

        existing: int | None = None
        for index, other in enumerate(overloads):
            if val.type_sig == other.type_sig:
                if (
                    val.type != other.type
                    or val.no_name_mangle != other.no_name_mangle
                    or (val.defined and other.defined)
                ):
                    raise RegistrationError(RegisterKind.COLLISION, other.code_loc)
                existing = index
                break

        if existing is None:
            overloads.append(val)
            return FuncId(val.name, len(overloads) - 1)

        if val.defined:
            overloads[existing] = val
        return FuncId(val.name, existing)

    def get_func(self, func_id: FuncId) -> FuncValue:
        return self._funcs[func_id.name][func_id.index]

    def is_func_name(self, name: Hashable) -> bool:
        return name in self._funcs

    def get_func_ids(self, name: Hashable) -> list[FuncId]:
        return [FuncId(name, index) for index in range(len(self._funcs.get(name, ())))]

    # ----- macros -----

    def register_macro(self, val: MacroValue, type_table: TypeTable) -> MacroId:
        """Register a macro; raises RegistrationError on clashes."""
        if self.is_func_name(val.name):
            raise RegistrationError(
                RegisterKind.OTHER_CALLABLE_TYPE_SAME_NAME,
                self._funcs[val.name][0].code_loc,
            )

        overloads = self._macros.setdefault(val.name, [])

        for other in overloads:
            if val.type_sig == other.type_sig:
                raise RegistrationError(RegisterKind.COLLISION, other.code_loc)

        call = val.callable(type_table)
        call_count = call.arg_count()
        for other in overloads:
            other_call = other.callable(type_table)
            other_count = other_call.arg_count()
            if (
                (call.variadic and other_call.variadic)
                or (call.variadic and call_count > 0 and other_count >= call_count - 1)
                or (other_call.variadic and other_count > 0 and call_count >= other_count - 1)
            ):
                raise RegistrationError(RegisterKind.VARIADIC_COLLISION, other.code_loc)

        overloads.append(val)
        return MacroId(val.name, len(overloads) - 1)

    def get_macro(self, macro_id: MacroId) -> MacroValue:
        return self._macros[macro_id.name][macro_id.index]

    def is_macro_name(self, name: Hashable) -> bool:
        return name in self._macros

    def get_macros(self, name: Hashable) -> list[MacroId]:
        return [MacroId(name, index) for index in range(len(self._macros.get(name, ())))]

    def get_macro_id(self, invoke_site: InvokeSite, type_table: TypeTable) -> MacroId | None:
        """Return the macro that accepts the number of arguments at the call site."""
        for index, macro in enumerate(self._macros.get(invoke_site.name, ())):
            count = macro.arg_count()
            variadic = macro.callable(type_table).variadic
            if count == invoke_site.arg_count or (
                variadic and count > 0 and count - 1 <= invoke_site.arg_count
            ):
                return MacroId(invoke_site.name, index)
        return None

    # ----- per-type data -----

    def register_data_attrs(self, ty: TypeId, attrs: Any) -> None:
        """Remember attributes of a data type; the first registration wins."""
        self._data_attrs.setdefault(ty, attrs)

    def get_data_attrs(self, ty: TypeId) -> Any | None:
        return self._data_attrs.get(ty)

    def register_drop_func(self, ty: TypeId, func: Any) -> None:
        """Remember the drop function of a type; the first registration wins."""
        self._drop_funcs.setdefault(ty, func)

    def get_drop_func(self, ty: TypeId) -> Any | None:
        return self._drop_funcs.get(ty)

    # ----- scope queries -----

    def in_global_scope(self) -> bool:
        return not self._local_chains and len(self._global_chain) == 1

    def curr_nest_level(self) -> NestLevel:
        return NestLevel(len(self._local_chains), len(self._current_chain()))

    def get_last_block(self) -> Block:
        return self._last_block_internal().block

    def get_block(self, name: Hashable) -> Block | None:
        """Return the innermost visible block called ``name``, or None."""
        for internal in reversed(self._current_chain()):
            if internal.block.name == name:
                return internal.block
        return None

    def get_curr_callee(self) -> CalleeValueInfo | None:
        return self._local_chains[-1][0] if self._local_chains else None

    # ----- values to drop -----

    def _collect_rev(self, callable_index: int | None, block: int, out: list[DropVal]) -> None:
        internal = self._block_at(callable_index, block)
        out.extend(reversed(internal.tmps))
        out.extend(
            VarId(callable_index, block, index) for index in reversed(range(len(internal.vars)))
        )

    def vals_for_drop_curr_block(self) -> list[DropVal]:
        """Return temporaries and variables of the innermost block, newest first."""
        out: list[DropVal] = []
        self._collect_rev(self._current_callable_index(), len(self._current_chain()) - 1, out)
        return out

    def vals_for_drop_from_block_to_curr_block(self, name: Hashable) -> list[DropVal]:
        """Return values to drop when leaving every block up to the one called ``name``."""
        chain = self._current_chain()
        callable_index = self._current_callable_index()
        out: list[DropVal] = []
        for block_index in reversed(range(len(chain))):
            self._collect_rev(callable_index, block_index, out)
            if chain[block_index].block.name == name:
                return out
        raise KeyError(name)

    def vals_for_drop_curr_callable(self) -> list[DropVal]:
        """Return values to drop when leaving the current callable."""
        if not self._local_chains:
            raise RuntimeError("not inside a callable")
        callable_index = len(self._local_chains) - 1
        out: list[DropVal] = []
        for block_index in reversed(range(len(self._local_chains[-1][1]))):
            self._collect_rev(callable_index, block_index, out)
        return out

    def name_available(
        self,
        name: Hashable,
        type_table: TypeTable,
        reserved: Reserved,
        for_global: bool = False,
        check_all_scopes: bool = False,
    ) -> bool:
        """Return True if ``name`` may be used for a new variable."""
        if reserved.is_reserved(name) or type_table.is_type(name):
            return False
        if check_all_scopes:
            return not self.is_var_name(name)
        block = self._global_chain[0] if for_global else self._last_block_internal()
        return all(var.name != name for var in block.vars)