"""Type identifiers and the descriptions stored in the type table."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Hashable, Iterable

_FLOAT32_MAX = 3.4028234663852886e38

_INT_RANGES = (
    (-(1 << 7), (1 << 7) - 1),
    (-(1 << 15), (1 << 15) - 1),
    (-(1 << 31), (1 << 31) - 1),
)


class TypeKind(enum.Enum):
    PRIM = 0
    TUPLE = 1
    DESCR = 2
    EXPLICIT = 3
    DATA = 4
    CALLABLE = 5


@dataclass(frozen=True)
class TypeId:
    """Identifies a type by the table it lives in and its position there."""

    kind: TypeKind
    index: int


class PrimId(enum.IntEnum):
    BOOL = 0
    I8 = 1
    I16 = 2
    I32 = 3
    I64 = 4
    U8 = 5
    U16 = 6
    U32 = 7
    U64 = 8
    F32 = 9
    F64 = 10
    C8 = 11
    PTR = 12
    ID = 13
    TYPE = 14
    RAW = 15


WIDEST_I = PrimId.I64
WIDEST_U = PrimId.U64
WIDEST_F = PrimId.F64


def shortest_fitting_prim_i(x: int) -> PrimId:
    """Return the narrowest signed integer primitive that can hold ``x``."""
    for prim, (lo, hi) in zip((PrimId.I8, PrimId.I16, PrimId.I32), _INT_RANGES):
        if lo <= x <= hi:
            return prim
    return PrimId.I64


def shortest_fitting_prim_f(x: float) -> PrimId:
    """Return F32 if ``x`` fits in single precision range, otherwise F64."""
    if math.isinf(x) or math.isnan(x) or abs(x) <= _FLOAT32_MAX:
        return PrimId.F32
    return PrimId.F64


class DecorType(enum.Enum):
    PTR = "ptr"
    ARR = "arr"
    ARR_PTR = "arr_ptr"
    INVALID = "invalid"


@dataclass(frozen=True)
class Decor:
    """One level of decoration on a type: pointer, array or array pointer."""

    type: DecorType = DecorType.INVALID
    length: int = 0


@dataclass
class TypeDescr:
    """A base type with decorations, each of which may be marked constant.

    ``cn`` tells whether the base itself is constant; ``cns[i]`` tells whether
    the type produced by ``decors[i]`` is constant.
    """

    base: TypeId
    cn: bool = False
    decors: list[Decor] = field(default_factory=list)
    cns: list[bool] = field(default_factory=list)

    def is_empty(self) -> bool:
        """Return True if this adds nothing to its base type."""
        return not self.decors and not self.cn

    def add_decor(self, decor: Decor, cn: bool = False) -> None:
        """Append a decoration; an array of constant elements is constant."""
        prev_is_cn = self.cns[-1] if self.cns else self.cn
        self.decors.append(decor)
        self.cns.append(False)
        if cn or (prev_is_cn and decor.type is DecorType.ARR):
            self.set_last_cn()

    def set_last_cn(self) -> None:
        """Mark the outermost level as constant."""
        if self.cns:
            self.cns[-1] = True
        else:
            self.cn = True


@dataclass
class Tuple:
    elements: list[TypeId] = field(default_factory=list)

    def add_element(self, type_id: TypeId) -> None:
        self.elements.append(type_id)


@dataclass
class ExplicitType:
    """A named type standing for another type."""

    type: TypeId
    name: Hashable


@dataclass
class ElemEntry:
    name: Hashable
    type: TypeId
    no_zero_init: bool = False


@dataclass
class DataType:
    """A named record type; it may be declared before it is defined."""

    name: Hashable
    elements: list[ElemEntry] = field(default_factory=list)
    defined: bool = False

    def elem_index(self, name: Hashable) -> int | None:
        """Return the position of the element called ``name``, or None."""
        return next((i for i, elem in enumerate(self.elements) if elem.name == name), None)


@dataclass
class ArgEntry:
    ty: TypeId | None = None
    no_drop: bool = False


@dataclass(eq=False)
class Callable:
    """Type of a function or macro.

    Two callables are equal when kind, argument count, return type and
    variadicity match; argument entries are compared only for functions.
    """

    is_func: bool = True
    ret_type: TypeId | None = None
    variadic: bool = False
    args: list[ArgEntry] = field(default_factory=list)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Callable):
            return NotImplemented
        if (
            self.is_func != other.is_func
            or self.arg_count() != other.arg_count()
            or self.ret_type != other.ret_type
            or self.variadic != other.variadic
        ):
            return False
        return not self.is_func or self.args == other.args

    __hash__ = None  # type: ignore[assignment]

    def arg_count(self) -> int:
        return len(self.args)

    def set_arg_count(self, count: int) -> None:
        """Resize the argument list; new arguments have no type yet."""
        if count < 0:
            raise ValueError("argument count cannot be negative")
        del self.args[count:]
        self.args.extend(ArgEntry() for _ in range(count - len(self.args)))

    def arg_type(self, index: int) -> TypeId | None:
        return self.args[index].ty

    def set_arg_type(self, index: int, type_id: TypeId) -> None:
        self.args[index].ty = type_id

    def set_arg_types(self, types: Iterable[TypeId]) -> None:
        """Set every argument type; the count must match the argument count."""
        types = list(types)
        if len(types) != len(self.args):
            raise ValueError("number of types does not match argument count")
        for arg, ty in zip(self.args, types):
            arg.ty = ty

    def arg_no_drop(self, index: int) -> bool:
        return self.args[index].no_drop

    def set_arg_no_drop(self, index: int, value: bool) -> None:
        self.args[index].no_drop = value

    def set_arg_no_drops(self, values: Iterable[bool]) -> None:
        """Set every no-drop flag; the count must match the argument count."""
        values = list(values)
        if len(values) != len(self.args):
            raise ValueError("number of flags does not match argument count")
        for arg, value in zip(self.args, values):
            arg.no_drop = value

    def has_ret(self) -> bool:
        return self.ret_type is not None