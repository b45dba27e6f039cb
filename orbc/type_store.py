"""Storage of every known type and the queries that only read it."""

from __future__ import annotations

import copy
from typing import Callable as _Predicate
from typing import Hashable

from .types import (
    Callable,
    DataType,
    DecorType,
    ExplicitType,
    PrimId,
    Tuple,
    TypeDescr,
    TypeId,
    TypeKind,
)


def _find(items: list, value: object) -> int | None:
    return next((i for i, item in enumerate(items) if item == value), None)


class TypeStore:
    """Holds primitives, tuples, type descriptions, explicit, data and callable types.

    Tuples, type descriptions and callables are deduplicated, so equal
    types always share one id.
    """

    def __init__(self) -> None:
        self._tuples: list[Tuple] = []
        self._type_descrs: list[TypeDescr] = []
        self._explicit_types: list[ExplicitType] = []
        self._data_types: list[DataType] = []
        self._callables: list[Callable] = []
        self._type_ids: dict[Hashable, TypeId] = {}
        self._type_names: dict[TypeId, Hashable] = {}

    # ----- adding types -----

    def add_prim_type(self, name: Hashable, prim: PrimId) -> TypeId:
        """Register ``name`` as the name of primitive ``prim``."""
        type_id = self.get_prim_type_id(prim)
        self._type_ids[name] = type_id
        self._type_names[type_id] = name
        return type_id

    def _normalize(self, descr: TypeDescr) -> TypeDescr:
        if descr.is_empty() or not self.is_type_descr(descr.base):
            return TypeDescr(descr.base, descr.cn, list(descr.decors), list(descr.cns))
        normalized = self._normalize(self.get_type_descr(descr.base))
        if descr.cn:
            normalized.set_last_cn()
        for decor, cn in zip(descr.decors, descr.cns):
            normalized.add_decor(decor, cn)
        return normalized

    def add_type_descr(self, descr: TypeDescr) -> TypeId:
        """Add a type description; an empty one yields its base type.

        A base that is itself a description is merged into this one.
        """
        if descr.is_empty():
            return descr.base
        normalized = self._normalize(descr)
        index = _find(self._type_descrs, normalized)
        if index is None:
            index = len(self._type_descrs)
            self._type_descrs.append(normalized)
        return TypeId(TypeKind.DESCR, index)

    def add_tuple(self, tup: Tuple) -> TypeId | None:
        """Add a tuple; None if empty, the element's type if it has one element."""
        if not tup.elements:
            return None
        if len(tup.elements) == 1:
            return tup.elements[0]
        index = _find(self._tuples, tup)
        if index is None:
            index = len(self._tuples)
            self._tuples.append(Tuple(list(tup.elements)))
        return TypeId(TypeKind.TUPLE, index)

    def add_explicit_type(self, explicit: ExplicitType) -> TypeId | None:
        """Add a named type; None if the name is already a type."""
        if explicit.name in self._type_ids:
            return None
        type_id = TypeId(TypeKind.EXPLICIT, len(self._explicit_types))
        self._type_ids[explicit.name] = type_id
        self._type_names[type_id] = explicit.name
        self._explicit_types.append(ExplicitType(explicit.type, explicit.name))
        return type_id

    def add_data_type(self, data: DataType) -> TypeId | None:
        """Declare or define a data type.

        Returns None if the name belongs to another kind of type or if both
        the existing and the new one are definitions.
        """
        existing_id = self._type_ids.get(data.name)
        if existing_id is not None:
            if not self.is_data_type(existing_id):
                return None
            existing = self.get_data_type(existing_id)
            if data.defined and existing.defined:
                return None
            if data.defined:
                self._data_types[existing_id.index] = copy.deepcopy(data)
            return existing_id

        type_id = TypeId(TypeKind.DATA, len(self._data_types))
        self._type_ids[data.name] = type_id
        self._type_names[type_id] = data.name
        self._data_types.append(copy.deepcopy(data))
        return type_id

    def add_callable(self, call: Callable) -> TypeId:
        """Add a callable type, reusing the id of an equal one."""
        index = _find(self._callables, call)
        if index is None:
            index = len(self._callables)
            self._callables.append(copy.deepcopy(call))
        return TypeId(TypeKind.CALLABLE, index)

    # ----- getters -----

    def get_prim_type_id(self, prim: PrimId) -> TypeId:
        return TypeId(TypeKind.PRIM, int(prim))

    def get_tuple(self, type_id: TypeId) -> Tuple:
        return self._tuples[type_id.index]

    def get_type_descr(self, type_id: TypeId) -> TypeDescr:
        return self._type_descrs[type_id.index]

    def get_explicit_type(self, type_id: TypeId) -> ExplicitType:
        return self._explicit_types[type_id.index]

    def get_data_type(self, type_id: TypeId) -> DataType:
        return self._data_types[type_id.index]

    def get_callable(self, type_id: TypeId) -> Callable:
        return self._callables[type_id.index]

    # ----- identity -----

    def _count_of(self, kind: TypeKind) -> int:
        return {
            TypeKind.PRIM: len(PrimId),
            TypeKind.TUPLE: len(self._tuples),
            TypeKind.DESCR: len(self._type_descrs),
            TypeKind.EXPLICIT: len(self._explicit_types),
            TypeKind.DATA: len(self._data_types),
            TypeKind.CALLABLE: len(self._callables),
        }[kind]

    def is_valid_type(self, t: TypeId) -> bool:
        return 0 <= t.index < self._count_of(t.kind)

    def _check_valid(self, t: TypeId) -> None:
        if not self.is_valid_type(t):
            raise ValueError(f"invalid type id {t!r}")

    def is_type(self, name: Hashable) -> bool:
        return name in self._type_ids

    def get_type_id(self, name: Hashable) -> TypeId | None:
        return self._type_ids.get(name)

    def get_type_name(self, t: TypeId) -> Hashable | None:
        return self._type_names.get(t)

    def _is_kind(self, t: TypeId, kind: TypeKind) -> bool:
        return t.kind is kind and self.is_valid_type(t)

    def is_primitive(self, t: TypeId) -> bool:
        return self._is_kind(t, TypeKind.PRIM)

    def is_tuple(self, t: TypeId) -> bool:
        return self._is_kind(t, TypeKind.TUPLE)

    def is_type_descr(self, t: TypeId) -> bool:
        return self._is_kind(t, TypeKind.DESCR)

    def is_explicit_type(self, t: TypeId) -> bool:
        return self._is_kind(t, TypeKind.EXPLICIT)

    def is_data_type(self, t: TypeId) -> bool:
        return self._is_kind(t, TypeKind.DATA)

    def is_callable(self, t: TypeId) -> bool:
        return self._is_kind(t, TypeKind.CALLABLE)

    # ----- resolution -----

    def extract_base_type(self, t: TypeId) -> TypeId:
        """Pass through explicit types and all decorations."""
        while True:
            if self.is_explicit_type(t):
                t = self.get_explicit_type(t).type
            elif self.is_type_descr(t):
                t = self.get_type_descr(t).base
            else:
                return t

    def extract_explicit_type_base_type(self, t: TypeId) -> TypeId:
        """Pass through explicit types and descriptions that only add cn."""
        while True:
            if self.is_explicit_type(t):
                t = self.get_explicit_type(t).type
            elif self.is_type_descr(t) and not self.get_type_descr(t).decors:
                t = self.get_type_descr(t).base
            else:
                return t

    def _follow_explicit(self, t: TypeId) -> TypeId:
        while self.is_explicit_type(t):
            t = self.get_explicit_type(t).type
        return t

    # ----- works-as queries -----

    def works_as_primitive(
        self, t: TypeId, lo: PrimId | None = None, hi: PrimId | None = None
    ) -> bool:
        """Return True if ``t`` acts as a primitive, optionally within ``lo..hi``.

        With only ``lo`` given, the primitive must be exactly ``lo``.
        """
        self._check_valid(t)
        base = self.extract_explicit_type_base_type(t)
        if not self.is_primitive(base):
            return False
        if lo is None:
            return True
        return lo <= base.index <= (lo if hi is None else hi)

    def works_as_tuple(self, t: TypeId) -> bool:
        self._check_valid(t)
        return self.is_tuple(self.extract_explicit_type_base_type(t))

    def works_as_explicit_type(self, t: TypeId) -> bool:
        self._check_valid(t)
        while self.is_type_descr(t) and not self.get_type_descr(t).decors:
            t = self.get_type_descr(t).base
        return self.is_explicit_type(t)

    def works_as_data_type(self, t: TypeId) -> bool:
        self._check_valid(t)
        return self.is_data_type(self.extract_explicit_type_base_type(t))

    def works_as_callable(self, t: TypeId, is_func: bool | None = None) -> bool:
        """Return True if ``t`` is callable, optionally of the given kind."""
        call = self.extract_callable(t)
        if call is None:
            return False
        return is_func is None or call.is_func == is_func

    def works_as_macro_with_args(self, t: TypeId, arg_count: int, variadic: bool = False) -> bool:
        call = self.extract_callable(t)
        if call is None:
            return False
        return not call.is_func and call.arg_count() == arg_count and call.variadic == variadic

    def works_as_type_i(self, t: TypeId) -> bool:
        return self.works_as_primitive(t, PrimId.I8, PrimId.I64)

    def works_as_type_u(self, t: TypeId) -> bool:
        return self.works_as_primitive(t, PrimId.U8, PrimId.U64)

    def works_as_type_f(self, t: TypeId) -> bool:
        return self.works_as_primitive(t, PrimId.F32, PrimId.F64)

    def works_as_type_c(self, t: TypeId) -> bool:
        return self.works_as_primitive(t, PrimId.C8)

    def works_as_type_b(self, t: TypeId) -> bool:
        return self.works_as_primitive(t, PrimId.BOOL)

    def works_as_type_ptr(self, t: TypeId) -> bool:
        """Return True for the untyped pointer primitive."""
        base = self.extract_explicit_type_base_type(t)
        return self.is_primitive(base) and base.index == PrimId.PTR

    def works_as_type_any_p(self, t: TypeId) -> bool:
        """Return True for the pointer primitive, a pointer or an array pointer."""
        return self.works_as_type_p(t) or self.works_as_type_ptr(t) or self.works_as_type_arr_p(t)

    def works_as_type_p(self, t: TypeId) -> bool:
        """Return True for a typed pointer (``*``)."""
        self._check_valid(t)
        base = self.extract_explicit_type_base_type(t)
        if not self.is_type_descr(base):
            return False
        decors = self.get_type_descr(base).decors
        return bool(decors) and decors[-1].type is DecorType.PTR

    def _descr_satisfies(self, t: TypeId, cond: _Predicate[[TypeDescr], bool]) -> bool:
        t = self._follow_explicit(t)
        return self.is_type_descr(t) and cond(self.get_type_descr(t))

    def works_as_type_arr(self, t: TypeId) -> bool:
        return self._descr_satisfies(
            t, lambda d: bool(d.decors) and d.decors[-1].type is DecorType.ARR
        )

    def works_as_type_arr_of_len(self, t: TypeId, length: int) -> bool:
        return self._descr_satisfies(
            t,
            lambda d: bool(d.decors)
            and d.decors[-1].type is DecorType.ARR
            and d.decors[-1].length == length,
        )

    def works_as_type_arr_p(self, t: TypeId) -> bool:
        return self._descr_satisfies(
            t, lambda d: bool(d.decors) and d.decors[-1].type is DecorType.ARR_PTR
        )

    def works_as_type_str(self, t: TypeId) -> bool:
        """Return True for an array pointer to constant characters."""
        return self._descr_satisfies(
            t,
            lambda d: len(d.decors) == 1
            and d.decors[0].type is DecorType.ARR_PTR
            and self.works_as_type_c(d.base)
            and d.cn,
        )

    def works_as_type_char_arr_of_len(self, t: TypeId, length: int) -> bool:
        return self._descr_satisfies(
            t,
            lambda d: len(d.decors) == 1
            and self.works_as_type_c(d.base)
            and d.decors[0].type is DecorType.ARR
            and d.decors[0].length == length,
        )

    # ----- extraction -----

    def extract_tuple(self, t: TypeId) -> Tuple | None:
        self._check_valid(t)
        base = self.extract_explicit_type_base_type(t)
        return self.get_tuple(base) if self.is_tuple(base) else None

    def extract_data_type(self, t: TypeId) -> DataType | None:
        self._check_valid(t)
        base = self.extract_explicit_type_base_type(t)
        return self.get_data_type(base) if self.is_data_type(base) else None

    def extract_callable(self, t: TypeId) -> Callable | None:
        base = self.extract_explicit_type_base_type(t)
        return self.get_callable(base) if self.is_callable(base) else None

    def extract_len_of_arr(self, t: TypeId) -> int | None:
        base = self.extract_explicit_type_base_type(t)
        if not self.works_as_type_arr(base):
            return None
        return self.get_type_descr(base).decors[-1].length

    def extract_len_of_tuple(self, t: TypeId) -> int | None:
        base = self.extract_explicit_type_base_type(t)
        if not self.is_tuple(base):
            return None
        return len(self.get_tuple(base).elements)

    def extract_len_of_data_type(self, t: TypeId) -> int | None:
        base = self.extract_explicit_type_base_type(t)
        if not self.is_data_type(base):
            return None
        return len(self.get_data_type(base).elements)

    def is_direct_cn(self, t: TypeId) -> bool:
        """Return True if the outermost level of ``t`` is constant."""
        t = self._follow_explicit(t)
        if not self.is_type_descr(t):
            return False
        descr = self.get_type_descr(t)
        return descr.cns[-1] if descr.cns else descr.cn