"""The type table: derived types, constness, fitting and casting rules."""

from __future__ import annotations

import copy
from typing import Any, Hashable

from .type_store import TypeStore
from .types import (
    Callable,
    Decor,
    DecorType,
    PrimId,
    TypeDescr,
    TypeId,
    shortest_fitting_prim_f,
    shortest_fitting_prim_i,
)

_INT64_MAX = (1 << 63) - 1

_SIGNED_RANGES = {
    PrimId.I8: (-(1 << 7), (1 << 7) - 1),
    PrimId.I16: (-(1 << 15), (1 << 15) - 1),
    PrimId.I32: (-(1 << 31), (1 << 31) - 1),
    PrimId.I64: (-(1 << 63), _INT64_MAX),
    PrimId.U8: (0, (1 << 8) - 1),
    PrimId.U16: (0, (1 << 16) - 1),
    PrimId.U32: (0, (1 << 32) - 1),
    # literals never exceed the signed 64-bit maximum
    PrimId.U64: (0, _INT64_MAX),
}

_UNSIGNED_MAX = {
    PrimId.I8: (1 << 7) - 1,
    PrimId.I16: (1 << 15) - 1,
    PrimId.I32: (1 << 31) - 1,
    PrimId.I64: _INT64_MAX,
    PrimId.U8: (1 << 8) - 1,
    PrimId.U16: (1 << 16) - 1,
    PrimId.U32: (1 << 32) - 1,
    PrimId.U64: (1 << 64) - 1,
}

_PRIM_BIN_NAMES = {
    PrimId.BOOL: "$bool",
    PrimId.I8: "$i8",
    PrimId.I16: "$i16",
    PrimId.I32: "$i32",
    PrimId.I64: "$i64",
    PrimId.U8: "$u8",
    PrimId.U16: "$u16",
    PrimId.U32: "$u32",
    PrimId.U64: "$u64",
    PrimId.F32: "$f32",
    PrimId.F64: "$f64",
    PrimId.C8: "$c8",
    PrimId.PTR: "$ptr",
    PrimId.ID: "$id",
    PrimId.TYPE: "$type",
    PrimId.RAW: "$raw",
}

_DECOR_BIN_NAMES = {
    DecorType.ARR: "$arr",
    DecorType.ARR_PTR: "$[]",
    DecorType.PTR: "$*",
}

_REF_DECORS = frozenset({DecorType.PTR, DecorType.ARR_PTR})


def _copy_descr(descr: TypeDescr) -> TypeDescr:
    return TypeDescr(descr.base, descr.cn, list(descr.decors), list(descr.cns))


def _without_last_decor(descr: TypeDescr) -> TypeDescr:
    return TypeDescr(descr.base, descr.cn, list(descr.decors[:-1]), list(descr.cns[:-1]))


class TypeTable(TypeStore):
    """Type store that also builds derived types and answers typing questions."""

    def __init__(self) -> None:
        super().__init__()
        str_descr = TypeDescr(self.get_prim_type_id(PrimId.C8), True)
        str_descr.add_decor(Decor(DecorType.ARR_PTR), False)
        self._str_type = self.add_type_descr(str_descr)

    def str_type_id(self) -> TypeId:
        """Return the id of the string type (array pointer to constant c8)."""
        return self._str_type

    def char_arr_of_len_id(self, length: int) -> TypeId:
        """Return the id of an array of ``length`` c8."""
        return self.add_type_arr_of_len_of(self.get_prim_type_id(PrimId.C8), length)

    # ----- derived types -----

    def add_type_deref_of(self, t: TypeId) -> TypeId | None:
        """Return the type a pointer points to, or None if ``t`` is no pointer."""
        if not self.works_as_type_p(t):
            return None
        if self.is_type_descr(t):
            descr = self.get_type_descr(t)
            if not descr.decors:
                return self.add_type_deref_of(descr.base)
            return self.add_type_descr(_without_last_decor(descr))
        if self.is_explicit_type(t):
            return self.add_type_deref_of(self.get_explicit_type(t).type)
        return None

    def add_type_index_of(self, t: TypeId) -> TypeId | None:
        """Return the element type of an array or array pointer, or None."""
        if not self.works_as_type_arr_p(t) and not self.works_as_type_arr(t):
            return None
        if self.is_type_descr(t):
            return self.add_type_descr(_without_last_decor(self.get_type_descr(t)))
        if self.is_explicit_type(t):
            return self.add_type_index_of(self.get_explicit_type(t).type)
        return None

    def add_type_addr_of(self, t: TypeId) -> TypeId:
        """Return the type of a pointer to ``t``."""
        if self.is_type_descr(t):
            descr = _copy_descr(self.get_type_descr(t))
        else:
            descr = TypeDescr(t)
        descr.add_decor(Decor(DecorType.PTR), False)
        return self.add_type_descr(descr)

    def add_type_arr_of_len_of(self, t: TypeId, length: int) -> TypeId:
        """Return the type of an array of ``length`` elements of ``t``."""
        if self.is_type_descr(t):
            descr = _copy_descr(self.get_type_descr(t))
        else:
            descr = TypeDescr(t)
        descr.add_decor(Decor(DecorType.ARR, length), False)
        descr.set_last_cn()
        return self.add_type_descr(descr)

    def add_type_cn_of(self, t: TypeId) -> TypeId:
        """Return the constant version of ``t``."""
        if self.is_direct_cn(t):
            return t
        if self.is_type_descr(t):
            descr = _copy_descr(self.get_type_descr(t))
        else:
            descr = TypeDescr(t)
        descr.set_last_cn()
        return self.add_type_descr(descr)

    def add_type_descr_for_sig(self, descr: TypeDescr | TypeId) -> TypeId:
        """Return the type as it appears in a signature.

        Constness is dropped from every level not behind a pointer.
        """
        if isinstance(descr, TypeId):
            if not self.is_type_descr(descr):
                return descr
            descr = self.get_type_descr(descr)

        sig = _copy_descr(descr)
        past_ref = False
        for ind in reversed(range(len(sig.cns))):
            if not past_ref:
                sig.cns[ind] = False
            if sig.decors[ind].type in _REF_DECORS:
                past_ref = True
        if not past_ref:
            sig.cn = False
        return self.add_type_descr(sig)

    def add_callable_sig(self, call: Callable | TypeId) -> TypeId:
        """Return the signature of a callable: no return type, no no-drop flags."""
        if isinstance(call, TypeId):
            found = self.extract_callable(call)
            if found is None:
                raise ValueError(f"type {call!r} is not callable")
            call = found

        sig = copy.deepcopy(call)
        for arg in sig.args:
            if arg.ty is not None and self.is_type_descr(arg.ty):
                arg.ty = self.add_type_descr_for_sig(self.get_type_descr(arg.ty))
            arg.no_drop = False
        sig.ret_type = None
        return self.add_callable(sig)

    # ----- element types -----

    def _elem_with_cn(self, t: TypeId, elem: TypeId) -> TypeId:
        return self.add_type_cn_of(elem) if self.is_direct_cn(t) else elem

    def extract_tuple_element_type(self, t: TypeId, index: int) -> TypeId | None:
        """Return the type of element ``index`` of a tuple, keeping constness."""
        tup = self.extract_tuple(t)
        if tup is None or not 0 <= index < len(tup.elements):
            return None
        return self._elem_with_cn(t, tup.elements[index])

    def extract_data_type_element_type(self, t: TypeId, name: Hashable) -> TypeId | None:
        """Return the type of the element called ``name``, keeping constness."""
        data = self.extract_data_type(t)
        if data is None:
            return None
        index = data.elem_index(name)
        if index is None:
            return None
        return self._elem_with_cn(t, data.elements[index].type)

    def extract_data_type_element_type_at(self, t: TypeId, index: int) -> TypeId | None:
        """Return the type of element ``index`` of a data type, keeping constness."""
        data = self.extract_data_type(t)
        if data is None:
            return None
        return self._elem_with_cn(t, data.elements[index].type)

    # ----- fitting -----

    def _prim_of(self, t: TypeId) -> PrimId | None:
        if not self.works_as_primitive(t):
            return None
        return PrimId(self.extract_base_type(t).index)

    def fits_type_i(self, x: int, t: TypeId) -> bool:
        """Return True if signed ``x`` fits the integer type ``t``."""
        prim = self._prim_of(t)
        bounds = _SIGNED_RANGES.get(prim) if prim is not None else None
        if bounds is None:
            return False
        lo, hi = bounds
        return lo <= x <= hi

    def fits_type_u(self, x: int, t: TypeId) -> bool:
        """Return True if unsigned ``x`` fits the integer type ``t``."""
        if x < 0:
            raise ValueError("unsigned value cannot be negative")
        prim = self._prim_of(t)
        hi = _UNSIGNED_MAX.get(prim) if prim is not None else None
        if hi is None:
            return False
        return x <= hi

    def fits_type_f(self, x: float, t: TypeId) -> bool:
        """Return True if ``x`` fits the floating type ``t``."""
        prim = self._prim_of(t)
        if prim is PrimId.F32:
            return shortest_fitting_prim_f(x) is PrimId.F32
        return prim is PrimId.F64

    def shortest_fitting_type_i_id(self, x: int) -> TypeId:
        return self.get_prim_type_id(shortest_fitting_prim_i(x))

    # ----- constness, definedness, casting -----

    def works_as_type_cn(self, t: TypeId) -> bool:
        """Return True if ``t`` or any part directly contained in it is constant."""
        if self.is_type_descr(t):
            descr = self.get_type_descr(t)
            for cn, decor in zip(reversed(descr.cns), reversed(descr.decors)):
                if cn:
                    return True
                if decor.type is not DecorType.ARR:
                    return False
            if descr.cn:
                return True
            return self.works_as_type_cn(descr.base)
        if self.is_tuple(t):
            return any(self.works_as_type_cn(elem) for elem in self.get_tuple(t).elements)
        if self.is_explicit_type(t):
            return self.works_as_type_cn(self.get_explicit_type(t).type)
        return False

    def is_undef(self, t: TypeId) -> bool:
        """Return True if ``t`` contains a data type that is only declared."""
        if self.works_as_tuple(t):
            tup = self.extract_tuple(t)
            return any(self.is_undef(elem) for elem in tup.elements)
        if self.works_as_type_arr(t):
            return self.is_undef(self.add_type_index_of(t))
        if self.works_as_data_type(t):
            return not self.extract_data_type(t).defined
        return False

    def is_implicit_castable(self, source: TypeId, target: TypeId) -> bool:
        """Return True if a value of ``source`` converts to ``target`` implicitly."""
        if self.is_type_descr(source) and not self.get_type_descr(source).decors:
            source = self.get_type_descr(source).base
        if self.is_type_descr(target) and not self.get_type_descr(target).decors:
            target = self.get_type_descr(target).base

        if source == target:
            return True

        if self.is_primitive(source):
            if not self.is_primitive(target):
                return False
            s, d = source.index, target.index
            return (
                s == d
                or (self.works_as_type_i(source) and s <= d <= PrimId.I64)
                or (self.works_as_type_u(source) and s <= d <= PrimId.U64)
                or (self.works_as_type_f(source) and s <= d <= PrimId.F64)
            )

        if self.is_type_descr(source):
            if not self.is_type_descr(target):
                return False
            s_descr = self.get_type_descr(source)
            d_descr = self.get_type_descr(target)
            if len(s_descr.decors) != len(d_descr.decors):
                return False
            past_ref = False
            for i in reversed(range(len(s_descr.decors))):
                if s_descr.decors[i] != d_descr.decors[i]:
                    return False
                if past_ref and s_descr.cns[i] and not d_descr.cns[i]:
                    return False
                if d_descr.decors[i].type in _REF_DECORS:
                    past_ref = True
            if s_descr.base != d_descr.base:
                return False
            return not (past_ref and s_descr.cn and not d_descr.cn)

        if self.is_tuple(source):
            if not self.is_tuple(target):
                return False
            s_elems = self.get_tuple(source).elements
            d_elems = self.get_tuple(target).elements
            if len(s_elems) != len(d_elems):
                return False
            return all(self.is_implicit_castable(s, d) for s, d in zip(s_elems, d_elems))

        return False

    # ----- mangling -----

    def make_bin_string(self, t: TypeId, name_pool: Any, make_sig: bool) -> str | None:
        """Return the mangled name of ``t``, or None if it cannot be mangled.

        ``name_pool`` must map name ids to strings through ``get``.
        """
        ty = t
        if make_sig and self.is_type_descr(ty):
            ty = self.add_type_descr_for_sig(self.get_type_descr(ty))

        if self.is_primitive(ty):
            name = _PRIM_BIN_NAMES.get(PrimId(ty.index))
            return None if name is None else "$p" + name

        if self.is_tuple(ty):
            parts = ["$t"]
            for elem in self.get_tuple(ty).elements:
                elem_str = self.make_bin_string(elem, name_pool, False)
                if elem_str is None:
                    return None
                parts.append(elem_str)
            return "".join(parts)

        if self.is_explicit_type(ty):
            return "$c$" + name_pool.get(self.get_explicit_type(ty).name)

        if self.is_data_type(ty):
            return "$s$" + name_pool.get(self.get_data_type(ty).name)

        if self.is_type_descr(ty):
            descr = self.get_type_descr(ty)
            parts = ["$d"]
            for cn, decor in zip(reversed(descr.cns), reversed(descr.decors)):
                if cn:
                    parts.append("$cn")
                decor_str = _DECOR_BIN_NAMES.get(decor.type)
                if decor_str is None:
                    return None
                parts.append(decor_str)
            if descr.cn:
                parts.append("$cn")
            # descriptions are normalized, so the base is never a description
            base_str = self.make_bin_string(descr.base, name_pool, False)
            if base_str is None:
                return None
            parts.append(base_str)
            return "".join(parts)

        if self.is_callable(ty):
            call = self.get_callable(ty)
            sig = self.get_callable(self.add_callable_sig(call))
            parts = ["$f" if sig.is_func else "$m", f"$a{sig.arg_count()}"]
            if sig.variadic:
                parts.append("+")
            if sig.is_func:
                for i, arg in enumerate(sig.args):
                    arg_str = self.make_bin_string(arg.ty, name_pool, False)
                    if arg_str is None:
                        return None
                    parts.append(arg_str)
                    if call.arg_no_drop(i):
                        parts.append("$!")
            if call.ret_type is not None:
                ret_str = self.make_bin_string(call.ret_type, name_pool, False)
                if ret_str is None:
                    return None
                parts.append("$r" + ret_str)
            return "".join(parts)

        return None