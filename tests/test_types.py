import math

import pytest

from orbc.types import (
    ArgEntry,
    Callable,
    DataType,
    Decor,
    DecorType,
    ElemEntry,
    ExplicitType,
    PrimId,
    Tuple,
    TypeDescr,
    TypeId,
    TypeKind,
    shortest_fitting_prim_f,
    shortest_fitting_prim_i,
)

I32 = TypeId(TypeKind.PRIM, PrimId.I32)
C8 = TypeId(TypeKind.PRIM, PrimId.C8)
F64 = TypeId(TypeKind.PRIM, PrimId.F64)


@pytest.mark.parametrize(
    "x, expected",
    [
        (0, PrimId.I8),
        (127, PrimId.I8),
        (-128, PrimId.I8),
        (128, PrimId.I16),
        (-129, PrimId.I16),
        (32767, PrimId.I16),
        (32768, PrimId.I32),
        (2**31 - 1, PrimId.I32),
        (-(2**31), PrimId.I32),
        (2**31, PrimId.I64),
        (-(2**63), PrimId.I64),
    ],
)
def test_shortest_fitting_prim_i(x, expected):
    assert shortest_fitting_prim_i(x) is expected


@pytest.mark.parametrize(
    "x, expected",
    [
        (0.0, PrimId.F32),
        (1.5, PrimId.F32),
        (math.inf, PrimId.F32),
        (-math.inf, PrimId.F32),
        (math.nan, PrimId.F32),
        (1e39, PrimId.F64),
        (-1e300, PrimId.F64),
    ],
)
def test_shortest_fitting_prim_f(x, expected):
    assert shortest_fitting_prim_f(x) is expected


def test_fitting_prims_are_ordered_for_ranges():
    narrow = shortest_fitting_prim_i(1)
    wide = shortest_fitting_prim_i(2**40)
    assert narrow < wide < PrimId.U8
    assert shortest_fitting_prim_f(1.0) < shortest_fitting_prim_f(1e39)


def test_type_id_equality_and_hash():
    assert TypeId(TypeKind.PRIM, 3) == I32
    assert TypeId(TypeKind.TUPLE, 3) != I32
    assert {I32: "x"}[TypeId(TypeKind.PRIM, 3)] == "x"


def test_type_descr_empty():
    descr = TypeDescr(I32)
    assert descr.is_empty()
    descr.set_last_cn()
    assert descr.cn is True
    assert not descr.is_empty()


def test_add_decor_pointer_not_cn():
    descr = TypeDescr(I32, cn=True)
    descr.add_decor(Decor(DecorType.PTR))
    assert descr.cns == [False]
    assert descr.decors == [Decor(DecorType.PTR)]


def test_array_of_cn_is_cn():
    descr = TypeDescr(I32, cn=True)
    descr.add_decor(Decor(DecorType.ARR, 4))
    assert descr.cns == [True]


def test_array_of_non_cn_is_not_cn():
    descr = TypeDescr(I32)
    descr.add_decor(Decor(DecorType.ARR, 4))
    assert descr.cns == [False]


def test_add_decor_explicit_cn_and_set_last_cn():
    descr = TypeDescr(C8)
    descr.add_decor(Decor(DecorType.ARR_PTR), cn=True)
    descr.add_decor(Decor(DecorType.PTR))
    assert descr.cns == [True, False]
    descr.set_last_cn()
    assert descr.cns == [True, True]
    assert descr.cn is False


def test_type_descr_equality():
    a = TypeDescr(I32)
    a.add_decor(Decor(DecorType.ARR, 3))
    b = TypeDescr(I32)
    b.add_decor(Decor(DecorType.ARR, 3))
    c = TypeDescr(I32)
    c.add_decor(Decor(DecorType.ARR, 4))
    assert a == b
    assert a != c


def test_tuple_add_element():
    tup = Tuple()
    tup.add_element(I32)
    tup.add_element(C8)
    assert tup.elements == [I32, C8]
    assert tup == Tuple([I32, C8])
    assert tup != Tuple([C8, I32])


def test_explicit_type_holds_fields():
    ex = ExplicitType(I32, "myint")
    assert ex.type == I32
    assert ex.name == "myint"


def test_data_type_elem_index():
    data = DataType("point", [ElemEntry("x", I32), ElemEntry("y", F64)])
    assert data.elem_index("x") == 0
    assert data.elem_index("y") == 1
    assert data.elem_index("z") is None
    assert data.defined is False


def test_callable_arg_count_and_types():
    call = Callable(is_func=True)
    call.set_arg_count(2)
    assert call.arg_count() == 2
    assert call.arg_type(0) is None
    call.set_arg_types([I32, C8])
    assert [call.arg_type(0), call.arg_type(1)] == [I32, C8]
    call.set_arg_type(1, F64)
    assert call.arg_type(1) == F64
    call.set_arg_count(1)
    assert call.args == [ArgEntry(I32)]


def test_callable_no_drops():
    call = Callable()
    call.set_arg_count(2)
    call.set_arg_no_drops([True, False])
    assert call.arg_no_drop(0) is True
    assert call.arg_no_drop(1) is False
    call.set_arg_no_drop(1, True)
    assert call.arg_no_drop(1) is True


def test_callable_mismatched_lengths_raise():
    call = Callable()
    call.set_arg_count(2)
    with pytest.raises(ValueError):
        call.set_arg_types([I32])
    with pytest.raises(ValueError):
        call.set_arg_no_drops([True, False, True])


def test_callable_has_ret():
    call = Callable()
    assert not call.has_ret()
    call.ret_type = I32
    assert call.has_ret()


def test_func_equality_compares_args():
    a = Callable(is_func=True)
    a.set_arg_count(1)
    a.set_arg_types([I32])
    b = Callable(is_func=True)
    b.set_arg_count(1)
    b.set_arg_types([C8])
    assert a != b
    b.set_arg_types([I32])
    assert a == b
    b.set_arg_no_drop(0, True)
    assert a != b


def test_macro_equality_ignores_arg_types():
    a = Callable(is_func=False)
    a.set_arg_count(2)
    a.set_arg_types([I32, I32])
    b = Callable(is_func=False)
    b.set_arg_count(2)
    b.set_arg_types([C8, F64])
    assert a == b
    b.variadic = True
    assert a != b


def test_callable_equality_checks_kind_and_ret():
    a = Callable(is_func=True, ret_type=I32)
    b = Callable(is_func=True, ret_type=C8)
    assert a != b
    assert Callable(is_func=True) != Callable(is_func=False)