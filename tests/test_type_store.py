import pytest

from orbc.type_store import TypeStore
from orbc.types import (
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
)


@pytest.fixture
def store():
    return TypeStore()


def _descr(base, *decors, cn=False):
    d = TypeDescr(base, cn)
    for decor in decors:
        d.add_decor(decor)
    return d


def test_prim_type_names_round_trip(store):
    i32 = store.add_prim_type("i32", PrimId.I32)
    assert i32 == store.get_prim_type_id(PrimId.I32)
    assert store.get_type_id("i32") == i32
    assert store.get_type_name(i32) == "i32"
    assert store.is_type("i32")
    assert not store.is_type("nothing")
    assert store.get_type_id("nothing") is None


def test_validity(store):
    assert not store.is_valid_type(TypeId(TypeKind.TUPLE, 0))
    assert not store.is_primitive(TypeId(TypeKind.PRIM, len(PrimId)))
    assert store.is_primitive(store.get_prim_type_id(PrimId.RAW))
    i8 = store.get_prim_type_id(PrimId.I8)
    tup = store.add_tuple(Tuple([i8, i8]))
    assert store.is_valid_type(tup)
    assert store.is_tuple(tup)


def test_tuple_rules(store):
    i8 = store.get_prim_type_id(PrimId.I8)
    f64 = store.get_prim_type_id(PrimId.F64)
    assert store.add_tuple(Tuple([])) is None
    assert store.add_tuple(Tuple([f64])) == f64
    elems = [i8, f64]
    first = store.add_tuple(Tuple(elems))
    assert store.add_tuple(Tuple([i8, f64])) == first
    assert store.add_tuple(Tuple([f64, i8])) != first
    elems.append(i8)
    assert store.get_tuple(first).elements == [i8, f64]
    assert store.extract_len_of_tuple(first) == len([i8, f64])
    assert store.works_as_tuple(first)
    assert store.extract_tuple(first).elements == [i8, f64]


def test_empty_descr_returns_base(store):
    i32 = store.get_prim_type_id(PrimId.I32)
    assert store.add_type_descr(TypeDescr(i32)) == i32


def test_descr_normalization_and_dedup(store):
    i32 = store.get_prim_type_id(PrimId.I32)
    ptr = Decor(DecorType.PTR)
    inner = store.add_type_descr(_descr(i32, ptr))
    outer = store.add_type_descr(_descr(inner, ptr))
    direct = store.add_type_descr(_descr(i32, ptr, ptr))
    assert outer == direct
    normalized = store.get_type_descr(outer)
    assert normalized.base == i32
    assert normalized.decors == [ptr, ptr]
    assert store.extract_base_type(outer) == i32


def test_explicit_type(store):
    i32 = store.get_prim_type_id(PrimId.I32)
    ex = store.add_explicit_type(ExplicitType(i32, "myint"))
    assert store.add_explicit_type(ExplicitType(i32, "myint")) is None
    assert store.get_type_name(ex) == "myint"
    assert store.works_as_explicit_type(ex)
    assert store.works_as_type_i(ex)
    assert not store.works_as_type_u(ex)
    assert store.works_as_primitive(ex, PrimId.I32)
    assert not store.works_as_primitive(ex, PrimId.I64)
    assert store.extract_explicit_type_base_type(ex) == i32
    cn_ex = store.add_type_descr(TypeDescr(ex, cn=True))
    assert store.works_as_type_i(cn_ex)
    assert store.is_direct_cn(cn_ex)
    assert not store.is_direct_cn(ex)


def test_data_type_declare_then_define(store):
    i32 = store.get_prim_type_id(PrimId.I32)
    declared = store.add_data_type(DataType("point"))
    assert not store.get_data_type(declared).defined
    defined = DataType("point", [ElemEntry("x", i32), ElemEntry("y", i32)], defined=True)
    assert store.add_data_type(defined) == declared
    assert store.get_data_type(declared).defined
    assert store.extract_len_of_data_type(declared) == len(defined.elements)
    assert store.add_data_type(DataType("point", defined=True)) is None
    assert store.works_as_data_type(declared)
    assert store.extract_data_type(declared).elem_index("y") == 1


def test_data_type_name_clash(store):
    i32 = store.get_prim_type_id(PrimId.I32)
    store.add_explicit_type(ExplicitType(i32, "thing"))
    assert store.add_data_type(DataType("thing")) is None


def test_pointer_queries(store):
    i32 = store.get_prim_type_id(PrimId.I32)
    p = store.add_type_descr(_descr(i32, Decor(DecorType.PTR)))
    assert store.works_as_type_p(p)
    assert store.works_as_type_any_p(p)
    assert not store.works_as_primitive(p)
    assert not store.works_as_type_arr(p)
    raw_ptr = store.get_prim_type_id(PrimId.PTR)
    assert store.works_as_type_ptr(raw_ptr)
    assert store.works_as_type_any_p(raw_ptr)
    assert not store.works_as_type_p(raw_ptr)


def test_array_queries(store):
    c8 = store.get_prim_type_id(PrimId.C8)
    arr = store.add_type_descr(_descr(c8, Decor(DecorType.ARR, 5)))
    assert store.works_as_type_arr(arr)
    assert store.works_as_type_arr_of_len(arr, 5)
    assert not store.works_as_type_arr_of_len(arr, 4)
    assert store.works_as_type_char_arr_of_len(arr, 5)
    assert store.extract_len_of_arr(arr) == 5
    assert store.extract_len_of_arr(c8) is None


def test_str_requires_cn_chars(store):
    c8 = store.get_prim_type_id(PrimId.C8)
    s = store.add_type_descr(_descr(c8, Decor(DecorType.ARR_PTR), cn=True))
    not_s = store.add_type_descr(_descr(c8, Decor(DecorType.ARR_PTR)))
    assert store.works_as_type_str(s)
    assert not store.works_as_type_str(not_s)
    assert store.works_as_type_arr_p(not_s)
    assert not store.is_direct_cn(s)


def test_callable_dedup_and_queries(store):
    i32 = store.get_prim_type_id(PrimId.I32)
    func = Callable(is_func=True)
    func.set_arg_count(1)
    func.set_arg_type(0, i32)
    fid = store.add_callable(func)
    assert store.add_callable(func) == fid
    assert store.is_callable(fid)
    assert store.works_as_callable(fid)
    assert store.works_as_callable(fid, True)
    assert not store.works_as_callable(fid, False)
    macro = Callable(is_func=False, variadic=True)
    macro.set_arg_count(2)
    mid = store.add_callable(macro)
    assert mid != fid
    assert store.works_as_macro_with_args(mid, 2, True)
    assert not store.works_as_macro_with_args(mid, 2)
    assert store.extract_callable(mid) == macro
    assert store.extract_callable(i32) is None


def test_invalid_type_raises(store):
    with pytest.raises(ValueError):
        store.works_as_primitive(TypeId(TypeKind.DATA, 3))