import pytest

from orbc.symbol_ids import FuncId, MacroId, VarId


def test_var_id_equality_compares_all_fields():
    assert VarId(None, 0, 1) == VarId(None, 0, 1)
    assert VarId(None, 0, 1) != VarId(0, 0, 1)
    assert VarId(2, 3, 4) != VarId(2, 3, 5)
    assert VarId(2, 3, 4) != VarId(2, 4, 4)


def test_var_id_is_hashable_and_usable_as_key():
    table = {VarId(None, 0, 0): "global", VarId(1, 0, 0): "local"}
    assert table[VarId(1, 0, 0)] == "local"
    assert table[VarId(None, 0, 0)] == "global"


def test_var_id_is_immutable():
    var_id = VarId(None, 0, 0)
    with pytest.raises(AttributeError):
        var_id.index = 5
    assert var_id.index == 0
    assert var_id == VarId(None, 0, 0)


def test_func_id_equality():
    assert FuncId("main", 0) == FuncId("main", 0)
    assert FuncId("main", 0) != FuncId("main", 1)
    assert FuncId("main", 0) != FuncId("other", 0)


def test_macro_id_equality_and_hash():
    ids = {MacroId("m", 0), MacroId("m", 0), MacroId("m", 1)}
    assert len(ids) == 2


def test_func_and_macro_ids_are_distinct_kinds():
    assert FuncId("x", 0) != MacroId("x", 0)