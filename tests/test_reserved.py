import pytest

from orbc.reserved import (
    OPER_INFOS,
    Keyword,
    Meaningful,
    Oper,
    OperInfo,
    Reserved,
    is_type_descr_decor_meaning,
)


@pytest.fixture
def reserved():
    return Reserved(
        meaningfuls={1: Meaningful.CN, 2: Meaningful.MAIN, 6: Meaningful.ASTERISK},
        keywords={3: Keyword.FNC, 7: Keyword.RET},
        opers={4: Oper.ADD, 8: Oper.EQ},
    )


def test_type_descr_decor_meanings():
    assert is_type_descr_decor_meaning(Meaningful.CN)
    assert is_type_descr_decor_meaning(Meaningful.ASTERISK)
    assert is_type_descr_decor_meaning(Meaningful.SQUARE)
    assert not is_type_descr_decor_meaning(Meaningful.MAIN)
    assert not is_type_descr_decor_meaning(Meaningful.TYPE)


def test_meaningful_lookup(reserved):
    assert reserved.get_meaningful(2) is Meaningful.MAIN
    assert reserved.get_meaningful(3) is None
    assert reserved.is_meaningful(1)
    assert reserved.is_meaningful(1, Meaningful.CN)
    assert not reserved.is_meaningful(1, Meaningful.MAIN)
    assert not reserved.is_meaningful(99)


def test_keyword_lookup(reserved):
    assert reserved.get_keyword(3) is Keyword.FNC
    assert reserved.is_keyword(7, Keyword.RET)
    assert not reserved.is_keyword(7, Keyword.FNC)
    assert reserved.get_keyword(4) is None


def test_oper_lookup(reserved):
    assert reserved.get_oper(4) is Oper.ADD
    assert reserved.is_oper(8, Oper.EQ)
    assert not reserved.is_oper(3)


@pytest.mark.parametrize(
    "enum_value,lookup",
    [
        (Meaningful.MAIN, "meaningful_name_id"),
        (Keyword.RET, "keyword_name_id"),
        (Oper.EQ, "oper_name_id"),
    ],
)
def test_name_id_round_trip(reserved, enum_value, lookup):
    name = getattr(reserved, lookup)(enum_value)
    getter = {"meaningful_name_id": reserved.get_meaningful,
              "keyword_name_id": reserved.get_keyword,
              "oper_name_id": reserved.get_oper}[lookup]
    assert getter(name) is enum_value


def test_missing_name_id_raises(reserved):
    with pytest.raises(KeyError):
        reserved.meaningful_name_id(Meaningful.TYPE)
    with pytest.raises(KeyError):
        reserved.keyword_name_id(Keyword.CAST)
    with pytest.raises(KeyError):
        reserved.oper_name_id(Oper.SHL)


def test_is_reserved(reserved):
    assert reserved.is_reserved(1)
    assert reserved.is_reserved(6)
    assert reserved.is_reserved(3)
    assert reserved.is_reserved(4)
    assert not reserved.is_reserved(2)
    assert not reserved.is_reserved(42)


def test_is_type_descr_decor_by_name(reserved):
    assert reserved.is_type_descr_decor(1)
    assert not reserved.is_type_descr_decor(2)
    assert not reserved.is_type_descr_decor(3)


def test_oper_info_of_looked_up_opers(reserved):
    eq_info = OPER_INFOS[reserved.get_oper(8)]
    add_info = OPER_INFOS[reserved.get_oper(4)]
    assert eq_info == OperInfo(binary=True, comparison=True)
    assert add_info == OperInfo(unary=True, binary=True)


def test_oper_info_entries():
    assert OPER_INFOS[Oper.ADD] == OperInfo(unary=True, binary=True)
    assert OPER_INFOS[Oper.NOT] == OperInfo(unary=True)
    assert all(info.binary for info in OPER_INFOS.values() if info.comparison)