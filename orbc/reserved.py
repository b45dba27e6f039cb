"""Reserved names: meaningful identifiers, keywords and operators."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Hashable, Mapping, TypeVar

_E = TypeVar("_E", bound=enum.Enum)


class Meaningful(enum.Enum):
    MAIN = enum.auto()
    CN = enum.auto()
    ASTERISK = enum.auto()
    SQUARE = enum.auto()
    TYPE = enum.auto()
    UNKNOWN = enum.auto()


class Keyword(enum.Enum):
    SYM = enum.auto()
    CAST = enum.auto()
    BLOCK = enum.auto()
    EXIT = enum.auto()
    LOOP = enum.auto()
    PASS = enum.auto()
    EXPLICIT = enum.auto()
    DATA = enum.auto()
    FNC = enum.auto()
    RET = enum.auto()
    MAC = enum.auto()
    EVAL = enum.auto()
    TYPE_OF = enum.auto()
    LEN_OF = enum.auto()
    SIZE_OF = enum.auto()
    IS_DEF = enum.auto()
    ATTR_OF = enum.auto()
    ATTR_IS_DEF = enum.auto()
    IS_EVAL = enum.auto()
    IMPORT = enum.auto()
    MESSAGE = enum.auto()
    UNKNOWN = enum.auto()


class Oper(enum.Enum):
    ASGN = enum.auto()
    NOT = enum.auto()
    BIT_NOT = enum.auto()
    EQ = enum.auto()
    NE = enum.auto()
    LT = enum.auto()
    LE = enum.auto()
    GT = enum.auto()
    GE = enum.auto()
    ADD = enum.auto()
    SUB = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()
    REM = enum.auto()
    BIT_AND = enum.auto()
    BIT_OR = enum.auto()
    BIT_XOR = enum.auto()
    SHL = enum.auto()
    SHR = enum.auto()
    IND = enum.auto()
    UNKNOWN = enum.auto()


@dataclass(frozen=True)
class OperInfo:
    unary: bool = False
    binary: bool = False
    comparison: bool = False


OPER_INFOS: Mapping[Oper, OperInfo] = {
    Oper.ASGN: OperInfo(binary=True),
    Oper.NOT: OperInfo(unary=True),
    Oper.BIT_NOT: OperInfo(unary=True),
    Oper.EQ: OperInfo(binary=True, comparison=True),
    Oper.NE: OperInfo(binary=True, comparison=True),
    Oper.LT: OperInfo(binary=True, comparison=True),
    Oper.LE: OperInfo(binary=True, comparison=True),
    Oper.GT: OperInfo(binary=True, comparison=True),
    Oper.GE: OperInfo(binary=True, comparison=True),
    Oper.ADD: OperInfo(unary=True, binary=True),
    Oper.SUB: OperInfo(unary=True, binary=True),
    Oper.MUL: OperInfo(unary=True, binary=True),
    Oper.DIV: OperInfo(binary=True),
    Oper.REM: OperInfo(binary=True),
    Oper.BIT_AND: OperInfo(unary=True, binary=True),
    Oper.BIT_OR: OperInfo(binary=True),
    Oper.BIT_XOR: OperInfo(binary=True),
    Oper.SHL: OperInfo(binary=True),
    Oper.SHR: OperInfo(unary=True, binary=True),
    Oper.IND: OperInfo(binary=True),
}

_TYPE_DESCR_DECORS = frozenset({Meaningful.CN, Meaningful.ASTERISK, Meaningful.SQUARE})


def is_type_descr_decor_meaning(m: Meaningful) -> bool:
    """Return True if ``m`` decorates a type description (cn, * or [])."""
    return m in _TYPE_DESCR_DECORS


def _name_of(table: Mapping[Hashable, _E], value: _E) -> Hashable:
    for name, entry in table.items():
        if entry is value:
            return name
    raise KeyError(value)


class Reserved:
    """Lookup tables mapping name ids to their reserved meaning."""

    def __init__(
        self,
        meaningfuls: Mapping[Hashable, Meaningful] | None = None,
        keywords: Mapping[Hashable, Keyword] | None = None,
        opers: Mapping[Hashable, Oper] | None = None,
    ) -> None:
        self.meaningfuls: dict[Hashable, Meaningful] = dict(meaningfuls or {})
        self.keywords: dict[Hashable, Keyword] = dict(keywords or {})
        self.opers: dict[Hashable, Oper] = dict(opers or {})

    def is_meaningful(self, name: Hashable, m: Meaningful | None = None) -> bool:
        """Return True if ``name`` is meaningful (and, if given, means ``m``)."""
        found = self.meaningfuls.get(name)
        return found is not None if m is None else found is m

    def get_meaningful(self, name: Hashable) -> Meaningful | None:
        return self.meaningfuls.get(name)

    def meaningful_name_id(self, m: Meaningful) -> Hashable:
        """Return the name id registered for ``m``; raises KeyError if none."""
        return _name_of(self.meaningfuls, m)

    def is_keyword(self, name: Hashable, k: Keyword | None = None) -> bool:
        found = self.keywords.get(name)
        return found is not None if k is None else found is k

    def get_keyword(self, name: Hashable) -> Keyword | None:
        return self.keywords.get(name)

    def keyword_name_id(self, k: Keyword) -> Hashable:
        """Return the name id registered for ``k``; raises KeyError if none."""
        return _name_of(self.keywords, k)

    def is_oper(self, name: Hashable, o: Oper | None = None) -> bool:
        found = self.opers.get(name)
        return found is not None if o is None else found is o

    def get_oper(self, name: Hashable) -> Oper | None:
        return self.opers.get(name)

    def oper_name_id(self, o: Oper) -> Hashable:
        """Return the name id registered for ``o``; raises KeyError if none."""
        return _name_of(self.opers, o)

    def is_reserved(self, name: Hashable) -> bool:
        """Return True if ``name`` cannot be used as a user identifier."""
        return self.is_keyword(name) or self.is_oper(name) or self.is_type_descr_decor(name)

    def is_type_descr_decor(self, name: Hashable) -> bool:
        m = self.meaningfuls.get(name)
        return m is not None and is_type_descr_decor_meaning(m)