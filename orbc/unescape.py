"""Unescaping of quoted character and string literals."""

from __future__ import annotations

import enum
from dataclasses import dataclass

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_FORBIDDEN_WHITESPACE = frozenset("\t\n\v\f\r")
_ESCAPES = {
    "'": "'",
    '"': '"',
    "?": "?",
    "\\": "\\",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "0": "\0",
}


class UnescapeStatus(enum.Enum):
    SUCCESS = "success"
    SUCCESS_UNCLOSED = "success_unclosed"
    FAILURE = "failure"


@dataclass(frozen=True)
class UnescapeResult:
    """Outcome of unescaping.

    On success ``next_index`` is one past the closing quote; when the text ends
    before a closing quote it is the length of the text. On failure it is the
    index just after the last character that was unescaped successfully.
    """

    unescaped: str
    next_index: int
    status: UnescapeStatus = UnescapeStatus.SUCCESS


def unescape(text: str, start: int, single_quote: bool) -> UnescapeResult:
    """Unescape ``text`` from ``start`` up to the matching closing quote.

    Recognised sequences are \\', \\", \\?, \\\\, \\a, \\b, \\f, \\n, \\r, \\t,
    \\v, \\0 and \\xNN with two hex digits.
    """
    out: list[str] = []
    ind = start
    length = len(text)
    last_ok = ind

    while True:
        last_ok = ind
        if ind >= length:
            return UnescapeResult("".join(out), last_ok, UnescapeStatus.SUCCESS_UNCLOSED)

        ch = text[ind]
        ind += 1

        if ch == "'":
            if single_quote:
                return UnescapeResult("".join(out), ind)
            out.append("'")
        elif ch == '"':
            if not single_quote:
                return UnescapeResult("".join(out), ind)
            break
        elif ch in _FORBIDDEN_WHITESPACE:
            break
        elif ch == "\\":
            if ind >= length:
                break
            esc = text[ind]
            ind += 1
            if esc == "x":
                digits = text[ind:ind + 2]
                if len(digits) < 2 or not all(d in _HEX_DIGITS for d in digits):
                    break
                ind += 2
                out.append(chr(int(digits, 16)))
            else:
                replacement = _ESCAPES.get(esc)
                if replacement is None:
                    return UnescapeResult("", last_ok, UnescapeStatus.FAILURE)
                out.append(replacement)
        else:
            out.append(ch)

    return UnescapeResult("", last_ok, UnescapeStatus.FAILURE)