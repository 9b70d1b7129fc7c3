"""
Token tagging for the command surface.

Each argv item becomes a Token tagged FLAG, INPUT or EMPTY:
- FLAG: the item starts with '-'; its name is the item without that first '-'
  (so '--append' is named '-append' and '-a' is named 'a').
- INPUT: anything else.
- EMPTY: the single token produced for an empty argv.

The raw text is always kept, so an operand that happens to start with '-'
(e.g. a line like "ls -la") reaches the operation unchanged.
"""
from collections.abc import Iterable
from enum import Enum
from typing import NamedTuple

from .faults import FaultCode, TooManyInputsError

MAX_TOKENS = 1024


class TokenKind(Enum):
    INPUT = "input"
    FLAG = "flag"
    EMPTY = "empty"


class Token(NamedTuple):
    kind: TokenKind
    name: str
    raw: str

    def __repr__(self):
        return f"Token({self.kind.name}, {self.raw!r})"


EMPTY = Token(TokenKind.EMPTY, "", "")


def tag(item, /):
    if not isinstance(item, str):
        raise TypeError("tag() argument must be a string, not %s" % type(item).__name__)
    if item.startswith("-"):
        return Token(TokenKind.FLAG, item[1:], item)
    return Token(TokenKind.INPUT, item, item)


def tokenize(argv, /):
    """
    Tag every item of 'argv' (program name already removed).
    """
    if isinstance(argv, str) or not isinstance(argv, Iterable):
        raise TypeError("tokenize() argument must be an iterable of strings")
    argv = list(argv)
    if len(argv) > MAX_TOKENS:
        raise TooManyInputsError(
            "input contains %d sub-commands, at most %d are accepted" % (len(argv), MAX_TOKENS),
            title="too many inputs",
            code=FaultCode.TOO_MANY_INPUTS,
            hint="split the work into several invocations",
            count=len(argv),
        )
    if not argv:
        return (EMPTY,)
    return tuple(map(tag, argv))


__all__ = (
    "MAX_TOKENS",
    "TokenKind",
    "Token",
    "EMPTY",
    "tag",
    "tokenize",
)
