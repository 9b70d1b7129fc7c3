"""
Lalias utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the grammar, the mutation engine and the
  command surface, so that every layer agrees on the same byte-level semantics.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/b"".

- encode(value) / decode(value)
  • Convert between user-facing str and the byte names/lines stored in the .lal file.
  • Uses the filesystem encoding with surrogateescape so arbitrary argv bytes survive.

- numeric(text)
  • Parse a non-negative base-10 integer made of ASCII digits only (no sign, no spaces).

- ordinal(number)
  • Human-friendly ordinal labels for position-first messages.

Constants
- RESTRICTED: bytes that can never appear in an alias name.

Quick examples
    >>> coalesce(Unset, 1)
    1
    >>> numeric(b"12")
    12
    >>> numeric("1a") is None
    True
"""
import functools
import os
from typing import final

RESTRICTED = frozenset(b" \n{}<>")


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None is a legitimate user value, but the API needs a way
    to distinguish “not provided” from “provided as None”. A single instance,
    Unset, is exposed for use as the default in internal parameters.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    @functools.cache
    def __new__(cls):
        """
        Ensure a single instance for this sentinel type.
        """
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        """
        Disallow subclassing to preserve sentinel semantics.
        """
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve an internal Unset sentinel to a concrete default.

    Falsey values like None, 0, b"" or [] are preserved as-is; they are not
    treated as “unset”.
    """
    return object if object is not Unset else default


def encode(object, /):
    """
    Return the byte form of a name or line.

    - bytes/bytearray: copied into immutable bytes.
    - str: encoded with the filesystem encoding (surrogateescape), matching how
      the interpreter decoded argv in the first place.
    """
    if isinstance(object, (bytes, bytearray)):
        return bytes(object)
    if isinstance(object, str):
        return os.fsencode(object)
    raise TypeError("encode() argument must be a string or bytes, not %s" % type(object).__name__)


def decode(object, /):
    """
    Return the printable str form of stored bytes (inverse of encode()).
    """
    if isinstance(object, str):
        return object
    return os.fsdecode(bytes(object))


def numeric(text, /):
    """
    Parse a non-negative base-10 integer.

    Only ASCII digits are accepted; signs, whitespace, underscores and other
    unicode digits are rejected. Returns None for anything that is not a
    plain run of digits (including the empty string), so callers can decide
    which fault applies.
    """
    text = encode(text)
    if not text or any(byte not in b"0123456789" for byte in text):
        return None
    return int(text)


@functools.cache
def ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with correct English suffixes.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    # 11th, 12th, 13th (and 111th, 112th, 113th, …)
    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Typical pattern: value = coalesce(user_value, default) to materialize a fallback
only when user_value is Unset (None and other falsey values are preserved).
"""


__all__ = (
    # Functions
    "coalesce",
    "encode",
    "decode",
    "numeric",
    "ordinal",

    # Types
    "UnsetType",

    # Constants
    "Unset",
    "RESTRICTED",
)
