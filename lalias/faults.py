"""
Lalias faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing failure.
  Codes are grouped by domain (input, format, lookup, mutation, storage) to keep
  copy consistent and make logs/searches predictable.
- LaliasException: base type that carries message + options and knows how to
  render itself as a single, lowercased, actionable diagnostic line.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Policy
- Every fault is terminal. Nothing is retried, nothing is partially applied:
  in library mode the fault is raised, in shell mode it is printed once to
  stderr and the process exits with status 1.

UX goals
- One line per failure: "[ lalias — 13101 | Label Not Found ] message → hint".
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Readable styling, configurable via __styles__ in __main__.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, UnsetType

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across lalias (stable identifiers).

    grouping (by high-level domain)
    - input (11xxx)
      • TOO_MANY_INPUTS, UNKNOWN_FLAG, INSUFFICIENT_INPUTS, BAD_NUMERICAL_INPUT,
        UNPARSED_TOKENS
    - format (12xxx)
      • MALFORMED_LABEL, UNEXPECTED_END_OF_INPUT, MISSING_TERMINATOR,
        MALFORMED_LINE, MALFORMED_PLACEHOLDER
    - lookup (13xxx)
      • LABEL_NOT_FOUND, DUPLICATE_LABEL
    - mutation (14xxx)
      • TRUNCATE_FAILURE
    - storage (15xxx)
      • STORAGE_READ, STORAGE_WRITE

    codes are normalized to a string via normalize() so hosts can remap them.
    """
    # --- input errors (11xxx) ---
    TOO_MANY_INPUTS             = 11101
    UNKNOWN_FLAG                = 11102
    INSUFFICIENT_INPUTS         = 11103
    BAD_NUMERICAL_INPUT         = 11104
    UNPARSED_TOKENS             = 11105

    # --- format errors (12xxx) ---
    MALFORMED_LABEL             = 12101
    UNEXPECTED_END_OF_INPUT     = 12102
    MISSING_TERMINATOR          = 12103
    MALFORMED_LINE              = 12104
    MALFORMED_PLACEHOLDER       = 12111

    # --- lookup errors (13xxx) ---
    LABEL_NOT_FOUND             = 13101
    DUPLICATE_LABEL             = 13102

    # --- mutation errors (14xxx) ---
    TRUNCATE_FAILURE            = 14101

    # --- storage errors (15xxx) ---
    STORAGE_READ                = 15101
    STORAGE_WRITE               = 15102

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class LaliasException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | UnsetType)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message if self.message is not Unset else ""

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        prog = text(getattr(main, "__prog__", self.options.get("prog", "lalias")), "prog-name")

        code = self.code.normalize() if isinstance(self.code, FaultCode) else "?"
        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code, "code"),
            " | ",
            text(str(self.options.get("title", "error")).title(), "error-title"),
            " ]"
        )
        message = text(str(self), "error-message")
        hint = Text("")
        if self.options.get("hint"):
            hint = Text.assemble(text(" → ", "hint-arrow"), text(self.options["hint"], "hint"))

        if self.options.get("fancy", False):
            return Panel(Group(message, hint), title=header, title_align="left")

        return Text.assemble(header, " ", message, hint, no_wrap=False)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self, soft_wrap=True)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


# --- input ---
class TooManyInputsError(LaliasException): ...
class UnknownFlagError(LaliasException): ...
class InsufficientInputsError(LaliasException): ...
class BadNumericalInputError(LaliasException): ...
class UnparsedTokensError(LaliasException): ...

# --- format ---
class MalformedLabelError(LaliasException): ...
class UnexpectedEndOfInputError(LaliasException): ...
class MissingTerminatorError(LaliasException): ...
class MalformedLineError(LaliasException): ...
class MalformedPlaceholderError(LaliasException): ...

# --- lookup ---
class LabelNotFoundError(LaliasException): ...
class DuplicateLabelError(LaliasException): ...

# --- mutation ---
class TruncateFailureError(LaliasException): ...

# --- storage ---
class StorageReadError(LaliasException): ...
class StorageWriteError(LaliasException): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see LaliasException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console and the process exits;
      otherwise the fault is raised.

    typical options
    - shell, fancy, colorful, prog, title, code, hint, and any other context the
      reporter may want to keep (offset, name, count...).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "LaliasException",
    "TooManyInputsError",
    "UnknownFlagError",
    "InsufficientInputsError",
    "BadNumericalInputError",
    "UnparsedTokensError",
    "MalformedLabelError",
    "UnexpectedEndOfInputError",
    "MissingTerminatorError",
    "MalformedLineError",
    "MalformedPlaceholderError",
    "LabelNotFoundError",
    "DuplicateLabelError",
    "TruncateFailureError",
    "StorageReadError",
    "StorageWriteError",
    "FaultCode",
    "trigger",
    "getdoc",
)
