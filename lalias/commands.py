"""
Lalias command layer: map a tagged token stream onto exactly one operation.

What this module provides
- FLAGS: the flag table (long/short spellings, operand arity, whether the
  operation rewrites the store, and the handler).
- run(prompt, ...): load → one mutation, invocation or listing → optional
  rewrite. This is what the `lalias` executable calls.

Command surface
    lalias --append    | -a   NAME LINE...     add lines (creates NAME when new)
    lalias --overwrite | -ow  NAME LINE...     replace every line of NAME
    lalias --truncate  | -t   NAME [COUNT]     drop the last COUNT lines (default 1)
    lalias --delete    | -d   NAME             remove NAME
    lalias --rename    | -rn  NAME NEW         rename NAME to NEW
    lalias --list      | -l                    show every alias
    lalias --help      | -h                    show this table
    lalias NAME [ARG...]                       run NAME, <<N>> → ARG N
    lalias                                     nothing

Flow
- Only the first token selects the operation; the following tokens are taken
  verbatim as operands.
- Faults are surfaced through lalias.faults.trigger(): raised when shell=False,
  printed as one line followed by exit status 1 when shell=True.
- The store is written back only after a mutation succeeded in memory, and
  only through lalias.storage.save() (atomic replace).
"""
import difflib
import logging
import shlex
import sys
from collections.abc import Iterable
from typing import NamedTuple

from rich.box import ROUNDED
from rich.console import Console
from rich.table import Table
from rich.text import Text

from . import executor, mutations, storage
from .faults import *
from .model import Literal, Placeholder
from .tokens import TokenKind, tokenize
from .utils import Unset, decode, ordinal

logger = logging.getLogger(__name__)


class Flag(NamedTuple):
    long: str
    short: str
    minimum: int
    maximum: int | None
    mutates: bool
    handler: object
    usage: str
    descr: str

    @property
    def spellings(self):
        return "-%s" % self.long, "-%s" % self.short


def _append(context, name, *lines):
    mutations.append(context.store, name, lines)


def _overwrite(context, name, *lines):
    mutations.overwrite(context.store, name, lines)


def _truncate(context, name, count=1):
    mutations.truncate(context.store, name, count)


def _delete(context, name):
    mutations.delete(context.store, name)


def _rename(context, name, new_name):
    mutations.rename(context.store, name, new_name)


def _render_line(line, colorful):
    text = Text()
    for segment in line:
        match segment:
            case Literal():
                text.append(decode(segment.text))
            case Placeholder():
                text.append("<<%s>>" % decode(segment.text), "bold #00E5FF" if colorful else "")
    return text


def _list(context):
    if not context.store:
        context.console.print(Text("no labels stored in %s" % context.path))
        return

    table = Table(box=ROUNDED, show_header=True, header_style="bold" if context.colorful else "")
    table.add_column("label", style="bold #FF4DA6" if context.colorful else "", no_wrap=True)
    table.add_column("#", justify="right")
    table.add_column("command")

    for alias in context.store:
        label = Text(decode(alias.name))
        if not alias.lines:
            table.add_row(label, "", "")
        for number, line in enumerate(alias.lines, 1):
            table.add_row(label if number == 1 else "", str(number), _render_line(line, context.colorful))

    context.console.print(table)


def _help(context):
    table = Table(box=ROUNDED, show_header=True, header_style="bold" if context.colorful else "")
    table.add_column("flag", no_wrap=True)
    table.add_column("operands")
    table.add_column("description")
    for flag in FLAGS:
        table.add_row(" | ".join(flag.spellings), flag.usage, flag.descr)
    table.add_row("", "NAME [ARG...]", "run NAME, replacing <<N>> with the Nth ARG (0-based)")
    context.console.print(table)


FLAGS = (
    Flag("-append", "a", 2, None, True, _append, "NAME LINE...", "append lines to NAME, creating it when new"),
    Flag("-overwrite", "ow", 2, None, True, _overwrite, "NAME LINE...", "replace every line of NAME"),
    Flag("-truncate", "t", 1, 2, True, _truncate, "NAME [COUNT]", "remove the last COUNT lines of NAME (default 1)"),
    Flag("-delete", "d", 1, 1, True, _delete, "NAME", "remove NAME and all of its lines"),
    Flag("-rename", "rn", 2, 2, True, _rename, "NAME NEW", "rename NAME to NEW"),
    Flag("-list", "l", 0, 0, False, _list, "", "show every stored label"),
    Flag("-help", "h", 0, 0, False, _help, "", "show this table"),
)


def _resolve_flag(token):
    for flag in FLAGS:
        if token.name in (flag.long, flag.short):
            return flag

    spellings = [spelling for flag in FLAGS for spelling in flag.spellings]
    suggestions = difflib.get_close_matches(token.raw, spellings, 3)
    try:
        hint = "did you mean %r? run 'lalias --help' to see all flags" % suggestions[0]
    except IndexError:
        hint = "run 'lalias --help' to see all flags"
    raise UnknownFlagError(
        "unknown flag %r at first position" % token.raw,
        title="unknown flag",
        code=FaultCode.UNKNOWN_FLAG,
        hint=hint,
        input=token.raw,
        suggestions=suggestions,
    )


def _check_arity(flag, operands):
    if len(operands) < flag.minimum:
        raise InsufficientInputsError(
            "%s expects %s, got %d operand(s)" % (flag.spellings[0], flag.usage, len(operands)),
            title="insufficient inputs",
            code=FaultCode.INSUFFICIENT_INPUTS,
            hint="usage: lalias %s %s" % (flag.spellings[0], flag.usage),
            expected=flag.minimum,
            supplied=len(operands),
        )
    if flag.maximum is not None and len(operands) > flag.maximum:
        position = flag.maximum + 2
        raise UnparsedTokensError(
            "unexpected input %r from %s position" % (operands[flag.maximum], ordinal(position)),
            title="unparsed input",
            code=FaultCode.UNPARSED_TOKENS,
            hint="remove the extra inputs (quote lines that contain spaces)",
            leftover=list(operands[flag.maximum:]),
        )


class Context:
    """
    Per-run state handed to flag handlers.
    """

    def __init__(self, path, console, colorful):
        self.path = path
        self.console = console
        self.colorful = colorful
        self.store = None


def _tokens(prompt):
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        items = list(prompt)
        for item in items:
            if not isinstance(item, str):
                raise TypeError("run() argument must be a string or an iterable of strings")
        return items
    raise TypeError("run() argument must be a string or an iterable of strings")


def _execute(tokens, context, runner):
    head, *rest = tokens
    operands = [token.raw for token in rest]

    match head.kind:
        case TokenKind.EMPTY:
            logger.debug("no tokens, nothing to do")
            return
        case TokenKind.INPUT:
            context.store = storage.load(context.path)
            executor.invoke(context.store, head.raw, operands, runner=runner)
            return

    flag = _resolve_flag(head)
    _check_arity(flag, operands)

    if flag.handler is not _help:
        context.store = storage.load(context.path)
    flag.handler(context, *operands)

    if flag.mutates:
        storage.save(context.store, context.path)


def run(prompt=Unset, /, *, path=storage.STORE_FILE, shell=False, fancy=False, colorful=True, runner=Unset, console=Unset):
    """
    Execute one lalias command.

    Parameters
    - prompt:
      • Unset: read tokens from sys.argv[1:].
      • str: shell-like string; split via shlex.split.
      • Iterable[str]: pre-tokenized sequence, used verbatim.
    - path: the store file (defaults to .lal in the working directory).
    - shell: print faults and exit(1) instead of raising them.
    - fancy/colorful: presentation of faults, listings and help.
    - runner: callable receiving each expanded command (bytes); defaults to the shell.
    - console: rich Console for listings and help (defaults to stdout).

    Returns
    - the Store after the operation (None when nothing was loaded).
    """
    console = Console(no_color=not colorful) if console is Unset else console
    context = Context(path, console, colorful)
    try:
        tokens = tokenize(_tokens(prompt))
        logger.debug("tokens: %r", tokens)
        _execute(tokens, context, runner)
    except LaliasException as fault:
        trigger(fault, shell=shell, fancy=fancy, colorful=colorful)
    return context.store


__all__ = (
    "FLAGS",
    "Flag",
    "run",
)
