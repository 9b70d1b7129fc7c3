"""
Mutation engine: the edits a user can make to a Store.

Operations
- append(store, name, texts): add lines to an alias, creating it at the tail when new.
- overwrite(store, name, texts): replace every line of an existing alias.
- truncate(store, name, count=1): drop the last 'count' lines; an emptied alias is removed.
- delete(store, name): remove an alias with all of its lines.
- rename(store, name, new_name): change an alias name, keeping its lines.

Contract
- Every operation checks all of its inputs first and only then edits the store:
  when a fault is raised the store is exactly as it was.
- Each user-supplied line is lexed with lalias.lexer.lex_text, so it may carry
  <<N>> placeholders and is guaranteed to serialize back into valid bytes.
- Names come from the user and are validated here (the parser validates the
  ones it reads from disk).
"""
import logging

from .faults import (
    BadNumericalInputError,
    DuplicateLabelError,
    FaultCode,
    InsufficientInputsError,
    MalformedLabelError,
    TruncateFailureError,
)
from .lexer import lex_text
from .model import Alias
from .utils import RESTRICTED, decode, encode, numeric

logger = logging.getLogger(__name__)


def check_name(name, /):
    """
    Validate and encode a user-supplied alias name.

    Beyond the restricted bytes, ':' is refused as well since it terminates
    the name in the file.
    """
    name = encode(name)
    if not name:
        raise MalformedLabelError(
            "label cannot be empty",
            title="malformed label",
            code=FaultCode.MALFORMED_LABEL,
            hint="pick a non-empty label without spaces",
            name=name,
        )
    for offset, byte in enumerate(name):
        if byte in RESTRICTED or byte == ord(":"):
            raise MalformedLabelError(
                "restricted character %r at position %d in label %r" % (chr(byte), offset, decode(name)),
                title="malformed label",
                code=FaultCode.MALFORMED_LABEL,
                hint="labels cannot contain spaces, newlines, ':', '{', '}', '<' or '>'",
                name=name,
                offset=offset,
            )
    return name


def _lines(texts, operation):
    texts = list(texts)
    if not texts:
        raise InsufficientInputsError(
            "%s needs at least one line" % operation,
            title="insufficient inputs",
            code=FaultCode.INSUFFICIENT_INPUTS,
            hint="pass the command line(s) after the label, e.g. 'lalias -a build \"make <<0>>\"'",
        )
    return [lex_text(text) for text in texts]


def append(store, name, texts, /):
    """
    Append one line per text to the alias 'name'; create the alias at the end when absent.
    """
    name = check_name(name)
    lines = _lines(texts, "append")

    if (alias := store.get(name)) is None:
        alias = store.add(Alias(name))
        logger.debug("created alias %r", name)
    alias.lines.extend(lines)
    logger.debug("appended %d line(s) to %r", len(lines), name)
    return alias


def overwrite(store, name, texts, /):
    """
    Replace every line of the existing alias 'name'.
    """
    alias = store.find(name)
    lines = _lines(texts, "overwrite")
    alias.lines[:] = lines
    logger.debug("overwrote %r with %d line(s)", alias.name, len(lines))
    return alias


def _count(count):
    if isinstance(count, bool):
        raise TypeError("truncate() count must be an integer or a numeric string")
    if isinstance(count, int):
        value = count if count >= 0 else None
    else:
        value = numeric(count)
    if value is None:
        raise BadNumericalInputError(
            "expected a non-negative whole number of lines, got %r" % (count if isinstance(count, int) else decode(encode(count))),
            title="bad numerical input",
            code=FaultCode.BAD_NUMERICAL_INPUT,
            hint="use digits only, e.g. 'lalias -t build 2'",
            count=count,
        )
    return value


def truncate(store, name, count=1, /):
    """
    Remove the last 'count' lines of the alias 'name'.

    Returns the alias, or None when it was emptied and therefore removed.
    """
    count = _count(count)
    alias = store.find(name)

    if count > len(alias.lines):
        raise TruncateFailureError(
            "cannot remove %d line(s) from label %r, it only has %d" % (count, decode(alias.name), len(alias.lines)),
            title="failed to truncate",
            code=FaultCode.TRUNCATE_FAILURE,
            hint="use 'lalias -d %s' to remove the whole label" % decode(alias.name),
            name=alias.name,
            count=count,
        )

    if not count:
        return alias

    del alias.lines[-count:]
    logger.debug("truncated %d line(s) from %r", count, alias.name)

    if not alias.lines:
        store.remove(alias.name)
        logger.debug("removed emptied alias %r", alias.name)
        return None
    return alias


def delete(store, name, /):
    alias = store.remove(name)
    logger.debug("deleted alias %r", alias.name)
    return alias


def rename(store, name, new_name, /):
    """
    Rename the alias 'name' to 'new_name'.

    Renaming onto another existing alias is refused (DuplicateLabelError);
    renaming an alias to its own name changes nothing.
    """
    alias = store.find(name)
    new_name = check_name(new_name)

    if new_name != alias.name and new_name in store:
        raise DuplicateLabelError(
            "label %r already exists" % decode(new_name),
            title="duplicate label",
            code=FaultCode.DUPLICATE_LABEL,
            hint="delete or rename the existing label %r first" % decode(new_name),
            name=new_name,
        )

    logger.debug("renamed %r to %r", alias.name, new_name)
    alias.name = new_name
    return alias


__all__ = (
    "check_name",
    "append",
    "overwrite",
    "truncate",
    "delete",
    "rename",
)
