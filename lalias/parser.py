"""
Store parser: turns the raw bytes of a .lal file into a Store.

Grammar
    File  := Entry*
    Entry := Name ':' Body '<<END>>' Skip*
    Name  := byte+ (no restricted byte), terminated by ':'
    Body  := Line*                      -- see lalias.lexer for Line
    Skip  := any restricted byte right after '<<END>>' (consumed, not stored)

State machine
    ReadName → ReadBody ⇄ ReadLine → ReadEndSentinel → ReadSkip → ReadName | Done

- ReadName fails fast on a restricted byte (MalformedLabelError) and fails with
  UnexpectedEndOfInputError when the buffer ends before ':'.
- ReadBody tries '<<END>>' first; otherwise whitespace between lines is skipped
  and '{' starts a line. Anything else, or the buffer ending at a line boundary,
  means the sentinel is missing (MissingTerminatorError).
- An empty buffer is an empty store.

Every fault carries the byte 'offset' where it was detected.
"""
import logging

from .faults import FaultCode, MalformedLabelError, MissingTerminatorError, UnexpectedEndOfInputError
from .lexer import END, OPEN_LINE, Cursor, lex_line
from .model import Alias, Store
from .utils import RESTRICTED, decode

logger = logging.getLogger(__name__)

SEPARATOR = ord(":")
BLANKS = frozenset(b" \t\r\n")


def _parse_name(cursor):
    start = cursor.position
    name = bytearray()

    while True:
        if cursor.exhausted:
            raise UnexpectedEndOfInputError(
                "unexpected end of input while reading the label that starts at byte %d" % start,
                title="unexpected end of input",
                code=FaultCode.UNEXPECTED_END_OF_INPUT,
                hint="every label must be followed by ':' and its lines",
                offset=start,
            )
        byte = cursor.buffer[cursor.position]
        if byte == SEPARATOR:
            break
        if byte in RESTRICTED:
            raise MalformedLabelError(
                "restricted character %r at byte %d in label %r" % (chr(byte), cursor.position, decode(name)),
                title="malformed label",
                code=FaultCode.MALFORMED_LABEL,
                hint="labels cannot contain spaces, newlines, '{', '}', '<' or '>'",
                offset=cursor.position,
            )
        name.append(byte)
        cursor.skip(1)

    if not name:
        raise MalformedLabelError(
            "empty label at byte %d" % start,
            title="malformed label",
            code=FaultCode.MALFORMED_LABEL,
            hint="every entry must start with a non-empty label followed by ':'",
            offset=start,
        )

    cursor.skip(1)  # ':'
    return bytes(name)


def _parse_body(cursor, name):
    start = cursor.position
    lines = []

    while not cursor.startswith(END):
        if cursor.exhausted:
            raise MissingTerminatorError(
                "label %r opened at byte %d never reaches <<END>>" % (decode(name), start),
                title="missing terminator",
                code=FaultCode.MISSING_TERMINATOR,
                hint="close every entry with <<END>>",
                offset=cursor.position,
            )
        if cursor.buffer[cursor.position] in BLANKS:
            cursor.skip(1)
        elif cursor.startswith(OPEN_LINE):
            lines.append(lex_line(cursor))
        else:
            raise MissingTerminatorError(
                "expected '{' or <<END>> at byte %d in label %r, got %r" % (
                    cursor.position, decode(name), decode(cursor.peek())
                ),
                title="missing terminator",
                code=FaultCode.MISSING_TERMINATOR,
                hint="lines are written as {command} and every entry ends with <<END>>",
                offset=cursor.position,
            )

    cursor.skip(len(END))
    return lines


def _skip(cursor):
    while not cursor.exhausted and cursor.buffer[cursor.position] in RESTRICTED:
        cursor.skip(1)


def parse(buffer, /):
    """
    Parse a whole .lal buffer into a Store.

    Raises
    - MalformedLabelError, UnexpectedEndOfInputError, MissingTerminatorError.
    """
    if not isinstance(buffer, (bytes, bytearray, memoryview)):
        raise TypeError("parse() argument must be a bytes-like object, not %s" % type(buffer).__name__)

    store = Store()
    cursor = Cursor(buffer)

    while not cursor.exhausted:
        name = _parse_name(cursor)
        store.add(Alias(name, _parse_body(cursor, name)))
        _skip(cursor)

    logger.debug("parsed %d aliases from %d bytes", len(store), len(cursor.buffer))
    return store


__all__ = (
    "parse",
)
