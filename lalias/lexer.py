"""
Segment/line lexer for the .lal grammar.

Grammar (byte-oriented, no escaping)
    Line        := '{' Segment* '}'          -- '{' / '}' nest, depth-counted
    Segment     := Placeholder | Literal
    Placeholder := '<<' InnerText '>>'       -- '<<' / '>>' nest, depth-counted
    Literal     := one or more bytes that do not start '<<'

Design
- A Cursor is an explicit (buffer, position) pair created by whoever starts a
  scan; lexing functions advance it and never keep references to it.
- Literal bytes accumulate in a growable buffer and are flushed as one Literal
  when a placeholder starts or the line ends, so literals are never split.
- Braces that do not close the current line are ordinary literal bytes; they
  only move the depth counter.
- Nested '<<'/'>>' inside a placeholder are kept verbatim in its inner text.

Errors
- UnexpectedEndOfInputError: the buffer ended inside a line or a placeholder.
- MalformedLineError: lex_text() met a '}' with no matching '{'.
"""
from .faults import FaultCode, MalformedLineError, UnexpectedEndOfInputError
from .model import Line, Literal, Placeholder
from .utils import encode

OPEN_LINE = b"{"
CLOSE_LINE = b"}"
OPEN_PLACEHOLDER = b"<<"
CLOSE_PLACEHOLDER = b">>"
END = b"<<END>>"


class Cursor:
    """
    Read position over an immutable byte buffer.
    """
    __slots__ = ("buffer", "position")

    def __init__(self, buffer, position=0, /):
        self.buffer = bytes(buffer)
        self.position = position

    @property
    def exhausted(self):
        return self.position >= len(self.buffer)

    def startswith(self, token, /):
        return self.buffer.startswith(token, self.position)

    def peek(self):
        return self.buffer[self.position:self.position + 1]

    def take(self, size=1, /):
        chunk = self.buffer[self.position:self.position + size]
        self.position += len(chunk)
        return chunk

    def skip(self, size, /):
        self.position += size

    def __repr__(self):
        return f"Cursor(position={self.position}, size={len(self.buffer)})"


def _eof(cursor, what, offset):
    return UnexpectedEndOfInputError(
        "unexpected end of input inside %s opened at byte %d" % (what, offset),
        title="unexpected end of input",
        code=FaultCode.UNEXPECTED_END_OF_INPUT,
        hint="close every '{' with '}' and every '<<' with '>>'",
        offset=offset,
        position=cursor.position,
    )


def lex_placeholder(cursor, /):
    """
    Lex one placeholder; the cursor must be on '<<'.
    """
    start = cursor.position
    cursor.skip(len(OPEN_PLACEHOLDER))
    inner = bytearray()
    depth = 1

    while True:
        if cursor.exhausted:
            raise _eof(cursor, "a placeholder", start)
        if cursor.startswith(OPEN_PLACEHOLDER):
            depth += 1
            inner += cursor.take(len(OPEN_PLACEHOLDER))
        elif cursor.startswith(CLOSE_PLACEHOLDER):
            depth -= 1
            if not depth:
                cursor.skip(len(CLOSE_PLACEHOLDER))
                return Placeholder(bytes(inner))
            inner += cursor.take(len(CLOSE_PLACEHOLDER))
        else:
            inner += cursor.take()


def _lex_segments(cursor, depth, /):
    """
    Lex segments until the brace depth drops to zero or the buffer ends.

    lex_line() and lex_text() both start at depth 1: for a line the opening
    brace is already consumed, for user text the braces are implied.

    Returns (segments, depth). The closing '}' that brings depth to zero is
    consumed but not stored.
    """
    segments = []
    literal = bytearray()

    def flush():
        if literal:
            segments.append(Literal(bytes(literal)))
            literal.clear()

    while not cursor.exhausted:
        if cursor.startswith(OPEN_PLACEHOLDER):
            flush()
            segments.append(lex_placeholder(cursor))
            continue

        byte = cursor.take()
        if byte == OPEN_LINE:
            depth += 1
        elif byte == CLOSE_LINE:
            depth -= 1
            if not depth:
                break
        literal += byte

    flush()
    return segments, depth


def lex_line(cursor, /):
    """
    Lex one {...} line; the cursor must be on '{'.
    """
    start = cursor.position
    if not cursor.startswith(OPEN_LINE):
        raise ValueError("lex_line() cursor must be on '{' (position %d)" % start)
    cursor.skip(len(OPEN_LINE))

    segments, depth = _lex_segments(cursor, 1)
    if depth:
        raise _eof(cursor, "a line", start)
    return Line(segments)


def lex_text(text, /):
    """
    Lex a user-supplied line body (no surrounding braces) into a Line.

    The text may carry <<N>> placeholders; braces in it must balance so the
    line can be written back and read again unchanged.
    """
    cursor = Cursor(encode(text))
    segments, depth = _lex_segments(cursor, 1)

    if not depth:
        raise MalformedLineError(
            "unbalanced '}' at byte %d of line %r" % (cursor.position - 1, cursor.buffer.decode(errors="replace")),
            title="malformed line",
            code=FaultCode.MALFORMED_LINE,
            hint="every '}' in a line needs a matching '{' before it",
            offset=cursor.position - 1,
        )
    if depth > 1:
        raise _eof(cursor, "a brace group", cursor.buffer.rfind(OPEN_LINE))
    return Line(segments)


__all__ = (
    "Cursor",
    "lex_placeholder",
    "lex_line",
    "lex_text",
    "OPEN_LINE",
    "CLOSE_LINE",
    "OPEN_PLACEHOLDER",
    "CLOSE_PLACEHOLDER",
    "END",
)
