"""
Serializer: renders a Store back into the canonical .lal bytes.

For each alias, in store order:
    name ':' ( '{' segments '}' )* '<<END>>' '\\n'

Literals are written verbatim and placeholders as '<<' + text + '>>'. This is
the exact inverse of lalias.parser for every store the mutation engine builds:
parse(serialize(store)) == store.
"""
from .lexer import CLOSE_LINE, CLOSE_PLACEHOLDER, END, OPEN_LINE, OPEN_PLACEHOLDER
from .model import Literal, Placeholder


def serialize_line(line, /):
    """
    Render a single line, braces included.
    """
    chunks = [OPEN_LINE]
    for segment in line:
        match segment:
            case Literal():
                chunks.append(segment.text)
            case Placeholder():
                chunks += (OPEN_PLACEHOLDER, segment.text, CLOSE_PLACEHOLDER)
            case _:
                raise TypeError("unexpected segment %r" % (segment,))
    chunks.append(CLOSE_LINE)
    return b"".join(chunks)


def serialize(store, /):
    chunks = []
    for alias in store:
        chunks += (alias.name, b":")
        chunks += map(serialize_line, alias.lines)
        chunks += (END, b"\n")
    return b"".join(chunks)


__all__ = (
    "serialize",
    "serialize_line",
)
