"""
Lalias data model: the in-memory shape of a .lal file.

What this module provides
- Literal: verbatim bytes of a command template.
- Placeholder: a positional-argument marker (<<N>>), resolved at invocation time.
- Line: one shell-command template, i.e. one {...} block; an immutable sequence of segments.
- Alias: one named macro (name + ordered lines).
- Store: the ordered collection of aliases backing one .lal file.

Ownership
- A Store owns its aliases, an Alias owns its lines, a Line owns its segments.
  Nothing is shared and nothing points back to its owner, so deleting an alias
  from the store is just removing it from the list.

Invariants
- Literal text produced by the lexer is never empty, and two literals are never
  adjacent inside a Line (adjacent bytes coalesce into one segment).
- Insertion order of aliases is the order they are written back.

Notes
- Names and literal text are bytes: the .lal format is byte-oriented and has no
  escaping, so nothing is decoded until it must be shown to a person.
"""
from .faults import FaultCode, LabelNotFoundError, MalformedPlaceholderError
from .utils import decode, encode, numeric


class Literal:
    """
    Verbatim text of a line.
    """
    __slots__ = ("_text",)

    def __init__(self, text, /):
        self._text = encode(text)

    @property
    def text(self):
        return self._text

    def __eq__(self, other):
        if not isinstance(other, Literal):
            return NotImplemented
        return self._text == other._text

    def __hash__(self):
        return hash((Literal, self._text))

    def __repr__(self):
        return f"Literal({self._text!r})"

    def __rich_repr__(self):
        yield self._text


class Placeholder:
    """
    Positional-argument marker: <<N>> stands for the Nth invocation argument (0-indexed).

    The raw inner bytes are kept exactly as found in the file. Reading .index
    converts them; content that is not a plain non-negative decimal number is
    reported as MalformedPlaceholderError right there, which is why a .lal file
    with a bad placeholder still loads and can still be edited.
    """
    __slots__ = ("_text",)

    def __init__(self, text, /):
        if isinstance(text, bool):
            raise TypeError("Placeholder() argument must be bytes, str or int, not bool")
        if isinstance(text, int):
            if text < 0:
                raise ValueError("Placeholder() index must be non-negative")
            text = str(text)
        self._text = encode(text)

    @property
    def text(self):
        return self._text

    @property
    def index(self):
        if (index := numeric(self._text)) is None:
            raise MalformedPlaceholderError(
                "placeholder <<%s>> is not a non-negative number" % decode(self._text),
                title="malformed placeholder",
                code=FaultCode.MALFORMED_PLACEHOLDER,
                hint="placeholders take the form <<N>>, where N is the 0-based argument index",
                text=self._text,
            )
        return index

    def __eq__(self, other):
        if not isinstance(other, Placeholder):
            return NotImplemented
        return self._text == other._text

    def __hash__(self):
        return hash((Placeholder, self._text))

    def __repr__(self):
        return f"Placeholder({self._text!r})"

    def __rich_repr__(self):
        yield self._text


class Line:
    """
    One shell-command template: an immutable, ordered sequence of segments.
    """
    __slots__ = ("_segments",)

    def __init__(self, segments=(), /):
        self._segments = tuple(segments)
        for segment in self._segments:
            if not isinstance(segment, (Literal, Placeholder)):
                raise TypeError("Line() segments must be Literal or Placeholder, not %s" % type(segment).__name__)

    @property
    def segments(self):
        return self._segments

    def __iter__(self):
        return iter(self._segments)

    def __len__(self):
        return len(self._segments)

    def __getitem__(self, index):
        return self._segments[index]

    def __eq__(self, other):
        if not isinstance(other, Line):
            return NotImplemented
        return self._segments == other._segments

    def __hash__(self):
        return hash((Line, self._segments))

    def __repr__(self):
        return f"Line({list(self._segments)!r})"

    def __rich_repr__(self):
        yield from self._segments


class Alias:
    """
    One named macro.

    The name is not validated here: the parser checks it with byte offsets for
    precise messages, and the mutation engine checks names coming from the user.
    """

    def __init__(self, name, lines=(), /):
        self.name = encode(name)
        self.lines = list(lines)

    def __eq__(self, other):
        if not isinstance(other, Alias):
            return NotImplemented
        return self.name == other.name and self.lines == other.lines

    __hash__ = None

    def __repr__(self):
        return f"Alias({self.name!r}, {self.lines!r})"

    def __rich_repr__(self):
        yield "name", decode(self.name)
        yield "lines", self.lines


class Store:
    """
    Ordered collection of aliases.

    Lookups are exact byte-for-byte matches on the name and resolve to the first
    alias carrying that name.
    """

    def __init__(self, aliases=(), /):
        self._aliases = list(aliases)

    @property
    def aliases(self):
        return tuple(self._aliases)

    @property
    def names(self):
        return tuple(alias.name for alias in self._aliases)

    def index(self, name, /):
        """
        position of the alias called 'name', or LabelNotFoundError.
        """
        name = encode(name)
        for index, alias in enumerate(self._aliases):
            if alias.name == name:
                return index
        raise LabelNotFoundError(
            "label %r not found" % decode(name),
            title="label not found",
            code=FaultCode.LABEL_NOT_FOUND,
            hint="run 'lalias --list' to see the stored labels",
            name=name,
        )

    def find(self, name, /):
        return self._aliases[self.index(name)]

    def get(self, name, default=None, /):
        name = encode(name)
        return next((alias for alias in self._aliases if alias.name == name), default)

    def add(self, alias, /):
        if not isinstance(alias, Alias):
            raise TypeError("add() argument must be an Alias, not %s" % type(alias).__name__)
        self._aliases.append(alias)
        return alias

    def remove(self, name, /):
        return self._aliases.pop(self.index(name))

    def __contains__(self, name):
        try:
            return self.get(name) is not None
        except TypeError:
            return False

    def __iter__(self):
        return iter(self._aliases)

    def __len__(self):
        return len(self._aliases)

    def __bool__(self):
        return bool(self._aliases)

    def __eq__(self, other):
        if not isinstance(other, Store):
            return NotImplemented
        return self._aliases == other._aliases

    __hash__ = None

    def __repr__(self):
        return f"Store({self._aliases!r})"

    def __rich_repr__(self):
        yield from self._aliases


__all__ = (
    "Literal",
    "Placeholder",
    "Line",
    "Alias",
    "Store",
)
