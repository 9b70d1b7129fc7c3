"""
Substitution executor: runs a stored alias with positional arguments.

Behavior
- expand(alias, args) builds the full command of every line first: literals are
  copied verbatim and <<N>> is replaced by args[N].
- A placeholder pointing past the supplied arguments (InsufficientInputsError)
  or with non-numeric content (MalformedPlaceholderError) aborts the whole
  invocation before any line runs.
- invoke(store, name, args) then runs each command, in order, as one shell
  command. Runs are synchronous, inherit the standard streams, and their exit
  status is neither inspected nor propagated: the next line always runs.
"""
import logging
import subprocess

from .faults import FaultCode, InsufficientInputsError
from .model import Literal, Placeholder
from .utils import Unset, coalesce, decode, encode

logger = logging.getLogger(__name__)


def _shell(command, /):
    subprocess.run(command, shell=True, check=False)


def expand_line(line, args, /):
    """
    Substitute 'args' into one line and return the command bytes.
    """
    chunks = []
    for segment in line:
        match segment:
            case Literal():
                chunks.append(segment.text)
            case Placeholder():
                index = segment.index
                if index >= len(args):
                    raise InsufficientInputsError(
                        "placeholder <<%d>> needs at least %d argument(s), got %d" % (index, index + 1, len(args)),
                        title="insufficient inputs",
                        code=FaultCode.INSUFFICIENT_INPUTS,
                        hint="pass more arguments after the label",
                        index=index,
                        supplied=len(args),
                    )
                chunks.append(args[index])
    return b"".join(chunks)


def expand(alias, args=(), /):
    """
    Build every command of 'alias', or fail without building any.
    """
    args = [encode(arg) for arg in args]
    return [expand_line(line, args) for line in alias.lines]


def invoke(store, name, args=(), /, *, runner=Unset):
    """
    Run the alias 'name' with 'args'.

    'runner' receives each command as bytes; it defaults to a synchronous
    subprocess.run(..., shell=True) that ignores the exit status.
    """
    runner = coalesce(runner, _shell)
    alias = store.find(name)
    commands = expand(alias, args)

    for command in commands:
        logger.debug("running %r", decode(command))
        runner(command)
    return commands


__all__ = (
    "expand",
    "expand_line",
    "invoke",
)
