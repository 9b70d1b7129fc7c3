"""
Storage: reading and rewriting the .lal file.

- load(path) reads the whole file in one go and parses it. A file that does not
  exist yet, or is zero bytes long, is an empty store; any other read failure
  is a StorageReadError, never a silent empty store.
- save(store, path) serializes the store into a temporary file next to the
  target, flushes and fsyncs it, gives it the mode of the file it replaces (or
  0o666 minus the umask for a new store), then atomically replaces the target. When
  anything fails the temporary file is removed and the previous content of the
  store is left untouched (StorageWriteError).

No locking is attempted: concurrent invocations against the same file must be
serialized by the caller.
"""
import contextlib
import logging
import os
import tempfile
from pathlib import Path

from .faults import FaultCode, StorageReadError, StorageWriteError
from .parser import parse
from .serializer import serialize

logger = logging.getLogger(__name__)

STORE_FILE = ".lal"


def _mode(path):
    """
    Permission bits for the rewritten store: those of the current file, or
    0o666 minus the umask when the file does not exist yet.
    """
    try:
        return path.stat().st_mode & 0o7777
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def load(path=STORE_FILE, /):
    path = Path(path)
    try:
        buffer = path.read_bytes()
    except FileNotFoundError:
        logger.debug("%s does not exist yet, starting empty", path)
        buffer = b""
    except OSError as exception:
        raise StorageReadError(
            "failed to read %s: %s" % (path, exception.strerror or exception),
            title="failed to read store",
            code=FaultCode.STORAGE_READ,
            hint="check that the file is readable",
            path=str(path),
            exception=exception,
        ) from exception

    logger.debug("loaded %d bytes from %s", len(buffer), path)
    return parse(buffer)


def save(store, path=STORE_FILE, /):
    path = Path(path)
    buffer = serialize(store)

    name = None
    try:
        with tempfile.NamedTemporaryFile("wb", dir=path.parent, prefix=path.name + ".", suffix=".tmp", delete=False) as handle:
            name = handle.name
            handle.write(buffer)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(name, _mode(path))
        os.replace(name, path)
    except OSError as exception:
        if name is not None:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(name)
        raise StorageWriteError(
            "failed to write %s: %s" % (path, exception.strerror or exception),
            title="failed to write store",
            code=FaultCode.STORAGE_WRITE,
            hint="the previous content of the store was kept",
            path=str(path),
            exception=exception,
        ) from exception

    logger.debug("wrote %d bytes to %s", len(buffer), path)
    return len(buffer)


__all__ = (
    "STORE_FILE",
    "load",
    "save",
)
