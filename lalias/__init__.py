__title__ = 'lalias'
__author__ = 'Eiko Reishin (影皇嶺臣)'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.1.0"

from .commands import *
from .executor import *
from .faults import *
from .model import *
from .mutations import *
from .parser import *
from .serializer import *
from .storage import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 1, 0, "final", 0, "")

__all__ = (
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the data model
__all__ += model.__all__  # type: ignore[attr-defined]
# Load the exposed API of the grammar
__all__ += parser.__all__  # type: ignore[attr-defined]
__all__ += serializer.__all__  # type: ignore[attr-defined]
# Load the exposed API of the engine
__all__ += mutations.__all__  # type: ignore[attr-defined]
__all__ += executor.__all__  # type: ignore[attr-defined]
# Load the exposed API of storage and commands
__all__ += storage.__all__  # type: ignore[attr-defined]
__all__ += commands.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
