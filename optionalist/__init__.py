__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'optionalist'
__author__ = 'Eiko Reishin (影皇嶺臣)'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .faults import *
from .keys import *
from .metadata import *
from .parsing import *
from .results import *
from .schema import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the reserved schema keys
__all__ += keys.__all__  # type: ignore[attr-defined]
# Load the program metadata lookup
__all__ += metadata.__all__  # type: ignore[attr-defined]
# Load the entry point
__all__ += parsing.__all__  # type: ignore[attr-defined]
# Load the result types
__all__ += results.__all__  # type: ignore[attr-defined]
# Load the schema types
__all__ += schema.__all__  # type: ignore[attr-defined]
