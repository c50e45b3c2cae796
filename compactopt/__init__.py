__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'compactopt'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.3.0"

from .engine import Slot
from .faults import *
from .session import *
from .specs import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 3, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__license__",
    "__version__",
    "version_info",
    "Slot",
)

# Load the exposed API of the session facade
__all__ += session.__all__  # type: ignore[attr-defined]
# Load the exposed API of the option descriptors
__all__ += specs.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
