"""casper package root."""

from casper.exceptions import BootstrapError, CasperError, ModuleResolutionError
from casper.invariants import never

__all__ = [
    "__version__",
    "BootstrapError",
    "CasperError",
    "ModuleResolutionError",
    "never",
]

__version__ = "1.1.0"
