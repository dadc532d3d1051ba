"""Exception types raised by the casper bootstrap."""

from __future__ import annotations


class CasperError(RuntimeError):
    """Base class for every error raised by casper itself."""


class BootstrapError(CasperError):
    """Fatal startup failure.

    Raised while the environment is being validated (runtime version, root
    path, version file). The driver turns it into an exit request with status
    1; it is never retried.
    """


class ModuleResolutionError(CasperError):
    def __init__(self, name: str):
        super().__init__(f"Can't find module {name}")
        self.name = name


class NeverThrown(CasperError):
    """Raised by ``never()`` when a path that must be unreachable runs."""

    def __init__(self, message: str, *, env: dict[str, object] | None = None):
        super().__init__(message)
        self.env = dict(env or {})
