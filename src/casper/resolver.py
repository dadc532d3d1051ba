"""Layered module resolution.

Every casper module starts by patching the ``require`` it was handed::

    require = patch_require(require)
    utils = require("utils")

A patched ``require`` looks a name up in three tiers, first match wins:

1. builtin modules shipped in ``<root>/modules/<name>.py``;
2. files relative to the current script base directory, ``<base>/<name>``
   then ``<base>/<name>.py``;
3. the primitive loader, with the name unchanged.

Patching is idempotent: an already patched ``require`` is returned as-is.
"""

from __future__ import annotations

import logging
from typing import Callable, MutableMapping, Protocol

from casper.exceptions import ModuleResolutionError
from casper.fs import FileSystemAdapter
from casper.runtime.path_policy import MODULE_SUFFIX, MODULES_REL_DIR

LOGGER = logging.getLogger(__name__)


class ResolverContext(Protocol):
    fs: FileSystemAdapter
    root_path: str
    script_base_dir: str | None


class PrimitiveRequire(Protocol):
    cache: MutableMapping[str, object]
    extensions: MutableMapping[str, Callable[..., object]]
    stubs: MutableMapping[str, object]

    def __call__(self, name: str) -> object: ...


class PatchedRequire:
    patched = True

    def __init__(self, resolver: ModuleResolver, primitive: PrimitiveRequire):
        self.resolver = resolver
        self.primitive = primitive
        self.cache = primitive.cache
        self.extensions = primitive.extensions
        self.stubs = primitive.stubs

    def __call__(self, name: str) -> object:
        module_path = self.resolver.builtin_path(name)
        if module_path is not None:
            LOGGER.debug("require %r -> builtin %s", name, module_path)
            return self.primitive(module_path)
        module_path = self.resolver.local_path(name)
        if module_path is not None:
            LOGGER.debug("require %r -> local %s", name, module_path)
            return self.primitive(module_path)
        try:
            return self.primitive(name)
        except Exception as exc:
            raise ModuleResolutionError(name) from exc

    def __repr__(self) -> str:
        return f"PatchedRequire(root={self.resolver.context.root_path!r})"


class ModuleResolver:
    def __init__(self, context: ResolverContext):
        self.context = context

    @property
    def fs(self) -> FileSystemAdapter:
        return self.context.fs

    def builtin_path(self, name: str) -> str | None:
        abs_path = self.fs.path_join(
            self.context.root_path,
            str(MODULES_REL_DIR),
            f"{name}{MODULE_SUFFIX}",
        )
        return abs_path if self.fs.is_file(abs_path) else None

    def base_dir(self) -> str:
        return self.context.script_base_dir or self.fs.working_directory

    def local_path(self, name: str) -> str | None:
        base_dir = self.base_dir()
        candidates = [
            self.fs.absolute(self.fs.path_join(base_dir, name)),
            self.fs.absolute(self.fs.path_join(base_dir, f"{name}{MODULE_SUFFIX}")),
        ]
        return next((path for path in candidates if self.fs.is_file(path)), None)

    def install(self, primitive: PrimitiveRequire) -> PrimitiveRequire:
        if getattr(primitive, "patched", False):
            return primitive
        return PatchedRequire(self, primitive)
