"""Primitive module loader.

``FileLoader`` turns a module name into its exports. Registered stubs win,
then an existing file path is loaded (once, cached by absolute path) with
the handler registered for its suffix, and anything else is handed to the
interpreter's own import machinery.
"""

from __future__ import annotations

import hashlib
import importlib
import importlib.machinery
import importlib.util
import json
import logging
import os
from pathlib import Path
import sys
from types import ModuleType
from typing import Callable, MutableMapping, TypeAlias

LOGGER = logging.getLogger(__name__)

Exports: TypeAlias = object
ExtensionHandler: TypeAlias = Callable[["FileLoader", str], Exports]


def _module_name_for(path: str) -> str:
    stem = Path(path).stem.replace("-", "_").replace(".", "_")
    digest = hashlib.sha1(path.encode("utf-8")).hexdigest()[:8]
    return f"casper_module_{stem}_{digest}"


def load_python_source(loader: FileLoader, path: str) -> Exports:
    module_name = _module_name_for(path)
    spec = importlib.util.spec_from_file_location(
        module_name,
        path,
        loader=importlib.machinery.SourceFileLoader(module_name, path),
    )
    if spec is None or spec.loader is None:
        raise ImportError(f"cannot build a module spec for {path}", path=path)
    module = importlib.util.module_from_spec(spec)
    for name, value in loader.preamble.items():
        setattr(module, name, value)
    # Cached before execution so that circular requests see the partial module.
    loader.cache[path] = module
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        loader.cache.pop(path, None)
        sys.modules.pop(module_name, None)
        raise
    return module


def load_json_data(loader: FileLoader, path: str) -> Exports:
    with open(path, encoding="utf-8") as handle:
        data = json.load(handle)
    loader.cache[path] = data
    return data


def default_extensions() -> dict[str, ExtensionHandler]:
    return {
        ".py": load_python_source,
        ".json": load_json_data,
    }


class FileLoader:
    def __init__(
        self,
        *,
        cache: MutableMapping[str, Exports] | None = None,
        extensions: MutableMapping[str, ExtensionHandler] | None = None,
        stubs: MutableMapping[str, Exports] | None = None,
        preamble: MutableMapping[str, object] | None = None,
    ):
        self.cache: MutableMapping[str, Exports] = {} if cache is None else cache
        self.extensions: MutableMapping[str, ExtensionHandler] = (
            default_extensions() if extensions is None else extensions
        )
        self.stubs: MutableMapping[str, Exports] = {} if stubs is None else stubs
        self.preamble: MutableMapping[str, object] = {} if preamble is None else preamble

    def __call__(self, name: str) -> Exports:
        if name in self.stubs:
            return self.stubs[name]
        if os.path.isfile(name):
            return self.load_file(os.path.abspath(name))
        return self.import_module(name)

    def load_file(self, path: str) -> Exports:
        if path in self.cache:
            return self.cache[path]
        handler = self.extensions.get(Path(path).suffix.lower(), load_python_source)
        LOGGER.debug("loading %s", path)
        return handler(self, path)

    def import_module(self, name: str) -> ModuleType:
        return importlib.import_module(name)
