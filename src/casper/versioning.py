"""Runtime and package version handling."""

from __future__ import annotations

from dataclasses import dataclass
import json
import sys

from pydantic import ValidationError

from casper.exceptions import BootstrapError
from casper.fs import FileSystemAdapter
from casper.runtime.path_policy import PACKAGE_MANIFEST_REL_PATH
from casper.schema import PackageManifestDTO

SUPPORTED_RUNTIME_MAJOR = 3
MINIMUM_RUNTIME_VERSION: tuple[int, int, int] = (3, 11, 0)
RUNTIME_NAME = "Python"


@dataclass(frozen=True)
class Version:
    major: int
    minor: int
    patch: int
    ident: str = ""

    def __str__(self) -> str:
        version = f"{self.major}.{self.minor}.{self.patch}"
        if self.ident:
            version = f"{version}-{self.ident}"
        return version

    def numbers(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)


def _to_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


def parse_version(text: str) -> Version:
    parts = str(text).strip().split(".")
    if len(parts) < 3:
        raise BootstrapError("Invalid version number")
    patch_part = parts[2].split("-")
    return Version(
        major=_to_int(parts[0]),
        minor=_to_int(parts[1]),
        patch=_to_int(patch_part[0]),
        ident=patch_part[1] if len(patch_part) > 1 else "",
    )


def read_package_version(root_path: str, fs: FileSystemAdapter) -> Version:
    pkg_file = fs.absolute(fs.path_join(root_path, str(PACKAGE_MANIFEST_REL_PATH)))
    if not fs.exists(pkg_file):
        raise BootstrapError(f"Cannot find package.json at {pkg_file}")
    try:
        manifest = PackageManifestDTO.model_validate(json.loads(fs.read(pkg_file)))
    except (OSError, UnicodeError, json.JSONDecodeError, ValidationError) as exc:
        raise BootstrapError(f"Cannot read package file contents: {exc}") from exc
    return parse_version(manifest.version)


def runtime_version() -> Version:
    info = sys.version_info
    ident = "" if info.releaselevel == "final" else f"{info.releaselevel}{info.serial}"
    return Version(major=info.major, minor=info.minor, patch=info.micro, ident=ident)


def check_runtime(
    version: Version,
    *,
    supported_major: int = SUPPORTED_RUNTIME_MAJOR,
    minimum: tuple[int, int, int] = MINIMUM_RUNTIME_VERSION,
) -> str | None:
    """Return a fatal diagnostic when *version* cannot host casper."""
    _, min_minor, min_patch = minimum
    if version.major != supported_major:
        return f"casper needs {RUNTIME_NAME} {supported_major}.x"
    if version.minor < min_minor:
        return f"casper needs at least {RUNTIME_NAME} {supported_major}.{min_minor} or later."
    if version.minor == min_minor and version.patch < min_patch:
        return (
            f"casper needs at least {RUNTIME_NAME} "
            f"{supported_major}.{min_minor}.{min_patch} or later."
        )
    return None
