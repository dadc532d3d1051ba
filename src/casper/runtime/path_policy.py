from __future__ import annotations

from pathlib import Path

# Layout of a casper root installation, relative to the root path.
PACKAGE_MANIFEST_REL_PATH = Path("package.json")
USAGE_REL_PATH = Path("bin/usage.txt")
MODULES_REL_DIR = Path("modules")
TESTS_REL_DIR = Path("tests")
TEST_RUNNER_NAME = "run.py"
SELFTEST_INCLUDE_NAME = "selftest.py"
SELFTEST_SUITES_NAME = "suites"

MODULE_SUFFIX = ".py"

BUNDLED_HOME = Path(__file__).resolve().parents[1] / "home"


def bundled_home() -> Path:
    return BUNDLED_HOME
