"""casper test runner.

Runs every ``.py`` file found under the positional paths. The comma
separated files named by ``--includes`` run first and their public names are
visible to each test file. A test file passes when it runs to completion.
"""

import os
import runpy
import sys
import traceback


def _collect(paths):
    files = []
    for path in paths:
        if os.path.isdir(path):
            for dirpath, dirnames, filenames in os.walk(path):
                dirnames.sort()
                files.extend(
                    os.path.join(dirpath, name)
                    for name in sorted(filenames)
                    if name.endswith(".py") and not name.startswith("_")
                )
        elif os.path.isfile(path):
            files.append(path)
        else:
            print(f"casper test: no such path {path}", file=sys.stderr)
    return files


def _includes(args):
    value = args.get("includes")
    if not value:
        return []
    return [item.strip() for item in str(value).split(",") if item.strip()]


def _namespace(base, includes):
    namespace = dict(base)
    for include in includes:
        included = runpy.run_path(include, init_globals=dict(base))
        namespace.update(
            (name, value) for name, value in included.items() if not name.startswith("_")
        )
    return namespace


def main(context, args):
    base = {
        "require": require,
        "patch_require": patch_require,
        "casper": context,
        "casper_args": args,
    }
    files = _collect(str(item) for item in args.raw_args)
    if not files:
        print("casper test: no test files found", file=sys.stderr)
        return 1
    fail_fast = bool(args.get("fail-fast"))
    failures = 0
    for path in files:
        try:
            runpy.run_path(path, init_globals=_namespace(base, _includes(args)), run_name="__casper_test__")
        except AssertionError as exc:
            failures += 1
            print(f"FAIL {path}: {exc}")
        except Exception:
            failures += 1
            print(f"ERROR {path}")
            traceback.print_exc()
        else:
            print(f"PASS {path}")
        if failures and fail_fast:
            break
    print(f"{len(files)} file(s), {failures} failure(s)")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main(casper, casper_args))
