"""Worker process: list one suite file through an interface module.

Usage: python -m suitelist.worker <interface> <parameter> <suite_file>

Prints a JSON array of test descriptors and exits 0. On failure the
traceback goes to stderr and the exit code is 1.
"""

from __future__ import annotations

import contextlib
import importlib
import importlib.util
import json
import os
import sys
import traceback
from types import ModuleType
from typing import Any, List, Optional, Sequence

USAGE = "usage: python -m suitelist.worker <interface> <parameter> <suite_file>"


def load_interface(ref: str) -> ModuleType:
    """Import an interface by dotted module name or by path to a .py file."""
    if ref.endswith(".py") or os.path.isfile(ref) or os.path.isfile(ref + ".py"):
        path = ref if ref.endswith(".py") or os.path.isfile(ref) else ref + ".py"
        name = os.path.splitext(os.path.basename(path))[0]
        spec = importlib.util.spec_from_file_location(f"suitelist_interface_{name}", path)
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load interface from {path}")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module
    return importlib.import_module(ref)


def _jsonable(test: Any) -> Any:
    return test.to_dict() if hasattr(test, "to_dict") else test


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 3:
        print(USAGE, file=sys.stderr)
        return 2
    interface_ref, parameter, suite_file = args

    # Suites may print while loading; keep stdout for the JSON document
    try:
        with contextlib.redirect_stdout(sys.stderr):
            interface = load_interface(interface_ref)
            tests: List[Any] = [_jsonable(t) for t in interface.list_tests(parameter, suite_file)]
    except Exception:
        traceback.print_exc()
        return 1

    json.dump(tests, sys.stdout)
    sys.stdout.write("\n")
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
