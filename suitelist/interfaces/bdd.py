"""Interface for suite files written with ``suitelist.bdd``.

The parameter is an ``os.pathsep``-separated list of directories put in
front of ``sys.path`` before the suite file is loaded.
"""

from __future__ import annotations

import os
import runpy
import sys
from typing import Any, Dict, List, Optional

from suitelist import bdd
from suitelist.config import defaults


def _inherited(suites: List[bdd.Suite], case: bdd.Case, attr: str) -> Optional[float]:
    value = getattr(case, attr)
    if value is not None:
        return value
    for suite in reversed(suites):
        value = getattr(suite, attr)
        if value is not None:
            return value
    return None


def describe_tests(root: bdd.Suite, suite_file: str) -> List[Dict[str, Any]]:
    """Flatten a collected suite tree into descriptor dicts, in declaration order."""
    out: List[Dict[str, Any]] = []

    def walk(suite: bdd.Suite, suites: List[bdd.Suite]) -> None:
        for child in suite.children:
            if isinstance(child, bdd.Suite):
                walk(child, suites + [child])
                continue

            titles = [s.title for s in suites if s is not root] + [child.title]
            test: Dict[str, Any] = {"path": {"file": suite_file, "path": titles}}
            if child.fn is None or child.pending or any(s.pending for s in suites):
                test["skipped"] = True
            if child.exclusive or any(s.exclusive for s in suites):
                test["only"] = True
            timeout = _inherited(suites, child, "timeout_ms")
            if timeout is not None:
                test["timeout"] = timeout
            slow = _inherited(suites, child, "slow_ms")
            if slow is not None:
                test["slow"] = slow
            out.append(test)

    walk(root, [root])
    return out


def list_tests(parameter: str, suite_file: str) -> List[Dict[str, Any]]:
    for entry in reversed([p for p in parameter.split(os.pathsep) if p]):
        sys.path.insert(0, entry)
    with bdd.collecting() as root:
        runpy.run_path(suite_file, run_name=defaults.SUITE_RUN_NAME)
    return describe_tests(root, suite_file)
