"""Subprocess-isolated, time-bounded listing of suite files."""

from __future__ import annotations

from .lister import SuiteLister, WorkerProcess, list_tests_of_file, parse_listing, spawn_worker
from .models import ListResult, ListTestError, TestDescriptor, TestPath

__all__ = [
    "ListResult",
    "ListTestError",
    "SuiteLister",
    "TestDescriptor",
    "TestPath",
    "WorkerProcess",
    "list_tests_of_file",
    "parse_listing",
    "spawn_worker",
]
