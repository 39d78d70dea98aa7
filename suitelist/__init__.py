"""List the tests of suite files in isolated, time-bounded worker processes."""

from suitelist.listing import (
    ListResult,
    ListTestError,
    SuiteLister,
    TestDescriptor,
    TestPath,
    list_tests_of_file,
)

__all__ = [
    "ListResult",
    "ListTestError",
    "SuiteLister",
    "TestDescriptor",
    "TestPath",
    "list_tests_of_file",
]
