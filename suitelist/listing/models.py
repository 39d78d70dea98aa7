"""Test descriptor dataclasses and the listing error type.

Descriptors mirror the JSON objects a worker prints: optional fields are
``None`` when the worker did not report them and are left out again by
``to_dict`` so the worker's output round-trips unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

_FLAG_FIELDS = ("skipped", "only")
_NUMBER_FIELDS = ("timeout", "slow")
_OPTIONAL_FIELDS = _FLAG_FIELDS + _NUMBER_FIELDS


@dataclass
class TestPath:
    """Location of a single test.

    Attributes:
        file: Suite file the test was declared in
        path: Title chain from the outermost describe to the test itself
    """

    __test__ = False  # not a pytest test class

    file: str
    path: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "TestPath":
        if not isinstance(data, dict):
            raise ValueError(f"Test path must be an object, got {type(data).__name__}")
        file = data.get("file")
        titles = data.get("path")
        if not isinstance(file, str):
            raise ValueError("Test path is missing a 'file' string")
        if not isinstance(titles, list) or not all(isinstance(t, str) for t in titles):
            raise ValueError("Test path is missing a 'path' list of strings")
        return cls(file=file, path=list(titles))

    def to_dict(self) -> Dict[str, Any]:
        return {"file": self.file, "path": list(self.path)}


@dataclass
class TestDescriptor:
    """A listed test plus the markers and overrides that apply to it."""

    __test__ = False  # not a pytest test class

    path: TestPath
    skipped: Optional[bool] = None
    only: Optional[bool] = None
    timeout: Optional[float] = None
    slow: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Any) -> "TestDescriptor":
        if not isinstance(data, dict):
            raise ValueError(f"Test descriptor must be an object, got {type(data).__name__}")
        if "path" not in data:
            raise ValueError("Test descriptor is missing 'path'")
        for name in _FLAG_FIELDS:
            if name in data and not isinstance(data[name], bool):
                raise ValueError(f"Test descriptor '{name}' must be a boolean")
        for name in _NUMBER_FIELDS:
            value = data.get(name)
            if name in data and (isinstance(value, bool) or not isinstance(value, (int, float))):
                raise ValueError(f"Test descriptor '{name}' must be a number")
        return cls(
            path=TestPath.from_dict(data["path"]),
            **{name: data[name] for name in _OPTIONAL_FIELDS if name in data},
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"path": self.path.to_dict()}
        for name in _OPTIONAL_FIELDS:
            value = getattr(self, name)
            if value is not None:
                out[name] = value
        return out


ListResult = List[TestDescriptor]


def _rebuild_list_test_error(
    cls: type, suite_name: str, error_output: Optional[str], timeout: bool
) -> "ListTestError":
    error = cls(suite_name, error_output)
    error.timeout = timeout
    return error


class ListTestError(Exception):
    """Listing the tests of a suite file failed.

    ``message`` is the identifying string the error was built from. ``stack``
    is the same string, followed by the worker's captured error output when
    there is any. ``timeout`` is only set for listings that ran out of time.
    """

    def __init__(self, suite_name: str = "", error_output: Optional[str] = None):
        super().__init__(suite_name)
        self.message = suite_name
        self.error_output = error_output
        self.stack = f"{suite_name}\n{error_output}" if error_output else suite_name
        self.timeout = False

    def __reduce__(self):
        return (
            _rebuild_list_test_error,
            (type(self), self.message, self.error_output, self.timeout),
        )

    @classmethod
    def load_failure(
        cls, suite_file: str, reason: str, error_output: Optional[str] = None
    ) -> "ListTestError":
        return cls(f"Failed to process {suite_file}: {reason}", error_output)

    @classmethod
    def timed_out(cls, suite_file: str) -> "ListTestError":
        error = cls(f"Timed out while listing tests of {suite_file}")
        error.timeout = True
        return error
