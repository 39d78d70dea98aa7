"""describe/it declarations for suite files.

A suite file declares its tests at import time::

    from suitelist.bdd import describe, it

    with describe("A suite") as suite:
        suite.timeout(1234)

        @it("should print its timeout")
        def _():
            ...

Declarations are recorded into the collection opened by ``collecting()``;
test bodies are stored but never called here.
"""

from __future__ import annotations

import contextlib
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Union


@dataclass
class Case:
    """A declared test. Without a body it is pending."""

    title: str
    fn: Optional[Callable] = None
    pending: bool = False
    exclusive: bool = False
    timeout_ms: Optional[float] = None
    slow_ms: Optional[float] = None

    def __call__(self, fn: Callable) -> Callable:
        """Attach the test body when used as a decorator."""
        self.fn = fn
        return fn

    def timeout(self, ms: float) -> "Case":
        self.timeout_ms = ms
        return self

    def slow(self, ms: float) -> "Case":
        self.slow_ms = ms
        return self


@dataclass
class Suite:
    """A describe block; ``children`` keeps cases and suites in declaration order."""

    title: str
    parent: Optional["Suite"] = field(default=None, repr=False)
    pending: bool = False
    exclusive: bool = False
    timeout_ms: Optional[float] = None
    slow_ms: Optional[float] = None
    children: List[Union["Suite", Case]] = field(default_factory=list)

    def timeout(self, ms: float) -> "Suite":
        self.timeout_ms = ms
        return self

    def slow(self, ms: float) -> "Suite":
        self.slow_ms = ms
        return self

    def ancestry(self) -> List["Suite"]:
        """Suites from the root down to and including this one."""
        chain: List[Suite] = []
        node: Optional[Suite] = self
        while node is not None:
            chain.append(node)
            node = node.parent
        return chain[::-1]


_stack: List[Suite] = []


@contextlib.contextmanager
def collecting() -> Iterator[Suite]:
    """Open a fresh root suite that declarations are recorded into."""
    root = Suite("")
    _stack.append(root)
    try:
        yield root
    finally:
        del _stack[_stack.index(root) :]


def _current() -> Suite:
    if not _stack:
        raise RuntimeError("describe/it used outside of a suite listing")
    return _stack[-1]


@contextlib.contextmanager
def _open_suite(title: str, pending: bool = False, exclusive: bool = False) -> Iterator[Suite]:
    parent = _current()
    suite = Suite(title, parent=parent, pending=pending, exclusive=exclusive)
    parent.children.append(suite)
    _stack.append(suite)
    try:
        yield suite
    finally:
        _stack.pop()


def _add_case(
    title: str, fn: Optional[Callable], pending: bool = False, exclusive: bool = False
) -> Case:
    case = Case(title, fn=fn, pending=pending, exclusive=exclusive)
    _current().children.append(case)
    return case


class _Describe:
    def __call__(self, title: str):
        return _open_suite(title)

    def skip(self, title: str):
        return _open_suite(title, pending=True)

    def only(self, title: str):
        return _open_suite(title, exclusive=True)


class _It:
    def __call__(self, title: str, fn: Optional[Callable] = None) -> Case:
        return _add_case(title, fn)

    def skip(self, title: str, fn: Optional[Callable] = None) -> Case:
        return _add_case(title, fn, pending=True)

    def only(self, title: str, fn: Optional[Callable] = None) -> Case:
        return _add_case(title, fn, exclusive=True)


describe = _Describe()
it = _It()


def timeout(ms: float) -> None:
    """Override the timeout of the innermost open suite."""
    _current().timeout(ms)


def slow(ms: float) -> None:
    """Override the slowness threshold of the innermost open suite."""
    _current().slow(ms)
