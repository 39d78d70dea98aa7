from __future__ import annotations

import asyncio
import signal
from typing import List, Optional, Sequence


class StubWorker:
    """Stub worker process driven by a script instead of a real subprocess.

    The worker writes ``stdout``/``stderr`` and exits with ``exit_code`` after
    ``delay_s``; ``exit_code=None`` means it never exits on its own. ``kill()``
    makes it exit with -SIGKILL unless ``exits_on_kill`` is False. With
    ``closes_pipes=False`` the streams stay open after exit, as when a child
    of the worker inherited them.
    """

    def __init__(
        self,
        stdout: bytes = b"[]",
        stderr: bytes = b"",
        exit_code: Optional[int] = 0,
        delay_s: float = 0.0,
        exits_on_kill: bool = True,
        kill_output: bytes = b"",
        closes_pipes: bool = True,
    ):
        self.stdout = asyncio.StreamReader()
        self.stderr = asyncio.StreamReader()
        self.returncode: Optional[int] = None
        self.kill_calls = 0
        self.reaped = False
        self.closed = False
        self._exited = asyncio.Event()
        self._closes_pipes = closes_pipes
        self._exits_on_kill = exits_on_kill
        self._kill_output = kill_output
        self._script: Optional[asyncio.Task] = None
        if exit_code is not None:
            self._script = asyncio.ensure_future(self._run(stdout, stderr, exit_code, delay_s))

    async def _run(self, stdout: bytes, stderr: bytes, exit_code: int, delay_s: float) -> None:
        if delay_s:
            await asyncio.sleep(delay_s)
        self._finish(exit_code, stdout, stderr)

    def _finish(self, exit_code: int, stdout: bytes = b"", stderr: bytes = b"") -> None:
        if self.returncode is not None:
            return
        if stdout:
            self.stdout.feed_data(stdout)
        if stderr:
            self.stderr.feed_data(stderr)
        if self._closes_pipes:
            self.stdout.feed_eof()
            self.stderr.feed_eof()
        self.returncode = exit_code
        self._exited.set()

    def exit(self, exit_code: int) -> None:
        self._finish(exit_code)

    async def wait(self) -> int:
        await self._exited.wait()
        self.reaped = True
        return self.returncode

    def close(self) -> None:
        self.closed = True
        self.stdout.feed_eof()
        self.stderr.feed_eof()

    def kill(self) -> None:
        self.kill_calls += 1
        if self._script is not None:
            self._script.cancel()
        if self._exits_on_kill:
            self._finish(-signal.SIGKILL, self._kill_output)


class StubLauncher:
    """Launcher recording its calls and handing out StubWorkers."""

    def __init__(self, **worker_kwargs):
        self.calls: List[List[str]] = []
        self.workers: List[StubWorker] = []
        self._worker_kwargs = worker_kwargs

    async def __call__(self, args: Sequence[str]) -> StubWorker:
        self.calls.append(list(args))
        worker = StubWorker(**self._worker_kwargs)
        self.workers.append(worker)
        return worker

    @property
    def worker(self) -> StubWorker:
        return self.workers[-1]
