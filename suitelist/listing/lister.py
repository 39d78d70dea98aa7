"""Bounded subprocess listing of the tests declared in one suite file.

Each request starts one worker process, buffers its stdout and stderr, and
races the worker's exit against an optional timeout. Every failure (crash,
unparseable output, timeout) is reported as a ListTestError.
"""

from __future__ import annotations

import asyncio
import json
import logging
import signal
from typing import List, Optional, Sequence

from suitelist.config import defaults

from .launcher_api import IWorkerProcess, Launcher
from .models import ListTestError, TestDescriptor

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024
_STREAM_LIMIT = 64 * 1024


class _WorkerProtocol(asyncio.subprocess.SubprocessStreamProtocol):
    """Stream protocol that also reports the moment the worker exits."""

    def __init__(self, limit: int, loop: asyncio.AbstractEventLoop) -> None:
        super().__init__(limit=limit, loop=loop)
        self.exited = loop.create_future()

    def process_exited(self) -> None:
        super().process_exited()
        if not self.exited.done():
            self.exited.set_result(None)


class WorkerProcess:
    """A worker subprocess whose ``wait()`` returns as soon as it exits.

    ``asyncio.subprocess.Process.wait()`` can also wait for the pipes to
    close, which never happens while a child of the suite still holds them.
    """

    def __init__(
        self,
        transport: asyncio.SubprocessTransport,
        protocol: _WorkerProtocol,
        loop: asyncio.AbstractEventLoop,
    ) -> None:
        self._transport = transport
        self._protocol = protocol
        self._process = asyncio.subprocess.Process(transport, protocol, loop)
        self.pid = self._process.pid
        self.stdout = self._process.stdout
        self.stderr = self._process.stderr

    @property
    def returncode(self) -> Optional[int]:
        return self._process.returncode

    async def wait(self) -> int:
        await asyncio.shield(self._protocol.exited)
        return self._process.returncode

    def kill(self) -> None:
        self._process.kill()

    def close(self) -> None:
        """Close the pipes, including ones a child of the suite still holds."""
        self._transport.close()


async def spawn_worker(args: Sequence[str]) -> WorkerProcess:
    """Start a ``suitelist.worker`` subprocess with the given arguments."""
    loop = asyncio.get_running_loop()
    transport, protocol = await loop.subprocess_exec(
        lambda: _WorkerProtocol(limit=_STREAM_LIMIT, loop=loop),
        defaults.PYTHON_EXECUTABLE,
        "-m",
        defaults.WORKER_MODULE,
        *args,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    return WorkerProcess(transport, protocol, loop)


async def _drain(stream: Optional[asyncio.StreamReader], buf: bytearray) -> None:
    # Chunks land in buf as they arrive so a cancelled reader keeps what it read
    if stream is None:
        return
    while True:
        chunk = await stream.read(_CHUNK_SIZE)
        if not chunk:
            return
        buf.extend(chunk)


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def _exit_reason(code: int) -> str:
    if code < 0:
        try:
            name = signal.Signals(-code).name
        except ValueError:
            name = str(-code)
        return f"worker was killed by signal {name}"
    return f"worker exited with code {code}"


def parse_listing(stdout: str) -> List[TestDescriptor]:
    """Parse a worker's stdout into descriptors.

    Raises:
        ValueError: If stdout is not a JSON array of test descriptors
    """
    data = json.loads(stdout)
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array, got {type(data).__name__}")
    return [TestDescriptor.from_dict(item) for item in data]


class SuiteLister:
    """Lists suite files through worker subprocesses.

    Requests are independent: each owns its worker, buffers and timer, so
    several listings can run concurrently on one event loop.
    """

    def __init__(
        self,
        launcher: Optional[Launcher] = None,
        reap_timeout_s: float = defaults.REAP_TIMEOUT_S,
        output_grace_s: float = defaults.OUTPUT_GRACE_S,
    ) -> None:
        """Initialize lister.

        Args:
            launcher: Async callable starting a worker from its argument list
                (defaults to spawn_worker)
            reap_timeout_s: How long to wait for a killed worker to exit
            output_grace_s: How long to keep reading output after the worker
                exited; pipes inherited by the suite's own children can stay open
        """
        self._launch = launcher or spawn_worker
        self._reap_timeout_s = reap_timeout_s
        self._output_grace_s = output_grace_s

    async def list_tests_of_file(
        self, timeout_ms: int, interface: str, parameter: str, suite_file: str
    ) -> List[TestDescriptor]:
        """List the tests of ``suite_file`` without running them.

        Args:
            timeout_ms: Listing budget in milliseconds, 0 for no timeout
            interface: Interface module (dotted name or .py path) the worker loads
            parameter: Opaque value forwarded to the interface
            suite_file: Suite file to enumerate

        Returns:
            Descriptors in the order the worker reported them

        Raises:
            ListTestError: If the worker fails, prints garbage or times out
        """
        if timeout_ms < 0:
            raise ValueError(f"timeout_ms must be >= 0, got {timeout_ms}")

        proc = await self._launch([interface, parameter, suite_file])
        logger.debug(f"Listing {suite_file} via {interface} (timeout {timeout_ms}ms)")

        out, err = bytearray(), bytearray()
        readers = [
            asyncio.ensure_future(_drain(proc.stdout, out)),
            asyncio.ensure_future(_drain(proc.stderr, err)),
        ]

        try:
            try:
                if timeout_ms > 0:
                    code = await asyncio.wait_for(proc.wait(), timeout_ms / 1000)
                else:
                    code = await proc.wait()
            except asyncio.TimeoutError:
                logger.info(f"Listing {suite_file} timed out after {timeout_ms}ms, killing worker")
                await self._kill(proc, suite_file)
                raise ListTestError.timed_out(suite_file) from None
            except asyncio.CancelledError:
                await self._kill(proc, suite_file)
                raise

            _, still_open = await asyncio.wait(readers, timeout=self._output_grace_s)
            if still_open:
                logger.warning(
                    f"Output of {suite_file} still open {self._output_grace_s}s after its worker "
                    "exited; using what was read"
                )
        finally:
            for task in readers:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*readers, return_exceptions=True)
            proc.close()

        stderr = _decode(bytes(err))
        if code != 0:
            raise ListTestError.load_failure(suite_file, _exit_reason(code), stderr)
        try:
            tests = parse_listing(_decode(bytes(out)))
        except ValueError as e:
            raise ListTestError.load_failure(suite_file, str(e), stderr) from e

        if stderr:
            logger.debug(f"Worker for {suite_file} wrote to stderr:\n{stderr}")
        return tests

    async def _reap(self, proc: IWorkerProcess, suite_file: str) -> None:
        try:
            await asyncio.wait_for(proc.wait(), self._reap_timeout_s)
        except asyncio.TimeoutError:
            logger.warning(
                f"Worker for {suite_file} did not exit within {self._reap_timeout_s}s of being killed"
            )

    async def _kill(self, proc: IWorkerProcess, suite_file: str) -> None:
        try:
            proc.kill()
        except ProcessLookupError:
            logger.debug(f"Worker for {suite_file} had already exited")

        # Reaping carries on in the background if the caller cancels us
        reap = asyncio.ensure_future(self._reap(proc, suite_file))
        try:
            await asyncio.shield(reap)
        except asyncio.CancelledError:
            logger.warning(f"Cancelled while reaping the worker for {suite_file}")
            raise


async def list_tests_of_file(
    timeout_ms: int,
    interface: str,
    parameter: str,
    suite_file: str,
    launcher: Optional[Launcher] = None,
) -> List[TestDescriptor]:
    """Module-level shortcut for ``SuiteLister(launcher).list_tests_of_file(...)``."""
    return await SuiteLister(launcher).list_tests_of_file(
        timeout_ms, interface, parameter, suite_file
    )
