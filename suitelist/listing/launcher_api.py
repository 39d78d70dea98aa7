from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional, Protocol, Sequence


class IWorkerProcess(Protocol):
    stdout: Optional[asyncio.StreamReader]
    stderr: Optional[asyncio.StreamReader]

    async def wait(self) -> int: ...

    def kill(self) -> None: ...

    def close(self) -> None: ...


Launcher = Callable[[Sequence[str]], Awaitable[IWorkerProcess]]
