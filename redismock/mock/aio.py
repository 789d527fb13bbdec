"""
Asyncio Mock Connection

Coroutine flavour of MockConn for code written against an asyncio Redis
client. Registration, matching and the error taxonomy are shared with
MockConn; only the issuing side is awaitable.

With receive_wait set, a suspended receive() resumes only after the driving
task awaits gate.signal().
"""

import logging
from typing import Any

from .connection import BaseMockConn
from .gate import AsyncReceiveGate

logger = logging.getLogger(__name__)


class AsyncMockConn(BaseMockConn):
    """In-memory stand-in for an asyncio pipelined Redis connection."""

    def __init__(self, *args, gate: AsyncReceiveGate = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.gate = gate if gate is not None else AsyncReceiveGate()

    async def execute_command(self, name: str, *args: Any) -> Any:
        """Issue a command and resolve its reply immediately."""
        return self._do(name, args)

    do = execute_command

    async def send(self, name: str, *args: Any) -> None:
        """Queue a command; match failures surface on receive()."""
        self._enqueue(name, args)

    async def receive(self) -> Any:
        """Resolve the oldest sent command, waiting on the gate if armed."""
        pending = self._dequeue()

        if self.receive_wait:
            logger.debug("receive waiting on gate")
            await self.gate.wait()

        return self._resolve(pending)

    async def flush(self) -> None:
        self._run_hook(self.flush_mock)

    async def close(self) -> None:
        self._run_hook(self.close_mock)

    async def __aenter__(self) -> "AsyncMockConn":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
