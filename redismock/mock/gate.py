"""
Receive Gates

A gate lets the driving test decide exactly when a queued receive() may
resolve. signal() behaves like a send on an unbuffered channel: it hands one
permit over and only returns once a waiting receive() has taken it.

ReceiveGate serves threaded callers, AsyncReceiveGate serves coroutines on a
single event loop. Both assume one driving caller issuing signals.
"""

import asyncio
import logging
import threading
from typing import Optional

from ..errors import GateTimeout

logger = logging.getLogger(__name__)


class ReceiveGate:
    """Rendezvous between a driving thread and blocked receive() calls."""

    def __init__(self):
        self._cond = threading.Condition()
        self._permits = 0
        self._issued = 0
        self._taken = 0

    def signal(self, timeout: Optional[float] = None) -> None:
        """
        Let exactly one receive() proceed.

        Args:
            timeout: Seconds to wait for a receiver (None waits forever)

        Raises:
            GateTimeout: If no receive() took the permit in time; the
                         permit is withdrawn
        """
        with self._cond:
            self._permits += 1
            self._issued += 1
            ticket = self._issued
            self._cond.notify_all()

            if not self._cond.wait_for(lambda: self._taken >= ticket, timeout):
                self._permits -= 1
                self._issued -= 1
                raise GateTimeout(f"no receive() took gate signal within {timeout}s")
        logger.debug(f"Gate signal {ticket} collected")

    def wait(self) -> None:
        """Block until a permit is handed over. Never times out."""
        with self._cond:
            self._cond.wait_for(lambda: self._permits > 0)
            self._permits -= 1
            self._taken += 1
            self._cond.notify_all()


class AsyncReceiveGate:
    """Rendezvous between a driving task and suspended receive() coroutines."""

    def __init__(self):
        self._cond = asyncio.Condition()
        self._permits = 0
        self._issued = 0
        self._taken = 0

    async def signal(self, timeout: Optional[float] = None) -> None:
        """Let exactly one receive() proceed; see ReceiveGate.signal()."""
        async with self._cond:
            self._permits += 1
            self._issued += 1
            ticket = self._issued
            self._cond.notify_all()

            try:
                await asyncio.wait_for(
                    self._cond.wait_for(lambda: self._taken >= ticket), timeout
                )
            except asyncio.TimeoutError:
                self._permits -= 1
                self._issued -= 1
                raise GateTimeout(f"no receive() took gate signal within {timeout}s")
        logger.debug(f"Gate signal {ticket} collected")

    async def wait(self) -> None:
        async with self._cond:
            await self._cond.wait_for(lambda: self._permits > 0)
            self._permits -= 1
            self._taken += 1
            self._cond.notify_all()
