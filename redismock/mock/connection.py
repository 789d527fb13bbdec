"""
Mock Connection Module

This module implements the connection facade that code under test talks to
in place of a real pipelined Redis connection.

Two ways of issuing commands are supported:
- do(): synchronous round trip, the reply is resolved immediately
- send() ... receive(): pipelining, replies are resolved later in the same
  order the commands were sent

Usage:
    conn = MockConn()
    conn.command("HGETALL", "person:1").expect_map({"name": "Mr. Johson", "age": "42"})

    conn.do("HGETALL", "person:1")   # ['name', 'Mr. Johson', 'age', '42']
    conn.do("HGETALL", "person:1")   # raises ResponsesExhausted
"""

import logging
import threading
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Deque, List, Optional

from ..config.settings import settings
from ..errors import (
    CommandNotRegistered,
    ExpectationsNotMet,
    NothingToReceive,
    as_exception,
)
from ..protocol.commands import CommandSignature, encode_args
from .gate import ReceiveGate
from .registry import Cmd, CommandRegistry

logger = logging.getLogger(__name__)

Hook = Callable[[], Optional[BaseException]]


@dataclass
class PendingCall:
    """
    A sent command waiting for receive().

    Exactly one of cmd or error is set: the Cmd the command matched, or the
    match failure captured at send() time.
    """
    cmd: Optional[Cmd] = None
    error: Optional[CommandNotRegistered] = None


class BaseMockConn:
    """
    Registry, pending-call queue and lifecycle hooks shared by the threaded
    and asyncio connection facades.

    All mutating operations are serialized behind a single lock. Independent
    connection instances share no state.

    Attributes:
        decode_responses: Return textual replies as str instead of bytes
        encoding: Encoding used for str arguments and textual replies
        receive_wait: When set, receive() waits on gate before resolving
        close_mock, err_mock, flush_mock: Optional lifecycle overrides,
            each a callable returning an error or None; a
            non-exception result is raised as SimulatedError
    """

    def __init__(
            self,
            decode_responses: bool = None,
            encoding: str = None,
            receive_wait: bool = None,
            close_mock: Hook = None,
            err_mock: Hook = None,
            flush_mock: Hook = None,
    ):
        self.decode_responses = (
            decode_responses if decode_responses is not None else settings.DECODE_RESPONSES
        )
        self.encoding = encoding if encoding is not None else settings.ENCODING
        self.receive_wait = receive_wait if receive_wait is not None else settings.RECEIVE_WAIT

        self.close_mock = close_mock
        self.err_mock = err_mock
        self.flush_mock = flush_mock

        self._lock = threading.RLock()
        self._registry = CommandRegistry(self._lock, self.encoding)
        self._queue: Deque[PendingCall] = deque()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def command(self, name: str, *args: Any) -> Cmd:
        """
        Register a command matched on its name and exact arguments.

        Registering the same signature twice returns the same Cmd.
        """
        return self._registry.register(CommandSignature.exact(name, args, self.encoding))

    def generic_command(self, name: str) -> Cmd:
        """Register a command matched on its name alone."""
        return self._registry.register(CommandSignature.generic(name))

    def find(self, name: str, *args: Any) -> Optional[Cmd]:
        """Return the exact registration for ``name``/``args`` without creating one."""
        return self._registry.find(CommandSignature.exact(name, args, self.encoding))

    def commands(self) -> List[Cmd]:
        """Every registered Cmd in registration order."""
        return self._registry.commands()

    # ------------------------------------------------------------------
    # Engine
    # ------------------------------------------------------------------

    def _do(self, name: str, args: tuple) -> Any:
        encoded = encode_args(args, self.encoding)
        with self._lock:
            cmd = self._registry.match(name, encoded)
            reply = cmd.pop_next()
        logger.debug(f"do {name} -> {reply.status.name} via {cmd.signature}")
        return reply.resolve(self.decode_responses, self.encoding)

    def _enqueue(self, name: str, args: tuple) -> None:
        encoded = encode_args(args, self.encoding)
        with self._lock:
            try:
                pending = PendingCall(cmd=self._registry.match(name, encoded))
            except CommandNotRegistered as exc:
                logger.warning(f"send {name}: {exc}")
                pending = PendingCall(error=exc)
            self._queue.append(pending)
        logger.debug(f"send {name} queued")

    def _dequeue(self) -> PendingCall:
        with self._lock:
            if not self._queue:
                raise NothingToReceive()
            return self._queue.popleft()

    def _resolve(self, pending: PendingCall) -> Any:
        if pending.error is not None:
            raise pending.error

        reply = pending.cmd.pop_next()
        logger.debug(f"receive -> {reply.status.name} via {pending.cmd.signature}")
        return reply.resolve(self.decode_responses, self.encoding)

    def pending(self) -> int:
        """Number of sent commands not yet received."""
        with self._lock:
            return len(self._queue)

    # ------------------------------------------------------------------
    # Reset and inspection
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Drop every registration and every pending call."""
        with self._lock:
            self._registry.clear()
            self._queue.clear()
        logger.debug("Cleared registrations and pending calls")

    def stats(self, cmd: Cmd) -> int:
        """How many replies ``cmd`` has handed out."""
        with self._lock:
            return cmd.calls

    def expectations_were_met(self) -> None:
        """
        Check every registration was used as scripted.

        Raises:
            ExpectationsNotMet: Listing each Cmd never called or with
                                replies left over
        """
        problems = []
        for cmd in self._registry.commands():
            if not cmd.called:
                problems.append(f"command {cmd.signature} not called")
            left = cmd.pending_replies()
            if left:
                problems.append(f"command {cmd.signature} has {left} unconsumed replies")
        if problems:
            raise ExpectationsNotMet(problems)

    # ------------------------------------------------------------------
    # Lifecycle hooks
    # ------------------------------------------------------------------

    def _run_hook(self, hook: Optional[Hook]) -> None:
        if hook is not None:
            error = hook()
            if error is None:
                return
            raise as_exception(error)

    def err(self) -> Optional[BaseException]:
        """None unless err_mock is set; returns what err_mock returns."""
        if self.err_mock is not None:
            return self.err_mock()
        return None


class MockConn(BaseMockConn):
    """
    In-memory stand-in for a pipelined Redis connection, for threaded code.

    One thread may send() while another drains with receive(). With
    receive_wait set, each receive() blocks until the driving test calls
    gate.signal():

        conn = MockConn(receive_wait=True)
        ...
        worker = threading.Thread(target=drain, args=(conn,))
        worker.start()
        conn.gate.signal()   # first receive() may now resolve
    """

    def __init__(self, *args, gate: ReceiveGate = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.gate = gate if gate is not None else ReceiveGate()

    def do(self, name: str, *args: Any) -> Any:
        """
        Issue a command and resolve its reply immediately.

        Returns:
            The next queued value for the matching registration

        Raises:
            CommandNotRegistered: If nothing matches
            ResponsesExhausted: If the match has no replies left
            The registered error for an expect_error() reply
        """
        return self._do(name, args)

    def send(self, name: str, *args: Any) -> None:
        """
        Queue a command for a later receive().

        A match failure is not reported here; it is captured and raised by
        the receive() that dequeues this call.
        """
        self._enqueue(name, args)

    def receive(self) -> Any:
        """
        Resolve the oldest sent command.

        When receive_wait is set, blocks on the gate after dequeuing and
        before resolving. There is no timeout.

        Raises:
            NothingToReceive: If nothing was sent
            CommandNotRegistered: If the sent command matched nothing
            ResponsesExhausted: If the match has no replies left
            The registered error for an expect_error() reply
        """
        pending = self._dequeue()

        if self.receive_wait:
            logger.debug("receive waiting on gate")
            self.gate.wait()

        return self._resolve(pending)

    def flush(self) -> None:
        """No-op unless flush_mock is set; raises the error it returns."""
        self._run_hook(self.flush_mock)

    def close(self) -> None:
        """No-op unless close_mock is set; raises the error it returns."""
        self._run_hook(self.close_mock)

    def __enter__(self) -> "MockConn":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
