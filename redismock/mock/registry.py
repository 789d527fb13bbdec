"""
Command Registry Module

This module holds the registered commands of a mock connection and the
matching rules used to find which one an issued command refers to.

Matching:
    1. Exact registrations (name and every argument equal), in
       registration order
    2. Generic registrations (name only), in registration order
    3. Otherwise CommandNotRegistered
"""

import logging
import threading
from collections import deque
from typing import Any, Deque, List, Mapping, Optional, Tuple

from ..errors import CommandNotRegistered, ResponsesExhausted
from ..protocol.commands import CommandSignature
from ..protocol.replies import Reply

logger = logging.getLogger(__name__)


class Cmd:
    """
    A registered command and its FIFO queue of canned replies.

    The builder methods append to the queue and return the same Cmd, so
    several calls can be scripted in one chain:

        conn.command("HGETALL", "person:1").expect_map(
            {"name": "Mr. Johson", "age": "42"}
        ).expect_error("simulated error")

    Attributes:
        signature: The CommandSignature this record answers
        calls: How many replies have been consumed so far
    """

    def __init__(self, signature: CommandSignature, lock: threading.RLock, encoding: str = None):
        self.signature = signature
        self.encoding = encoding
        self.calls = 0
        self._responses: Deque[Reply] = deque()
        self._lock = lock

    @property
    def name(self) -> str:
        return self.signature.name

    @property
    def called(self) -> bool:
        return self.calls > 0

    def _append(self, reply: Reply) -> "Cmd":
        with self._lock:
            self._responses.append(reply)
        logger.debug(f"Queued {reply.status.name} reply for {self.signature}")
        return self

    def expect(self, value: Any) -> "Cmd":
        """Queue a reply returned exactly as given."""
        return self._append(Reply.of(value))

    def expect_map(self, mapping: Mapping[Any, Any]) -> "Cmd":
        """
        Queue a record reply, flattened into alternating keys and values.

        Raises:
            DataError: If a key or value cannot be encoded; nothing is queued
        """
        return self._append(Reply.of_map(mapping, self.encoding))

    def expect_slice(self, *values: Any) -> "Cmd":
        """Queue a list reply."""
        return self._append(Reply.of(list(values)))

    def expect_string_slice(self, *values: Any) -> "Cmd":
        """Queue a list-of-strings reply."""
        return self._append(Reply.of_strings(values, self.encoding))

    def expect_error(self, error: Any) -> "Cmd":
        """Queue a failure; anything but an exception is wrapped in SimulatedError."""
        return self._append(Reply.failure(error))

    def pending_replies(self) -> int:
        """Number of replies not yet consumed."""
        with self._lock:
            return len(self._responses)

    def pop_next(self) -> Reply:
        """
        Remove and return the oldest queued reply.

        Raises:
            ResponsesExhausted: If nothing is queued
        """
        with self._lock:
            if not self._responses:
                raise ResponsesExhausted(self.name)
            self.calls += 1
            return self._responses.popleft()

    def __repr__(self) -> str:
        return f"<Cmd {self.signature} replies={len(self._responses)} calls={self.calls}>"


class CommandRegistry:
    """
    Ordered set of registered commands.

    Registration never duplicates a signature: registering an identical
    signature again returns the existing Cmd so more replies can be queued.
    """

    def __init__(self, lock: threading.RLock = None, encoding: str = None):
        self._lock = lock if lock is not None else threading.RLock()
        self._encoding = encoding
        self._commands: List[Cmd] = []

    def register(self, signature: CommandSignature) -> Cmd:
        """Return the Cmd for ``signature``, creating it if needed."""
        with self._lock:
            for cmd in self._commands:
                if cmd.signature == signature:
                    return cmd

            cmd = Cmd(signature, self._lock, self._encoding)
            self._commands.append(cmd)
        logger.debug(f"Registered command {signature}")
        return cmd

    def find(self, signature: CommandSignature) -> Optional[Cmd]:
        """Return the Cmd registered under exactly ``signature``, if any."""
        with self._lock:
            for cmd in self._commands:
                if cmd.signature == signature:
                    return cmd
        return None

    def match(self, name: str, args: Tuple[bytes, ...]) -> Cmd:
        """
        Find the Cmd an issued command refers to.

        Args:
            name: Command name as issued
            args: Normalized arguments as issued

        Returns:
            The matching Cmd, exact registrations first

        Raises:
            CommandNotRegistered: If neither an exact nor a generic
                                  registration matches
        """
        with self._lock:
            for cmd in self._commands:
                if not cmd.signature.is_generic and cmd.signature.matches(name, args):
                    return cmd
            for cmd in self._commands:
                if cmd.signature.is_generic and cmd.signature.matches(name, args):
                    return cmd
        raise CommandNotRegistered(name, args)

    def commands(self) -> List[Cmd]:
        """Snapshot of every registered Cmd in registration order."""
        with self._lock:
            return list(self._commands)

    def clear(self) -> None:
        """Forget every registered command."""
        with self._lock:
            self._commands.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._commands)
