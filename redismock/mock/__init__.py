"""Mock connection module for Redis-Mock."""

from .aio import AsyncMockConn
from .connection import BaseMockConn, MockConn, PendingCall
from .gate import AsyncReceiveGate, ReceiveGate
from .registry import Cmd, CommandRegistry

__all__ = [
    "AsyncMockConn",
    "AsyncReceiveGate",
    "BaseMockConn",
    "Cmd",
    "CommandRegistry",
    "MockConn",
    "PendingCall",
    "ReceiveGate",
]
