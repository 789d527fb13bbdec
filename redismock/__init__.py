"""
Redis-Mock: Programmable Pipelined Connection Double

An in-memory stand-in for a pipelined Redis connection. Tests register the
commands they expect and the replies or errors each should yield, then hand
the connection to the code under test.
"""

from .errors import (
    CommandNotRegistered,
    DataError,
    ExpectationsNotMet,
    GateTimeout,
    MockError,
    NothingToReceive,
    ResponsesExhausted,
    SimulatedError,
)
from .mock import AsyncMockConn, Cmd, MockConn

__version__ = "1.0.0"

__all__ = [
    "AsyncMockConn",
    "Cmd",
    "MockConn",
    "CommandNotRegistered",
    "DataError",
    "ExpectationsNotMet",
    "GateTimeout",
    "MockError",
    "NothingToReceive",
    "ResponsesExhausted",
    "SimulatedError",
]
