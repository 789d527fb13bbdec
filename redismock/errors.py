"""
Mock Connection Errors

Every failure a mock connection reports derives from MockError, so tests
can catch the whole family at once. Errors registered through
Cmd.expect_error() are raised verbatim and do not need to derive from it.
"""

from typing import Any, Optional, Sequence


class MockError(Exception):
    """Base class for failures raised by the mock itself."""


class DataError(MockError, TypeError):
    """An argument could not be normalized into a command signature."""


class CommandNotRegistered(MockError):
    """No exact or generic registration matches the issued command."""

    def __init__(self, name: str, args: Optional[Sequence[bytes]] = None):
        self.name = name
        self.args_ = tuple(args or ())
        rendered = " ".join([name] + [repr(arg) for arg in self.args_])
        super().__init__(f"command {rendered} not registered in redismock library")


class ResponsesExhausted(MockError):
    """The matched command has no queued responses left."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"no more responses registered for command {name}")


class NothingToReceive(MockError):
    """receive() was called without a pending send()."""

    def __init__(self):
        super().__init__("no more items to receive")


class SimulatedError(MockError):
    """A string error registered through Cmd.expect_error()."""


class ExpectationsNotMet(MockError):
    """Registered commands were left uncalled or with unconsumed responses."""

    def __init__(self, problems: Sequence[str]):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


class GateTimeout(MockError):
    """No receive() collected a gate signal in time."""


def as_exception(error: Any):
    """
    Return ``error`` if it can be raised, else a SimulatedError with its text.

    Exception instances and exception classes are kept as given.
    """
    if isinstance(error, type) and issubclass(error, BaseException):
        return error
    if isinstance(error, BaseException):
        return error
    return SimulatedError(str(error))
