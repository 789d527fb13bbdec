"""
Command Signature Definitions

This module defines how an issued command is identified: its name plus the
normalized form of every positional argument. Arguments are normalized the
way a Redis client encodes them before writing to the wire, so that
``"1"``, ``b"1"`` and ``1`` all describe the same command.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Tuple

from ..config.settings import settings
from ..errors import DataError


def encode_arg(value: Any, encoding: str = None) -> bytes:
    """
    Normalize a single command argument into bytes.

    Args:
        value: The argument as passed by the caller
        encoding: Text encoding for str arguments (default from settings)

    Returns:
        The bytes a Redis client would send for this argument

    Raises:
        DataError: For None, bool and any other unsupported type
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    # bool is an int subclass, reject it before the numeric branch
    if isinstance(value, bool):
        raise DataError("Invalid input of type: 'bool'. Convert to a bytes, string, int or float first.")
    if isinstance(value, int):
        return str(value).encode()
    if isinstance(value, float):
        return repr(value).encode()
    if isinstance(value, str):
        return value.encode(encoding or settings.ENCODING)
    raise DataError(
        f"Invalid input of type: '{type(value).__name__}'. "
        f"Convert to a bytes, string, int or float first."
    )


def encode_args(args: Iterable[Any], encoding: str = None) -> Tuple[bytes, ...]:
    """Normalize a whole argument list."""
    return tuple(encode_arg(arg, encoding) for arg in args)


@dataclass(frozen=True)
class CommandSignature:
    """
    Identifies a registered or issued command.

    Attributes:
        name: The command verb, compared case-sensitively
        args: Normalized arguments, or None for a generic signature that
              matches any argument list for the same name
    """
    name: str
    args: Optional[Tuple[bytes, ...]] = field(default=None)

    @classmethod
    def exact(cls, name: str, args: Iterable[Any], encoding: str = None) -> "CommandSignature":
        """Build a signature that only matches these exact arguments."""
        return cls(name=name, args=encode_args(args, encoding))

    @classmethod
    def generic(cls, name: str) -> "CommandSignature":
        """Build a signature that matches any arguments for ``name``."""
        return cls(name=name, args=None)

    @property
    def is_generic(self) -> bool:
        return self.args is None

    def matches(self, name: str, args: Tuple[bytes, ...]) -> bool:
        """Check whether an issued command falls under this signature."""
        if self.name != name:
            return False
        if self.is_generic:
            return True
        return self.args == args

    def __str__(self) -> str:
        if self.is_generic:
            return f"{self.name} *"
        return " ".join([self.name] + [repr(arg) for arg in self.args])
