"""
Canned Reply Definitions

This module defines the response entries queued on a registered command and
the flattening of record-like replies into alternating key/value sequences.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Type, Union

from ..errors import as_exception
from .commands import encode_arg


class ReplyStatus(Enum):
    """Enumeration of reply kinds."""
    VALUE = "VALUE"
    ERROR = "ERROR"


def flatten_map(mapping: Mapping[Any, Any]) -> List[Any]:
    """
    Flatten a mapping into ``[key1, value1, key2, value2, ...]``.

    Order follows the mapping's own iteration order.

    Examples:
        >>> flatten_map({"name": "Mr. Johson", "age": "42"})
        ['name', 'Mr. Johson', 'age', '42']
    """
    flat = []
    for key, value in mapping.items():
        flat.append(key)
        flat.append(value)
    return flat


def _encode_items(items: Iterable[Any], encoding: Optional[str]) -> List[bytes]:
    return [encode_arg(item, encoding) for item in items]


@dataclass
class Reply:
    """
    A single queued outcome for a registered command.

    Attributes:
        status: VALUE or ERROR
        value: The payload returned for VALUE replies
        error: The exception raised for ERROR replies
        textual: True when value is a list of encoded strings that should
                 follow the connection's decode_responses policy
    """
    status: ReplyStatus
    value: Any = None
    error: Optional[Union[BaseException, Type[BaseException]]] = None
    textual: bool = False

    @classmethod
    def of(cls, value: Any) -> "Reply":
        """Create a reply returned exactly as given."""
        return cls(status=ReplyStatus.VALUE, value=value)

    @classmethod
    def of_map(cls, mapping: Mapping[Any, Any], encoding: str = None) -> "Reply":
        """
        Create a flattened record reply.

        Raises:
            DataError: If a key or value cannot be encoded
        """
        return cls(
            status=ReplyStatus.VALUE,
            value=_encode_items(flatten_map(mapping), encoding),
            textual=True,
        )

    @classmethod
    def of_strings(cls, values: Iterable[Any], encoding: str = None) -> "Reply":
        """Create a list-of-strings reply; raises DataError like of_map()."""
        return cls(status=ReplyStatus.VALUE, value=_encode_items(values, encoding), textual=True)

    @classmethod
    def failure(cls, error: Any) -> "Reply":
        """
        Create an error reply.

        Exception instances and classes are raised as given; anything else
        becomes a SimulatedError carrying its text.
        """
        return cls(status=ReplyStatus.ERROR, error=as_exception(error))

    @property
    def is_error(self) -> bool:
        return self.status == ReplyStatus.ERROR

    def resolve(self, decode: bool, encoding: str) -> Any:
        """
        Produce the caller-visible outcome of this reply.

        Returns:
            The payload, with textual items as str when decode is set and
            as bytes otherwise

        Raises:
            The registered error for ERROR replies
        """
        if self.is_error:
            raise self.error
        if self.textual:
            if decode:
                return [item.decode(encoding) for item in self.value]
            return list(self.value)
        return self.value
