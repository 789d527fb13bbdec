"""Protocol module for Redis-Mock."""

from .commands import CommandSignature, encode_arg, encode_args
from .replies import Reply, ReplyStatus, flatten_map

__all__ = [
    "CommandSignature",
    "encode_arg",
    "encode_args",
    "Reply",
    "ReplyStatus",
    "flatten_map",
]
