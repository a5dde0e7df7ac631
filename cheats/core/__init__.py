"""Core types: codes, output channels and errors."""

from .code import Code, FunctionInvokable, Invokable, as_invokable, validate_name
from .exceptions import (
    CheatsError,
    CodeAlreadyExists,
    CodeDoesNotExist,
    CodeError,
    InvalidName,
    NameCollision,
    NotFound,
    ShellError,
    WhitespaceError,
)
from .stream import ReadWrite, Stream, drain

__all__ = [
    "Code",
    "Invokable",
    "FunctionInvokable",
    "as_invokable",
    "validate_name",
    "ReadWrite",
    "Stream",
    "drain",
    "CheatsError",
    "CodeError",
    "WhitespaceError",
    "InvalidName",
    "ShellError",
    "CodeAlreadyExists",
    "NameCollision",
    "CodeDoesNotExist",
    "NotFound",
]
