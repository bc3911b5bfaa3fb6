"""
Typed errors raised by the integer helpers and the discrete-log groups.
"""


class DlogError(Exception):
    """Root of every error raised by this package."""


class InvalidArgument(DlogError, ValueError):
    """An argument is outside the domain the operation accepts."""


class ArithmeticDomainError(DlogError, ArithmeticError):
    """The inputs admit no mathematical answer (e.g. no modular inverse)."""


class GroupMismatchError(DlogError, ValueError):
    """An element was handed to a group that did not produce it."""


class EncodingLengthError(DlogError, ValueError):
    """A byte string is too long to be encoded as one group element."""


class ConstructionError(DlogError, ValueError):
    """A group could not be built from the requested parameters."""
