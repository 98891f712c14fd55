"""Errors raised by the interval scheduler."""

from typing import Any


class IntervalError(Exception):
    """Base class for interval scheduler errors."""

    pass


class InvalidArgumentError(IntervalError, TypeError, ValueError):
    """A bad argument was passed when registering a handler.

    Raised synchronously from ``start``; never raised once a handle exists.
    """

    def __init__(self, argument: str, value: Any, expected: str):
        super().__init__(
            f'Invalid argument: "{argument}". Expected {expected}, got {value!r}.'
        )
        self.argument = argument
        self.value = value
