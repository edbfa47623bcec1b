"""
Error kinds raised by the index structures and the facet document resolver.

Each kind also derives from the matching builtin so callers can catch either
the project type or the familiar stdlib family (KeyError, OSError, ValueError).
"""


class TextGraphIndexError(Exception):
    """Base class for all tdt_index errors."""


class NotFound(TextGraphIndexError, KeyError):
    """Lookup miss on a key that was never recorded."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return Exception.__str__(self)


class IOFailure(TextGraphIndexError, OSError):
    """An external lookup (filename, scope, path) could not be completed."""


class InvalidArgument(TextGraphIndexError, ValueError):
    """Caller contract violation, e.g. a negative count."""
