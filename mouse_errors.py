"""
Error types raised by the pointer controller and its cursor backends.
"""


class MouseError(Exception):
    """Base class for every pointer operation failure"""


class InvalidInputError(MouseError):
    """Caller-supplied values break a precondition (no OS call was made)"""


class OutOfBoundsError(MouseError):
    """Requested position lies outside the live screen bounds"""


class ConversionError(MouseError):
    """Coordinate cannot be represented in the OS call's numeric domain"""


class CursorIOError(MouseError):
    """The cursor backend itself failed"""
