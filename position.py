"""
Screen position model
Signed screen coordinates, bounds validation and unsigned conversion
"""

from typing import NamedTuple, Tuple

from mouse_errors import ConversionError

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1
UINT32_MAX = 2 ** 32 - 1


def _saturate(value: int) -> int:
    return max(INT32_MIN, min(INT32_MAX, value))


def _to_unsigned_component(name: str, value: int) -> int:
    if value < 0 or value > UINT32_MAX:
        raise ConversionError(f"Failed to convert {name} coordinate {value} to an unsigned value")
    return value


class ScreenBounds(NamedTuple):
    """Width and height of the primary display in pixels"""

    width: int
    height: int


class Position(NamedTuple):
    """
    A point in screen space.

    Negative coordinates are allowed here; whether a position is usable is
    answered by is_out_of_bounds() against the bounds current at call time.
    """

    x: int
    y: int

    def is_out_of_bounds(self, bounds: ScreenBounds) -> bool:
        """
        True when the point lies off screen.

        The maximum edge is inclusive: x == width and y == height are in bounds.
        """
        return self.x < 0 or self.y < 0 or self.x > bounds.width or self.y > bounds.height

    def to_unsigned(self) -> Tuple[int, int]:
        """
        Return (x, y) as unsigned 32-bit magnitudes.

        Raises:
            ConversionError: x is checked first; y is only checked once x converts
        """
        ux = _to_unsigned_component("x", self.x)
        uy = _to_unsigned_component("y", self.y)
        return ux, uy

    def offset(self, dx: int, dy: int) -> "Position":
        """Translate by (dx, dy), saturating at the signed 32-bit limits"""
        return Position(_saturate(self.x + dx), _saturate(self.y + dy))
