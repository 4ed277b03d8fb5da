#!/usr/bin/env python3
"""
Mouse Controller Module
Validated pointer movement, clicks, drags and scrolling with click notifications
"""

import math
import time
from typing import Callable, Optional, Tuple

from loguru import logger

from config import MouseSettings, load_settings
from cursor_backend import ButtonAction, CursorBackend, MouseButton, create_cursor_backend
from event_emitter import EventEmitter, Listener
from mouse_errors import InvalidInputError, OutOfBoundsError
from position import Position, ScreenBounds

CLICK_EVENT = "Click"


def _ensure_int_coordinates(x, y) -> None:
    # The OS calls take integers; bool is an int subclass but never a coordinate
    for value in (x, y):
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidInputError(f"Coordinates must be integers, got {x!r},{y!r}")


class MouseController:
    """
    Stateful pointer façade.

    Tracks the last validated cursor position, checks every request against
    the live screen bounds before touching the OS, and emits CLICK_EVENT after
    each successful left click.
    """

    def __init__(
        self,
        backend: Optional[CursorBackend] = None,
        settings: Optional[MouseSettings] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._backend = backend if backend is not None else create_cursor_backend()
        self._settings = settings if settings is not None else load_settings()
        self._clock = clock
        self._sleep = sleep
        self._events = EventEmitter()
        self.current_position = Position(*self._backend.get_cursor_position())
        logger.info("Mouse controller ready at {},{}", *self.current_position)

    @property
    def events(self) -> EventEmitter:
        return self._events

    def on(self, event_name: str, listener: Listener) -> None:
        """Register a listener on this controller's emitter"""
        self._events.register(event_name, listener)

    def get_position(self) -> Tuple[int, int]:
        return self.current_position.x, self.current_position.y

    def print_mouse_position(self) -> Tuple[int, int]:
        """Print the live cursor position (as reported by the OS) and return it"""
        x, y = self._backend.get_cursor_position()
        print(f"Mouse position: ({x}, {y})")
        return x, y

    def close(self) -> None:
        """Release backend resources such as the button state listener"""
        self._backend.close()

    # Validation helpers

    def _screen_bounds(self) -> ScreenBounds:
        # Re-queried every time; the display may change under us
        return ScreenBounds(*self._backend.get_screen_bounds())

    def _ensure_in_bounds(self, position: Position) -> None:
        bounds = self._screen_bounds()
        if position.is_out_of_bounds(bounds):
            raise OutOfBoundsError(
                f"Position {position.x},{position.y} is outside the screen ({bounds.width}x{bounds.height})"
            )

    def _press_and_release(self, button: MouseButton) -> None:
        self._backend.inject_button_event(button, ButtonAction.DOWN)
        self._backend.inject_button_event(button, ButtonAction.UP)

    # Movement

    def move_to(self, x: int, y: int) -> None:
        """
        Move the cursor to an absolute position.

        Checks run in a fixed order: negative input, screen bounds, unsigned
        conversion, then the OS call. The cached position only changes once the
        OS call succeeded.

        Raises:
            InvalidInputError: x or y is not an integer or is negative
            OutOfBoundsError: target is beyond the screen's width or height
            ConversionError: target cannot be passed to the OS as unsigned
            CursorIOError: the backend refused the move
        """
        _ensure_int_coordinates(x, y)
        if x < 0 or y < 0:
            raise InvalidInputError(f"Coordinates must not be negative, got {x},{y}")
        target = Position(x, y)
        self._ensure_in_bounds(target)
        ux, uy = target.to_unsigned()
        self._backend.set_cursor_position(ux, uy)
        self.current_position = target
        logger.debug("Mouse moved to {},{}", x, y)

    def move_relative(self, dx: int, dy: int) -> None:
        """Move by (dx, dy) from the tracked position"""
        target = self.current_position.offset(dx, dy)
        self.move_to(target.x, target.y)

    # Buttons

    def click(self) -> None:
        """Left click at the tracked position, then emit CLICK_EVENT"""
        self._ensure_in_bounds(self.current_position)
        self._press_and_release(MouseButton.LEFT)
        logger.debug("Left click at {},{}", *self.current_position)
        self._events.emit(CLICK_EVENT)

    def double_click(self) -> None:
        self.click()
        self._sleep(self._settings.click_pause)
        self.click()

    def multi_click(self, count: int) -> None:
        """
        Left click count times at the tracked position.

        Bounds are checked once up front. No CLICK_EVENT is emitted.
        """
        if count < 1:
            raise InvalidInputError(f"Click count must be positive, got {count}")
        self._ensure_in_bounds(self.current_position)
        for i in range(count):
            if i:
                self._sleep(self._settings.multi_click_pause)
            self._press_and_release(MouseButton.LEFT)
        logger.debug("{} left clicks at {},{}", count, *self.current_position)

    def right_click(self) -> None:
        # Unlike click(), no event is emitted
        self._ensure_in_bounds(self.current_position)
        self._press_and_release(MouseButton.RIGHT)
        logger.debug("Right click at {},{}", *self.current_position)

    def middle_click(self) -> None:
        self._ensure_in_bounds(self.current_position)
        self._press_and_release(MouseButton.MIDDLE)
        logger.debug("Middle click at {},{}", *self.current_position)

    def is_left_button_pressed(self) -> bool:
        return self._backend.get_async_button_state(MouseButton.LEFT)

    def is_right_button_pressed(self) -> bool:
        return self._backend.get_async_button_state(MouseButton.RIGHT)

    def is_middle_button_pressed(self) -> bool:
        return self._backend.get_async_button_state(MouseButton.MIDDLE)

    # Wheel

    def scroll(self, amount: int) -> None:
        """Scroll vertically by amount notches in one wheel event"""
        self._ensure_in_bounds(self.current_position)
        self._backend.inject_wheel_event(amount)
        logger.debug("Scrolled {}", amount)

    def scroll_with_delay(self, amount: int, delay: float) -> None:
        """Scroll one notch at a time, pausing delay seconds between notches"""
        self._ensure_in_bounds(self.current_position)
        step = 1 if amount > 0 else -1
        for i in range(abs(amount)):
            if i:
                self._sleep(delay)
            self._backend.inject_wheel_event(step)
        logger.debug("Scrolled {} in single steps", amount)

    def scroll_horizontal(self, distance: int) -> None:
        # Not bounds checked, unlike scroll()
        self._backend.inject_wheel_event(distance, horizontal=True)
        logger.debug("Scrolled horizontally {}", distance)

    # Gestures

    def drag_and_drop(self, dx: int, dy: int) -> None:
        """
        Press the left button at the tracked position and release it (dx, dy) away.

        Both ends must be on screen; otherwise nothing is injected and the
        tracked position stays put.
        """
        _ensure_int_coordinates(dx, dy)
        start = self.current_position
        target = start.offset(dx, dy)
        self._ensure_in_bounds(start)
        self._ensure_in_bounds(target)
        ux, uy = target.to_unsigned()
        self._backend.inject_button_event(MouseButton.LEFT, ButtonAction.DOWN)
        try:
            self._backend.set_cursor_position(ux, uy)
        finally:
            # Never leave the OS button held
            self._backend.inject_button_event(MouseButton.LEFT, ButtonAction.UP)
        self.current_position = target
        logger.debug("Dragged from {},{} to {},{}", start.x, start.y, target.x, target.y)

    def hover(self, x: int, y: int, duration: float) -> None:
        """
        Glide in a straight line to (x, y) over duration seconds.

        Progress at elapsed time t is t / duration. A final exact move_to
        corrects timing drift. Any failing step aborts the glide.
        """
        if duration <= 0:
            raise InvalidInputError(f"Hover duration must be positive, got {duration}")
        _ensure_int_coordinates(x, y)
        if x < 0 or y < 0:
            raise InvalidInputError(f"Coordinates must not be negative, got {x},{y}")
        self._ensure_in_bounds(Position(x, y))

        start = self.current_position
        started_at = self._clock()
        while True:
            elapsed = self._clock() - started_at
            if elapsed >= duration:
                break
            progress = elapsed / duration
            self.move_to(
                round(start.x + (x - start.x) * progress),
                round(start.y + (y - start.y) * progress),
            )
            self._sleep(self._settings.poll_interval)
        self.move_to(x, y)

    def move_in_circle(self, cx: int, cy: int, radius: int, duration: float) -> None:
        """Sweep one full circle of radius around (cx, cy) over duration seconds"""
        if radius <= 0:
            raise InvalidInputError(f"Radius must be positive, got {radius}")
        if duration <= 0:
            raise InvalidInputError(f"Circle duration must be positive, got {duration}")

        started_at = self._clock()
        while True:
            elapsed = self._clock() - started_at
            if elapsed >= duration:
                break
            angle = 2 * math.pi * elapsed / duration
            self.move_to(
                round(cx + radius * math.cos(angle)),
                round(cy + radius * math.sin(angle)),
            )
            self._sleep(self._settings.poll_interval)


def create_mouse_controller(settings: Optional[MouseSettings] = None) -> MouseController:
    """Factory function to create a MouseController on the host's cursor backend"""
    return MouseController(backend=create_cursor_backend(), settings=settings)
