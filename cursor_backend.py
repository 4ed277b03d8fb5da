#!/usr/bin/env python3
"""
Cursor Backend Module
Thin shims over the host's cursor placement and synthetic pointer input
"""

import ctypes
import threading
from enum import Enum
from typing import Optional, Protocol, Set, Tuple

from loguru import logger
from screeninfo import ScreenInfoError, get_monitors

from mouse_errors import CursorIOError, MouseError
from os_detector import os_detector

try:
    from pynput.mouse import Button, Controller, Listener
    PYNPUT_MOUSE_AVAILABLE = True
    logger.info("pynput mouse simulation library loaded")
    if os_detector.is_macos:
        logger.info(
            "macOS: if the pointer does not move, grant Accessibility permission "
            "to Terminal (or your IDE) in System Settings > Privacy & Security > Accessibility"
        )
except ImportError:
    PYNPUT_MOUSE_AVAILABLE = False
    Button = Controller = Listener = None
    logger.warning("pynput mouse not available - pynput backend disabled")

if os_detector.is_windows:
    try:
        from ctypes import wintypes
        user32 = ctypes.windll.user32
        WINDOWS_API_AVAILABLE = True
        logger.info("Windows native cursor API available")
    except (ImportError, AttributeError):
        WINDOWS_API_AVAILABLE = False
        user32 = None
        logger.warning("Windows native APIs not available")
else:
    WINDOWS_API_AVAILABLE = False
    user32 = None

# user32 constants
SM_CXSCREEN = 0
SM_CYSCREEN = 1
MOUSEEVENTF_LEFTDOWN = 0x0002
MOUSEEVENTF_LEFTUP = 0x0004
MOUSEEVENTF_RIGHTDOWN = 0x0008
MOUSEEVENTF_RIGHTUP = 0x0010
MOUSEEVENTF_MIDDLEDOWN = 0x0020
MOUSEEVENTF_MIDDLEUP = 0x0040
MOUSEEVENTF_WHEEL = 0x0800
MOUSEEVENTF_HWHEEL = 0x1000
WHEEL_DELTA = 120
VK_LBUTTON = 0x01
VK_RBUTTON = 0x02
VK_MBUTTON = 0x04


class MouseButton(Enum):
    LEFT = "left"
    RIGHT = "right"
    MIDDLE = "middle"


class ButtonAction(Enum):
    DOWN = "down"
    UP = "up"


class CursorBackend(Protocol):
    """Operations the pointer controller needs from the host OS.

    Wheel deltas are in notches; positive scrolls up (vertical) or right
    (horizontal).
    """

    def get_cursor_position(self) -> Tuple[int, int]:
        ...

    def set_cursor_position(self, x: int, y: int) -> None:
        """Place the cursor; raises CursorIOError when the OS refuses."""
        ...

    def get_screen_bounds(self) -> Tuple[int, int]:
        ...

    def inject_button_event(self, button: MouseButton, action: ButtonAction) -> None:
        ...

    def inject_wheel_event(self, delta: int, horizontal: bool = False) -> None:
        ...

    def get_async_button_state(self, button: MouseButton) -> bool:
        ...

    def close(self) -> None:
        """Release any resources the backend started (threads, hooks)."""
        ...


class WindowsCursorBackend:
    """user32-based backend (GetCursorPos / SetCursorPos / mouse_event)"""

    _BUTTON_FLAGS = {
        (MouseButton.LEFT, ButtonAction.DOWN): MOUSEEVENTF_LEFTDOWN,
        (MouseButton.LEFT, ButtonAction.UP): MOUSEEVENTF_LEFTUP,
        (MouseButton.RIGHT, ButtonAction.DOWN): MOUSEEVENTF_RIGHTDOWN,
        (MouseButton.RIGHT, ButtonAction.UP): MOUSEEVENTF_RIGHTUP,
        (MouseButton.MIDDLE, ButtonAction.DOWN): MOUSEEVENTF_MIDDLEDOWN,
        (MouseButton.MIDDLE, ButtonAction.UP): MOUSEEVENTF_MIDDLEUP,
    }
    _VK_CODES = {
        MouseButton.LEFT: VK_LBUTTON,
        MouseButton.RIGHT: VK_RBUTTON,
        MouseButton.MIDDLE: VK_MBUTTON,
    }

    @staticmethod
    def is_available() -> bool:
        return WINDOWS_API_AVAILABLE

    def get_cursor_position(self) -> Tuple[int, int]:
        point = wintypes.POINT()
        user32.GetCursorPos(ctypes.byref(point))
        return point.x, point.y

    def set_cursor_position(self, x: int, y: int) -> None:
        if not user32.SetCursorPos(x, y):
            raise CursorIOError(f"SetCursorPos({x}, {y}) failed") from ctypes.WinError()
        logger.debug("Windows cursor set to {},{}", x, y)

    def get_screen_bounds(self) -> Tuple[int, int]:
        return user32.GetSystemMetrics(SM_CXSCREEN), user32.GetSystemMetrics(SM_CYSCREEN)

    def inject_button_event(self, button: MouseButton, action: ButtonAction) -> None:
        user32.mouse_event(self._BUTTON_FLAGS[(button, action)], 0, 0, 0, 0)
        logger.debug("Windows button {} {}", button.value, action.value)

    def inject_wheel_event(self, delta: int, horizontal: bool = False) -> None:
        flag = MOUSEEVENTF_HWHEEL if horizontal else MOUSEEVENTF_WHEEL
        user32.mouse_event(flag, 0, 0, delta * WHEEL_DELTA, 0)
        logger.debug("Windows wheel {} (horizontal={})", delta, horizontal)

    def get_async_button_state(self, button: MouseButton) -> bool:
        return bool(user32.GetAsyncKeyState(self._VK_CODES[button]) & 0x8000)

    def close(self) -> None:
        pass


class PynputCursorBackend:
    """pynput-based backend; screen size comes from screeninfo"""

    def __init__(self):
        self._controller = Controller()
        self._listener: Optional[Listener] = None
        self._pressed: Set[MouseButton] = set()
        self._pressed_lock = threading.Lock()

    @staticmethod
    def is_available() -> bool:
        return PYNPUT_MOUSE_AVAILABLE

    @staticmethod
    def _get_pynput_button(button: MouseButton):
        return {
            MouseButton.LEFT: Button.left,
            MouseButton.RIGHT: Button.right,
            MouseButton.MIDDLE: Button.middle,
        }[button]

    def get_cursor_position(self) -> Tuple[int, int]:
        x, y = self._controller.position
        return int(round(x)), int(round(y))

    def set_cursor_position(self, x: int, y: int) -> None:
        try:
            self._controller.position = (x, y)
        except Exception as e:
            raise CursorIOError(f"Failed to set cursor position to {x},{y}: {e}") from e
        logger.debug("pynput cursor set to {},{}", x, y)

    def get_screen_bounds(self) -> Tuple[int, int]:
        try:
            monitors = get_monitors()
        except ScreenInfoError as e:
            raise CursorIOError(f"Failed to enumerate monitors: {e}") from e
        if not monitors:
            raise CursorIOError("No monitors reported")
        primary = next((m for m in monitors if m.is_primary), monitors[0])
        return primary.width, primary.height

    def inject_button_event(self, button: MouseButton, action: ButtonAction) -> None:
        btn = self._get_pynput_button(button)
        if action == ButtonAction.DOWN:
            self._controller.press(btn)
        else:
            self._controller.release(btn)
        logger.debug("pynput button {} {}", button.value, action.value)

    def inject_wheel_event(self, delta: int, horizontal: bool = False) -> None:
        if horizontal:
            self._controller.scroll(delta, 0)
        else:
            self._controller.scroll(0, delta)
        logger.debug("pynput wheel {} (horizontal={})", delta, horizontal)

    def get_async_button_state(self, button: MouseButton) -> bool:
        self._ensure_listener()
        with self._pressed_lock:
            return button in self._pressed

    def close(self) -> None:
        """Stop the button state listener if one was started; it can be restarted later"""
        if self._listener is None:
            return
        self._listener.stop()
        self._listener = None
        with self._pressed_lock:
            self._pressed.clear()
        logger.info("pynput button state listener stopped")

    def _ensure_listener(self) -> None:
        # pynput cannot poll button state, so track it from a listener thread
        if self._listener is not None:
            return
        self._listener = Listener(on_click=self._on_click)
        self._listener.start()
        logger.info("pynput button state listener started")

    def _on_click(self, x, y, button, pressed) -> None:
        reverse = {
            Button.left: MouseButton.LEFT,
            Button.right: MouseButton.RIGHT,
            Button.middle: MouseButton.MIDDLE,
        }
        ours = reverse.get(button)
        if ours is None:
            return
        with self._pressed_lock:
            if pressed:
                self._pressed.add(ours)
            else:
                self._pressed.discard(ours)


def create_cursor_backend() -> CursorBackend:
    """Factory picking the native backend on Windows and pynput elsewhere"""
    if os_detector.is_windows and WindowsCursorBackend.is_available():
        logger.info("Using Windows cursor backend")
        return WindowsCursorBackend()
    if PynputCursorBackend.is_available():
        logger.info("Using pynput cursor backend")
        return PynputCursorBackend()
    raise MouseError("No cursor backend available - install pynput")
