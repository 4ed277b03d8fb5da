#!/usr/bin/env python3
"""
Operating System Detection Module
Centralized OS detection used to pick a cursor backend and input pacing
"""

import platform
from enum import Enum
from typing import Optional

from loguru import logger


class OperatingSystem(Enum):
    """Enumeration for supported operating systems"""
    WINDOWS = "Windows"
    MACOS = "Darwin"
    LINUX = "Linux"


class OSDetector:
    """Centralized operating system detection and management"""

    _instance: Optional['OSDetector'] = None
    _detected_os: Optional[OperatingSystem] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._detect_os()
        return cls._instance

    def _detect_os(self) -> None:
        if self._detected_os is None:
            system_name = platform.system()
            try:
                self._detected_os = OperatingSystem(system_name)
                logger.info("Detected operating system: {}", self._detected_os.value)
                if self._detected_os == OperatingSystem.WINDOWS:
                    logger.info("Windows detected - native user32 cursor backend preferred")
                elif self._detected_os == OperatingSystem.MACOS:
                    logger.info("macOS detected - pynput cursor backend will be used")
                else:
                    logger.info("Linux detected - pynput cursor backend will be used")
            except ValueError:
                logger.warning("Unknown OS: {} - using Linux defaults", system_name)
                self._detected_os = OperatingSystem.LINUX

    @property
    def is_macos(self) -> bool:
        return self._detected_os == OperatingSystem.MACOS

    @property
    def is_windows(self) -> bool:
        return self._detected_os == OperatingSystem.WINDOWS

    def get_os_specific_delay(self, action_type: str = "default") -> float:
        """Pause between synthetic pointer steps.

        macOS drops button events that arrive back to back, so clicks get a
        longer gap there.
        """
        if self.is_macos:
            return 0.1 if action_type == "click" else 0.03
        return 0.05 if action_type == "click" else 0.01


os_detector = OSDetector()
