#!/usr/bin/env python3
"""
Pointer demo
Drives the mouse controller through a short scripted sequence
"""

import argparse
import sys
from typing import Callable, List, NamedTuple, Optional

from loguru import logger

from config import load_settings
from mouse_controller import CLICK_EVENT, MouseController, create_mouse_controller
from mouse_errors import MouseError


class DemoStep(NamedTuple):
    """One step of the scripted demo"""

    name: str
    action: Callable[[MouseController], None]


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level, format="{time:HH:mm:ss} - {level} - {message}")


def build_demo_steps(include_circle: bool = False) -> List[DemoStep]:
    steps = [
        DemoStep("move to 100,100", lambda m: m.move_to(100, 100)),
        DemoStep("hover to 400,300", lambda m: m.hover(400, 300, 1.0)),
        DemoStep("nudge by 20,-20", lambda m: m.move_relative(20, -20)),
        DemoStep("drag by 50,50", lambda m: m.drag_and_drop(50, 50)),
        DemoStep("click", lambda m: m.click()),
        DemoStep("scroll down 3 notches", lambda m: m.scroll_with_delay(-3, 0.1)),
    ]
    if include_circle:
        steps.append(DemoStep("circle around 400,300", lambda m: m.move_in_circle(400, 300, 100, 2.0)))
    return steps


def run_demo(mouse: MouseController, steps: List[DemoStep]) -> int:
    """Run steps in order; stop at the first failing one"""
    clicks = []
    mouse.on(CLICK_EVENT, lambda: clicks.append(mouse.get_position()))
    mouse.on(CLICK_EVENT, lambda: logger.info("Click event received"))

    mouse.print_mouse_position()
    for i, step in enumerate(steps):
        logger.info("Step {}: {}", i + 1, step.name)
        try:
            step.action(mouse)
        except MouseError as e:
            logger.error("Step {} ({}) failed: {}", i + 1, step.name, e)
            return 1
    mouse.print_mouse_position()
    logger.info("Demo finished - {} click event(s) at {}", len(clicks), clicks)
    return 0


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Pointer automation demo")
    parser.add_argument("--position-only", action="store_true", help="print the cursor position and exit")
    parser.add_argument("--circle", action="store_true", help="finish with a circular sweep")
    parser.add_argument("--log-level", default=None, help="loguru level (default: POINTER_LOG_LEVEL or INFO)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    settings = load_settings(args.log_level)
    configure_logging(settings.log_level)

    try:
        mouse = create_mouse_controller(settings)
    except MouseError as e:
        logger.error("Mouse control not available: {}", e)
        return 1

    try:
        if args.position_only:
            mouse.print_mouse_position()
            return 0
        return run_demo(mouse, build_demo_steps(args.circle))
    finally:
        mouse.close()


if __name__ == "__main__":
    sys.exit(main())
