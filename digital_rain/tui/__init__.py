"""Curses host for the digital rain: colors, frame display and the tick loop."""

from .colors import Colors
from .display import CursesDisplay
from .app import RainApp, run_rain, main

__all__ = [
    "Colors",
    "CursesDisplay",
    "RainApp",
    "run_rain",
    "main",
]
