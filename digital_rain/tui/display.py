"""
TUI Display - draws composed frames onto a curses screen.
"""

import logging
from typing import Optional

# Handle curses import for Windows compatibility
try:
    import curses
    CURSES_AVAILABLE = True
except ImportError:
    curses = None
    CURSES_AVAILABLE = False

from ..models import Frame
from ..utils.error_handling import ErrorCategory, handle_error
from .colors import Colors

logger = logging.getLogger(__name__)


class CursesDisplay:
    """
    Writes Frame cells to a curses window.

    Frames are drawn into the window buffer first and pushed to the
    terminal with a single refresh, so each frame appears at once.
    """

    def __init__(self, screen):
        self.screen = screen
        self.frames_drawn = 0
        self.failed_cells = 0

    def draw(self, frame: Frame):
        """Draw one frame. Cells the terminal rejects are counted and logged."""
        if not CURSES_AVAILABLE or curses is None:
            return

        self.screen.erase()
        last_error: Optional[Exception] = None
        failures = 0
        last_x, last_y = frame.width - 1, frame.height - 1

        for x, y, cell in frame.painted():
            # curses cannot write the bottom-right cell without scrolling
            if x == last_x and y == last_y:
                continue
            pair, attrs = Colors.style_for(cell)
            try:
                self.screen.addstr(y, x, cell.char, curses.color_pair(pair) | attrs)
            except curses.error as e:
                failures += 1
                last_error = e

        self.screen.refresh()
        self.frames_drawn += 1

        if last_error is not None:
            self.failed_cells += failures
            handle_error(
                last_error,
                "draw_frame",
                ErrorCategory.RENDER,
                additional_context={
                    'failed_cells': failures,
                    'frame_size': f"{frame.width}x{frame.height}",
                },
            )
