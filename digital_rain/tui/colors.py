"""
TUI Color Definitions - Curses color pair management for the rain.
"""

from typing import Tuple

# Handle curses import for Windows compatibility
try:
    import curses
    CURSES_AVAILABLE = True
except ImportError:
    curses = None
    CURSES_AVAILABLE = False

from ..models import Cell, FadeStage, Tone
from ..constants import Palette

# Attribute bits, usable without an initialized screen
A_NORMAL = curses.A_NORMAL if CURSES_AVAILABLE else 0
A_BOLD = curses.A_BOLD if CURSES_AVAILABLE else 0
A_DIM = curses.A_DIM if CURSES_AVAILABLE else 0


class Colors:
    """Color pairs for curses."""
    NORMAL = 0
    RAIN_HEAD = 1       # Near-white head glyph
    RAIN_BRIGHT = 2     # Bright green just behind the head
    RAIN_MID = 3        # Body of the trail
    RAIN_DARK = 4       # Dark green tail
    GLITCH = 5          # Bright white glitch rows
    FLASH_BRIGHT = 6    # Easter egg overlay, first stage
    FLASH_DIM = 7       # Easter egg overlay, fading

    DARK_GREEN_SLOT = 100  # Custom color number for the dark tail

    # Intensity thresholds for trail cells
    BRIGHT_THRESHOLD = 0.85
    MID_THRESHOLD = 0.5
    DIM_THRESHOLD = 0.3

    @staticmethod
    def init_colors():
        """Initialize curses color pairs (green-on-black rain)."""
        if not CURSES_AVAILABLE or curses is None:
            return
        curses.start_color()
        try:
            curses.use_default_colors()
        except curses.error:
            pass  # Terminal has no default colors; black background below
        background = curses.COLOR_BLACK

        curses.init_pair(Colors.RAIN_HEAD, curses.COLOR_WHITE, background)
        curses.init_pair(Colors.RAIN_BRIGHT, curses.COLOR_GREEN, background)
        curses.init_pair(Colors.RAIN_MID, curses.COLOR_GREEN, background)
        # Dark green for rain tails - try to use custom dark green if terminal supports it
        try:
            if curses.can_change_color() and curses.COLORS >= 256:
                # RGB values scaled 0-1000
                curses.init_color(Colors.DARK_GREEN_SLOT, 0, 300, 0)
                curses.init_pair(Colors.RAIN_DARK, Colors.DARK_GREEN_SLOT, background)
            else:
                # Fallback: normal green, rendered with A_DIM
                curses.init_pair(Colors.RAIN_DARK, curses.COLOR_GREEN, background)
        except curses.error:
            curses.init_pair(Colors.RAIN_DARK, curses.COLOR_GREEN, background)
        curses.init_pair(Colors.GLITCH, curses.COLOR_WHITE, background)
        curses.init_pair(Colors.FLASH_BRIGHT, curses.COLOR_WHITE, background)
        curses.init_pair(Colors.FLASH_DIM, curses.COLOR_GREEN, background)

    @staticmethod
    def style_for(cell: Cell) -> Tuple[int, int]:
        """
        Map a composed cell to (color pair number, attribute bits).

        The caller combines them as curses.color_pair(pair) | attrs.
        """
        tone = cell.tone
        if tone == Tone.HEAD:
            return Colors.RAIN_HEAD, A_BOLD
        if tone == Tone.GLITCH:
            return Colors.GLITCH, A_BOLD
        if tone == Tone.OVERLAY:
            if cell.intensity >= Palette.FLASH_INTENSITIES[FadeStage.BRIGHT.value]:
                return Colors.FLASH_BRIGHT, A_BOLD
            if cell.intensity >= Palette.FLASH_INTENSITIES[FadeStage.MEDIUM.value]:
                return Colors.FLASH_DIM, A_NORMAL
            return Colors.FLASH_DIM, A_DIM
        if tone == Tone.TRAIL:
            if cell.intensity >= Colors.BRIGHT_THRESHOLD:
                return Colors.RAIN_BRIGHT, A_BOLD
            if cell.intensity >= Colors.MID_THRESHOLD:
                return Colors.RAIN_MID, A_NORMAL
            if cell.intensity >= Colors.DIM_THRESHOLD:
                return Colors.RAIN_MID, A_DIM
            return Colors.RAIN_DARK, A_DIM
        return Colors.NORMAL, A_NORMAL
