"""
Digital Rain Terminal Host

Runs the rain in a curses session at a fixed 20 ticks per second. Each
tick reads the terminal size, advances the StreamEngine, composes a frame
and draws it; between ticks the loop waits for a quit key.

Usage:
    digital-rain
    digital-rain --log-file rain.log --debug
    python -m digital_rain

Keyboard Shortcuts:
    [q]      Quit
    [Esc]    Quit
    [Ctrl-C] Quit
"""

import locale
import logging
import sys
import time
from typing import Optional

# Handle curses import for Windows compatibility
try:
    import curses
    CURSES_AVAILABLE = True
except ImportError:
    curses = None
    CURSES_AVAILABLE = False

from ..compositor import FrameCompositor
from ..constants import Timing
from ..engine import StreamEngine
from ..models import Frame
from ..utils.error_handling import (
    ErrorCategory,
    TerminalUnavailableError,
    get_error_aggregator,
    safe_execute,
)
from .colors import Colors
from .display import CursesDisplay

logger = logging.getLogger(__name__)

KEY_ESC = 27
KEY_CTRL_C = 3
QUIT_KEYS = frozenset({ord('q'), ord('Q'), KEY_ESC, KEY_CTRL_C})


class RainApp:
    """
    Terminal host for the digital rain.

    The engine and compositor can be injected; by default a fresh engine
    with OS-seeded randomness is used.
    """

    def __init__(self, engine: Optional[StreamEngine] = None,
                 compositor: Optional[FrameCompositor] = None,
                 tick_seconds: float = Timing.TICK_SECONDS,
                 populate: bool = True):
        self.engine = engine or StreamEngine()
        self.compositor = compositor or FrameCompositor()
        self.tick_seconds = tick_seconds
        self.populate = populate
        self.running = False
        self.screen = None
        self.display: Optional[CursesDisplay] = None
        self.width = 0
        self.height = 0

    def run(self):
        """Run the rain until a quit key is pressed."""
        if not CURSES_AVAILABLE:
            if sys.platform == 'win32':
                raise TerminalUnavailableError(
                    "curses library not available on Windows. Try: pip install windows-curses"
                )
            raise TerminalUnavailableError("curses library not available.")
        if not sys.stdout.isatty():
            raise TerminalUnavailableError("stdout is not a terminal.")
        # curses.wrapper restores the terminal on every exit path
        curses.wrapper(self._main_loop)

    def step(self, width: int, height: int) -> Frame:
        """Advance one tick at the given size and compose the frame."""
        self.engine.advance(1.0, width, height)
        return self.compositor.compose(
            self.engine.streams,
            self.engine.glitches,
            self.engine.easter_eggs,
            width,
            height,
        )

    def handle_key(self, key: int) -> bool:
        """Process a key code; returns False when the loop should stop."""
        if key in QUIT_KEYS:
            self.running = False
        elif CURSES_AVAILABLE and key == curses.KEY_RESIZE:
            logger.debug("Terminal resize event")
        return self.running

    def _update_dimensions(self):
        self.height, self.width = self.screen.getmaxyx()

    def _main_loop(self, screen):
        """Main curses loop."""
        self.screen = screen
        self.display = CursesDisplay(screen)
        self.running = True

        # Setup curses
        with safe_execute("hide_cursor", ErrorCategory.TERMINAL):
            curses.curs_set(0)
        with safe_execute("init_colors", ErrorCategory.TERMINAL):
            Colors.init_colors()
        if hasattr(curses, 'set_escdelay'):
            curses.set_escdelay(Timing.ESC_DELAY_MS)
        screen.keypad(True)

        self._update_dimensions()
        if self.populate:
            self.engine.populate(self.width, self.height)
        logger.info(f"Rain started at {self.width}x{self.height}")

        last_tick = time.monotonic() - self.tick_seconds
        while self.running:
            try:
                if time.monotonic() - last_tick >= self.tick_seconds:
                    last_tick = time.monotonic()
                    # Size is read fresh every tick; resizes need no locking
                    self._update_dimensions()
                    self.display.draw(self.step(self.width, self.height))

                remaining = self.tick_seconds - (time.monotonic() - last_tick)
                screen.timeout(max(0, int(remaining * 1000)))
                key = screen.getch()
                if key != -1:
                    self.handle_key(key)
            except KeyboardInterrupt:
                self.running = False

        logger.info(f"Rain stopped after {self.engine.tick} ticks, "
                    f"{self.display.frames_drawn} frames")
        summary = get_error_aggregator().get_error_summary()
        if summary['total_errors']:
            logger.info(f"Errors during session: {summary}")


def configure_logging(log_file: Optional[str] = None, debug: bool = False):
    """
    Configure logging for a session.

    curses owns the terminal while the rain runs, so records go to a file
    when one is given and are otherwise suppressed until restore_logging().
    """
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=logging.DEBUG if debug else logging.INFO,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
    else:
        logging.disable(logging.CRITICAL)


def restore_logging(log_file: Optional[str] = None):
    """Undo the suppression configure_logging() applies without a log file."""
    if not log_file:
        logging.disable(logging.NOTSET)


def run_rain(log_file: Optional[str] = None, debug: bool = False) -> int:
    """
    Run the digital rain.

    Args:
        log_file: Write diagnostics to this file
        debug: Log simulation events at DEBUG level

    Returns:
        Process exit status
    """
    configure_logging(log_file, debug)
    try:
        # Needed for curses to emit the half-width Katakana
        with safe_execute("set_locale", ErrorCategory.PLATFORM):
            locale.setlocale(locale.LC_ALL, '')

        app = RainApp()
        try:
            app.run()
        except TerminalUnavailableError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        return 0
    finally:
        # Embedding programs get their logging back once the session ends
        restore_logging(log_file)


def main() -> int:
    """CLI entry point for the digital-rain command."""
    import argparse

    from .. import __version__

    parser = argparse.ArgumentParser(
        description="Digital Rain - falling glyphs in your terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Keyboard Shortcuts:
    q      Quit
    Esc    Quit
    Ctrl-C Quit
        """
    )
    parser.add_argument("--log-file", "-l", type=str,
                        help="Write diagnostics to this file")
    parser.add_argument("--debug", action="store_true",
                        help="Log simulation events (needs --log-file)")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")

    args = parser.parse_args()
    return run_rain(log_file=args.log_file, debug=args.debug)


if __name__ == "__main__":
    sys.exit(main())
