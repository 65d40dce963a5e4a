"""
Frame Compositor - turns the engine's state into a grid of colored cells.

compose() is a pure function of its inputs: it reads streams, glitch events
and flash overlays, never mutates them, keeps no references to them and
uses no randomness. The same snapshot always yields the same frame.

Painting order per frame:
    1. stream glyphs with a head-to-tail brightness gradient
    2. glitch events recolor their row segment bright white
    3. a flash overlay replaces everything with centered text
"""

import textwrap
from functools import lru_cache
from typing import Iterable, List, Tuple

from .constants import Palette
from .models import (
    RGB,
    Cell,
    FadeStage,
    FlashOverlay,
    Frame,
    GlitchEvent,
    Stream,
    Tone,
)

FLASH_STYLES = {
    FadeStage.BRIGHT: (Palette.FLASH_BRIGHT_RGB, Palette.FLASH_INTENSITIES[0]),
    FadeStage.MEDIUM: (Palette.FLASH_MEDIUM_RGB, Palette.FLASH_INTENSITIES[1]),
    FadeStage.DIM: (Palette.FLASH_DIM_RGB, Palette.FLASH_INTENSITIES[2]),
}


@lru_cache(maxsize=4096)
def trail_style(distance: int, length: int) -> Tuple[RGB, float, Tone]:
    """
    Color and intensity for the cell `distance` cells behind the head.

    The head is near-white; the next two cells are bright green; the rest
    fade towards dark green as the distance approaches the stream length.
    Intensity never increases with distance.
    """
    if distance == 0:
        return Palette.HEAD_RGB, Palette.HEAD_INTENSITY, Tone.HEAD
    if distance <= len(Palette.NEAR_HEAD_INTENSITIES):
        return (Palette.NEAR_HEAD_RGB,
                Palette.NEAR_HEAD_INTENSITIES[distance - 1],
                Tone.TRAIL)

    ratio = min(distance / max(length, 1), 1.0)
    r = int(20 * (1.0 - ratio))
    g = int(200 * (1.0 - ratio * 0.8))
    floor = Palette.TRAIL_INTENSITY_FLOOR
    intensity = floor + (Palette.TRAIL_INTENSITY_MAX - floor) * (1.0 - ratio)
    return (r, g, 0), intensity, Tone.TRAIL


class FrameCompositor:
    """Builds one Frame per tick from a read-only engine snapshot."""

    def compose(self, streams: Iterable[Stream], glitches: Iterable[GlitchEvent],
                easter_eggs: Iterable[FlashOverlay],
                terminal_width: int, terminal_height: int) -> Frame:
        """Compose a frame; non-positive sizes give an empty frame."""
        frame = Frame.blank(terminal_width, terminal_height)
        if frame.is_empty:
            return frame

        overlay = next((egg for egg in easter_eggs if egg.active), None)
        if overlay is not None:
            self._paint_overlay(frame, overlay)
            return frame

        self._paint_streams(frame, streams)
        self._paint_glitches(frame, glitches)
        return frame

    def _paint_streams(self, frame: Frame, streams: Iterable[Stream]):
        width, height = frame.width, frame.height
        rows = frame.rows
        for stream in streams:
            x = stream.column
            if not 0 <= x < width:
                continue
            head = stream.head_cell
            # Only the part of the span that intersects the screen
            first = max(0, head - (height - 1))
            last = min(stream.length, head)
            for i in range(first, last + 1):
                y = head - i
                rgb, intensity, tone = trail_style(i, stream.length)
                current = rows[y][x]
                if current.is_blank or intensity >= current.intensity:
                    rows[y][x] = Cell(stream.glyphs[i], rgb, intensity, tone)

    def _paint_glitches(self, frame: Frame, glitches: Iterable[GlitchEvent]):
        rows = frame.rows
        for glitch in glitches:
            if not glitch.active or not 0 <= glitch.row < frame.height:
                continue
            row = rows[glitch.row]
            for x in range(max(0, glitch.start_col), min(glitch.end_col, frame.width)):
                row[x] = Cell(row[x].char, Palette.GLITCH_RGB, 1.0, Tone.GLITCH)

    def _paint_overlay(self, frame: Frame, overlay: FlashOverlay):
        rgb, intensity = FLASH_STYLES[overlay.fade_stage]
        lines = self.layout_text(overlay.text, frame.width, frame.height)
        top = (frame.height - len(lines)) // 2
        for offset, line in enumerate(lines):
            left = (frame.width - len(line)) // 2
            row = frame.rows[top + offset]
            for k, char in enumerate(line):
                if char != " ":
                    row[left + k] = Cell(char, rgb, intensity, Tone.OVERLAY)

    @staticmethod
    def layout_text(text: str, width: int, height: int) -> List[str]:
        """Wrap overlay text to the frame, keeping at most `height` lines."""
        lines = textwrap.wrap(text, width=width, break_long_words=True) or [""]
        return lines[:height]
