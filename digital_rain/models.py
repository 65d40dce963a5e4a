"""
Rain Data Models - streams, events and the composed frame.

Streams, glitch events and easter eggs are owned by the StreamEngine.
Cells and frames are produced by the FrameCompositor.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .constants import Palette

RGB = Tuple[int, int, int]


class Tone(Enum):
    """What painted a cell; the terminal display maps tones to color pairs."""
    BLANK = "blank"
    HEAD = "head"
    TRAIL = "trail"
    GLITCH = "glitch"
    OVERLAY = "overlay"


class FadeStage(Enum):
    """Fade stages of a full-screen flash overlay."""
    BRIGHT = 0
    MEDIUM = 1
    DIM = 2


@dataclass
class EmbeddedPhrase:
    """A hidden phrase spelled down the trail of a live stream."""
    text: str
    duration: int
    ticks_remaining: int = 0

    def __post_init__(self):
        if not self.ticks_remaining:
            self.ticks_remaining = self.duration

    @property
    def active(self) -> bool:
        return self.ticks_remaining > 0


@dataclass
class Stream:
    """
    One falling column of glyphs.

    glyphs[0] is the head; glyphs[i] is the i-th cell behind it, drawn at
    row floor(head_row) - i. There are length + 1 glyphs in total.
    """
    column: int
    head_row: float
    speed: float
    length: int
    glyphs: List[str]
    spawned_at: int = 0
    alive: bool = True
    phrase: Optional[EmbeddedPhrase] = None

    def __post_init__(self):
        if self.length < 1:
            raise ValueError(f"Stream length must be >= 1, got {self.length}")
        if self.speed <= 0:
            raise ValueError(f"Stream speed must be > 0, got {self.speed}")
        if self.column < 0:
            raise ValueError(f"Stream column must be >= 0, got {self.column}")
        if len(self.glyphs) != self.length + 1:
            raise ValueError(
                f"Stream needs {self.length + 1} glyphs, got {len(self.glyphs)}"
            )

    @property
    def tail_row(self) -> float:
        """Position of the last trailing cell relative to the head."""
        return self.head_row - self.length

    @property
    def head_cell(self) -> int:
        """Integer row of the head glyph."""
        return math.floor(self.head_row)

    def is_past(self, terminal_height: int) -> bool:
        """True once the whole span has scrolled below the last visible row."""
        return self.head_row - self.length >= terminal_height

    def locked_cells(self) -> int:
        """Number of trailing cells held by an active embedded phrase."""
        if self.phrase is not None and self.phrase.active:
            return min(len(self.phrase.text), self.length)
        return 0


@dataclass
class GlitchEvent:
    """A row segment forced to bright white for a few ticks."""
    row: int
    start_col: int
    end_col: int  # exclusive
    start_tick: int
    duration: int
    ticks_remaining: int = 0

    def __post_init__(self):
        if not self.ticks_remaining:
            self.ticks_remaining = self.duration

    @property
    def active(self) -> bool:
        return self.ticks_remaining > 0

    def covers(self, x: int, y: int) -> bool:
        return y == self.row and self.start_col <= x < self.end_col


@dataclass
class FlashOverlay:
    """Full-screen easter egg: centered text replacing the rain."""
    text: str
    start_tick: int
    duration: int
    ticks_remaining: int = 0

    def __post_init__(self):
        if not self.ticks_remaining:
            self.ticks_remaining = self.duration

    @property
    def active(self) -> bool:
        return self.ticks_remaining > 0

    @property
    def fade_stage(self) -> FadeStage:
        """Bright for the first half, medium for the next 30%, then dim."""
        elapsed = self.duration - self.ticks_remaining
        fraction = elapsed / self.duration if self.duration else 1.0
        if fraction < 0.5:
            return FadeStage.BRIGHT
        if fraction < 0.8:
            return FadeStage.MEDIUM
        return FadeStage.DIM


@dataclass(frozen=True)
class Cell:
    """One composed terminal cell."""
    char: str = " "
    rgb: RGB = Palette.BLANK_RGB
    intensity: float = 0.0
    tone: Tone = Tone.BLANK

    @property
    def is_blank(self) -> bool:
        return self.tone == Tone.BLANK


BLANK_CELL = Cell()


@dataclass
class Frame:
    """A composed grid of cells, row-major: rows[y][x]."""
    width: int
    height: int
    rows: List[List[Cell]] = field(default_factory=list)

    @classmethod
    def blank(cls, width: int, height: int) -> 'Frame':
        """A frame of blank cells; non-positive sizes give an empty frame."""
        if width <= 0 or height <= 0:
            return cls(width=0, height=0, rows=[])
        return cls(width=width, height=height,
                   rows=[[BLANK_CELL] * width for _ in range(height)])

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def cell(self, x: int, y: int) -> Cell:
        return self.rows[y][x]

    def row_text(self, y: int) -> str:
        return "".join(c.char for c in self.rows[y])

    def text(self) -> str:
        return "\n".join(self.row_text(y) for y in range(self.height))

    def painted(self) -> List[Tuple[int, int, Cell]]:
        """(x, y, cell) for every non-blank cell."""
        return [
            (x, y, c)
            for y, row in enumerate(self.rows)
            for x, c in enumerate(row)
            if not c.is_blank
        ]
