"""
Stream Engine - the falling-glyph simulation.

Owns every stream, glitch event and easter egg. Each call to advance()
moves the simulation forward by one tick:

    0. reconcile a terminal resize (drop streams in vanished columns)
    1. move every stream down by its speed
    2. flicker glyphs
    3. retire streams whose whole span has left the screen
    4. spawn new streams into empty columns
    5. age and trigger glitches and easter eggs

Streams never interact with each other, so a tick is O(live streams).
All randomness comes from the injected RandomSource.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from .charset import EASTER_EGG_PHRASES, MATRIX_CHARS, phrase_glyphs
from .constants import RainTuning
from .models import EmbeddedPhrase, FlashOverlay, GlitchEvent, Stream
from .randomness import RandomSource, SeededRandomSource

logger = logging.getLogger(__name__)


class StreamEngine:
    """Digital rain simulation state and its per-tick update."""

    def __init__(self, rng: Optional[RandomSource] = None,
                 tuning: Optional[RainTuning] = None,
                 charset: Sequence[str] = MATRIX_CHARS,
                 phrases: Sequence[str] = EASTER_EGG_PHRASES):
        self.rng = rng or SeededRandomSource()
        self.tuning = tuning or RainTuning()
        self.tuning.validate()
        if not charset:
            raise ValueError("charset must not be empty")
        if not phrases:
            raise ValueError("phrases must not be empty")
        self.charset = list(charset)
        self.phrases = list(phrases)

        self._streams: List[Stream] = []
        self._glitches: List[GlitchEvent] = []
        self._flashes: List[FlashOverlay] = []
        self._tick = 0
        self._width: Optional[int] = None
        self._height: Optional[int] = None

    # ------------------------------------------------------------------
    # Read access for the compositor and the host
    # ------------------------------------------------------------------

    @property
    def streams(self) -> List[Stream]:
        return self._streams

    @property
    def glitches(self) -> List[GlitchEvent]:
        return self._glitches

    @property
    def easter_eggs(self) -> List[FlashOverlay]:
        """Active full-screen overlays. Embedded phrases live on their streams."""
        return self._flashes

    @property
    def tick(self) -> int:
        return self._tick

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height) seen by the last advance() or populate() call."""
        return (self._width or 0, self._height or 0)

    def stats(self) -> Dict[str, int]:
        """Counts of live simulation objects."""
        return {
            'tick': self._tick,
            'streams': len(self._streams),
            'glitches': len(self._glitches),
            'flashes': len(self._flashes),
            'phrases': sum(1 for s in self._streams if s.phrase is not None),
        }

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def advance(self, dt: float, terminal_width: int, terminal_height: int):
        """Advance the simulation by one tick of length dt (1.0 = one fixed tick)."""
        self._reconcile_size(terminal_width, terminal_height)
        self._tick += 1
        step = dt if dt > 0 else 0.0

        for stream in self._streams:
            stream.head_row += stream.speed * step
            self._flicker(stream)

        self._retire(terminal_height)
        self._spawn(terminal_width, terminal_height)
        self._age_events()
        self._trigger_events(terminal_width, terminal_height)

    def _reconcile_size(self, width: int, height: int):
        """Drop state that no longer fits after a resize."""
        if width == self._width and height == self._height:
            return
        old_width, old_height = self._width, self._height
        self._width, self._height = width, height

        before = len(self._streams)
        self._streams = [s for s in self._streams if s.column < width]
        self._glitches = [g for g in self._glitches if g.row < height and g.start_col < width]
        for glitch in self._glitches:
            glitch.end_col = min(glitch.end_col, width)

        if old_width is not None:
            logger.debug(
                f"Resize {old_width}x{old_height} -> {width}x{height}, "
                f"dropped {before - len(self._streams)} streams"
            )

    def _flicker(self, stream: Stream):
        """Re-roll glyphs independently; the head flickers more than the trail."""
        tuning = self.tuning
        if self.rng.chance(tuning.head_flicker_chance):
            stream.glyphs[0] = self.rng.choice(self.charset)
        locked = stream.locked_cells()
        for i in range(locked + 1, len(stream.glyphs)):
            if self.rng.chance(tuning.flicker_chance):
                stream.glyphs[i] = self.rng.choice(self.charset)

    def _retire(self, height: int):
        retired = 0
        for stream in self._streams:
            if stream.is_past(height):
                stream.alive = False
                retired += 1
        if retired:
            self._streams = [s for s in self._streams if s.alive]

    def _spawn(self, width: int, height: int):
        """Spawn into empty columns, plus the occasional extra for density."""
        if width <= 0 or height <= 0:
            return
        occupied = self._occupied_columns(width)
        for column in range(width):
            if not occupied[column] and self.rng.chance(self.tuning.spawn_chance):
                self.spawn_stream(column, height)
        if self.rng.chance(self.tuning.density_spawn_chance):
            self.spawn_stream(self.rng.randint(0, width - 1), height)

    def _occupied_columns(self, width: int) -> List[bool]:
        occupied = [False] * width
        for stream in self._streams:
            if stream.column < width:
                occupied[stream.column] = True
        return occupied

    def _age_events(self):
        for glitch in self._glitches:
            glitch.ticks_remaining -= 1
        self._glitches = [g for g in self._glitches if g.active]

        for flash in self._flashes:
            flash.ticks_remaining -= 1
        self._flashes = [f for f in self._flashes if f.active]

        for stream in self._streams:
            if stream.phrase is not None:
                stream.phrase.ticks_remaining -= 1
                if not stream.phrase.active:
                    stream.phrase = None

    def _trigger_events(self, width: int, height: int):
        if width <= 0 or height <= 0:
            return
        tuning = self.tuning
        if self.rng.chance(tuning.glitch_chance):
            self.trigger_glitch(self.rng.randint(0, height - 1), width,
                                span=self.rng.randint(tuning.glitch_span_min,
                                                      tuning.glitch_span_max))
        if not self._flashes and self.rng.chance(tuning.flash_chance):
            self.trigger_flash()
        if self._streams and self.rng.chance(tuning.phrase_chance):
            self.embed_phrase()

    # ------------------------------------------------------------------
    # Spawning
    # ------------------------------------------------------------------

    def populate(self, terminal_width: int, terminal_height: int):
        """
        Seed empty columns at start-up so the first frame is not bare.

        Unlike regular spawns these streams start anywhere from one screen
        above the top down to the bottom edge.
        """
        self._reconcile_size(terminal_width, terminal_height)
        if terminal_width <= 0 or terminal_height <= 0:
            return
        occupied = self._occupied_columns(terminal_width)
        for column in range(terminal_width):
            if not occupied[column] and self.rng.chance(self.tuning.populate_chance):
                head_row = self.rng.uniform(-terminal_height, terminal_height - 1)
                self.spawn_stream(column, terminal_height, head_row=head_row)
        logger.debug(f"Populated {len(self._streams)} streams for "
                     f"{terminal_width}x{terminal_height}")

    def spawn_stream(self, column: int, terminal_height: int,
                     head_row: Optional[float] = None) -> Stream:
        """Create a stream with random speed and length; by default it starts just above the screen."""
        tuning = self.tuning
        length_max = min(tuning.length_max, max(tuning.length_min, terminal_height))
        length = self.rng.randint(tuning.length_min, length_max)
        speed = self.rng.uniform(tuning.speed_min, tuning.speed_max)
        glyphs = [self.rng.choice(self.charset) for _ in range(length + 1)]
        stream = Stream(
            column=column,
            head_row=float(-length) if head_row is None else float(head_row),
            speed=speed,
            length=length,
            glyphs=glyphs,
            spawned_at=self._tick,
        )
        self._streams.append(stream)
        return stream

    def add_stream(self, stream: Stream) -> Stream:
        """Adopt a stream built by the caller."""
        stream.spawned_at = self._tick
        stream.alive = True
        self._streams.append(stream)
        return stream

    # ------------------------------------------------------------------
    # Glitches and easter eggs
    # ------------------------------------------------------------------

    def trigger_glitch(self, row: int, terminal_width: int,
                       duration: Optional[int] = None,
                       span: Optional[int] = None,
                       start_col: Optional[int] = None) -> GlitchEvent:
        """
        Flash a row segment bright white.

        Args:
            row: Target row
            terminal_width: Current width, bounds the segment
            duration: Ticks the glitch stays visible (random if omitted)
            span: Segment width in columns; the whole row if omitted
            start_col: Segment start (random if omitted and span is given)
        """
        tuning = self.tuning
        if duration is None:
            duration = self.rng.randint(tuning.glitch_duration_min,
                                        tuning.glitch_duration_max)
        width = max(terminal_width, 0)
        if span is None:
            start, end = 0, width
        else:
            span = max(1, min(span, width)) if width else 0
            if start_col is None:
                start_col = self.rng.randint(0, max(0, width - span))
            start, end = start_col, min(start_col + span, width)

        glitch = GlitchEvent(row=row, start_col=start, end_col=end,
                             start_tick=self._tick, duration=duration)
        self._glitches.append(glitch)
        logger.debug(f"Glitch on row {row} cols {start}-{end} for {duration} ticks")
        return glitch

    def trigger_flash(self, text: Optional[str] = None,
                      duration: Optional[int] = None) -> FlashOverlay:
        """Start a full-screen text overlay, replacing any active one."""
        flash = FlashOverlay(
            text=text if text is not None else self.rng.choice(self.phrases),
            start_tick=self._tick,
            duration=duration if duration is not None else self.tuning.flash_duration,
        )
        self._flashes = [flash]
        logger.debug(f"Flash overlay '{flash.text}' for {flash.duration} ticks")
        return flash

    def embed_phrase(self, stream: Optional[Stream] = None,
                     text: Optional[str] = None,
                     duration: Optional[int] = None) -> bool:
        """
        Spell a phrase down a live stream's trail.

        The letters are written into the cells behind the head so the phrase
        reads top to bottom while the stream falls. Phrases longer than the
        trail are truncated. Returns False when there is no stream to use.
        """
        if stream is None:
            candidates = [s for s in self._streams if s.phrase is None]
            if not candidates:
                return False
            stream = self.rng.choice(candidates)

        phrase = phrase_glyphs(text if text is not None else self.rng.choice(self.phrases))
        phrase = phrase[:stream.length]
        if not phrase:
            return False

        count = len(phrase)
        for k, letter in enumerate(phrase):
            stream.glyphs[count - k] = letter
        stream.phrase = EmbeddedPhrase(
            text=phrase,
            duration=duration if duration is not None else self.tuning.phrase_duration,
        )
        logger.debug(f"Embedded '{phrase}' in column {stream.column}")
        return True
