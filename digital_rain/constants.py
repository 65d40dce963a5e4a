"""
Tuning Constants for Digital Rain

Centralizes the probabilities, ranges, timing and palette values used by
the stream engine and the frame compositor. These are tuning parameters,
not user configuration: the only runtime input is the terminal size.

Usage:
    from digital_rain.constants import Probabilities, Ranges, RainTuning

    tuning = RainTuning(spawn_chance=0.0)  # e.g. a quiet engine for tests
"""

from dataclasses import dataclass
from typing import Tuple

RGB = Tuple[int, int, int]


class Timing:
    """Tick cadence of the host loop."""
    TICKS_PER_SECOND = 20
    TICK_SECONDS = 1.0 / TICKS_PER_SECOND  # 50ms, ~20 FPS
    ESC_DELAY_MS = 25  # curses waits this long to tell Esc from an escape sequence


class Probabilities:
    """Per-tick chances. All values are in [0, 1]."""
    # Per empty column, per tick
    SPAWN = 0.15
    # Per tick, one extra stream on any column (occupied or not) for density
    DENSITY_SPAWN = 0.08
    # Per empty column, once at start-up
    POPULATE = 0.70
    # Per trailing glyph, per tick
    FLICKER = 0.02
    # Per head glyph, per tick
    HEAD_FLICKER = 0.33
    # Per tick
    GLITCH = 0.002
    FLASH = 1.0 / 800
    PHRASE = 0.004


class Ranges:
    """Closed ranges for randomized stream and event attributes."""
    SPEED_MIN = 0.3   # cells per tick
    SPEED_MAX = 1.2
    LENGTH_MIN = 4    # trailing cells
    LENGTH_MAX = 40
    GLITCH_DURATION_MIN = 2  # ticks
    GLITCH_DURATION_MAX = 6
    GLITCH_SPAN_MIN = 3  # columns
    GLITCH_SPAN_MAX = 20
    FLASH_DURATION = 29  # ticks: 15 bright, 8 medium, 6 dim at 20 FPS
    PHRASE_DURATION = 60  # ticks


class Palette:
    """RGB values and intensities used by the compositor."""
    BLANK_RGB: RGB = (0, 0, 0)
    HEAD_RGB: RGB = (220, 255, 220)
    NEAR_HEAD_RGB: RGB = (0, 255, 65)
    GLITCH_RGB: RGB = (255, 255, 255)
    FLASH_BRIGHT_RGB: RGB = (180, 255, 180)
    FLASH_MEDIUM_RGB: RGB = (80, 180, 80)
    FLASH_DIM_RGB: RGB = (30, 90, 30)

    HEAD_INTENSITY = 1.0
    NEAR_HEAD_INTENSITIES = (0.9, 0.85)  # trailing cells 1 and 2
    TRAIL_INTENSITY_MAX = 0.8
    TRAIL_INTENSITY_FLOOR = 0.15  # dark green at the end of the trail
    FLASH_INTENSITIES = (1.0, 0.6, 0.3)  # bright, medium, dim


@dataclass
class RainTuning:
    """
    Tuning values consumed by the StreamEngine.

    Defaults come from the constant classes above. Override individual
    fields to make the engine quieter or busier, e.g. zero probabilities in
    tests that need exact control over spawning and events.
    """

    spawn_chance: float = Probabilities.SPAWN
    density_spawn_chance: float = Probabilities.DENSITY_SPAWN
    populate_chance: float = Probabilities.POPULATE
    flicker_chance: float = Probabilities.FLICKER
    head_flicker_chance: float = Probabilities.HEAD_FLICKER
    glitch_chance: float = Probabilities.GLITCH
    flash_chance: float = Probabilities.FLASH
    phrase_chance: float = Probabilities.PHRASE

    speed_min: float = Ranges.SPEED_MIN
    speed_max: float = Ranges.SPEED_MAX
    length_min: int = Ranges.LENGTH_MIN
    length_max: int = Ranges.LENGTH_MAX
    glitch_duration_min: int = Ranges.GLITCH_DURATION_MIN
    glitch_duration_max: int = Ranges.GLITCH_DURATION_MAX
    glitch_span_min: int = Ranges.GLITCH_SPAN_MIN
    glitch_span_max: int = Ranges.GLITCH_SPAN_MAX
    flash_duration: int = Ranges.FLASH_DURATION
    phrase_duration: int = Ranges.PHRASE_DURATION

    def validate(self) -> bool:
        """Validate tuning values. Raises ValueError on the first bad field."""
        chances = {
            'spawn_chance': self.spawn_chance,
            'density_spawn_chance': self.density_spawn_chance,
            'populate_chance': self.populate_chance,
            'flicker_chance': self.flicker_chance,
            'head_flicker_chance': self.head_flicker_chance,
            'glitch_chance': self.glitch_chance,
            'flash_chance': self.flash_chance,
            'phrase_chance': self.phrase_chance,
        }
        for name, value in chances.items():
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        if self.speed_min <= 0:
            raise ValueError("Stream speed must be positive")
        if self.speed_max < self.speed_min:
            raise ValueError("speed_max must not be below speed_min")
        if self.length_min < 1:
            raise ValueError("Stream length must be at least 1")
        if self.length_max < self.length_min:
            raise ValueError("length_max must not be below length_min")
        if self.glitch_duration_min < 1 or self.glitch_duration_max < self.glitch_duration_min:
            raise ValueError("Glitch duration range is invalid")
        if self.glitch_span_min < 1 or self.glitch_span_max < self.glitch_span_min:
            raise ValueError("Glitch span range is invalid")
        if self.flash_duration < 1 or self.phrase_duration < 1:
            raise ValueError("Easter egg durations must be positive")
        return True
