"""
Tests for the Constants module.

Tests tuning probabilities, ranges, timing and the RainTuning dataclass.
"""

import os
import sys

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from digital_rain.constants import (
    Palette,
    Probabilities,
    RainTuning,
    Ranges,
    Timing,
)


# ===========================================================================
# Timing Constants Tests
# ===========================================================================

class TestTiming:
    def test_tick_rate(self):
        assert Timing.TICKS_PER_SECOND == 20
        assert Timing.TICK_SECONDS == pytest.approx(0.05)

    def test_esc_delay_positive(self):
        assert Timing.ESC_DELAY_MS > 0


# ===========================================================================
# Probability Constants Tests
# ===========================================================================

class TestProbabilities:
    def test_all_within_unit_interval(self):
        for value in (
            Probabilities.SPAWN,
            Probabilities.DENSITY_SPAWN,
            Probabilities.POPULATE,
            Probabilities.FLICKER,
            Probabilities.HEAD_FLICKER,
            Probabilities.GLITCH,
            Probabilities.FLASH,
            Probabilities.PHRASE,
        ):
            assert 0.0 <= value <= 1.0

    def test_head_flickers_more_than_trail(self):
        assert Probabilities.HEAD_FLICKER > Probabilities.FLICKER

    def test_events_are_rare(self):
        assert Probabilities.GLITCH < 0.01
        assert Probabilities.FLASH < 0.01
        assert Probabilities.PHRASE < 0.01


# ===========================================================================
# Range Constants Tests
# ===========================================================================

class TestRanges:
    def test_ranges_ordered(self):
        assert 0 < Ranges.SPEED_MIN < Ranges.SPEED_MAX
        assert 1 <= Ranges.LENGTH_MIN < Ranges.LENGTH_MAX
        assert 1 <= Ranges.GLITCH_DURATION_MIN <= Ranges.GLITCH_DURATION_MAX
        assert 1 <= Ranges.GLITCH_SPAN_MIN <= Ranges.GLITCH_SPAN_MAX

    def test_flash_lasts_about_a_second_and_a_half(self):
        seconds = Ranges.FLASH_DURATION * Timing.TICK_SECONDS
        assert 1.0 <= seconds <= 2.0


# ===========================================================================
# Palette Tests
# ===========================================================================

class TestPalette:
    def test_rgb_components_in_range(self):
        for rgb in (Palette.HEAD_RGB, Palette.NEAR_HEAD_RGB, Palette.GLITCH_RGB,
                    Palette.FLASH_BRIGHT_RGB, Palette.FLASH_MEDIUM_RGB, Palette.FLASH_DIM_RGB):
            assert len(rgb) == 3
            assert all(0 <= c <= 255 for c in rgb)

    def test_intensities_descend(self):
        assert Palette.HEAD_INTENSITY > Palette.NEAR_HEAD_INTENSITIES[0]
        assert Palette.NEAR_HEAD_INTENSITIES[0] > Palette.NEAR_HEAD_INTENSITIES[1]
        assert Palette.NEAR_HEAD_INTENSITIES[1] > Palette.TRAIL_INTENSITY_MAX
        assert Palette.TRAIL_INTENSITY_MAX > Palette.TRAIL_INTENSITY_FLOOR > 0
        bright, medium, dim = Palette.FLASH_INTENSITIES
        assert bright > medium > dim


# ===========================================================================
# RainTuning Tests
# ===========================================================================

class TestRainTuning:
    def test_defaults_validate(self):
        tuning = RainTuning()
        assert tuning.validate() is True
        assert tuning.spawn_chance == Probabilities.SPAWN
        assert tuning.length_max == Ranges.LENGTH_MAX

    def test_zero_probabilities_are_valid(self):
        tuning = RainTuning(spawn_chance=0.0, flicker_chance=0.0, flash_chance=0.0)
        assert tuning.validate() is True

    @pytest.mark.parametrize("overrides", [
        dict(spawn_chance=1.5),
        dict(flicker_chance=-0.1),
        dict(speed_min=0.0),
        dict(speed_min=2.0, speed_max=1.0),
        dict(length_min=0),
        dict(length_min=10, length_max=5),
        dict(glitch_duration_min=0),
        dict(glitch_span_min=5, glitch_span_max=2),
        dict(flash_duration=0),
        dict(phrase_duration=0),
    ], ids=[
        "chance-above-one", "negative-chance", "zero-speed", "speed-inverted",
        "zero-length", "length-inverted", "zero-glitch", "span-inverted",
        "zero-flash", "zero-phrase",
    ])
    def test_invalid_values_rejected(self, overrides):
        with pytest.raises(ValueError):
            RainTuning(**overrides).validate()
