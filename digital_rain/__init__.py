"""
Digital Rain - falling glyph animation for the terminal

Columns of half-width Katakana, digits and symbols fall with fading
trails, occasional glitches and hidden easter-egg phrases.

Basic Usage:
    from digital_rain import run_rain
    run_rain()

Driving the core yourself:
    from digital_rain import StreamEngine, FrameCompositor, SeededRandomSource

    engine = StreamEngine(rng=SeededRandomSource(seed=7))
    compositor = FrameCompositor()
    for _ in range(100):
        engine.advance(1.0, 80, 24)
    frame = compositor.compose(engine.streams, engine.glitches,
                               engine.easter_eggs, 80, 24)
    print(frame.text())
"""

__version__ = "1.0.0"

# Core
from .engine import StreamEngine
from .compositor import FrameCompositor, trail_style
from .randomness import RandomSource, SeededRandomSource
from .constants import RainTuning, Probabilities, Ranges, Timing, Palette

# Data models
from .models import (
    Stream,
    GlitchEvent,
    FlashOverlay,
    EmbeddedPhrase,
    Cell,
    Frame,
    Tone,
    FadeStage,
)

# Glyph tables
from .charset import MATRIX_CHARS, EASTER_EGG_PHRASES

# Terminal host
from .tui import RainApp, run_rain, main

__all__ = [
    # Version
    "__version__",
    # Core
    "StreamEngine",
    "FrameCompositor",
    "trail_style",
    "RandomSource",
    "SeededRandomSource",
    "RainTuning",
    "Probabilities",
    "Ranges",
    "Timing",
    "Palette",
    # Models
    "Stream",
    "GlitchEvent",
    "FlashOverlay",
    "EmbeddedPhrase",
    "Cell",
    "Frame",
    "Tone",
    "FadeStage",
    # Glyphs
    "MATRIX_CHARS",
    "EASTER_EGG_PHRASES",
    # Host
    "RainApp",
    "run_rain",
    "main",
]
