"""
Tests for the digital_rain package surface and glyph tables.
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class TestImports:
    """Test that all modules can be imported."""

    def test_import_package(self):
        """Package should be importable."""
        import digital_rain
        assert digital_rain.__version__ == "1.0.0"

    def test_import_core(self):
        """Engine and compositor should be importable."""
        from digital_rain import StreamEngine, FrameCompositor, SeededRandomSource
        assert StreamEngine is not None
        assert FrameCompositor is not None
        assert SeededRandomSource is not None

    def test_import_models(self):
        """Models should be importable."""
        from digital_rain import Stream, GlitchEvent, FlashOverlay, Cell, Frame
        assert Stream is not None
        assert GlitchEvent is not None
        assert FlashOverlay is not None
        assert Cell is not None
        assert Frame is not None

    def test_import_host(self):
        """Terminal host should be importable."""
        from digital_rain import RainApp, run_rain, main
        assert RainApp is not None
        assert callable(run_rain)
        assert callable(main)

    def test_all_exports_resolve(self):
        import digital_rain
        for name in digital_rain.__all__:
            assert hasattr(digital_rain, name), name


class TestCharset:
    """Test the glyph tables."""

    def test_katakana_range(self):
        from digital_rain.charset import KATAKANA
        assert KATAKANA[0] == 'ｦ'
        assert KATAKANA[-1] == 'ﾝ'
        assert len(KATAKANA) == 0xff9d - 0xff66 + 1

    def test_glyphs_are_single_width_characters(self):
        from digital_rain.charset import MATRIX_CHARS
        assert MATRIX_CHARS
        assert all(len(c) == 1 and not c.isspace() for c in MATRIX_CHARS)
        assert '0' in MATRIX_CHARS

    def test_phrases_are_non_empty(self):
        from digital_rain.charset import EASTER_EGG_PHRASES
        assert EASTER_EGG_PHRASES
        assert all(p.strip() for p in EASTER_EGG_PHRASES)

    def test_long_phrases_included(self):
        from digital_rain.charset import EASTER_EGG_PHRASES
        for phrase in (
            "THERE IS NO SPOON ONLY ZUUL",
            "WERE YOU LISTENING OR LOOKING AT THE WOMAN IN THE RED DRESS",
            "IM GOING TO SHOW THEM A WORLD WITHOUT RULES",
        ):
            assert phrase in EASTER_EGG_PHRASES
        assert len(set(EASTER_EGG_PHRASES)) == len(EASTER_EGG_PHRASES)

    def test_longest_phrase_fits_a_small_screen(self):
        from digital_rain import FlashOverlay, FrameCompositor
        from digital_rain.charset import EASTER_EGG_PHRASES

        longest = max(EASTER_EGG_PHRASES, key=len)
        frame = FrameCompositor().compose([], [], [FlashOverlay(longest, 0, 20)], 20, 6)
        shown = "".join(c.char for _, _, c in frame.painted())
        assert shown == longest.replace(" ", "")

    def test_phrase_glyphs_drop_whitespace(self):
        from digital_rain.charset import phrase_glyphs
        assert phrase_glyphs("WAKE UP NEO") == "WAKEUPNEO"
        assert phrase_glyphs("  ") == ""


class TestEndToEnd:
    """Drive the core for a while the way the host does."""

    def test_frames_stay_in_bounds(self):
        from digital_rain import FrameCompositor, SeededRandomSource, StreamEngine

        engine = StreamEngine(rng=SeededRandomSource(seed=2024))
        compositor = FrameCompositor()
        engine.populate(40, 12)
        for tick in range(300):
            width, height = (40, 12) if tick < 150 else (25, 8)
            engine.advance(1.0, width, height)
            frame = compositor.compose(engine.streams, engine.glitches,
                                       engine.easter_eggs, width, height)
            assert (frame.width, frame.height) == (width, height)
            for x, y, cell in frame.painted():
                assert 0 <= x < width and 0 <= y < height
                assert len(cell.char) == 1
