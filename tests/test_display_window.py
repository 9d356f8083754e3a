"""
Tests for DisplayWindow: screen placement, key toggles and background swaps.

Video engines are mocked: create_engine is patched where the window uses it.
"""

from unittest.mock import Mock, patch

import pytest
from PySide6.QtCore import Qt
from PySide6.QtTest import QTest

from display.backgrounds import BackgroundKind, VideoBackground
from display.window import DisplayWindow
from video.engines.base import VisualEngine


@pytest.fixture
def window(qapp):
    window = DisplayWindow(screen_index=0)
    yield window
    window.close()
    window.deleteLater()


@pytest.fixture
def video_file(tmp_path):
    path = tmp_path / "loop.mp4"
    path.write_bytes(b"\x00")
    return path


def create_mock_engine():
    engine = Mock(spec=VisualEngine)
    engine.is_playing.return_value = True
    return engine


class TestWindowSetup:

    def test_titles(self, qapp):
        assert DisplayWindow().windowTitle() == "Display"
        stage = DisplayWindow(stage_view=True)
        assert stage.windowTitle() == "Stage View"
        assert stage.canvas.is_stage_view() is True

    def test_notice_options_forwarded(self, qapp):
        window = DisplayWindow(notice_duration_ms=1500)
        label = window.canvas.get_overlay().add_notice("Hello")
        assert label.text() == "Hello"

    def test_missing_screen_falls_back_to_window(self, qapp):
        window = DisplayWindow(screen_index=99)
        assert window.move_to_screen() is False
        assert window.isVisible()
        window.close()

    def test_existing_screen(self, window):
        assert window.move_to_screen() is True


class TestKeyToggles:

    def test_b_toggles_black(self, window, flush):
        QTest.keyClick(window, Qt.Key_B)
        flush()
        assert window.canvas.is_blacked() is True
        assert window.canvas.layers()[0] is window.canvas.get_black_placeholder()

        QTest.keyClick(window, Qt.Key_B)
        flush()
        assert window.canvas.is_blacked() is False

    def test_c_toggles_clear(self, window, flush):
        QTest.keyClick(window, Qt.Key_C)
        flush()
        assert window.canvas.is_cleared() is True
        assert window.canvas.is_blacked() is False

    def test_escape_closes(self, window):
        closed = []
        window.closed.connect(lambda: closed.append(True))
        window.show()

        QTest.keyClick(window, Qt.Key_Escape)
        assert closed == [True]


class TestBackgroundSwap:

    def test_colour_background(self, window, flush):
        previous = window.canvas.get_background()
        background = window.set_colour_background("white")
        flush()

        assert window.canvas.get_background() is background
        assert window.canvas.layers()[0] is background
        assert previous not in window.canvas.layers()

    def test_image_background_missing_file(self, window, flush, tmp_path):
        background = window.set_image_background(tmp_path / "missing.png")
        flush()

        assert background.kind is BackgroundKind.IMAGE
        assert window.canvas.layers()[0] is background

    def test_video_background(self, window, flush, video_file):
        engine = create_mock_engine()
        with patch("display.window.create_engine", return_value=engine):
            background = window.set_video_background(video_file)
        flush()

        assert isinstance(background, VideoBackground)
        assert window.canvas.layers()[0] is background
        engine.load.assert_called_once_with(str(video_file))
        engine.play.assert_called_once()
        assert background.preserve_ratio() is False

    def test_video_replaced_is_released(self, window, flush, video_file):
        engine = create_mock_engine()
        with patch("display.window.create_engine", return_value=engine):
            window.set_video_background(video_file)
        flush()

        window.set_colour_background()
        flush()
        engine.shutdown.assert_called_once()

    def test_back_to_back_swaps_release_each_video(self, window, flush, video_file):
        original = window.canvas.get_background()
        first_engine = create_mock_engine()
        second_engine = create_mock_engine()
        with patch("display.window.create_engine", side_effect=[first_engine, second_engine]):
            first = window.set_video_background(video_file)
            second = window.set_video_background(video_file)
        # Both swaps queued before any render pass runs
        flush()

        assert window.canvas.get_background() is second
        assert window.canvas.layers()[0] is second
        assert first not in window.canvas.layers()
        assert original not in window.canvas.layers()
        first_engine.shutdown.assert_called_once()
        second_engine.shutdown.assert_not_called()
        second_engine.play.assert_called_once()

    def test_same_background_swapped_twice_is_kept(self, window, flush):
        background = window.set_colour_background("white")
        flush()

        window._replace_background(background)
        flush()

        assert window.canvas.get_background() is background
        assert window.canvas.layers()[0] is background
        assert not background.isHidden()

    def test_no_engine_keeps_background(self, window, flush, video_file):
        previous = window.canvas.get_background()
        with patch("display.window.create_engine", side_effect=RuntimeError("no engines")):
            assert window.set_video_background(video_file) is None
        flush()

        assert window.canvas.get_background() is previous

    def test_load_failure_keeps_background(self, window, flush, video_file):
        previous = window.canvas.get_background()
        engine = create_mock_engine()
        engine.load.side_effect = FileNotFoundError("gone")
        with patch("display.window.create_engine", return_value=engine):
            assert window.set_video_background(video_file) is None
        flush()

        assert window.canvas.get_background() is previous
        engine.shutdown.assert_called_once()

    def test_close_releases_video(self, window, flush, video_file):
        engine = create_mock_engine()
        window.show()
        with patch("display.window.create_engine", return_value=engine):
            window.set_video_background(video_file)
        flush()

        window.close()
        engine.shutdown.assert_called_once()
