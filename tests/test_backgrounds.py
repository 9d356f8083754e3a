"""
Tests for the background nodes (image and video).

Video tests use a mocked VisualEngine, no VLC/mpv required.
"""

import logging
from unittest.mock import Mock

import pytest
from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QPixmap

from display.backgrounds import BackgroundKind, BackgroundNode, ImageBackground, VideoBackground
from video.engines.base import VisualEngine


def create_mock_engine():
    engine = Mock(spec=VisualEngine)
    engine.is_playing.return_value = False
    return engine


class TestBackgroundNode:

    def test_fit_size_applied_to_geometry(self, qapp):
        node = BackgroundNode()
        node.set_fit_size(320, 200)
        assert (node.fit_width(), node.fit_height()) == (320, 200)
        assert (node.width(), node.height()) == (320, 200)

    def test_negative_fit_size_clamped(self, qapp):
        node = BackgroundNode()
        node.set_fit_size(-5, -1)
        assert (node.fit_width(), node.fit_height()) == (0, 0)

    def test_base_node_has_no_kind(self, qapp):
        assert BackgroundNode().kind is None


class TestImageBackground:

    def test_kind(self, qapp):
        assert ImageBackground.from_colour(Qt.black).kind is BackgroundKind.IMAGE

    def test_from_colour_is_solid(self, qapp):
        image = ImageBackground.from_colour(Qt.black)
        pixel = image.pixmap().toImage().pixelColor(0, 0)
        assert pixel.name() == "#000000"
        assert image.source is None

    def test_from_file(self, qapp, tmp_path):
        path = tmp_path / "slide.png"
        pixmap = QPixmap(4, 2)
        pixmap.fill(QColor("red"))
        assert pixmap.save(str(path))

        image = ImageBackground.from_file(path)
        assert image.source == str(path)
        assert (image.pixmap().width(), image.pixmap().height()) == (4, 2)

    def test_missing_file_falls_back_to_black(self, qapp, tmp_path, caplog):
        path = tmp_path / "missing.png"
        with caplog.at_level(logging.WARNING):
            image = ImageBackground.from_file(path)

        assert image.kind is BackgroundKind.IMAGE
        assert image.pixmap().toImage().pixelColor(0, 0).name() == "#000000"
        assert "Could not load background image" in caplog.text

    def test_fit_size_ignores_aspect(self, qapp, tmp_path):
        image = ImageBackground.from_colour("white")
        image.set_fit_size(1000, 10)
        assert (image.width(), image.height()) == (1000, 10)


class TestVideoBackground:

    def test_kind_and_defaults(self, qapp):
        engine = create_mock_engine()
        video = VideoBackground(engine)

        assert video.kind is BackgroundKind.VIDEO
        assert video.preserve_ratio() is True
        engine.set_loop.assert_called_once_with(True)

    def test_loop_disabled(self, qapp):
        engine = create_mock_engine()
        VideoBackground(engine, loop=False)
        engine.set_loop.assert_called_once_with(False)

    def test_preserve_ratio_forwarded(self, qapp):
        engine = create_mock_engine()
        video = VideoBackground(engine)
        video.set_fit_size(1280, 720)
        engine.fit_output.assert_called_with(1280, 720, True)

        video.set_preserve_ratio(False)
        assert video.preserve_ratio() is False
        engine.fit_output.assert_called_with(1280, 720, False)

    def test_same_ratio_is_noop(self, qapp):
        engine = create_mock_engine()
        video = VideoBackground(engine)
        engine.fit_output.reset_mock()

        video.set_preserve_ratio(True)
        engine.fit_output.assert_not_called()

    def test_load_success(self, qapp):
        engine = create_mock_engine()
        video = VideoBackground(engine)

        assert video.load("loops/intro.mp4") is True
        engine.load.assert_called_once_with("loops/intro.mp4")
        assert video.source == "loops/intro.mp4"

    def test_load_failure_is_logged(self, qapp, caplog):
        engine = create_mock_engine()
        engine.load.side_effect = FileNotFoundError("Video file not found: nope.mp4")
        video = VideoBackground(engine)

        with caplog.at_level(logging.ERROR):
            assert video.load("nope.mp4") is False

        assert video.source is None
        assert "FileNotFoundError" in caplog.text

    def test_play_attaches_once(self, qapp):
        engine = create_mock_engine()
        video = VideoBackground(engine)

        video.play()
        video.play()

        engine.attach_window.assert_called_once()
        (win_id,), _ = engine.attach_window.call_args
        assert isinstance(win_id, int)
        assert engine.play.call_count == 2

    def test_engine_failure_never_raises(self, qapp, caplog):
        engine = create_mock_engine()
        engine.attach_window.side_effect = RuntimeError("VLC attachment failed")
        video = VideoBackground(engine)

        with caplog.at_level(logging.WARNING):
            video.play()

        engine.play.assert_not_called()
        assert "Starting background video" in caplog.text

    def test_fit_failure_never_raises(self, qapp):
        engine = create_mock_engine()
        engine.fit_output.side_effect = RuntimeError("gone")
        video = VideoBackground(engine)

        video.set_fit_size(640, 480)
        assert (video.fit_width(), video.fit_height()) == (640, 480)

    def test_pause_stop_release(self, qapp):
        engine = create_mock_engine()
        video = VideoBackground(engine)

        video.pause()
        video.stop()
        video.release()

        engine.pause.assert_called_once()
        engine.stop.assert_called_once()
        engine.shutdown.assert_called_once()

    @pytest.mark.parametrize("playing", [True, False])
    def test_is_playing(self, qapp, playing):
        engine = create_mock_engine()
        engine.is_playing.return_value = playing
        assert VideoBackground(engine).is_playing() is playing
