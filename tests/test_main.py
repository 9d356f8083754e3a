"""Tests for the launcher: argument parsing and window/background setup."""

from unittest.mock import Mock

import pytest

from core.config_manager import ConfigManager
from display.window import DisplayWindow
from main import apply_background, build_windows, parse_args, resolve_background


@pytest.fixture
def config(tmp_path):
    ConfigManager.reset_instance()
    config = ConfigManager.get_instance(str(tmp_path / "settings.json"))
    yield config
    ConfigManager.reset_instance()


class TestParseArgs:

    def test_defaults(self):
        args = parse_args([])
        assert args.image is None
        assert args.video is None
        assert args.screen is None
        assert args.stage_screen is None
        assert args.debug is False

    def test_screens_and_engine(self):
        args = parse_args(["--screen", "2", "--stage-screen", "0", "--engine", "vlc"])
        assert (args.screen, args.stage_screen, args.engine) == (2, 0, "vlc")

    def test_image_and_video_exclusive(self):
        with pytest.raises(SystemExit):
            parse_args(["--image", "a.png", "--video", "b.mp4"])

    def test_unknown_engine_rejected(self):
        with pytest.raises(SystemExit):
            parse_args(["--engine", "gstreamer"])


class TestResolveBackground:

    def test_cli_image_wins(self, config):
        config.set("display.background", {"type": "video", "path": "loop.mp4"})
        assert resolve_background(parse_args(["--image", "slide.png"]), config) == ("image", "slide.png")

    def test_cli_video(self, config):
        assert resolve_background(parse_args(["--video", "loop.mp4"]), config) == ("video", "loop.mp4")

    def test_from_config(self, config):
        config.set("display.background", {"type": "video", "path": "loop.mp4"})
        assert resolve_background(parse_args([]), config) == ("video", "loop.mp4")

    def test_default_colour(self, config):
        assert resolve_background(parse_args([]), config) == ("colour", None)


class TestApplyBackground:

    def test_image(self, config):
        window = Mock(spec=DisplayWindow)
        apply_background(window, "image", "slide.png", config)
        window.set_image_background.assert_called_once_with("slide.png")

    def test_video_uses_config(self, config):
        config.set("video.engine", "vlc")
        config.set("video.loop", False)
        window = Mock(spec=DisplayWindow)

        apply_background(window, "video", "loop.mp4", config)

        window.set_video_background.assert_called_once_with(
            "loop.mp4", engine_name="vlc", loop=False, is_legacy_hardware=False
        )

    def test_missing_path_keeps_black(self, config, caplog):
        window = Mock(spec=DisplayWindow)
        apply_background(window, "video", None, config)

        window.set_video_background.assert_not_called()
        assert "without a path" in caplog.text

    def test_colour_does_nothing(self, config):
        window = Mock(spec=DisplayWindow)
        apply_background(window, "colour", None, config)
        window.set_image_background.assert_not_called()
        window.set_video_background.assert_not_called()


class TestBuildWindows:

    def test_single_window_by_default(self, qapp, config):
        windows = build_windows(parse_args([]), config)
        assert len(windows) == 1
        assert windows[0].screen_index == 1
        assert windows[0].canvas.is_stage_view() is False

    def test_stage_view_from_cli(self, qapp, config):
        windows = build_windows(parse_args(["--screen", "0", "--stage-screen", "1"]), config)
        assert [w.screen_index for w in windows] == [0, 1]
        assert windows[1].canvas.is_stage_view() is True

    def test_stage_view_from_config(self, qapp, config):
        config.set("display.stage_screen_index", 2)
        windows = build_windows(parse_args([]), config)
        assert windows[-1].screen_index == 2
        assert windows[-1].windowTitle() == "Stage View"

    def test_show_border_forwarded(self, qapp, config):
        config.set("display.show_border", True)
        windows = build_windows(parse_args([]), config)
        assert windows[0].canvas.show_border is True
