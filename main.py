"""
Stage display launcher.

Opens the main projection window and, when configured, a stage view on a
second screen. Command-line options override config/settings.json.

Usage:
    python main.py --video assets/loops/default.mp4 --screen 1
    python main.py --image assets/img/background.png --stage-screen 2
"""

import argparse
import sys

from PySide6.QtWidgets import QApplication

from core.config_manager import DEFAULT_CONFIG_PATH, ConfigManager
from display.window import DisplayWindow
from utils.logger import get_logger, setup_logging
from video.engines import ENGINE_NAMES

logger = get_logger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Lyrics / media projection display")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--image", help="Background image file")
    source.add_argument("--video", help="Background video file")
    parser.add_argument("--screen", type=int, help="Screen index for the main output")
    parser.add_argument("--stage-screen", type=int, help="Screen index for the stage view")
    parser.add_argument("--engine", choices=ENGINE_NAMES, help="Video engine")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Settings JSON file")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser.parse_args(argv)


def resolve_background(args, config: ConfigManager) -> tuple:
    """(type, path) of the startup background, CLI first."""
    if args.image:
        return "image", args.image
    if args.video:
        return "video", args.video
    return (config.get("display.background.type", "colour"),
            config.get("display.background.path"))


def apply_background(window: DisplayWindow, kind: str, path, config: ConfigManager) -> None:
    if kind == "image" and path:
        window.set_image_background(path)
    elif kind == "video" and path:
        window.set_video_background(
            path,
            engine_name=config.get("video.engine", "auto"),
            loop=config.get("video.loop", True),
            is_legacy_hardware=config.get("video.legacy_hardware", False),
        )
    elif kind != "colour":
        logger.warning(f"⚠️ Background '{kind}' without a path, keeping black")


def build_windows(args, config: ConfigManager) -> list:
    show_border = config.get("display.show_border", False)
    notice_options = {
        "notice_duration_ms": config.get("notices.duration_ms"),
        "notice_font_size": config.get("notices.font_size"),
    }

    screen = args.screen if args.screen is not None else config.get("display.screen_index", 1)
    windows = [DisplayWindow(screen_index=screen, show_border=show_border, **notice_options)]

    stage_screen = args.stage_screen
    if stage_screen is None:
        stage_screen = config.get("display.stage_screen_index")
    if stage_screen is not None:
        windows.append(DisplayWindow(screen_index=stage_screen, stage_view=True,
                                     show_border=show_border, **notice_options))
    return windows


def main(argv=None) -> int:
    args = parse_args(argv)

    config = ConfigManager.get_instance(args.config)
    if args.engine:
        config.settings.setdefault("video", {})["engine"] = args.engine

    setup_logging(level="DEBUG" if args.debug else None,
                  log_dir=config.get("paths.logs_root", "logs"))

    app = QApplication(sys.argv[:1])
    windows = build_windows(args, config)

    kind, path = resolve_background(args, config)
    for window in windows:
        window.move_to_screen()
        apply_background(window, kind, path, config)
        # Closing any output ends the session
        window.closed.connect(app.quit)

    logger.info(f"🖥️ {len(windows)} display window(s) open")
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
