"""
DisplayWindow - Frameless window hosting a DisplayCanvas on one screen.

One window per output: the main projection and, optionally, a stage view.
"""

from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QCloseEvent, QKeyEvent
from PySide6.QtWidgets import QApplication, QVBoxLayout, QWidget

from display.backgrounds import ImageBackground, VideoBackground
from display.canvas import DisplayCanvas
from utils.error_handler import log_exception
from utils.logger import get_logger
from video.engines import create_engine

logger = get_logger(__name__)

FALLBACK_WINDOW_SIZE = (800, 600)


class DisplayWindow(QWidget):
    """
    Output window.

    Keys:
        B: toggle black
        C: toggle clear
        Esc: close
    """

    closed = Signal()

    def __init__(self, screen_index: int = 1, stage_view: bool = False,
                 show_border: bool = False, notice_duration_ms: Optional[int] = None,
                 notice_font_size: Optional[int] = None):
        super().__init__()

        self.screen_index = screen_index
        self.setWindowTitle("Stage View" if stage_view else "Display")
        self.setWindowFlags(Qt.FramelessWindowHint | Qt.Window)
        self.resize(*FALLBACK_WINDOW_SIZE)

        canvas_options = {}
        if notice_duration_ms is not None:
            canvas_options["notice_duration_ms"] = notice_duration_ms
        if notice_font_size is not None:
            canvas_options["notice_font_size"] = notice_font_size
        self.canvas = DisplayCanvas(show_border=show_border, stage_view=stage_view,
                                    **canvas_options)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        layout.addWidget(self.canvas)

    def move_to_screen(self) -> bool:
        """
        Show full screen on the configured screen.

        Returns:
            False if the screen doesn't exist (window shown at fallback size)
        """
        screens = QApplication.screens()
        logger.debug(f"Screens detected: {len(screens)}")

        if self.screen_index >= len(screens):
            logger.warning(
                f"⚠️ Screen {self.screen_index} not available ({len(screens)} detected), "
                f"showing windowed"
            )
            self.show()
            return False

        geo = screens[self.screen_index].geometry()
        logger.info(f"✔ Moving display to screen {self.screen_index}: {geo}")
        self.setGeometry(geo)
        self.showFullScreen()
        return True

    # --- Backgrounds ----------------------------------------------

    def set_image_background(self, path) -> ImageBackground:
        background = ImageBackground.from_file(path)
        self._replace_background(background)
        return background

    def set_colour_background(self, colour=Qt.black) -> ImageBackground:
        background = ImageBackground.from_colour(colour)
        self._replace_background(background)
        return background

    def set_video_background(self, path, engine_name: str = "auto", loop: bool = True,
                             is_legacy_hardware: bool = False) -> Optional[VideoBackground]:
        """
        Play a video as background.

        Returns:
            The VideoBackground, or None if no engine could play the file
            (the current background stays in place).
        """
        try:
            engine = create_engine(engine_name, is_legacy_hardware=is_legacy_hardware)
        except RuntimeError as e:
            log_exception(e, "No video engine available", level="error")
            return None

        background = VideoBackground(engine, loop=loop)
        if not background.load(path):
            background.release()
            background.deleteLater()
            return None

        self._replace_background(background)
        return background

    def _replace_background(self, background) -> None:
        def swap():
            # Read at swap time: earlier queued swaps may not have run yet
            previous = self.canvas.get_background()
            if previous is background:
                return
            self.canvas.set_background(background)
            self._retire(previous)
            if isinstance(background, VideoBackground):
                background.play()

        self.canvas.render(swap)

    @staticmethod
    def _retire(background) -> None:
        if isinstance(background, VideoBackground):
            background.release()
        # Deleted after the current render pass has detached it
        background.deleteLater()

    # --- Events ---------------------------------------------------

    def keyPressEvent(self, event: QKeyEvent):
        key = event.key()
        if key == Qt.Key_B:
            self.canvas.toggle_black()
        elif key == Qt.Key_C:
            self.canvas.toggle_clear()
        elif key == Qt.Key_Escape:
            self.close()
        else:
            super().keyPressEvent(event)

    def closeEvent(self, event: QCloseEvent):
        background = self.canvas.get_background()
        if isinstance(background, VideoBackground):
            background.release()
        self.closed.emit()
        super().closeEvent(event)
