"""
VideoBackground - Video stream rendered by a VisualEngine into a native
child window of the canvas.

The canvas controls size and aspect policy; the engine only draws.
"""

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QPalette
from PySide6.QtWidgets import QWidget

from display.backgrounds.base import BackgroundKind, BackgroundNode
from utils.error_handler import safe_call, safe_method, safe_operation
from utils.logger import get_logger
from video.engines.base import VisualEngine

logger = get_logger(__name__)


class VideoBackground(BackgroundNode):
    """
    Video background.

    Responsibilities:
    - Host a native window the engine can render into
    - Forward fit size and aspect-ratio policy to the engine
    - Start/stop playback; engine failures are logged, never raised
    """

    kind = BackgroundKind.VIDEO

    def __init__(self, engine: VisualEngine, loop: bool = True,
                 parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.engine = engine
        self.source: Optional[str] = None
        self._preserve_ratio = True
        self._attached = False

        # Engines need a real native handle, not an alien widget
        self.setAttribute(Qt.WA_NativeWindow)
        self.setAttribute(Qt.WA_DontCreateNativeAncestors)

        palette = self.palette()
        palette.setColor(QPalette.Window, QColor(Qt.black))
        self.setPalette(palette)
        self.setAutoFillBackground(True)

        safe_call(self.engine.set_loop, loop, operation_name="Configuring video loop")

    def load(self, path) -> bool:
        """
        Load a video file into the engine.

        Returns:
            True if the engine accepted the file
        """
        with safe_operation(f"Loading background video {path}", silent=True, log_level="error"):
            self.engine.load(str(path))
            self.source = str(path)
            logger.info(f"🎬 Background video loaded: {path}")
            return True
        return False

    @safe_method("Starting background video")
    def play(self) -> None:
        if not self._attached:
            self.engine.attach_window(int(self.winId()))
            self._attached = True
            self.engine.fit_output(self._fit_width, self._fit_height, self._preserve_ratio)
        self.engine.play()

    @safe_method("Pausing background video")
    def pause(self) -> None:
        self.engine.pause()

    @safe_method("Stopping background video")
    def stop(self) -> None:
        self.engine.stop()

    def is_playing(self) -> bool:
        return bool(safe_call(self.engine.is_playing, default_return=False))

    def release(self) -> None:
        """Stop playback and free the engine."""
        safe_call(self.engine.shutdown, operation_name="Releasing video engine")
        self._attached = False
        logger.debug(f"🔧 Background video released: {self.source}")

    def preserve_ratio(self) -> bool:
        return self._preserve_ratio

    def set_preserve_ratio(self, preserve: bool) -> None:
        if preserve == self._preserve_ratio:
            return
        self._preserve_ratio = preserve
        self._fit_engine()

    def set_fit_size(self, width: int, height: int) -> None:
        super().set_fit_size(width, height)
        self._fit_engine()

    def _fit_engine(self) -> None:
        safe_call(self.engine.fit_output, self._fit_width, self._fit_height,
                  self._preserve_ratio, operation_name="Fitting video output")
