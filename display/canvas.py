"""
DisplayCanvas - The surface where backgrounds and notices are shown.

The canvas owns the current background, a black placeholder and the notice
overlay, and tracks the cleared/blacked flags. Every resize and every
toggle enqueues a render pass on the canvas's thread; the pass decides
which bottom layer is visible and sizes it to the canvas.

Layer list (index 0 is the bottom-most layer):
    [background or black placeholder, notice overlay]

Blacked wins over cleared: a blacked canvas shows the placeholder whatever
the cleared flag says. Cleared never hides the background, it only tells
text renderers (outside this widget) to draw nothing.
"""

from typing import Callable, Optional

from PySide6.QtCore import Qt, Signal, Slot
from PySide6.QtWidgets import QWidget

from display.backgrounds import BackgroundKind, BackgroundNode, ImageBackground, VideoBackground
from display.notice_overlay import DEFAULT_NOTICE_DURATION_MS, DEFAULT_NOTICE_FONT_SIZE, NoticeOverlay
from utils.error_handler import safe_call, safe_operation
from utils.logger import get_logger

logger = get_logger(__name__)

RenderCallback = Callable[[], None]


class DisplayCanvas(QWidget):
    """
    Display-state controller for one output (main projection or stage view).

    Signals:
        cleared_changed(bool): emitted by toggle_clear()
        blacked_changed(bool): emitted by toggle_black()
        rendered(): emitted at the end of every render pass
    """

    cleared_changed = Signal(bool)
    blacked_changed = Signal(bool)
    rendered = Signal()

    # Queued to self: render passes always run on the canvas's thread
    _render_requested = Signal(object)

    def __init__(self, show_border: bool = False, stage_view: bool = False,
                 parent: Optional[QWidget] = None,
                 notice_duration_ms: int = DEFAULT_NOTICE_DURATION_MS,
                 notice_font_size: int = DEFAULT_NOTICE_FONT_SIZE):
        """
        Create a canvas.

        Args:
            show_border: True if text drawn on this canvas should get a border
                         (read by text renderers, unused by the canvas itself)
            stage_view: True for a stage/confidence monitor instance
            parent: Parent widget
            notice_duration_ms: Default lifetime of notices
            notice_font_size: Notice font size in pixels
        """
        super().__init__(parent)
        self.setMinimumSize(0, 0)

        self.show_border = show_border
        self._stage_view = stage_view
        self._cleared = False
        self._blacked = False

        self._black_placeholder = ImageBackground.from_colour(Qt.black, parent=self)
        self._black_placeholder.set_fit_size(0, 0)
        self._black_placeholder.hide()

        self._overlay = NoticeOverlay(self, duration_ms=notice_duration_ms,
                                      font_size=notice_font_size)
        self._background: BackgroundNode = self.create_black_image()

        self._fitters = {
            BackgroundKind.IMAGE: self._fit_image,
            BackgroundKind.VIDEO: self._fit_video,
        }

        self._layers: list = [self._overlay]
        self._insert_bottom(self._background)

        self._render_requested.connect(self._render_now, Qt.QueuedConnection)

        logger.debug(f"🖥️ DisplayCanvas created (stage_view={stage_view}, show_border={show_border})")

    # --- Background -----------------------------------------------

    def get_background(self) -> BackgroundNode:
        return self._background

    def set_background(self, node: BackgroundNode) -> None:
        """
        Replace the background handle.

        Does not render: call render() afterwards, or use show_background()
        to do both in the same UI-thread turn.
        """
        if node is None:
            logger.warning("⚠️ Ignoring None background, keeping the current one")
            return
        if node is self._background:
            return

        # Adopt it hidden; the next render pass decides whether it shows
        if node.parent() is not self:
            node.setParent(self)
            node.hide()

        self._background = node
        logger.debug(f"🖼️ Background set: {node!r}")

    def show_background(self, node: BackgroundNode) -> None:
        """Replace the background and render it in one pass."""
        self.render(lambda: self.set_background(node))

    def create_black_image(self) -> ImageBackground:
        """New black image background sized to the canvas."""
        image = ImageBackground.from_colour(Qt.black, parent=self)
        image.set_fit_size(self.width(), self.height())
        image.hide()
        return image

    def get_black_placeholder(self) -> ImageBackground:
        return self._black_placeholder

    def get_overlay(self) -> NoticeOverlay:
        return self._overlay

    def layers(self) -> list:
        """Visible layers, bottom-most first."""
        return list(self._layers)

    # --- State ----------------------------------------------------

    def is_stage_view(self) -> bool:
        return self._stage_view

    def toggle_clear(self) -> None:
        """Toggle clearing: keep the background, drop all text."""
        self._cleared = not self._cleared
        logger.info(f"🧹 Canvas cleared={self._cleared} (stage_view={self._stage_view})")
        self.cleared_changed.emit(self._cleared)
        self.render(None)

    def is_cleared(self) -> bool:
        return self._cleared

    def toggle_black(self) -> None:
        """Toggle blacking: hide text and background, show only black."""
        self._blacked = not self._blacked
        logger.info(f"⬛ Canvas blacked={self._blacked} (stage_view={self._stage_view})")
        self.blacked_changed.emit(self._blacked)
        self.render(None)

    def is_blacked(self) -> bool:
        return self._blacked

    # --- Rendering ------------------------------------------------

    def render(self, callback: Optional[RenderCallback] = None) -> None:
        """
        Enqueue a render pass.

        Args:
            callback: Run at the start of the pass, before any layout
                      decision, so content changes and layout land in the
                      same UI-thread turn.

        Note:
            Never renders synchronously. Passes run in request order and
            are idempotent, so bursts of resize events are harmless.
        """
        self._render_requested.emit(callback)

    @Slot(object)
    def _render_now(self, callback: Optional[RenderCallback]) -> None:
        if callback is not None:
            with safe_operation("Render callback", silent=True, log_level="error"):
                callback()

        self._select_bottom_layer()

        width = self.width()
        height = self.height()

        background = self._background
        fitter = self._fitters.get(getattr(background, "kind", None))
        if fitter is None:
            logger.warning(f"BUG: Unrecognised background kind: {background!r}")
        else:
            fitter(background, width, height)

        # Kept in size even while hidden so blacking is instant
        self._black_placeholder.set_fit_size(width, height)

        safe_call(self._overlay.draw, width, height, not self._blacked,
                  operation_name="Drawing notices")
        self.rendered.emit()

    def _select_bottom_layer(self) -> None:
        current = self._layers[0]
        target = self._black_placeholder if self._blacked else self._background
        if current is target:
            return

        if self._blacked:
            # Cover first, then remove, so no frame shows an empty canvas
            self._insert_bottom(target)
            self._detach(current)
        else:
            self._detach(current)
            self._insert_bottom(target)

    def _insert_bottom(self, widget: QWidget) -> None:
        if widget.parent() is not self:
            widget.setParent(self)
        self._layers.insert(0, widget)
        widget.move(0, 0)
        widget.show()
        widget.lower()

    def _detach(self, widget: QWidget) -> None:
        if widget in self._layers:
            self._layers.remove(widget)
        widget.hide()

    def _fit_image(self, background: ImageBackground, width: int, height: int) -> None:
        background.set_fit_size(width, height)

    def _fit_video(self, background: VideoBackground, width: int, height: int) -> None:
        background.set_preserve_ratio(False)
        background.set_fit_size(width, height)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.render(None)

    def __repr__(self) -> str:
        return (f"<DisplayCanvas {self.width()}x{self.height()} "
                f"cleared={self._cleared} blacked={self._blacked} stage_view={self._stage_view}>")
