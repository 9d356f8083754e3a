"""
Transient notices drawn on top of a display canvas.

Notices are plain labels stacked from the bottom edge upwards and centred
horizontally. They expire on their own after their duration; a duration of
0 keeps a notice until it is removed.
"""

from typing import Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import QLabel, QWidget

from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_NOTICE_DURATION_MS = 8000
DEFAULT_NOTICE_FONT_SIZE = 28

# Layout (pixels)
NOTICE_MARGIN = 20
NOTICE_SPACING = 8


class NoticeOverlay(QWidget):
    """
    Transparent layer holding the active notices.

    The owning canvas calls draw() on every render pass so the overlay
    always covers the canvas and stays above the background.
    """

    NOTICE_STYLE = """
        QLabel {{
            background-color: rgba(0, 0, 0, 170);
            color: #FFFFFF;
            padding: 10px 24px;
            border-radius: 8px;
            font-size: {font_size}px;
            font-weight: bold;
        }}
    """

    def __init__(self, parent: Optional[QWidget] = None,
                 duration_ms: int = DEFAULT_NOTICE_DURATION_MS,
                 font_size: int = DEFAULT_NOTICE_FONT_SIZE):
        super().__init__(parent)
        self.duration_ms = duration_ms
        self.font_size = font_size
        self._notices: list[QLabel] = []
        self._width = 0
        self._height = 0

        self.setAttribute(Qt.WA_TransparentForMouseEvents)
        self.setAttribute(Qt.WA_TranslucentBackground)

    def add_notice(self, text: str, duration_ms: Optional[int] = None) -> QLabel:
        """
        Show a notice.

        Args:
            text: Notice text
            duration_ms: Lifetime in ms, None for the overlay default, 0 for no expiry

        Returns:
            The label, usable as a handle for remove_notice()
        """
        label = QLabel(text, self)
        label.setAlignment(Qt.AlignCenter)
        label.setWordWrap(True)
        label.setStyleSheet(self.NOTICE_STYLE.format(font_size=self.font_size))
        self._notices.append(label)

        lifetime = self.duration_ms if duration_ms is None else duration_ms
        if lifetime > 0:
            # Parented to the label so it dies with it
            expiry = QTimer(label)
            expiry.setSingleShot(True)
            expiry.timeout.connect(lambda: self.remove_notice(label))
            expiry.start(lifetime)

        self._layout_notices()
        label.show()
        logger.debug(f"📢 Notice added ({lifetime}ms): {text}")
        return label

    def remove_notice(self, label: QLabel) -> bool:
        if label not in self._notices:
            return False
        self._notices.remove(label)
        label.hide()
        label.deleteLater()
        self._layout_notices()
        return True

    def clear_notices(self) -> None:
        for label in list(self._notices):
            self.remove_notice(label)

    def notices(self) -> list:
        return list(self._notices)

    def draw(self, width: int, height: int, visible: bool = True) -> None:
        """Cover a width x height canvas and lay the notices out."""
        self._width = max(0, width)
        self._height = max(0, height)
        self.setGeometry(0, 0, self._width, self._height)
        self.setVisible(visible)
        self._layout_notices()
        self.raise_()

    def _layout_notices(self) -> None:
        available = max(0, self._width - 2 * NOTICE_MARGIN)
        y = self._height - NOTICE_MARGIN

        # Oldest notice sits at the bottom
        for label in self._notices:
            label.setMaximumWidth(available)
            label.adjustSize()
            y -= label.height()
            label.move((self._width - label.width()) // 2, y)
            y -= NOTICE_SPACING
