"""
ImageBackground - Still image stretched over the whole canvas.

Also used for the canvas's black placeholder, which is a 1x1 black pixmap
stretched to whatever size the canvas has.
"""

from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QPainter, QPixmap
from PySide6.QtWidgets import QWidget

from display.backgrounds.base import BackgroundKind, BackgroundNode
from utils.logger import get_logger

logger = get_logger(__name__)


class ImageBackground(BackgroundNode):
    """Static image background, painted without aspect preservation."""

    kind = BackgroundKind.IMAGE

    def __init__(self, pixmap: QPixmap, source: Optional[str] = None,
                 parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._pixmap = pixmap
        self.source = source
        self.setAttribute(Qt.WA_OpaquePaintEvent)

    @classmethod
    def from_colour(cls, colour=Qt.black, parent: Optional[QWidget] = None) -> 'ImageBackground':
        """Solid colour background (a 1x1 pixmap, stretched when painted)."""
        pixmap = QPixmap(1, 1)
        pixmap.fill(QColor(colour))
        return cls(pixmap, source=None, parent=parent)

    @classmethod
    def from_file(cls, path, parent: Optional[QWidget] = None) -> 'ImageBackground':
        """
        Load an image file.

        Falls back to solid black with a warning if the file is missing or
        unreadable, so a bad path never leaves the output without a background.
        """
        file_path = Path(path)
        pixmap = QPixmap(str(file_path))
        if pixmap.isNull():
            logger.warning(f"⚠️ Could not load background image: {file_path}, using black")
            background = cls.from_colour(Qt.black, parent=parent)
            background.source = str(file_path)
            return background

        logger.debug(f"🖼️ Loaded background image {file_path.name} "
                     f"({pixmap.width()}x{pixmap.height()})")
        return cls(pixmap, source=str(file_path), parent=parent)

    def pixmap(self) -> QPixmap:
        return self._pixmap

    def set_pixmap(self, pixmap: QPixmap) -> None:
        self._pixmap = pixmap
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.SmoothPixmapTransform)
        # Stretch to the full rect, no letterboxing
        painter.drawPixmap(self.rect(), self._pixmap)
        painter.end()
