"""
BackgroundNode - Base widget for the bottom layer of a display canvas.

Every background carries a ``kind`` discriminant so the canvas can pick a
sizing policy from a dispatch table instead of inspecting concrete types.
"""

from enum import Enum
from typing import Optional

from PySide6.QtWidgets import QWidget


class BackgroundKind(Enum):
    """Background variants understood by DisplayCanvas."""
    IMAGE = "image"
    VIDEO = "video"


class BackgroundNode(QWidget):
    """
    Base class for image and video backgrounds.

    The fit size is what the canvas asked for; it is applied to the widget
    geometry immediately and kept even while the node is hidden, so it can
    be queried before the widget is ever shown.
    """

    kind: Optional[BackgroundKind] = None

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setMinimumSize(0, 0)
        self._fit_width = 0
        self._fit_height = 0

    def set_fit_size(self, width: int, height: int) -> None:
        self._fit_width = max(0, int(width))
        self._fit_height = max(0, int(height))
        self.resize(self._fit_width, self._fit_height)

    def fit_width(self) -> int:
        return self._fit_width

    def fit_height(self) -> int:
        return self._fit_height

    def __repr__(self) -> str:
        kind = self.kind.value if self.kind else None
        return f"<{type(self).__name__} kind={kind} fit={self._fit_width}x{self._fit_height}>"
