"""
Display Backgrounds - Nodes occupying the bottom layer of a DisplayCanvas.
"""

from display.backgrounds.base import BackgroundKind, BackgroundNode
from display.backgrounds.image_background import ImageBackground
from display.backgrounds.video_background import VideoBackground

__all__ = [
    'BackgroundKind',
    'BackgroundNode',
    'ImageBackground',
    'VideoBackground'
]
