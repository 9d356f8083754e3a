"""
Visual Engines - Low-level video playback backends.

create_engine() picks a backend by name: "mpv", "vlc" or "auto"
(mpv first, VLC as fallback).
"""

from utils.error_handler import log_exception
from utils.logger import get_logger
from video.engines.base import VisualEngine

logger = get_logger(__name__)

ENGINE_NAMES = ("auto", "mpv", "vlc")


def _build(name: str, is_legacy_hardware: bool) -> VisualEngine:
    if name == "mpv":
        from video.engines.mpv_engine import MpvEngine
        engine = MpvEngine(is_legacy_hardware=is_legacy_hardware)
    else:
        from video.engines.vlc_engine import VlcEngine
        engine = VlcEngine(is_legacy_hardware=is_legacy_hardware)
    engine.initialize()
    return engine


def create_engine(name: str = "auto", is_legacy_hardware: bool = False) -> VisualEngine:
    """
    Create and initialize a video engine.

    Args:
        name: "mpv", "vlc" or "auto"
        is_legacy_hardware: Enable old-CPU optimizations in the backend

    Returns:
        Initialized VisualEngine

    Raises:
        RuntimeError: If no backend could be initialized
    """
    if name not in ENGINE_NAMES:
        logger.warning(f"⚠️ Unknown video engine '{name}', using auto")
        name = "auto"

    if name != "auto":
        return _build(name, is_legacy_hardware)

    try:
        return _build("mpv", is_legacy_hardware)
    except RuntimeError as e:
        log_exception(e, "mpv unavailable, falling back to VLC", level="warning",
                      include_traceback=False)
        return _build("vlc", is_legacy_hardware)


__all__ = ['VisualEngine', 'create_engine', 'ENGINE_NAMES']
