"""
MpvEngine - mpv backend implementation for background video.

Uses the python-mpv library; the import is deferred to initialize() so the
rest of the display keeps working on machines without libmpv.
"""

import os
import platform
import sys
from pathlib import Path

from utils.logger import get_logger
from video.engines.base import VisualEngine

logger = get_logger(__name__)

# Add Python Scripts directory to PATH for libmpv-2.dll discovery (Windows)
if platform.system() == "Windows":
    scripts_dir = Path(sys.executable).parent
    if str(scripts_dir) not in os.environ.get("PATH", "").split(os.pathsep):
        os.environ["PATH"] = str(scripts_dir) + os.pathsep + os.environ["PATH"]
        logger.debug(f"Added to PATH for MPV: {scripts_dir}")


class MpvEngine(VisualEngine):
    """
    mpv-based video playback engine.

    Responsibilities:
    - Initialize a muted mpv player embedded in a Qt window
    - Stretch or letterbox the picture (keepaspect)
    - Control playback: play, pause, stop, loop
    """

    def __init__(self, is_legacy_hardware: bool = False):
        """
        Construct mpv engine (lightweight).

        Args:
            is_legacy_hardware: Enable optimizations for old CPUs (pre-2013)

        Note:
            Does NOT initialize mpv resources. Call initialize() after construction.
        """
        self.is_legacy_hardware = is_legacy_hardware
        self.system = platform.system()
        self.player = None
        self._loop_enabled = False

    # --- Lifecycle ------------------------------------------------

    def initialize(self) -> None:
        """
        Create the mpv player.

        Raises:
            RuntimeError: If python-mpv/libmpv is missing or mpv failed to start
        """
        try:
            import mpv
        except (ImportError, OSError) as e:
            raise RuntimeError(
                "python-mpv library not available. "
                "Install with: pip install python-mpv"
            ) from e

        try:
            self.player = mpv.MPV(
                audio='no',
                vo='gpu',
                hwdec='auto',
                keep_open='yes',  # Hold the last frame instead of closing
                idle='yes',
                input_default_bindings=False,
                osc=False,
                terminal='no',
                msg_level='all=error',
            )

            if self.is_legacy_hardware:
                self.player['profile'] = 'sw-fast'
                self.player['scale'] = 'bilinear'
                logger.info("🔧 MpvEngine: Legacy hardware optimizations enabled")

            logger.info(f"🎬 MpvEngine initialized (system={self.system}, legacy={self.is_legacy_hardware})")

        except Exception as e:
            self.player = None
            raise RuntimeError(f"mpv initialization failed: {e}") from e

    def shutdown(self) -> None:
        if self.player:
            try:
                self.player.terminate()
                logger.debug("✓ MpvEngine: Player terminated")
            except Exception as e:
                logger.warning(f"⚠️ MpvEngine shutdown error: {e}")
            finally:
                self.player = None

    # --- Window ---------------------------------------------------

    def attach_window(self, win_id: int) -> None:
        """
        Embed mpv output in a native window.

        Raises:
            RuntimeError: If attachment failed
        """
        self._require_player()

        try:
            # mpv takes HWND, XID and NSView alike through 'wid'
            self.player['wid'] = int(win_id)
            logger.info(f"✓ MpvEngine: Attached to window {int(win_id)} ({self.system})")
        except Exception as e:
            logger.error(f"❌ MpvEngine: Failed to attach to window: {e}", exc_info=True)
            raise RuntimeError(f"mpv attachment failed: {e}") from e

    def fit_output(self, width: int, height: int, keep_aspect: bool) -> None:
        # mpv fills whatever window Qt gives it; only the aspect policy is ours
        if not self.player:
            return
        try:
            self.player['keepaspect'] = bool(keep_aspect)
        except Exception as e:
            logger.warning(f"⚠️ MpvEngine keepaspect error: {e}")

    # --- Media control --------------------------------------------

    def load(self, path: str) -> None:
        self._require_player()

        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Video file not found: {path}")

        try:
            self.player.loadfile(str(file_path.absolute()))
            self.player['loop-file'] = 'inf' if self._loop_enabled else 'no'
            # Stay paused until the background is actually shown
            self.player['pause'] = True
            logger.debug(f"📹 MpvEngine: Loaded media: {file_path.name} (paused)")
        except Exception as e:
            raise RuntimeError(f"Failed to load media: {e}") from e

    def play(self) -> None:
        self._require_player()
        try:
            self.player['pause'] = False
        except Exception as e:
            logger.warning(f"⚠️ MpvEngine play error: {e}")

    def pause(self) -> None:
        self._require_player()
        try:
            self.player['pause'] = True
        except Exception as e:
            logger.warning(f"⚠️ MpvEngine pause error: {e}")

    def stop(self) -> None:
        """mpv has no explicit stop: pause and rewind."""
        self._require_player()
        try:
            self.player['pause'] = True
            self.player.seek(0, reference='absolute')
        except Exception as e:
            logger.warning(f"⚠️ MpvEngine stop error: {e}")

    def set_loop(self, enabled: bool) -> None:
        self._loop_enabled = enabled

        if self.player:
            try:
                self.player['loop-file'] = 'inf' if enabled else 'no'
                logger.debug(f"🔄 MpvEngine: Loop {'enabled' if enabled else 'disabled'}")
            except Exception as e:
                logger.warning(f"⚠️ MpvEngine set_loop error: {e}")

    def is_playing(self) -> bool:
        if not self.player:
            return False
        try:
            paused = self.player['pause']
            return paused is not None and not paused
        except Exception:
            return False

    def _require_player(self) -> None:
        if not self.player:
            raise RuntimeError("Player not initialized. Call initialize() first.")

    def __repr__(self) -> str:
        return f"<MpvEngine legacy={self.is_legacy_hardware} ready={self.player is not None}>"
