"""
VlcEngine - VLC backend implementation for background video.

Like MpvEngine, the library import waits for initialize() so a machine
without libvlc can still run image backgrounds.
"""

import platform
from pathlib import Path

from utils.logger import get_logger
from video.engines.base import VisualEngine

logger = get_logger(__name__)


class VlcEngine(VisualEngine):
    """
    VLC-based video playback engine.

    Responsibilities:
    - Create a muted VLC instance with hardware-specific args
    - Attach to OS window handles (Windows/Linux/macOS)
    - Stretch or letterbox the picture on request
    - Control playback: play, pause, stop, loop
    """

    def __init__(self, is_legacy_hardware: bool = False):
        """
        Construct VLC engine (lightweight).

        Args:
            is_legacy_hardware: Enable optimizations for old CPUs (pre-2013)

        Note:
            Does NOT create VLC resources. Call initialize() after construction.
        """
        self.is_legacy_hardware = is_legacy_hardware
        self.system = platform.system()
        self.instance = None
        self.player = None
        self._loop_enabled = False

    def build_args(self) -> list:
        """VLC instance args for this hardware profile."""
        # Backgrounds never carry sound
        vlc_args = ['--quiet', '--no-video-title-show', '--no-audio']

        if self.is_legacy_hardware:
            vlc_args.extend([
                '--avcodec-hurry-up',         # Skip frames if CPU slow
                '--avcodec-skiploopfilter=4', # Skip deblocking (less CPU)
                '--avcodec-threads=2',
                '--file-caching=1000',        # Larger buffer (reduce spikes)
            ])
        return vlc_args

    def initialize(self) -> None:
        """
        Create the VLC instance and player.

        Raises:
            RuntimeError: If python-vlc/libvlc is missing or VLC failed to start
        """
        try:
            # python-vlc raises NotImplementedError when libvlc is not found
            import vlc
        except (ImportError, OSError, NotImplementedError) as e:
            raise RuntimeError(
                "python-vlc library not available. "
                "Install VLC and: pip install python-vlc"
            ) from e

        try:
            self.instance = vlc.Instance(self.build_args())
            self.player = self.instance.media_player_new()
        except Exception as e:
            raise RuntimeError(f"VLC initialization failed: {e}") from e

        if self.instance is None or self.player is None:
            raise RuntimeError("VLC initialization failed: libvlc returned no instance")

        self.player.audio_set_mute(True)
        if self.is_legacy_hardware:
            logger.info("🔧 VlcEngine: Legacy hardware optimizations enabled")
        logger.info(f"🎬 VlcEngine initialized (system={self.system}, legacy={self.is_legacy_hardware})")

    def shutdown(self) -> None:
        try:
            if self.player:
                self.player.stop()
                self.player.release()
            if self.instance:
                self.instance.release()
            logger.debug("🔧 VlcEngine: Resources released")
        except Exception as e:
            logger.warning(f"⚠ VlcEngine: Error releasing resources: {e}")
        finally:
            self.player = None
            self.instance = None

    def attach_window(self, win_id: int) -> None:
        """
        Attach VLC output to OS window handle.

        Raises:
            RuntimeError: If attachment failed
        """
        self._require_player()

        try:
            if self.system == "Windows":
                self.player.set_hwnd(int(win_id))
            elif self.system == "Linux":
                xid = int(win_id)
                if xid == 0:
                    raise RuntimeError("winId() returned 0 - window not initialized")
                self.player.set_xwindow(xid)
            elif self.system == "Darwin":
                self.player.set_nsobject(int(win_id))
            else:
                logger.warning(f"⚠ Unknown OS: {self.system}, VLC using default config")
                return

            logger.info(f"✓ VlcEngine: Attached to window {int(win_id)} ({self.system})")

        except Exception as e:
            logger.error(f"❌ VlcEngine: Failed to attach to window: {e}", exc_info=True)
            raise RuntimeError(f"VLC attachment failed: {e}") from e

    def fit_output(self, width: int, height: int, keep_aspect: bool) -> None:
        if not self.player:
            return

        if keep_aspect or width <= 0 or height <= 0:
            # None restores the source aspect ratio
            self.player.video_set_aspect_ratio(None)
        else:
            self.player.video_set_aspect_ratio(f"{width}:{height}")
        # Scale 0 = fit to window
        self.player.video_set_scale(0)

    def load(self, path: str) -> None:
        self._require_player()

        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Video file not found: {path}")

        if self.player.is_playing():
            self.player.stop()

        media = self.instance.media_new(str(file_path))
        media.add_option("no-audio")
        if self._loop_enabled:
            media.add_option("input-repeat=65535")

        self.player.set_media(media)
        media.release()

        logger.debug(f"📹 VlcEngine: Loaded video: {file_path.name}")

    def play(self) -> None:
        self._require_player()
        self.player.play()

    def pause(self) -> None:
        self._require_player()
        self.player.set_pause(1)

    def stop(self) -> None:
        self._require_player()
        self.player.stop()

    def set_loop(self, enabled: bool) -> None:
        """
        Enable or disable looping.

        Note:
            VLC applies repeat per media, so this takes effect on next load().
        """
        self._loop_enabled = enabled

    def is_playing(self) -> bool:
        if not self.player:
            return False
        return bool(self.player.is_playing())

    def _require_player(self) -> None:
        if not self.player:
            raise RuntimeError("Player not initialized. Call initialize() first.")

    def __repr__(self) -> str:
        return f"<VlcEngine legacy={self.is_legacy_hardware} ready={self.player is not None}>"
