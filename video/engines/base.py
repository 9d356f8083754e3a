"""
VisualEngine - Abstract base class for video playback backends.

Engines render a video stream into a native window owned by a
VideoBackground. They don't know about canvases, black/clear states or
notices; the display canvas decides what is visible and how big it is.
"""

from abc import ABC, abstractmethod


class VisualEngine(ABC):
    """
    Low-level visual output engine.

    Responsible ONLY for rendering a video stream into a window:
    1. Does not decide what to show (only executes commands)
    2. Does not decide layout (size and aspect policy arrive via fit_output)
    3. Allows clean degradation (swappable backend, lazy resources)

    Implementations:
    - VlcEngine: Uses python-vlc backend
    - MpvEngine: Uses python-mpv backend
    """

    # --- Lifecycle ------------------------------------------------

    @abstractmethod
    def initialize(self) -> None:
        """
        Allocate backend resources (instances, players).

        Raises:
            RuntimeError: If the backend library is missing or failed to start
        """
        pass

    @abstractmethod
    def shutdown(self) -> None:
        """Stop playback and release all backend resources."""
        pass

    # --- Window ---------------------------------------------------

    @abstractmethod
    def attach_window(self, win_id: int) -> None:
        """
        Render into the native window ``win_id`` (HWND/XID/NSView).

        Raises:
            RuntimeError: If attachment failed
        """
        pass

    @abstractmethod
    def fit_output(self, width: int, height: int, keep_aspect: bool) -> None:
        """
        Apply the output size and aspect policy.

        Args:
            width: Width of the host window in pixels
            height: Height of the host window in pixels
            keep_aspect: False stretches the picture to width x height
        """
        pass

    # --- Media control --------------------------------------------

    @abstractmethod
    def load(self, path: str) -> None:
        """
        Load a video file for playback.

        Raises:
            FileNotFoundError: If the file doesn't exist
            RuntimeError: If the engine failed to load it
        """
        pass

    @abstractmethod
    def play(self) -> None:
        pass

    @abstractmethod
    def pause(self) -> None:
        pass

    @abstractmethod
    def stop(self) -> None:
        pass

    @abstractmethod
    def set_loop(self, enabled: bool) -> None:
        """Enable or disable infinite looping of the loaded media."""
        pass

    @abstractmethod
    def is_playing(self) -> bool:
        pass
