"""Error handling utilities for the stage display.

A projection surface must never crash or block mid-service, so collaborator
failures (render callbacks, notice drawing, video engines) are logged with
context and swallowed at the edges through these helpers.

Usage:
    # Silent block (logs but doesn't raise)
    with safe_operation("Render callback", silent=True, log_level="error"):
        callback()

    # One-off calls with a fallback value
    playing = safe_call(engine.is_playing, default_return=False)
"""

from contextlib import contextmanager
from functools import wraps
from typing import Optional, Callable, Any

from utils.logger import get_logger

logger = get_logger(__name__)


def _log_failure(operation_name: str, error: Exception, log_level: str = "warning") -> None:
    log_func = getattr(logger, log_level, logger.warning)
    # Full traceback goes to the daily log file
    log_func(f"Error during {operation_name}: {type(error).__name__}: {error}", exc_info=True)


@contextmanager
def safe_operation(
    operation_name: str,
    silent: bool = False,
    log_level: str = "warning",
):
    """Context manager that logs any exception raised in its block.

    Args:
        operation_name: Human-readable description of the operation
        silent: If True, the exception stops here (default: False)
        log_level: "debug", "info", "warning" or "error"

    Example:
        >>> with safe_operation(f"Loading background video {path}", silent=True, log_level="error"):
        ...     self.engine.load(str(path))
    """
    try:
        yield
    except Exception as e:
        _log_failure(operation_name, e, log_level)
        if not silent:
            raise


def safe_call(
    func: Callable,
    *args,
    operation_name: Optional[str] = None,
    silent: bool = True,
    default_return: Any = None,
    **kwargs
) -> Any:
    """Call func(*args, **kwargs), logging a failure instead of raising it.

    Returns:
        The result of func, or default_return if it failed and silent=True

    Example:
        >>> safe_call(self._overlay.draw, width, height, not self._blacked,
        ...           operation_name="Drawing notices")
    """
    try:
        return func(*args, **kwargs)
    except Exception as e:
        _log_failure(operation_name or f"calling {getattr(func, '__name__', repr(func))}", e)
        if not silent:
            raise
        return default_return


def safe_method(operation_name: Optional[str] = None, silent: bool = True):
    """Decorator form of safe_operation for methods.

    Example:
        >>> @safe_method("Stopping background video")
        ... def stop(self):
        ...     self.engine.stop()
    """
    def decorator(func: Callable) -> Callable:
        name = operation_name or func.__name__

        @wraps(func)
        def wrapper(*args, **kwargs):
            with safe_operation(name, silent=silent):
                return func(*args, **kwargs)
        return wrapper
    return decorator


def log_exception(
    exception: Exception,
    context: str = "",
    level: str = "error",
    include_traceback: bool = True
):
    """Log an already-caught exception, prefixed with context.

    Example:
        >>> except RuntimeError as e:
        ...     log_exception(e, "No video engine available", level="error")
    """
    log_func = getattr(logger, level, logger.error)
    prefix = f"{context}: " if context else ""
    log_func(f"{prefix}{type(exception).__name__}: {exception}", exc_info=include_traceback)
