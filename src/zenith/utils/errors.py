"""
Error types and error boundaries for Zenith.

Nothing below the interaction layer propagates an error upward: a failing
timer callback or teardown step is logged where it happens and replaced by a
fallback value.
"""

import logging
from functools import wraps
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _log_failure(what: str, func: Callable[..., Any], error: Exception) -> None:
    logger.error(
        f"{what} failed: {error}",
        exc_info=True,
        extra={"function": getattr(func, "__name__", repr(func)), "source_module": getattr(func, "__module__", None)},
    )


def error_boundary(*, default_return: Any = None) -> Callable[[F], F]:
    """
    Decorator that logs and absorbs any exception raised by the wrapped call.

    Example:
        >>> @error_boundary(default_return=CONTINUE)
        ... def run_timer(timer):
        ...     return timer.callback()
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                _log_failure(func.__qualname__, func, e)
                return default_return

        return wrapper  # type: ignore

    return decorator


def safe_execute(func: Callable[[], Any], *, default: Any = None, description: str = "") -> Any:
    """
    Call ``func`` once; on failure log it under ``description`` and return ``default``.

    Used for one-off steps such as shutdown, where one failing part must not
    keep the rest from running.
    """
    try:
        return func()
    except Exception as e:
        _log_failure(description or getattr(func, "__qualname__", repr(func)), func, e)
        return default


class ZenithError(Exception):
    """Base exception for all Zenith-specific errors."""


class ConfigurationError(ZenithError):
    """The configuration file could not be read or parsed."""


class SurfaceError(ZenithError):
    """No rendering surface could be obtained. Fatal at startup."""


class ActionExecutionError(ZenithError):
    """An action referred to something that is not there, e.g. an inactive module."""
