from __future__ import annotations
import logging
from functools import wraps
from typing import Any, Callable


def log_calls(
    logger_name: str | None = None, *, method: bool = False
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator to log function calls at DEBUG level with basic error logging.

    With ``method=True`` the bound instance is left out of the logged arguments.
    """

    def _decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        name = logger_name or func.__module__
        logger = logging.getLogger(name)

        @wraps(func)
        def _wrapper(*args: Any, **kwargs: Any) -> Any:
            shown = args[1:] if method else args
            logger.debug("Calling %s args=%s kwargs=%s", func.__qualname__, shown, kwargs)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.exception("Error in %s: %s", func.__qualname__, e)
                raise
            logger.debug("%s returned %r", func.__qualname__, result)
            return result

        return _wrapper

    return _decorator


def configure_logging(level: str = "WARNING") -> int:
    """Configure the root logger for command-line use.

    Returns:
        The numeric level that was applied

    Raises:
        ValueError: If ``level`` is not a logging level name
    """
    level_value = logging.getLevelName(level.upper())
    if not isinstance(level_value, int):
        raise ValueError(f"Unknown log level: {level}")
    logging.basicConfig(
        level=level_value,
        format="%(levelname)s | %(name)s | %(message)s",
        force=True,
    )
    return level_value
