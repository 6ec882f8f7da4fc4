from typing import Literal, Optional, TextIO, get_args
import sys

from loguru._logger import Core as _Core, Logger as _Logger

LOG_LEVEL = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]

LogFormat = (
    "<fg #B0BEC5>{time:HH:mm:ss.SSS}</fg #B0BEC5> | "
    "<level>{level: <8}</level> | "
    "<fg #2196F3>{name}</fg #2196F3>:"
    "<fg #03A9F4>{function}</fg #03A9F4>:"
    "<fg #009688>{line}</fg #009688> - "
    "<level>{message}</level>"
)

# Independent Loguru logger. The iterative solvers log at DEBUG and TRACE,
# which must not reach the sinks of the host application.
logger = _Logger(
    core=_Core(),
    exception=None,
    depth=0,
    record=False,
    lazy=False,
    colors=False,
    raw=False,
    capture=True,
    patchers=[],
    extra={},
)

# Silent until set_log_level() adds a sink
_handler_id: Optional[int] = None


def disable_logging() -> None:
    """Remove the sink added by `set_log_level`, silencing gammakit again."""
    global _handler_id

    if _handler_id is not None:
        try:
            logger.remove(_handler_id)
        except ValueError:
            # Removed through logger.remove() directly
            pass
        _handler_id = None


def set_log_level(level: LOG_LEVEL, sink: TextIO = sys.stderr) -> None:
    """
    Log gammakit messages of at least the given level to a sink.

    A sink added by an earlier call is replaced.

    Args:
        level: Log level (TRACE, DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL)
        sink: Where to write the messages. Defaults to sys.stderr.

    Raises:
        ValueError: If an invalid log level is provided
    """
    global _handler_id

    # Literal is only checked by type checkers
    valid_levels = tuple(get_args(LOG_LEVEL))
    if level not in valid_levels:
        raise ValueError(f"Invalid log_level '{level}'. Must be one of: {valid_levels}")

    disable_logging()
    _handler_id = logger.add(
        sink=sink,
        level=level,
        colorize=sink in (sys.stderr, sys.stdout),
        format=LogFormat,
    )
    logger.success(f"Log level set to {level}")
